"""Shared fixtures for the hedera-bdd test suite.

By default the feature files run against :class:`tests.fakes.FakeLedger`
and a mirror node served from it.  ``pytest --live`` runs the same
scenarios against the network configured through ``HEDERABDD_*``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from hedera_bdd.config.settings import AccountConfig, AppConfig, MirrorNodeConfig
from hedera_bdd.ledger.client import LedgerClient
from hedera_bdd.mirror.client import MirrorNodeClient
from hedera_bdd.steps import PLUGINS

from .fakes import FakeLedger

if TYPE_CHECKING:
    from collections.abc import Iterator

pytest_plugins = list(PLUGINS)

TEST_ACCOUNTS = [
    AccountConfig(id="0.0.1001", private_key="302e020100300506032b657004220420" + "11" * 32),
    AccountConfig(id="0.0.1002", private_key="302e020100300506032b657004220420" + "22" * 32),
]


def pytest_addoption(parser: pytest.Parser) -> None:
    parser.addoption(
        "--live",
        action="store_true",
        default=False,
        help="run the feature files against the configured network",
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--live"):
        return
    skip_live = pytest.mark.skip(reason="needs --live")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_live)


@pytest.fixture(scope="session")
def live(request: pytest.FixtureRequest) -> bool:
    return bool(request.config.getoption("--live"))


@pytest.fixture(scope="session")
def app_config(live: bool) -> AppConfig:
    """Live: env/YAML configuration.  Offline: two fake accounts, no settle delay."""
    if live:
        return AppConfig()
    return AppConfig(
        accounts=TEST_ACCOUNTS,
        mirror=MirrorNodeConfig(url="https://mirror.test", settle_seconds=0),
    )


@pytest.fixture(scope="session")
def ledger(live: bool, app_config: AppConfig) -> Iterator[LedgerClient | FakeLedger]:
    if not live:
        yield FakeLedger()
        return
    client = LedgerClient(app_config)
    client.connect()
    yield client
    client.close()


@pytest.fixture
def mirror_node(live: bool, app_config: AppConfig, ledger) -> MirrorNodeClient:
    if live:
        return MirrorNodeClient(app_config)
    return MirrorNodeClient(app_config, transport=ledger.mirror_transport())
