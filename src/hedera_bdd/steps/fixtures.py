"""Fixtures and hooks shared by every scenario.

Before each scenario the configured treasury account (``accounts[0]``) is
loaded and made the client operator; scenarios that need another payer
switch the operator in their own Given steps.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from hedera_bdd.config.settings import AppConfig
from hedera_bdd.errors.definitions import ErrNoAccounts
from hedera_bdd.ledger.client import LedgerClient
from hedera_bdd.mirror.client import MirrorNodeClient
from hedera_bdd.steps.context import ScenarioContext

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@pytest.fixture(scope="session")
def app_config() -> AppConfig:
    """Suite configuration read from ``HEDERABDD_*`` env vars and YAML."""
    return AppConfig()


@pytest.fixture(scope="session")
def ledger(app_config: AppConfig) -> Iterator[LedgerClient]:
    """One SDK client for the whole session; operators switch per scenario."""
    client = LedgerClient(app_config)
    client.connect()
    yield client
    client.close()


@pytest.fixture
def mirror_node(app_config: AppConfig) -> MirrorNodeClient:
    """Unconnected mirror client; steps connect and close it per call."""
    return MirrorNodeClient(app_config)


@pytest.fixture
def scenario_context(app_config: AppConfig, ledger: LedgerClient) -> ScenarioContext:
    """Fresh scenario state with the treasury set as operator."""
    if not app_config.accounts:
        raise ErrNoAccounts
    treasury = ledger.load_account(app_config.account(0))
    ledger.set_operator(treasury)
    return ScenarioContext(treasury=treasury, operator=treasury)


def pytest_bdd_before_scenario(request, feature, scenario) -> None:
    ctx: ScenarioContext = request.getfixturevalue("scenario_context")
    ctx.tags = frozenset(scenario.tags)
    logger.info("Scenario: %s", scenario.name)
