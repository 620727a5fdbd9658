"""Account steps: configured accounts, balance checks and generated holders."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pytest_bdd import given

from hedera_bdd.ledger.models import to_units
from hedera_bdd.steps.parsing import ORDINALS, step

if TYPE_CHECKING:
    from hedera_bdd.config.settings import AppConfig
    from hedera_bdd.ledger.client import LedgerClient
    from hedera_bdd.ledger.models import Account
    from hedera_bdd.steps.context import ScenarioContext

logger = logging.getLogger(__name__)

# Extra hbar on top of the "more than" threshold so the check holds after fees.
_FUNDING_MARGIN = 2


def load_scenario_account(
    ledger: LedgerClient,
    app_config: AppConfig,
    ctx: ScenarioContext,
    ordinal: str,
) -> Account:
    """Register configured account *ordinal*; the first becomes the operator."""
    index = ORDINALS[ordinal]
    account = ledger.load_account(app_config.account(index))
    ctx.accounts[ordinal] = account
    if index == 0:
        ledger.set_operator(account)
        ctx.operator = account
    return account


def _assert_hbars_above(ledger: LedgerClient, account: Account, expected: int) -> None:
    balance = ledger.get_balance(account.account_id)
    logger.info("%s holds %s hbar", account.account_id, balance.hbars)
    assert balance.hbars > expected, (
        f"{account.account_id} holds {balance.hbars} hbar, expected more than {expected}"
    )


def _fund_token_holder(
    ledger: LedgerClient,
    app_config: AppConfig,
    ctx: ScenarioContext,
    ordinal: str,
    hbar: int,
    tokens: int,
) -> Account:
    """Create an account, associate it with the scenario token, send it tokens."""
    token_id = ctx.require("token_id")
    account = ledger.create_account(hbar)
    ctx.accounts[ordinal] = account
    ledger.associate_token(account, token_id)
    ledger.transfer_token(
        token_id,
        ctx.treasury,
        account.account_id,
        to_units(tokens, app_config.token_decimals),
    )
    return account


@given(step("a {ordinal:Ordinal} account with more than {balance:d} hbars"))
@given(step("A {ordinal:Ordinal} hedera account with more than {balance:d} hbar"))
def configured_account_with_balance(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    ordinal: str,
    balance: int,
) -> None:
    account = load_scenario_account(ledger, app_config, scenario_context, ordinal)
    _assert_hbars_above(ledger, account, balance)


@given(step("A Hedera account with more than {balance:d} hbar"))
def operator_account_with_balance(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    balance: int,
) -> None:
    account = load_scenario_account(ledger, app_config, scenario_context, "first")
    _assert_hbars_above(ledger, account, balance)


@given(step("A {ordinal:Ordinal} Hedera account"))
def configured_account(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    ordinal: str,
) -> None:
    load_scenario_account(ledger, app_config, scenario_context, ordinal)


@given(step("A {ordinal:Ordinal} Hedera account with more than {balance:d} hbar and {tokens:d} HTT tokens"))
def generated_account_above(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    ordinal: str,
    balance: int,
    tokens: int,
) -> None:
    account = _fund_token_holder(
        ledger, app_config, scenario_context, ordinal, balance + _FUNDING_MARGIN, tokens
    )
    result = ledger.get_balance(account.account_id)
    assert result.hbars > balance
    assert result.token_balance(scenario_context.token_id) == to_units(tokens, app_config.token_decimals)


@given(step("A {ordinal:Ordinal} Hedera account with {balance:d} hbar and {tokens:d} HTT tokens"))
def generated_account_exact(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    ordinal: str,
    balance: int,
    tokens: int,
) -> None:
    account = _fund_token_holder(ledger, app_config, scenario_context, ordinal, balance, tokens)
    result = ledger.get_balance(account.account_id)
    assert result.hbars == balance
    assert result.token_balance(scenario_context.token_id) == to_units(tokens, app_config.token_decimals)
