"""Token service steps: create, inspect and mint fungible tokens."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest
from pytest_bdd import then, when

from hedera_bdd.errors.ledger_errors import LedgerError
from hedera_bdd.ledger.models import TokenSpec, to_units
from hedera_bdd.steps.parsing import step

if TYPE_CHECKING:
    from hedera_bdd.config.settings import AppConfig
    from hedera_bdd.ledger.client import LedgerClient
    from hedera_bdd.ledger.models import TokenInfo
    from hedera_bdd.steps.context import ScenarioContext

logger = logging.getLogger(__name__)

# Smallest units requested by the mint that must be refused.
_REFUSED_MINT_UNITS = 1000


def _token_info(ledger: LedgerClient, ctx: ScenarioContext) -> TokenInfo:
    return ledger.get_token_info(ctx.require("token_id"))


@when(step("I create a token named {name} ({symbol})"))
def create_mintable_token(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    name: str,
    symbol: str,
) -> None:
    owner = scenario_context.account("first")
    spec = TokenSpec(
        name=name,
        symbol=symbol,
        decimals=app_config.token_decimals,
        treasury=owner,
        admin_key=owner.private_key,
        supply_key=owner.private_key,
    )
    scenario_context.token_id = ledger.create_token(spec)


@when(step("I create a fixed supply token named {name} ({symbol}) with {supply:d} tokens"))
def create_fixed_supply_token(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    name: str,
    symbol: str,
    supply: int,
) -> None:
    units = to_units(supply, app_config.token_decimals)
    spec = TokenSpec(
        name=name,
        symbol=symbol,
        decimals=app_config.token_decimals,
        treasury=scenario_context.account("first"),
        initial_supply=units,
        max_supply=units,
        finite=True,
    )
    scenario_context.token_id = ledger.create_token(spec)


@then(step('The token has the name "{name}"'))
def token_name(ledger: LedgerClient, scenario_context: ScenarioContext, name: str) -> None:
    assert _token_info(ledger, scenario_context).name == name


@then(step('The token has the symbol "{symbol}"'))
def token_symbol(ledger: LedgerClient, scenario_context: ScenarioContext, symbol: str) -> None:
    assert _token_info(ledger, scenario_context).symbol == symbol


@then(step("The token has {decimals:d} decimals"))
def token_decimals(ledger: LedgerClient, scenario_context: ScenarioContext, decimals: int) -> None:
    assert _token_info(ledger, scenario_context).decimals == decimals


@then(step("The token is owned by the account"))
def token_owner(ledger: LedgerClient, scenario_context: ScenarioContext) -> None:
    info = _token_info(ledger, scenario_context)
    assert info.treasury_account_id == scenario_context.account("first").account_id


@then(step("The total supply of the token is {supply:d}"))
def token_total_supply(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    supply: int,
) -> None:
    info = _token_info(ledger, scenario_context)
    assert info.total_supply == to_units(supply, app_config.token_decimals)


@then(step("An attempt to mint {amount:d} additional tokens succeeds"))
def mint_succeeds(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    amount: int,
) -> None:
    before = _token_info(ledger, scenario_context).total_supply
    units = to_units(amount, app_config.token_decimals)
    result = ledger.mint_token(
        scenario_context.require("token_id"),
        units,
        supply_key=scenario_context.account("first").private_key,
    )
    assert result.succeeded
    assert _token_info(ledger, scenario_context).total_supply == before + units


@then(step("An attempt to mint tokens fails"))
def mint_fails(ledger: LedgerClient, scenario_context: ScenarioContext) -> None:
    token_id = scenario_context.require("token_id")
    with pytest.raises(LedgerError) as excinfo:
        ledger.mint_token(token_id, _REFUSED_MINT_UNITS)
    logger.info("Minting failed as expected for fixed supply token: %s", excinfo.value)
