"""Token transfer steps: two-party, recipient-paid and multi-party transfers.

The treasury of ``A token named ...`` comes from the scenario tags:
``@treasury_first`` / ``@treasury_second`` pick that scenario account,
otherwise the configured treasury account holds the supply.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pytest_bdd import given, then, when

from hedera_bdd.ledger.models import TokenSpec, TokenTransfer, to_units
from hedera_bdd.steps.parsing import ORDINALS, step

if TYPE_CHECKING:
    from hedera_bdd.config.settings import AppConfig
    from hedera_bdd.ledger.client import LedgerClient
    from hedera_bdd.ledger.models import Account
    from hedera_bdd.steps.context import ScenarioContext

logger = logging.getLogger(__name__)

_TREASURY_TAG = "treasury_"


def scenario_treasury(ctx: ScenarioContext) -> Account:
    """Pick the token treasury named by the scenario's tags."""
    for tag in sorted(ctx.tags):
        if tag.startswith(_TREASURY_TAG):
            ordinal = tag.removeprefix(_TREASURY_TAG)
            if ordinal in ORDINALS:
                return ctx.account(ordinal)
    return ctx.treasury


@given(step("A token named {name} ({symbol}) with {supply:d} tokens"))
def token_with_supply(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    name: str,
    symbol: str,
    supply: int,
) -> None:
    treasury = scenario_treasury(scenario_context)
    units = to_units(supply, app_config.token_decimals)
    spec = TokenSpec(
        name=name,
        symbol=symbol,
        decimals=app_config.token_decimals,
        treasury=treasury,
        initial_supply=units,
        max_supply=units,
        finite=True,
    )
    scenario_context.token_id = ledger.create_token(spec)


@given(step("The {ordinal:Ordinal} account holds {tokens:d} HTT tokens"))
@then(step("The {ordinal:Ordinal} account holds {tokens:d} HTT tokens"))
def account_holds(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    ordinal: str,
    tokens: int,
) -> None:
    token_id = scenario_context.require("token_id")
    account = scenario_context.account(ordinal)
    held = ledger.get_balance(account.account_id).token_balance(token_id)
    expected = to_units(tokens, app_config.token_decimals)
    assert held == expected, f"{ordinal} account holds {held} units of {token_id}, expected {expected}"


@when(
    step(
        "The {sender:Ordinal} account creates a transaction to transfer "
        "{tokens:d} HTT tokens to the {recipient:Ordinal} account"
    )
)
def create_transfer(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    sender: str,
    tokens: int,
    recipient: str,
) -> None:
    token_id = scenario_context.require("token_id")
    source = scenario_context.account(sender)
    target = scenario_context.account(recipient)

    associated = ledger.associate_token(target, token_id)
    assert associated.succeeded

    units = to_units(tokens, app_config.token_decimals)
    scenario_context.pending = ledger.build_token_transfer(
        token_id,
        [TokenTransfer(source.account_id, -units), TokenTransfer(target.account_id, units)],
        [source],
    )


@when(
    step(
        "A transaction is created to transfer {out:d} HTT tokens out of the first and second "
        "account and {third:d} HTT tokens into the third account and {fourth:d} HTT tokens "
        "into the fourth account"
    )
)
def create_multi_party_transfer(
    ledger: LedgerClient,
    app_config: AppConfig,
    scenario_context: ScenarioContext,
    out: int,
    third: int,
    fourth: int,
) -> None:
    token_id = scenario_context.require("token_id")
    decimals = app_config.token_decimals
    first = scenario_context.account("first")
    second = scenario_context.account("second")
    legs = [
        TokenTransfer(first.account_id, -to_units(out, decimals)),
        TokenTransfer(second.account_id, -to_units(out, decimals)),
        TokenTransfer(scenario_context.account("third").account_id, to_units(third, decimals)),
        TokenTransfer(scenario_context.account("fourth").account_id, to_units(fourth, decimals)),
    ]
    scenario_context.pending = ledger.build_token_transfer(token_id, legs, [first, second])


@when(step("The first account submits the transaction"))
def submit_transaction(ledger: LedgerClient, scenario_context: ScenarioContext) -> None:
    pending = scenario_context.require("pending")
    result = ledger.submit(pending)
    assert result.succeeded
    scenario_context.submitted = result


@then(step("The first account has paid for the transaction fee"))
def first_account_paid(ledger: LedgerClient, scenario_context: ScenarioContext) -> None:
    result = scenario_context.require("submitted")
    payer = ledger.get_payer(result)
    logger.info(
        "Transaction %s paid by %s (operator %s)",
        result.transaction_id,
        payer,
        scenario_context.operator.account_id,
    )
    assert payer == scenario_context.account("first").account_id
