"""Consensus topic steps: submit keys, topic creation and message delivery."""

from __future__ import annotations

import asyncio
import logging
import time
from typing import TYPE_CHECKING

from pytest_bdd import given, then, when

from hedera_bdd.steps.parsing import step

if TYPE_CHECKING:
    from hedera_bdd.config.settings import AppConfig
    from hedera_bdd.ledger.client import LedgerClient
    from hedera_bdd.ledger.models import Account, ThresholdKey, TopicMessage
    from hedera_bdd.mirror.client import MirrorNodeClient
    from hedera_bdd.steps.context import ScenarioContext

logger = logging.getLogger(__name__)


def _create_topic(
    ledger: LedgerClient,
    ctx: ScenarioContext,
    memo: str,
    submit_key: Account | ThresholdKey,
    signers: list[Account],
) -> None:
    topic_id = ledger.create_topic(memo, submit_key)
    assert topic_id, "topic create returned no topic id"
    ctx.topic_id = topic_id
    ctx.topic_signers = signers
    info = ledger.get_topic_info(topic_id)
    assert info.memo == memo, f"topic memo is {info.memo!r}, expected {memo!r}"


@given(step("A {threshold:d} of {total:d} threshold key with the first and second account"))
def threshold_key(
    ledger: LedgerClient,
    scenario_context: ScenarioContext,
    threshold: int,
    total: int,
) -> None:
    accounts = [scenario_context.account("first"), scenario_context.account("second")]
    key = ledger.threshold_key(accounts, threshold)
    scenario_context.threshold_key = key
    assert key.threshold == threshold
    assert key.size == total


@when(step('A topic is created with the memo "{memo}" with the first account as the submit key'))
def topic_with_account_key(
    ledger: LedgerClient,
    scenario_context: ScenarioContext,
    memo: str,
) -> None:
    first = scenario_context.account("first")
    _create_topic(ledger, scenario_context, memo, first, [first])


@when(step('A topic is created with the memo "{memo}" with the threshold key as the submit key'))
def topic_with_threshold_key(
    ledger: LedgerClient,
    scenario_context: ScenarioContext,
    memo: str,
) -> None:
    key: ThresholdKey = scenario_context.require("threshold_key")
    holders = [scenario_context.account("first"), scenario_context.account("second")]
    _create_topic(ledger, scenario_context, memo, key, holders[: key.threshold])


@when(step('The message "{message}" is published to the topic'))
def publish_message(
    ledger: LedgerClient,
    scenario_context: ScenarioContext,
    message: str,
) -> None:
    topic_id = scenario_context.require("topic_id")
    ledger.submit_message(topic_id, message, scenario_context.topic_signers)


async def _latest_message(mirror: MirrorNodeClient, topic_id: str) -> TopicMessage | None:
    await mirror.connect()
    try:
        return await mirror.get_latest_topic_message(topic_id)
    finally:
        await mirror.close()


@then(step('The message "{message}" is received by the topic and can be printed to the console'))
def message_received(
    app_config: AppConfig,
    mirror_node: MirrorNodeClient,
    scenario_context: ScenarioContext,
    message: str,
) -> None:
    topic_id = scenario_context.require("topic_id")
    logger.info("Waiting for mirror node to update...")
    time.sleep(app_config.mirror.settle_seconds)

    latest = asyncio.run(_latest_message(mirror_node, topic_id))
    if latest is None:
        return
    print(f"\nLatest message: {latest.message}\n")
    logger.info("Topic %s message #%d: %s", topic_id, latest.sequence_number, latest.message)
    assert latest.message == message
