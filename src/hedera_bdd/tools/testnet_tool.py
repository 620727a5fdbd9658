#!/usr/bin/env python3
"""Hedera Testnet Tool: check balances, create accounts, read topics.

A standalone CLI utility for preparing and inspecting the accounts the
scenarios run against.  The operator is ``accounts[0]`` from the suite
configuration (``HEDERABDD_ACCOUNTS`` or ``HEDERABDD_CONFIG_PATH``):

    # Show hbar and token balances of an account
    python -m hedera_bdd.tools.testnet_tool balance <account_id>

    # Create a new ED25519 account funded by the operator (default 10 hbar)
    python -m hedera_bdd.tools.testnet_tool create-account [hbar]

    # List the messages published to a topic, via the mirror node
    python -m hedera_bdd.tools.testnet_tool messages <topic_id>

Fund the operator account from the portal faucet first:
    https://portal.hedera.com
"""

from __future__ import annotations

import asyncio
import logging
import sys
from decimal import Decimal

from hedera_bdd.config.settings import AppConfig


def _connected_ledger(config: AppConfig):
    from hedera_bdd.ledger.client import LedgerClient

    ledger = LedgerClient(config)
    ledger.connect()
    ledger.set_operator(ledger.load_account(config.account(0)))
    return ledger


def _cmd_balance(config: AppConfig, account_id: str) -> None:
    """Show hbar and token balances of an account."""
    ledger = _connected_ledger(config)
    try:
        bal = ledger.get_balance(account_id)
    finally:
        ledger.close()

    print(f"Account:  {bal.account_id}")
    print(f"Hbar:     {bal.hbars:>16,.8f}  ({bal.tinybars:,} tinybars)")
    if not bal.tokens:
        print("Tokens:   none associated")
        return
    print("Tokens:")
    for token_id, amount in sorted(bal.tokens.items()):
        print(f"  {token_id:<16} {amount:>16,} units")


def _cmd_create_account(config: AppConfig, hbar: Decimal) -> None:
    """Create an account funded by the operator and print its keys."""
    ledger = _connected_ledger(config)
    try:
        account = ledger.create_account(hbar)
    finally:
        ledger.close()

    key = account.private_key
    print("=" * 60)
    print(f"NEW {config.network.value.upper()} ACCOUNT")
    print("=" * 60)
    print()
    print(f"Account ID:   {account.account_id}")
    print(f"Private key:  {key.to_string()}")
    print(f"Public key:   {key.public_key().to_string()}")
    print(f"Balance:      {hbar} hbar")
    print()
    print("Add it to HEDERABDD_ACCOUNTS to use it in the scenarios.")


def _cmd_messages(config: AppConfig, topic_id: str) -> None:
    """List the messages published to a topic."""
    from hedera_bdd.mirror.client import MirrorNodeClient

    async def _run() -> None:
        mirror = MirrorNodeClient(config)
        await mirror.connect()
        try:
            messages = await mirror.get_topic_messages(topic_id)
            if not messages:
                print(f"No messages found yet for {topic_id}")
                return
            print(f"Messages on {topic_id} ({mirror.base_url}):")
            print("-" * 80)
            for m in messages:
                print(f"  #{m.sequence_number:<6} {m.consensus_timestamp:<22} {m.message}")
            print("-" * 80)
            print(f"  {len(messages)} message(s)")
        finally:
            await mirror.close()

    asyncio.run(_run())


def main() -> None:
    """CLI entry point."""
    if len(sys.argv) < 2:
        print(__doc__)
        sys.exit(1)

    config = AppConfig()
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    cmd = sys.argv[1].lower()

    if cmd == "balance":
        if len(sys.argv) < 3:
            print("Usage: testnet_tool balance <account_id>")
            sys.exit(1)
        _cmd_balance(config, sys.argv[2])
    elif cmd == "create-account":
        hbar = Decimal(sys.argv[2]) if len(sys.argv) > 2 else Decimal(10)
        _cmd_create_account(config, hbar)
    elif cmd == "messages":
        if len(sys.argv) < 3:
            print("Usage: testnet_tool messages <topic_id>")
            sys.exit(1)
        _cmd_messages(config, sys.argv[2])
    else:
        print(f"Unknown command: {cmd}")
        print(__doc__)
        sys.exit(1)


if __name__ == "__main__":
    main()
