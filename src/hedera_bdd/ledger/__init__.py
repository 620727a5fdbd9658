"""Ledger access: SDK client wrapper and the value types it returns."""

from hedera_bdd.ledger.models import (
    Account,
    AccountBalance,
    PendingTransaction,
    ThresholdKey,
    TokenInfo,
    TokenSpec,
    TokenTransfer,
    TopicInfo,
    TopicMessage,
    TransactionResult,
    to_units,
)

__all__ = [
    "Account",
    "AccountBalance",
    "PendingTransaction",
    "ThresholdKey",
    "TokenInfo",
    "TokenSpec",
    "TokenTransfer",
    "TopicInfo",
    "TopicMessage",
    "TransactionResult",
    "to_units",
]
