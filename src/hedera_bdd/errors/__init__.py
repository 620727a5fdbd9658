"""Error hierarchy for ledger, mirror node and scenario failures."""

from hedera_bdd.errors.ledger_errors import (
    ConfigurationError,
    LedgerError,
    MirrorNodeError,
    ScenarioStateError,
    TransactionFailedError,
)

__all__ = [
    "ConfigurationError",
    "LedgerError",
    "MirrorNodeError",
    "ScenarioStateError",
    "TransactionFailedError",
]
