"""LedgerError, the base exception class for all hedera-bdd errors."""

from __future__ import annotations


class LedgerError(Exception):
    """Base error for all ledger operations.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable error code string.
    """

    def __init__(self, message: str, *, code: str = "ledger-error") -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class TransactionFailedError(LedgerError):
    """A transaction was rejected at precheck or reached a non-SUCCESS receipt."""

    def __init__(
        self,
        message: str,
        *,
        status: str = "UNKNOWN",
        transaction_id: str = "",
    ) -> None:
        super().__init__(message, code="transaction-failed")
        self.status = status
        self.transaction_id = transaction_id


class MirrorNodeError(LedgerError):
    """Error from the mirror node REST API."""

    def __init__(self, message: str, *, status_code: int = 502) -> None:
        super().__init__(message, code="mirror-node-error")
        self.status_code = status_code


class ConfigurationError(LedgerError):
    """Missing or invalid suite configuration."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="configuration-error")


class ScenarioStateError(LedgerError):
    """A step read scenario state that no earlier step has set."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="scenario-state")
