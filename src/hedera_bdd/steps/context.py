"""Per-scenario state threaded through Given/When/Then steps."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from hedera_bdd.errors.ledger_errors import ScenarioStateError

if TYPE_CHECKING:
    from hedera_bdd.ledger.models import (
        Account,
        PendingTransaction,
        ThresholdKey,
        TransactionResult,
    )


@dataclass
class ScenarioContext:
    """Mutable state for a single scenario, discarded when it ends.

    Steps write IDs, keys and transactions here for later steps to read.
    Read through :meth:`require` / :meth:`account` so a step running out of
    order fails with a message naming the missing value.
    """

    treasury: Account
    operator: Account
    accounts: dict[str, Account] = field(default_factory=dict)
    threshold_key: ThresholdKey | None = None
    topic_id: str | None = None
    topic_signers: list[Account] = field(default_factory=list)
    token_id: str | None = None
    pending: PendingTransaction | None = None
    submitted: TransactionResult | None = None
    tags: frozenset[str] = frozenset()

    def require(self, name: str) -> Any:
        """Return attribute *name*, raising if no earlier step has set it."""
        value = getattr(self, name)
        if value is None:
            msg = f"{name} has not been set by an earlier step"
            raise ScenarioStateError(msg)
        return value

    def account(self, ordinal: str) -> Account:
        """Return the scenario account registered under *ordinal*."""
        try:
            return self.accounts[ordinal]
        except KeyError:
            msg = f"no {ordinal} account has been set up in this scenario"
            raise ScenarioStateError(msg) from None
