"""Ledger value types returned by the ledger client.

Plain frozen dataclasses keyed by string entity IDs (``"0.0.1234"``) so the
step definitions never depend on SDK object identity.  Key material is kept
as opaque handles: whatever the ledger implementation needs to sign with.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

TINYBARS_PER_HBAR = 100_000_000


def to_units(tokens: int, decimals: int) -> int:
    """Convert a whole-token amount to the token's smallest unit."""
    return tokens * 10**decimals


# ---------------------------------------------------------------------------
# Accounts & keys
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Account:
    """An account ID with the private key that controls it."""

    account_id: str
    private_key: Any = field(repr=False, compare=False)


@dataclass(frozen=True)
class ThresholdKey:
    """A k-of-n key list over public keys."""

    public_keys: tuple[Any, ...]
    threshold: int

    def __post_init__(self) -> None:
        if not 1 <= self.threshold <= len(self.public_keys):
            msg = f"threshold {self.threshold} out of range for {len(self.public_keys)} key(s)"
            raise ValueError(msg)

    @property
    def size(self) -> int:
        return len(self.public_keys)


@dataclass(frozen=True)
class AccountBalance:
    """Hbar and token balances of one account."""

    account_id: str
    tinybars: int
    tokens: dict[str, int] = field(default_factory=dict)

    @property
    def hbars(self) -> Decimal:
        return Decimal(self.tinybars) / TINYBARS_PER_HBAR

    def token_balance(self, token_id: str) -> int:
        """Balance of *token_id* in smallest units; 0 when not associated."""
        return self.tokens.get(token_id, 0)


# ---------------------------------------------------------------------------
# Tokens & topics
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenSpec:
    """Parameters for a fungible token create transaction.

    Supplies are in the smallest unit.  ``max_supply`` only applies when
    ``finite`` is set.  ``treasury`` signs the create; ``admin_key`` and
    ``supply_key`` are optional private-key handles.
    """

    name: str
    symbol: str
    decimals: int
    treasury: Account
    initial_supply: int = 0
    max_supply: int = 0
    finite: bool = False
    admin_key: Any = field(default=None, repr=False)
    supply_key: Any = field(default=None, repr=False)


@dataclass(frozen=True)
class TokenInfo:
    """Token metadata as reported by the network."""

    token_id: str
    name: str
    symbol: str
    decimals: int
    total_supply: int
    treasury_account_id: str


@dataclass(frozen=True)
class TopicInfo:
    """Topic metadata as reported by the network."""

    topic_id: str
    memo: str


@dataclass(frozen=True)
class TopicMessage:
    """A message read back from the mirror node."""

    topic_id: str
    sequence_number: int
    consensus_timestamp: str
    message: str


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TokenTransfer:
    """One leg of a token transfer; negative amounts debit the account."""

    account_id: str
    amount: int


@dataclass(frozen=True)
class PendingTransaction:
    """A frozen, signed transaction that has not been submitted yet.

    ``payer_account_id`` is the operator at freeze time; that account pays
    the fee whoever submits it.
    """

    transaction_id: str
    payer_account_id: str
    handle: Any = field(repr=False, compare=False)


@dataclass(frozen=True)
class TransactionResult:
    """Outcome of a submitted transaction."""

    transaction_id: str
    status: str
    handle: Any = field(default=None, repr=False, compare=False)

    @property
    def succeeded(self) -> bool:
        return self.status == "SUCCESS"
