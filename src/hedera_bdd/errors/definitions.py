"""Pre-defined error instances shared by the ledger and mirror clients."""

from __future__ import annotations

from hedera_bdd.errors.ledger_errors import ConfigurationError, LedgerError, MirrorNodeError

# -- Client lifecycle ------------------------------------------------------

ErrOperatorNotSet = LedgerError(
    "no operator account set; call set_operator() first", code="operator-not-set"
)
ErrMirrorNotConnected = MirrorNodeError(
    "mirror node client not connected; call connect() first", status_code=500
)

# -- Configuration ---------------------------------------------------------

ErrNoAccounts = ConfigurationError(
    "no accounts configured; set HEDERABDD_ACCOUNTS or an accounts: list in the YAML file"
)

# -- Ledger data -----------------------------------------------------------

ErrMissingEntityId = LedgerError(
    "receipt did not carry the created entity id", code="missing-entity-id"
)
