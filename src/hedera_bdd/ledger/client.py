"""Ledger client for accounts, topics, tokens and transfers over the Hiero SDK.

Synchronous wrapper around ``hiero_sdk_python`` used by the step definitions:
- account balance queries and funded account creation
- topic create / info / message submit
- fungible token create / info / mint / associate
- token transfers built and signed ahead of submission, plus record lookup

Every transaction is frozen with the current operator as payer, signed by
the extra keys the operation needs, executed, and its receipt checked.  A
precheck rejection or any receipt status other than SUCCESS raises
:class:`TransactionFailedError`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import TYPE_CHECKING, Any

import hiero_sdk_python as hiero
from hiero_sdk_python.crypto.key_list import KeyList
from hiero_sdk_python.exceptions import MaxAttemptsError, PrecheckError
from hiero_sdk_python.tokens.supply_type import SupplyType

from hedera_bdd.config.settings import KeyType
from hedera_bdd.errors.definitions import ErrMissingEntityId, ErrOperatorNotSet
from hedera_bdd.errors.ledger_errors import LedgerError, TransactionFailedError
from hedera_bdd.ledger.models import (
    Account,
    AccountBalance,
    PendingTransaction,
    ThresholdKey,
    TokenInfo,
    TokenSpec,
    TokenTransfer,
    TopicInfo,
    TransactionResult,
)

if TYPE_CHECKING:
    from hedera_bdd.config.settings import AccountConfig, AppConfig

logger = logging.getLogger(__name__)


def status_name(code: Any) -> str:
    """Render a receipt or precheck status code as its ResponseCode name."""
    if code is None:
        return "UNKNOWN"
    try:
        return hiero.ResponseCode(code).name
    except ValueError:
        return str(code)


class LedgerClient:
    """Hiero SDK client bound to one network and one operator at a time.

    Usage::

        ledger = LedgerClient(config)
        ledger.connect()
        try:
            treasury = ledger.load_account(config.account(0))
            ledger.set_operator(treasury)
            balance = ledger.get_balance(treasury.account_id)
        finally:
            ledger.close()
    """

    def __init__(self, config: AppConfig) -> None:
        """Initialize the ledger client.

        Args:
            config: Suite configuration (network, key types).
        """
        self._config = config
        self._client: Any = None
        self._operator: Account | None = None

    def connect(self) -> None:
        """Create the underlying SDK client for the configured network."""
        network = hiero.Network(network=self._config.network.value)
        self._client = hiero.Client(network)
        logger.info("Connected to %s", self._config.network.value)

    def close(self) -> None:
        """Close the SDK client's channels."""
        if self._client is not None:
            self._client.close()
            self._client = None
        self._operator = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    @property
    def operator(self) -> Account | None:
        """The account currently paying for transactions."""
        return self._operator

    # ------------------------------------------------------------------
    # Accounts & keys
    # ------------------------------------------------------------------

    def load_account(self, account: AccountConfig) -> Account:
        """Parse a configured account's private key."""
        if account.key_type is KeyType.ECDSA:
            key = hiero.PrivateKey.from_string_ecdsa(account.private_key)
        else:
            key = hiero.PrivateKey.from_string_ed25519(account.private_key)
        return Account(account_id=account.id, private_key=key)

    def set_operator(self, account: Account) -> None:
        """Make *account* the payer and default signer of later transactions."""
        client = self._ensure_connected()
        client.set_operator(hiero.AccountId.from_string(account.account_id), account.private_key)
        self._operator = account

    def public_key(self, account: Account) -> Any:
        return account.private_key.public_key()

    def threshold_key(self, accounts: Sequence[Account], threshold: int) -> ThresholdKey:
        """Build a k-of-n key over the accounts' public keys."""
        return ThresholdKey(
            public_keys=tuple(self.public_key(a) for a in accounts),
            threshold=threshold,
        )

    def get_balance(self, account_id: str) -> AccountBalance:
        """Query hbar and token balances for *account_id*."""
        client = self._require_operator()
        result = (
            hiero.CryptoGetAccountBalanceQuery()
            .set_account_id(hiero.AccountId.from_string(account_id))
            .execute(client)
        )
        tokens = {str(token_id): int(amount) for token_id, amount in (result.token_balances or {}).items()}
        return AccountBalance(
            account_id=account_id,
            tinybars=int(result.hbars.to_tinybars()),
            tokens=tokens,
        )

    def create_account(self, initial_hbar: int | Decimal) -> Account:
        """Generate a key pair and create an account funded by the operator.

        Args:
            initial_hbar: Starting balance in hbar.

        Returns:
            The new account with its freshly generated private key.
        """
        if self._config.new_account_key_type is KeyType.ECDSA:
            key = hiero.PrivateKey.generate_ecdsa()
        else:
            key = hiero.PrivateKey.generate_ed25519()
        tx = (
            hiero.AccountCreateTransaction()
            .set_key(key.public_key())
            .set_initial_balance(hiero.Hbar(initial_hbar))
        )
        receipt = self._execute(tx, label="account create")
        if receipt.account_id is None:
            raise ErrMissingEntityId
        account_id = str(receipt.account_id)
        logger.info("Created account %s with %s hbar", account_id, initial_hbar)
        return Account(account_id=account_id, private_key=key)

    # ------------------------------------------------------------------
    # Topics
    # ------------------------------------------------------------------

    def create_topic(self, memo: str, submit_key: Account | ThresholdKey) -> str:
        """Create a topic gated by *submit_key* and return its ID."""
        tx = hiero.TopicCreateTransaction().set_memo(memo).set_submit_key(self._sdk_key(submit_key))
        receipt = self._execute(tx, label="topic create")
        if receipt.topic_id is None:
            raise ErrMissingEntityId
        topic_id = str(receipt.topic_id)
        logger.info("Created topic %s (memo=%r)", topic_id, memo)
        return topic_id

    def get_topic_info(self, topic_id: str) -> TopicInfo:
        client = self._require_operator()
        info = hiero.TopicInfoQuery().set_topic_id(hiero.TopicId.from_string(topic_id)).execute(client)
        return TopicInfo(topic_id=topic_id, memo=info.memo)

    def submit_message(
        self,
        topic_id: str,
        message: str,
        signers: Sequence[Account] = (),
    ) -> TransactionResult:
        """Publish *message* to *topic_id*, signed by the submit key holders."""
        tx = (
            hiero.TopicMessageSubmitTransaction()
            .set_topic_id(hiero.TopicId.from_string(topic_id))
            .set_message(message)
        )
        receipt = self._execute(tx, *(s.private_key for s in signers), label="topic message submit")
        logger.info("Published message to topic %s", topic_id)
        return TransactionResult(
            transaction_id=str(tx.transaction_id),
            status=status_name(receipt.status),
            handle=tx.transaction_id,
        )

    # ------------------------------------------------------------------
    # Tokens
    # ------------------------------------------------------------------

    def create_token(self, spec: TokenSpec) -> str:
        """Create a fungible token and return its ID.

        The treasury key always signs; the admin key signs when one is set.
        """
        tx = (
            hiero.TokenCreateTransaction()
            .set_token_name(spec.name)
            .set_token_symbol(spec.symbol)
            .set_decimals(spec.decimals)
            .set_initial_supply(spec.initial_supply)
            .set_treasury_account_id(hiero.AccountId.from_string(spec.treasury.account_id))
        )
        if spec.finite:
            tx.set_supply_type(SupplyType.FINITE)
            tx.set_max_supply(spec.max_supply)
        if spec.admin_key is not None:
            tx.set_admin_key(spec.admin_key)
        if spec.supply_key is not None:
            tx.set_supply_key(spec.supply_key)

        signers = [spec.treasury.private_key]
        if spec.admin_key is not None:
            signers.append(spec.admin_key)
        receipt = self._execute(tx, *signers, label="token create")
        if receipt.token_id is None:
            raise ErrMissingEntityId
        token_id = str(receipt.token_id)
        logger.info(
            "Created token %s %s (%s) treasury=%s supply=%d",
            token_id,
            spec.name,
            spec.symbol,
            spec.treasury.account_id,
            spec.initial_supply,
        )
        return token_id

    def get_token_info(self, token_id: str) -> TokenInfo:
        client = self._require_operator()
        info = hiero.TokenInfoQuery().set_token_id(hiero.TokenId.from_string(token_id)).execute(client)
        return TokenInfo(
            token_id=token_id,
            name=info.name,
            symbol=info.symbol,
            decimals=int(info.decimals),
            total_supply=int(info.total_supply),
            treasury_account_id=str(info.treasury),
        )

    def mint_token(self, token_id: str, amount: int, supply_key: Any = None) -> TransactionResult:
        """Mint *amount* smallest units of *token_id* into its treasury."""
        tx = (
            hiero.TokenMintTransaction()
            .set_token_id(hiero.TokenId.from_string(token_id))
            .set_amount(amount)
        )
        signers = () if supply_key is None else (supply_key,)
        receipt = self._execute(tx, *signers, label="token mint")
        logger.info("Minted %d units of %s", amount, token_id)
        return TransactionResult(
            transaction_id=str(tx.transaction_id),
            status=status_name(receipt.status),
            handle=tx.transaction_id,
        )

    def associate_token(self, account: Account, token_id: str) -> TransactionResult:
        """Associate *account* with *token_id*, signed by the account's key."""
        tx = (
            hiero.TokenAssociateTransaction()
            .set_account_id(hiero.AccountId.from_string(account.account_id))
            .add_token_id(hiero.TokenId.from_string(token_id))
        )
        receipt = self._execute(tx, account.private_key, label="token associate")
        logger.info("Associated %s with token %s", account.account_id, token_id)
        return TransactionResult(
            transaction_id=str(tx.transaction_id),
            status=status_name(receipt.status),
            handle=tx.transaction_id,
        )

    # ------------------------------------------------------------------
    # Transfers
    # ------------------------------------------------------------------

    def build_token_transfer(
        self,
        token_id: str,
        transfers: Sequence[TokenTransfer],
        signers: Sequence[Account],
    ) -> PendingTransaction:
        """Freeze and sign a token transfer without submitting it.

        The current operator is recorded as payer.  Whoever submits the
        transaction later, the fee is charged to that account.
        """
        client = self._require_operator()
        sdk_token_id = hiero.TokenId.from_string(token_id)
        tx = hiero.TransferTransaction()
        for leg in transfers:
            tx.add_token_transfer(sdk_token_id, hiero.AccountId.from_string(leg.account_id), leg.amount)
        tx.freeze_with(client)
        for signer in signers:
            tx.sign(signer.private_key)
        return PendingTransaction(
            transaction_id=str(tx.transaction_id),
            payer_account_id=str(tx.transaction_id.account_id),
            handle=tx,
        )

    def transfer_token(
        self,
        token_id: str,
        sender: Account,
        recipient_id: str,
        amount: int,
    ) -> TransactionResult:
        """Move *amount* units of *token_id* from *sender* to *recipient_id*."""
        pending = self.build_token_transfer(
            token_id,
            [TokenTransfer(sender.account_id, -amount), TokenTransfer(recipient_id, amount)],
            [sender],
        )
        return self.submit(pending)

    def submit(self, pending: PendingTransaction) -> TransactionResult:
        """Execute a previously built transaction and check its receipt."""
        tx = pending.handle
        receipt = self._run(tx, label=f"transaction {pending.transaction_id}")
        logger.info("Submitted %s", pending.transaction_id)
        return TransactionResult(
            transaction_id=pending.transaction_id,
            status=status_name(receipt.status),
            handle=tx.transaction_id,
        )

    def get_payer(self, result: TransactionResult) -> str:
        """Return the account that paid for *result*, read from its record."""
        client = self._require_operator()
        record = hiero.TransactionRecordQuery().set_transaction_id(result.handle).execute(client)
        return str(record.transaction_id.account_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _execute(self, tx: Any, *signers: Any, label: str) -> Any:
        """Freeze *tx* with the operator, add *signers*, execute, check receipt."""
        client = self._require_operator()
        tx.freeze_with(client)
        for key in signers:
            tx.sign(key)
        return self._run(tx, label=label)

    def _run(self, tx: Any, *, label: str) -> Any:
        client = self._require_operator()
        try:
            receipt = tx.execute(client)
        except (PrecheckError, MaxAttemptsError) as exc:
            raise TransactionFailedError(
                f"{label} failed: {exc}",
                status=status_name(getattr(exc, "status", None)),
                transaction_id=str(tx.transaction_id),
            ) from exc
        status = status_name(receipt.status)
        if status != "SUCCESS":
            raise TransactionFailedError(
                f"{label} finished with {status}",
                status=status,
                transaction_id=str(tx.transaction_id),
            )
        return receipt

    def _sdk_key(self, key: Account | ThresholdKey) -> Any:
        if isinstance(key, ThresholdKey):
            return KeyList(keys=list(key.public_keys), threshold=key.threshold)
        return self.public_key(key)

    def _ensure_connected(self) -> Any:
        if self._client is None:
            msg = "LedgerClient is not connected; call connect() first"
            raise LedgerError(msg, code="not-connected")
        return self._client

    def _require_operator(self) -> Any:
        client = self._ensure_connected()
        if self._operator is None:
            raise ErrOperatorNotSet
        return client
