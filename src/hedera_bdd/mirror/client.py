"""Mirror node REST client for topic messages.

Async HTTP client for the public mirror node API:
- GET /api/v1/topics/<topicId>/messages

The mirror node is eventually consistent: a message accepted by consensus
shows up here a few seconds later.  Callers wait before reading; this
client does not retry.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import TYPE_CHECKING, Any

import httpx

from hedera_bdd.errors.definitions import ErrMirrorNotConnected
from hedera_bdd.errors.ledger_errors import MirrorNodeError
from hedera_bdd.ledger.models import TopicMessage

if TYPE_CHECKING:
    from hedera_bdd.config.settings import AppConfig

logger = logging.getLogger(__name__)


def decode_message(encoded: str) -> str:
    """Decode a base64 mirror node ``message`` field to stripped UTF-8 text."""
    try:
        raw = base64.b64decode(encoded, validate=True)
    except binascii.Error as exc:
        raise MirrorNodeError(f"message is not valid base64: {exc}") from exc
    return raw.decode("utf-8", errors="replace").strip()


class MirrorNodeClient:
    """Async HTTP client for the mirror node REST API.

    Usage::

        mirror = MirrorNodeClient(config)
        await mirror.connect()
        try:
            latest = await mirror.get_latest_topic_message("0.0.1234")
        finally:
            await mirror.close()
    """

    def __init__(
        self,
        config: AppConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the mirror node client.

        Args:
            config: Suite configuration (mirror URL and timeout).
            transport: Optional httpx transport, used by tests to serve
                canned responses.
        """
        self._base_url = config.mirror_url
        self._timeout = config.mirror.timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def connect(self) -> None:
        """Create the underlying HTTP client."""
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            headers={"Accept": "application/json"},
            timeout=self._timeout,
            transport=self._transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is active."""
        return self._client is not None

    @property
    def base_url(self) -> str:
        return self._base_url

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def get_topic_messages(
        self,
        topic_id: str,
        *,
        limit: int | None = None,
        order: str | None = None,
    ) -> list[TopicMessage]:
        """List the messages published to a topic.

        Args:
            topic_id: Topic entity ID (``shard.realm.num``).
            limit: Maximum number of messages to request.
            order: ``"asc"`` (the mirror's default, oldest first) or ``"desc"``.

        Returns:
            Decoded TopicMessage objects in the requested order.

        Raises:
            MirrorNodeError: On transport errors, non-200 responses or a
                malformed response body.
        """
        client = self._ensure_connected()
        params: dict[str, Any] = {}
        if limit is not None:
            params["limit"] = limit
        if order is not None:
            params["order"] = order

        try:
            response = await client.get(f"/api/v1/topics/{topic_id}/messages", params=params)
        except httpx.HTTPError as exc:
            raise MirrorNodeError(f"mirror node request failed: {exc}") from exc

        if response.status_code != 200:
            raise MirrorNodeError(
                f"failed to fetch messages for {topic_id}: "
                f"{response.status_code} {response.reason_phrase}",
                status_code=response.status_code,
            )

        try:
            data: dict[str, Any] = response.json()
            items: list[dict[str, Any]] = data.get("messages") or []
            return [
                TopicMessage(
                    topic_id=item.get("topic_id", topic_id),
                    sequence_number=item.get("sequence_number", 0),
                    consensus_timestamp=item.get("consensus_timestamp", ""),
                    message=decode_message(item["message"]),
                )
                for item in items
            ]
        except (ValueError, KeyError, AttributeError, TypeError) as exc:
            raise MirrorNodeError(f"malformed messages response for {topic_id}: {exc!r}") from exc

    async def get_latest_topic_message(self, topic_id: str) -> TopicMessage | None:
        """Return the most recent message on *topic_id*, or None if none yet."""
        messages = await self.get_topic_messages(topic_id, limit=1, order="desc")
        if not messages:
            logger.warning("No messages found yet in mirror node for topic %s", topic_id)
            return None
        return messages[0]

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _ensure_connected(self) -> httpx.AsyncClient:
        if self._client is None:
            raise ErrMirrorNotConnected
        return self._client
