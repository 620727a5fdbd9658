"""Tests for the mirror node HTTP client using an httpx mock transport."""

from __future__ import annotations

import base64

import httpx
import pytest

from hedera_bdd.config.settings import AppConfig, MirrorNodeConfig
from hedera_bdd.errors.ledger_errors import MirrorNodeError
from hedera_bdd.mirror.client import MirrorNodeClient, decode_message

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_TOPIC_ID = "0.0.4242"


def _config() -> AppConfig:
    return AppConfig(mirror=MirrorNodeConfig(url="https://mirror.test"))


def _b64(text: str) -> str:
    return base64.b64encode(text.encode()).decode()


async def _connected(handler) -> MirrorNodeClient:
    mirror = MirrorNodeClient(_config(), transport=httpx.MockTransport(handler))
    await mirror.connect()
    return mirror


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestMirrorLifecycle:
    async def test_not_connected_by_default(self) -> None:
        assert MirrorNodeClient(_config()).is_connected is False

    async def test_connect_and_close(self) -> None:
        mirror = MirrorNodeClient(_config())
        await mirror.connect()
        assert mirror.is_connected is True
        await mirror.close()
        assert mirror.is_connected is False

    async def test_close_idempotent(self) -> None:
        mirror = MirrorNodeClient(_config())
        await mirror.close()
        assert mirror.is_connected is False

    async def test_not_connected_raises(self) -> None:
        mirror = MirrorNodeClient(_config())
        with pytest.raises(MirrorNodeError, match="not connected"):
            await mirror.get_topic_messages(_TOPIC_ID)

    def test_base_url_from_network(self) -> None:
        assert MirrorNodeClient(AppConfig()).base_url == "https://testnet.mirrornode.hedera.com"


# ---------------------------------------------------------------------------
# Topic messages
# ---------------------------------------------------------------------------


class TestTopicMessages:
    async def test_get_topic_messages(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == f"/api/v1/topics/{_TOPIC_ID}/messages"
            return httpx.Response(
                200,
                json={
                    "messages": [
                        {
                            "topic_id": _TOPIC_ID,
                            "sequence_number": 1,
                            "consensus_timestamp": "1700000000.000000001",
                            "message": _b64("first ride"),
                        },
                        {
                            "topic_id": _TOPIC_ID,
                            "sequence_number": 2,
                            "consensus_timestamp": "1700000001.000000001",
                            "message": _b64("second ride\n"),
                        },
                    ],
                    "links": {"next": None},
                },
            )

        mirror = await _connected(handler)
        try:
            messages = await mirror.get_topic_messages(_TOPIC_ID)
        finally:
            await mirror.close()

        assert [m.sequence_number for m in messages] == [1, 2]
        assert messages[0].message == "first ride"
        assert messages[1].message == "second ride"
        assert messages[1].consensus_timestamp == "1700000001.000000001"

    async def test_limit_is_sent(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["limit"] == "5"
            return httpx.Response(200, json={"messages": []})

        mirror = await _connected(handler)
        try:
            assert await mirror.get_topic_messages(_TOPIC_ID, limit=5) == []
        finally:
            await mirror.close()

    async def test_latest_message_asks_for_newest_first(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["order"] == "desc"
            assert request.url.params["limit"] == "1"
            return httpx.Response(
                200,
                json={"messages": [{"sequence_number": 30, "message": _b64("new")}]},
            )

        mirror = await _connected(handler)
        try:
            latest = await mirror.get_latest_topic_message(_TOPIC_ID)
        finally:
            await mirror.close()

        assert latest is not None
        assert latest.message == "new"
        assert latest.sequence_number == 30
        assert latest.topic_id == _TOPIC_ID

    async def test_latest_message_none_yet(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"messages": []})

        mirror = await _connected(handler)
        try:
            assert await mirror.get_latest_topic_message(_TOPIC_ID) is None
        finally:
            await mirror.close()

    async def test_missing_messages_key(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={})

        mirror = await _connected(handler)
        try:
            assert await mirror.get_topic_messages(_TOPIC_ID) == []
        finally:
            await mirror.close()


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestMirrorErrors:
    async def test_http_error_status(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(404, json={"_status": {"messages": [{"message": "Not found"}]}})

        mirror = await _connected(handler)
        try:
            with pytest.raises(MirrorNodeError, match="404") as excinfo:
                await mirror.get_topic_messages(_TOPIC_ID)
        finally:
            await mirror.close()
        assert excinfo.value.status_code == 404

    async def test_transport_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        mirror = await _connected(handler)
        try:
            with pytest.raises(MirrorNodeError, match="request failed"):
                await mirror.get_topic_messages(_TOPIC_ID)
        finally:
            await mirror.close()

    async def test_non_json_body(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, text="<html>gateway timeout</html>")

        mirror = await _connected(handler)
        try:
            with pytest.raises(MirrorNodeError, match="malformed"):
                await mirror.get_topic_messages(_TOPIC_ID)
        finally:
            await mirror.close()

    async def test_entry_without_message_field(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"messages": [{"sequence_number": 1}]})

        mirror = await _connected(handler)
        try:
            with pytest.raises(MirrorNodeError, match="malformed"):
                await mirror.get_topic_messages(_TOPIC_ID)
        finally:
            await mirror.close()


class TestDecodeMessage:
    def test_strips_whitespace(self) -> None:
        assert decode_message(_b64("  hello  \n")) == "hello"

    def test_invalid_base64(self) -> None:
        with pytest.raises(MirrorNodeError, match="not valid base64"):
            decode_message("***")
