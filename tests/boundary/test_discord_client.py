"""
Test suite for DiscordClient.

Uses httpx.MockTransport to assert the exact requests sent for bot and
webhook destinations.

System role: Verification of the notification channel collaborator
"""

import json

import httpx
import pytest

from firefli.boundary.integrations.discord_client import DiscordClient
from firefli.core.exceptions import NotificationDeliveryError
from firefli.models.notification import Destination, DestinationType

BOT = Destination(type=DestinationType.BOT, channel_id="555", bot_token="bot-token")
WEBHOOK = Destination(type=DestinationType.WEBHOOK, webhook_url="https://discord.com/api/webhooks/1/abc")
PAYLOAD = {"embeds": [{"title": "Hello"}]}


def make_client(handler) -> tuple[DiscordClient, list[httpx.Request]]:
    seen: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return handler(request)

    http_client = httpx.AsyncClient(transport=httpx.MockTransport(record))
    return DiscordClient(http_client, api_base="https://discord.test/api/v10"), seen


class TestSendMessage:
    """Test suite for DiscordClient.send_message()."""

    async def test_send_message_should_post_to_channel_as_bot(self) -> None:
        """Test bot destinations use the channel messages API."""
        client, seen = make_client(lambda r: httpx.Response(200, json={"id": "900"}))

        message_id = await client.send_message(BOT, PAYLOAD)

        assert message_id == "900"
        assert seen[0].method == "POST"
        assert str(seen[0].url) == "https://discord.test/api/v10/channels/555/messages"
        assert seen[0].headers["Authorization"] == "Bot bot-token"
        assert json.loads(seen[0].content) == PAYLOAD

    async def test_send_message_should_wait_for_webhook_message(self) -> None:
        """Test webhook sends ask Discord to return the created message."""
        client, seen = make_client(lambda r: httpx.Response(200, json={"id": 901}))

        message_id = await client.send_message(WEBHOOK, PAYLOAD)

        assert message_id == "901"
        assert seen[0].url.params["wait"] == "true"
        assert seen[0].url.path == "/api/webhooks/1/abc"
        assert "Authorization" not in seen[0].headers

    async def test_send_message_should_raise_on_error_status(self) -> None:
        """Test non-2xx answers become delivery errors."""
        client, _ = make_client(lambda r: httpx.Response(403, json={"message": "Missing Access"}))

        with pytest.raises(NotificationDeliveryError) as exc_info:
            await client.send_message(BOT, PAYLOAD)

        assert exc_info.value.status_code == 403

    async def test_send_message_should_raise_on_timeout(self) -> None:
        """Test timeouts are treated as delivery failures."""

        def timeout(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        client, _ = make_client(timeout)

        with pytest.raises(NotificationDeliveryError, match="timed out"):
            await client.send_message(WEBHOOK, PAYLOAD)

    async def test_send_message_should_require_message_id(self) -> None:
        """Test a success response without an id is rejected."""
        client, _ = make_client(lambda r: httpx.Response(204))

        with pytest.raises(NotificationDeliveryError):
            await client.send_message(WEBHOOK, PAYLOAD)


class TestEditMessage:
    """Test suite for DiscordClient.edit_message()."""

    async def test_edit_message_should_patch_channel_message(self) -> None:
        """Test bot edits target the stored message id."""
        client, seen = make_client(lambda r: httpx.Response(200, json={"id": "900"}))

        await client.edit_message(BOT, "900", PAYLOAD)

        assert seen[0].method == "PATCH"
        assert str(seen[0].url) == "https://discord.test/api/v10/channels/555/messages/900"

    async def test_edit_message_should_patch_webhook_message(self) -> None:
        """Test webhook edits drop the query string and use the messages sub-path."""
        client, seen = make_client(lambda r: httpx.Response(200, json={"id": "901"}))
        destination = Destination(type=DestinationType.WEBHOOK, webhook_url="https://discord.com/api/webhooks/1/abc?thread_id=7")

        await client.edit_message(destination, "901", PAYLOAD)

        assert seen[0].method == "PATCH"
        assert str(seen[0].url) == "https://discord.com/api/webhooks/1/abc/messages/901"

    async def test_edit_message_should_raise_when_message_gone(self) -> None:
        """Test a deleted message surfaces as a delivery error."""
        client, _ = make_client(lambda r: httpx.Response(404, json={"message": "Unknown Message"}))

        with pytest.raises(NotificationDeliveryError):
            await client.edit_message(WEBHOOK, "1", PAYLOAD)
