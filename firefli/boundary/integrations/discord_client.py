"""
Discord REST client.

Sends and edits messages either as a bot (channel messages API) or
through an incoming webhook. Every call is bounded by the shared
httpx client's timeout; timeouts and non-2xx answers surface as
NotificationDeliveryError and are never retried here.

Dependencies: httpx, firefli.core.exceptions, firefli.models
System role: Notification channel collaborator
"""

import logging
from typing import Any

import httpx

from firefli.core.exceptions import NotificationDeliveryError
from firefli.models.notification import Destination, DestinationType

logger = logging.getLogger(__name__)


class DiscordClient:
    """
    Thin async wrapper over the Discord message endpoints.

    Attributes:
        http_client: Shared httpx.AsyncClient (owns timeout and connection pool)
        api_base: Discord REST API base URL
    """

    def __init__(self, http_client: httpx.AsyncClient, api_base: str = "https://discord.com/api/v10") -> None:
        self.http_client = http_client
        self.api_base = api_base.rstrip("/")

    async def send_message(self, destination: Destination, payload: dict[str, Any]) -> str:
        """
        Post a new message.

        Args:
            destination: Bot channel or webhook
            payload: Discord message body (content/embeds)

        Returns:
            str: Id of the created message

        Raises:
            NotificationDeliveryError: On timeout, transport error, or non-2xx status
        """
        if destination.type == DestinationType.WEBHOOK:
            response = await self._request(
                "POST", "send", destination.webhook_url, json=payload, params={"wait": "true"}
            )
        else:
            response = await self._request(
                "POST",
                "send",
                f"{self.api_base}/channels/{destination.channel_id}/messages",
                json=payload,
                headers=self._bot_headers(destination),
            )

        try:
            message_id = response.json().get("id")
        except ValueError:
            message_id = None
        if not message_id:
            raise NotificationDeliveryError(
                "Discord response did not include a message id",
                operation="send",
                status_code=response.status_code,
            )
        return str(message_id)

    async def edit_message(self, destination: Destination, message_id: str, payload: dict[str, Any]) -> None:
        """
        Edit a previously sent message in place.

        Args:
            destination: Bot channel or webhook the message was sent through
            message_id: Id returned by send_message
            payload: Replacement message body

        Raises:
            NotificationDeliveryError: On timeout, transport error, or non-2xx status
        """
        if destination.type == DestinationType.WEBHOOK:
            base, _, _ = (destination.webhook_url or "").partition("?")
            await self._request("PATCH", "edit", f"{base.rstrip('/')}/messages/{message_id}", json=payload)
        else:
            await self._request(
                "PATCH",
                "edit",
                f"{self.api_base}/channels/{destination.channel_id}/messages/{message_id}",
                json=payload,
                headers=self._bot_headers(destination),
            )

    @staticmethod
    def _bot_headers(destination: Destination) -> dict[str, str]:
        return {"Authorization": f"Bot {destination.bot_token}"}

    async def _request(self, method: str, operation: str, url: str | None, **kwargs) -> httpx.Response:
        if not url:
            raise NotificationDeliveryError("Destination has no URL", operation=operation)

        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise NotificationDeliveryError(
                f"Discord {operation} timed out", operation=operation, details={"error": str(e)}
            ) from e
        except httpx.HTTPError as e:
            raise NotificationDeliveryError(
                f"Discord {operation} failed: {e}", operation=operation
            ) from e

        if response.status_code >= 400:
            raise NotificationDeliveryError(
                f"Discord {operation} rejected with status {response.status_code}",
                operation=operation,
                status_code=response.status_code,
                details={"body": response.text[:200]},
            )
        return response
