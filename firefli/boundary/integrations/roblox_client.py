"""
Roblox web API client.

Username, headshot, group rank and universe name lookups used while
ingesting activity events. Throttled lookups (HTTP 429) are retried with
exponential backoff; other failures raise RobloxAPIError for the caller
to treat as best-effort.

Dependencies: httpx, tenacity, firefli.core.exceptions
System role: User-info and rank lookup collaborator
"""

import logging
from typing import Any

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from firefli.core.exceptions import RobloxAPIError, RobloxRateLimitError

logger = logging.getLogger(__name__)


class RobloxClient:
    """
    Async Roblox lookups.

    Attributes:
        http_client: Shared httpx.AsyncClient
        users_api: users.roblox.com base URL
        groups_api: groups.roblox.com base URL
        games_api: games.roblox.com base URL
        thumbnail_url: Headshot URL template with a {user_id} placeholder
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        users_api: str = "https://users.roblox.com",
        groups_api: str = "https://groups.roblox.com",
        games_api: str = "https://games.roblox.com",
        thumbnail_url: str = "https://www.roblox.com/headshot-thumbnail/image?userId={user_id}&width=420&height=420&format=png",
        max_attempts: int = 3,
    ) -> None:
        self.http_client = http_client
        self.users_api = users_api.rstrip("/")
        self.groups_api = groups_api.rstrip("/")
        self.games_api = games_api.rstrip("/")
        self.thumbnail_url = thumbnail_url
        self.max_attempts = max_attempts

    async def get_username(self, user_id: int) -> str | None:
        """
        Look up a user's current username.

        Returns:
            str | None: Username, None if the user does not exist
        """
        data = await self._get_json(f"{self.users_api}/v1/users/{user_id}", operation="get_username")
        if data is None:
            return None
        return data.get("name")

    def get_thumbnail_url(self, user_id: int) -> str:
        """Headshot URL for a user; no request is made."""
        return self.thumbnail_url.format(user_id=user_id)

    async def get_rank_in_group(self, group_id: int, user_id: int) -> int | None:
        """
        Look up a user's rank in a group.

        Args:
            group_id: Roblox group ID (workspace)
            user_id: Roblox user ID

        Returns:
            int | None: Rank number (0-255), None when the user is not in the group
        """
        data = await self._get_json(
            f"{self.groups_api}/v2/users/{user_id}/groups/roles", operation="get_rank_in_group"
        )
        for entry in (data or {}).get("data", []):
            if entry.get("group", {}).get("id") == group_id:
                return entry.get("role", {}).get("rank")
        return None

    async def get_universe_name(self, universe_id: int) -> str | None:
        """
        Resolve a universe's display name.

        Returns:
            str | None: Game name, None when Roblox returns nothing
        """
        data = await self._get_json(
            f"{self.games_api}/v1/games",
            operation="get_universe_name",
            params={"universeIds": str(universe_id)},
        )
        games = (data or {}).get("data") or []
        if games and games[0].get("name"):
            return games[0]["name"]
        return None

    async def _get_json(
        self,
        url: str,
        operation: str,
        params: dict[str, str] | None = None,
    ) -> dict[str, Any] | None:
        fetch = retry(
            retry=retry_if_exception_type(RobloxRateLimitError),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential_jitter(initial=1, max=10, jitter=1),
            reraise=True,
            before_sleep=lambda retry_state: logger.warning(
                f"{__name__}:{operation} - Retry {retry_state.attempt_number}/{self.max_attempts} after throttling"
            ),
        )(self._fetch)
        return await fetch(url, operation, params)

    async def _fetch(
        self,
        url: str,
        operation: str,
        params: dict[str, str] | None,
    ) -> dict[str, Any] | None:
        try:
            response = await self.http_client.get(url, params=params)
        except httpx.HTTPError as e:
            raise RobloxAPIError(f"Roblox {operation} failed: {e}", operation=operation) from e

        if response.status_code == 429:
            raise RobloxRateLimitError(
                f"Roblox {operation} throttled", operation=operation, status_code=429
            )
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise RobloxAPIError(
                f"Roblox {operation} returned {response.status_code}",
                operation=operation,
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise RobloxAPIError(
                f"Roblox {operation} returned a non-JSON body",
                operation=operation,
                status_code=response.status_code,
            ) from e
