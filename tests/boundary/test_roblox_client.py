"""
Test suite for RobloxClient.

System role: Verification of user-info and rank lookups
"""

import httpx
import pytest

from firefli.boundary.integrations.roblox_client import RobloxClient
from firefli.core.exceptions import RobloxAPIError, RobloxRateLimitError


def make_client(handler, max_attempts: int = 1) -> RobloxClient:
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return RobloxClient(
        http_client,
        users_api="https://users.test",
        groups_api="https://groups.test",
        games_api="https://games.test",
        thumbnail_url="https://thumbs.test/{user_id}.png",
        max_attempts=max_attempts,
    )


class TestUserLookups:
    """Test suite for username and thumbnail lookups."""

    async def test_get_username_should_return_name(self) -> None:
        """Test username is read from the users API."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/users/77"
            return httpx.Response(200, json={"id": 77, "name": "builderman"})

        assert await make_client(handler).get_username(77) == "builderman"

    async def test_get_username_should_return_none_for_unknown_user(self) -> None:
        """Test 404 maps to None."""
        client = make_client(lambda r: httpx.Response(404, json={}))
        assert await client.get_username(1) is None

    def test_get_thumbnail_url_should_format_template(self) -> None:
        """Test no request is needed for the headshot URL."""
        client = make_client(lambda r: httpx.Response(500))
        assert client.get_thumbnail_url(5) == "https://thumbs.test/5.png"


class TestGroupRank:
    """Test suite for get_rank_in_group()."""

    async def test_get_rank_in_group_should_return_matching_group_rank(self) -> None:
        """Test rank is taken from the requested group only."""
        roles = {
            "data": [
                {"group": {"id": 1}, "role": {"rank": 10}},
                {"group": {"id": 1001}, "role": {"rank": 200}},
            ]
        }
        client = make_client(lambda r: httpx.Response(200, json=roles))
        assert await client.get_rank_in_group(1001, 77) == 200

    async def test_get_rank_in_group_should_return_none_when_not_member(self) -> None:
        """Test missing membership maps to None."""
        client = make_client(lambda r: httpx.Response(200, json={"data": []}))
        assert await client.get_rank_in_group(1001, 77) is None

    async def test_get_rank_in_group_should_raise_on_server_error(self) -> None:
        """Test non-throttling failures surface as RobloxAPIError."""
        client = make_client(lambda r: httpx.Response(500))
        with pytest.raises(RobloxAPIError):
            await client.get_rank_in_group(1001, 77)

    async def test_get_rank_in_group_should_raise_on_non_json_body(self) -> None:
        """Test a 200 maintenance page surfaces as RobloxAPIError."""
        client = make_client(lambda r: httpx.Response(200, text="<html>maintenance</html>"))

        with pytest.raises(RobloxAPIError) as exc_info:
            await client.get_rank_in_group(1001, 77)

        assert exc_info.value.status_code == 200
        assert exc_info.value.details["operation"] == "get_rank_in_group"


class TestUniverseName:
    """Test suite for get_universe_name()."""

    async def test_get_universe_name_should_return_first_game_name(self) -> None:
        """Test universe id is passed as a query parameter."""

        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.params["universeIds"] == "123"
            return httpx.Response(200, json={"data": [{"id": 123, "name": "Cafe Roleplay"}]})

        assert await make_client(handler).get_universe_name(123) == "Cafe Roleplay"

    async def test_get_universe_name_should_return_none_for_empty_data(self) -> None:
        """Test unknown universes map to None."""
        client = make_client(lambda r: httpx.Response(200, json={"data": []}))
        assert await client.get_universe_name(123) is None

    async def test_get_universe_name_should_raise_on_non_json_body(self) -> None:
        """Test an HTML body is reported as a lookup failure."""
        client = make_client(lambda r: httpx.Response(200, text="<html>maintenance</html>"))
        with pytest.raises(RobloxAPIError):
            await client.get_universe_name(123)


class TestThrottling:
    """Test suite for 429 handling."""

    async def test_should_retry_after_throttling(self) -> None:
        """Test a throttled lookup is retried."""
        calls = {"count": 0}

        def handler(request: httpx.Request) -> httpx.Response:
            calls["count"] += 1
            if calls["count"] == 1:
                return httpx.Response(429)
            return httpx.Response(200, json={"name": "builderman"})

        client = make_client(handler, max_attempts=2)
        assert await client.get_username(77) == "builderman"
        assert calls["count"] == 2

    async def test_should_raise_rate_limit_error_when_attempts_exhausted(self) -> None:
        """Test the last throttling error is re-raised."""
        client = make_client(lambda r: httpx.Response(429), max_attempts=1)
        with pytest.raises(RobloxRateLimitError):
            await client.get_username(77)
