"""Tests for the cached BallDontLie client."""

import httpx
import pytest

from statline.core.cache import TTLCache
from statline.core.http import NetworkError, UpstreamError
from statline.providers.balldontlie import BallDontLieClient


class TestCaching:
    @pytest.mark.asyncio
    async def test_second_fetch_within_ttl_is_served_from_cache(self, upstream, fake_upstream):
        fake_upstream.add("/teams", {"data": [{"id": 1}]})

        first = await upstream.fetch("/teams")
        second = await upstream.fetch("/teams")

        assert first == second == {"data": [{"id": 1}]}
        assert len(fake_upstream.calls("/teams")) == 1

    @pytest.mark.asyncio
    async def test_fetch_after_ttl_goes_upstream_again(self, upstream, fake_upstream, clock):
        fake_upstream.add("/teams", {"data": []})

        await upstream.fetch("/teams")
        clock.advance(121)
        await upstream.fetch("/teams")

        assert len(fake_upstream.calls("/teams")) == 2

    @pytest.mark.asyncio
    async def test_distinct_queries_are_distinct_entries(self, upstream, fake_upstream):
        fake_upstream.add("/games", {"data": []})

        await upstream.get_games("2025-01-15")
        await upstream.get_games("2025-01-16")

        assert len(fake_upstream.calls("/games")) == 2

    def test_cache_key_ignores_parameter_order(self, upstream):
        a = upstream.cache_key("/stats", {"player_ids[]": 1, "seasons[]": 2025})
        b = upstream.cache_key("/stats", {"seasons[]": 2025, "player_ids[]": 1})
        assert a == b
        assert a.startswith("https://api.balldontlie.io/v1/stats?")

    def test_cache_key_without_query(self, upstream):
        assert upstream.cache_key("/players/42") == "https://api.balldontlie.io/v1/players/42"


class TestRequests:
    @pytest.mark.asyncio
    async def test_sends_api_key_and_query(self, upstream, fake_upstream):
        fake_upstream.add("/stats", {"data": []})

        await upstream.get_player_stats("42", 2025, per_page=100)

        request = fake_upstream.calls("/stats")[0]
        assert request.headers["Authorization"] == "test-key"
        assert request.url.params["player_ids[]"] == "42"
        assert request.url.params["seasons[]"] == "2025"
        assert request.url.params["per_page"] == "100"

    @pytest.mark.asyncio
    async def test_missing_api_key_sends_no_header(self, fake_upstream):
        fake_upstream.add("/teams", {"data": []})
        client = BallDontLieClient(
            api_key=None, cache=TTLCache(), transport=httpx.MockTransport(fake_upstream)
        )

        await client.fetch("/teams")

        assert not client.is_configured()
        assert "Authorization" not in fake_upstream.calls("/teams")[0].headers

    @pytest.mark.asyncio
    async def test_get_game_unwraps_envelope(self, upstream, fake_upstream):
        fake_upstream.add("/games/7", {"data": {"id": 7}})
        assert await upstream.get_game("7") == {"id": 7}

    @pytest.mark.asyncio
    async def test_get_game_without_envelope(self, upstream, fake_upstream):
        fake_upstream.add("/games/7", {"id": 7})
        assert await upstream.get_game("7") == {"id": 7}

    @pytest.mark.asyncio
    async def test_list_helpers_default_to_empty(self, upstream, fake_upstream):
        fake_upstream.add("/players/active", {"meta": {}})
        assert await upstream.get_active_players(2) == []


class TestErrors:
    @pytest.mark.asyncio
    async def test_non_success_raises_upstream_error(self, upstream, fake_upstream):
        fake_upstream.add("/players/1", {"error": "x" * 500}, status=401)

        with pytest.raises(UpstreamError) as exc_info:
            await upstream.fetch("/players/1")

        error = exc_info.value
        assert error.status_code == 401
        assert len(error.body_prefix) == 200
        assert "401" in str(error)

    @pytest.mark.asyncio
    async def test_errors_are_not_cached_or_retried(self, upstream, fake_upstream):
        fake_upstream.add("/players/1", {"error": "down"}, status=503)

        for _ in range(2):
            with pytest.raises(UpstreamError):
                await upstream.fetch("/players/1")

        assert len(fake_upstream.calls("/players/1")) == 2
        assert upstream.cache.size() == 0

    @pytest.mark.asyncio
    async def test_transport_failure_raises_network_error(self, ttl_cache):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = BallDontLieClient(
            api_key="k", cache=ttl_cache, transport=httpx.MockTransport(refuse)
        )

        with pytest.raises(NetworkError):
            await client.fetch("/teams")


class TestRateLimiting:
    @pytest.mark.asyncio
    async def test_rate_limited_client_still_fetches(self, fake_upstream, ttl_cache):
        fake_upstream.add("/teams", {"data": []})
        fake_upstream.add("/players/1", {"data": {"id": 1}})
        client = BallDontLieClient(
            api_key="k",
            cache=ttl_cache,
            requests_per_minute=60_000,
            transport=httpx.MockTransport(fake_upstream),
        )

        await client.fetch("/teams")
        await client.fetch("/players/1")

        assert len(fake_upstream.calls()) == 2
