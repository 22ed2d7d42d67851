"""
BallDontLie NBA API client.

Every request goes through the TTL cache first: a hit returns the stored
payload without touching the network, a miss performs one authenticated GET
and stores the decoded body under the full request URL.
"""

import logging
from typing import Any, Optional

import httpx

from ..core.cache import TTLCache
from ..core.http import BaseApiClient

logger = logging.getLogger(__name__)


class BallDontLieClient(BaseApiClient):
    """BallDontLie NBA API client with a read-through response cache."""

    BASE_URL = "https://api.balldontlie.io/v1"
    SERVICE_NAME = "Balldontlie"

    def __init__(
        self,
        api_key: Optional[str],
        cache: TTLCache,
        *,
        base_url: Optional[str] = None,
        timeout: float = 30.0,
        requests_per_minute: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # The provider expects the raw key in the Authorization header.
        super().__init__(
            base_url=base_url,
            headers={"Authorization": api_key} if api_key else {},
            requests_per_minute=requests_per_minute,
            timeout=timeout,
            transport=transport,
        )
        self._api_key = api_key
        self.cache = cache

    def is_configured(self) -> bool:
        return bool(self._api_key)

    def cache_key(self, path: str, params: Optional[dict[str, Any]] = None) -> str:
        """Full request identity: base URL, path and sorted query string."""
        items = sorted((params or {}).items())
        query = str(httpx.QueryParams(items)) if items else ""
        url = f"{self.base_url}{path}"
        return f"{url}?{query}" if query else url

    async def fetch(self, path: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        GET an endpoint, serving from cache while the entry is fresh.

        Raises:
            UpstreamError: Non-2xx response from the provider
            NetworkError: Transport failure
        """
        key = self.cache_key(path, params)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(f"[CACHE HIT] {key}")
            return cached

        logger.info(f"[FETCH] {key}")
        payload = await self._get(path, params)
        self.cache.set(key, payload)
        return payload

    # =========================================================================
    # Games
    # =========================================================================

    async def get_games(self, date: str) -> list[dict[str, Any]]:
        """Games scheduled on a YYYY-MM-DD date."""
        response = await self.fetch("/games", {"dates[]": date})
        return response.get("data") or []

    async def get_game(self, game_id: str) -> Optional[dict[str, Any]]:
        """A single game; unwraps the data envelope when present."""
        response = await self.fetch(f"/games/{game_id}")
        return _unwrap(response)

    # =========================================================================
    # Players
    # =========================================================================

    async def get_active_players(self, team_id: int, per_page: int = 25) -> list[dict[str, Any]]:
        """First page of a team's active roster."""
        response = await self.fetch(
            "/players/active", {"team_ids[]": team_id, "per_page": per_page}
        )
        return response.get("data") or []

    async def get_player(self, player_id: str) -> Optional[dict[str, Any]]:
        response = await self.fetch(f"/players/{player_id}")
        return _unwrap(response)

    # =========================================================================
    # Stats
    # =========================================================================

    async def get_player_stats(
        self,
        player_id: str,
        season: int,
        per_page: int = 100,
    ) -> list[dict[str, Any]]:
        """
        Game-by-game stat lines for a player.

        Args:
            player_id: Provider player id
            season: Season year (e.g., 2025 for 2025-26 season)
            per_page: Page size; the provider caps it at 100
        """
        response = await self.fetch(
            "/stats",
            {"player_ids[]": player_id, "seasons[]": season, "per_page": per_page},
        )
        return response.get("data") or []


def _unwrap(response: Any) -> Any:
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response
