"""
FastAPI application for the Statline API.

Serves three read-only views over the BallDontLie API:
- GET /api/games                              - today's games
- GET /api/games/{gameId}/players             - active rosters for a game
- GET /api/players/{playerId}/stats?gameId=   - recent games and season average

Upstream responses are memoized in an in-memory TTL cache; components are
constructed once per app and injected into handlers.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import msgspec
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_500_INTERNAL_SERVER_ERROR

from .dependencies import CacheDependency, GameResolverDependency
from .errors import APIError, api_error_handler
from .routers import games, players
from ..aggregators.nba import PlayerStatsAggregator
from ..core.cache import TTLCache
from ..core.config import Settings, get_settings
from ..providers.balldontlie import BallDontLieClient
from ..services.games import GameResolver

logger = logging.getLogger(__name__)


class MSGSpecResponse(Response):
    """Custom response class using msgspec for fast JSON serialization."""

    media_type = "application/json"

    def render(self, content: Any) -> bytes:
        if content is None:
            return b""
        return msgspec.json.encode(content)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifecycle.

    Startup:
    - Warn when the upstream credential is missing (requests will fail upstream)

    Shutdown:
    - Close the upstream HTTP client
    """
    logger.info(f"Starting {app.state.settings.app_name}...")
    if not app.state.upstream.is_configured():
        logger.warning(
            "BALLDONTLIE_API_KEY not set! Upstream requests will be rejected. "
            "Set it in the environment or in .env"
        )

    yield

    logger.info(f"Shutting down {app.state.settings.app_name}...")
    await app.state.upstream.close()


def create_app(
    settings: Settings | None = None,
    upstream: BallDontLieClient | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use (loaded from the environment when omitted)
        upstream: Pre-built upstream client, e.g. one with a mock transport

    Returns:
        Configured FastAPI application instance
    """
    settings = settings or get_settings()

    if upstream is None:
        upstream = BallDontLieClient(
            api_key=settings.balldontlie_api_key,
            cache=TTLCache(ttl=settings.cache_ttl_seconds),
            base_url=settings.balldontlie_base_url,
            timeout=settings.upstream_timeout,
            requests_per_minute=settings.upstream_requests_per_minute,
        )
    resolver = GameResolver(upstream)
    aggregator = PlayerStatsAggregator(
        upstream,
        resolver,
        current_season=settings.current_season,
        per_page=settings.stats_page_size,
    )

    app = FastAPI(
        title=settings.app_name,
        description="Cached, simplified NBA views over the BallDontLie API",
        version=settings.app_version,
        default_response_class=MSGSpecResponse,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.cache = upstream.cache
    app.state.upstream = upstream
    app.state.game_resolver = resolver
    app.state.aggregator = aggregator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
        expose_headers=settings.cors_expose_headers,
    )

    # GZip compression middleware - compresses responses > 1KB
    app.add_middleware(GZipMiddleware, minimum_size=1000)

    @app.middleware("http")
    async def add_process_time_header(request: Request, call_next):
        start_time = time.time()
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        response.headers["X-Process-Time"] = f"{process_time:.2f}ms"
        return response

    app.add_exception_handler(APIError, api_error_handler)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Handle unexpected exceptions without leaking details."""
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "An internal error occurred"},
        )

    @app.get("/health", tags=["health"])
    async def health_check():
        """Basic health check endpoint."""
        return {"status": "healthy", "timestamp": datetime.now(tz=timezone.utc).isoformat()}

    @app.get("/health/cache", tags=["health"])
    async def health_check_cache(cache: CacheDependency, resolver: GameResolverDependency):
        """Cache status check with hit/miss counters."""
        return {
            "status": "healthy",
            "cache": cache.get_stats(),
            "games_known": len(resolver),
            "timestamp": datetime.now(tz=timezone.utc).isoformat(),
        }

    app.include_router(games.router, prefix="/api/games", tags=["games"])
    app.include_router(players.router, prefix="/api/players", tags=["players"])

    return app
