"""
Dependency injection for API endpoints.

Components are built once by ``create_app`` and kept on ``app.state``; the
providers below hand them to route functions. Tests build an app with their
own components instead of patching module globals.
"""

from typing import Annotated

from fastapi import Depends, Request

from ..aggregators.nba import PlayerStatsAggregator
from ..core.cache import TTLCache
from ..core.config import Settings
from ..providers.balldontlie import BallDontLieClient
from ..services.games import GameResolver


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_response_cache(request: Request) -> TTLCache:
    return request.app.state.cache


def get_upstream(request: Request) -> BallDontLieClient:
    return request.app.state.upstream


def get_game_resolver(request: Request) -> GameResolver:
    return request.app.state.game_resolver


def get_aggregator(request: Request) -> PlayerStatsAggregator:
    return request.app.state.aggregator


SettingsDependency = Annotated[Settings, Depends(get_app_settings)]
CacheDependency = Annotated[TTLCache, Depends(get_response_cache)]
UpstreamDependency = Annotated[BallDontLieClient, Depends(get_upstream)]
GameResolverDependency = Annotated[GameResolver, Depends(get_game_resolver)]
AggregatorDependency = Annotated[PlayerStatsAggregator, Depends(get_aggregator)]
