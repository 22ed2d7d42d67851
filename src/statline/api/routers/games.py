"""
Games router.

Endpoints:
- GET ""                     - Today's games
- GET /{game_id}/players     - Active rosters for both teams in a game
"""

import logging
from typing import Any

from fastapi import APIRouter

from ..dependencies import GameResolverDependency, SettingsDependency, UpstreamDependency
from ..errors import InternalError
from ...services.games import list_game_players, list_today_games, local_today

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=None)
async def get_today_games(
    upstream: UpstreamDependency,
    resolver: GameResolverDependency,
    settings: SettingsDependency,
) -> list[dict[str, Any]]:
    """
    List games scheduled for today.

    Each game is remembered by id so the roster and stats endpoints can skip
    the single-game lookup.
    """
    try:
        games = await list_today_games(upstream, resolver, local_today(settings.timezone))
    except Exception:
        logger.exception("Error fetching games")
        raise InternalError("Failed to fetch games")
    return [game.model_dump(by_alias=True) for game in games]


@router.get("/{game_id}/players", response_model=None)
async def get_game_players(
    game_id: str,
    upstream: UpstreamDependency,
    resolver: GameResolverDependency,
    settings: SettingsDependency,
) -> list[dict[str, Any]]:
    """
    List active players for the home and away teams.

    An empty list means rosters are not published yet, not an error.
    """
    try:
        players = await list_game_players(
            upstream, resolver, game_id, per_page=settings.roster_page_size
        )
    except Exception:
        logger.exception(f"Error fetching players for game {game_id}")
        raise InternalError("Failed to fetch players")
    return [player.model_dump(by_alias=True) for player in players]
