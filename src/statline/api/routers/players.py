"""Player API endpoints."""

import logging
from typing import Annotated, Any, Optional

from fastapi import APIRouter, Query

from ..dependencies import AggregatorDependency
from ..errors import BadRequestError, InternalError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{player_id}/stats", response_model=None)
async def get_player_stats(
    player_id: str,
    aggregator: AggregatorDependency,
    game_id: Annotated[
        Optional[str], Query(alias="gameId", description="Game the player is about to play")
    ] = None,
) -> dict[str, Any]:
    """
    Recent-game log and season scoring average for a player.

    Returns:
        player, opponentTeam, seasonAvgPoints, last10Games, last10VsOpponent

    Raises:
        BadRequestError: 400 if gameId is missing
    """
    if not game_id:
        raise BadRequestError("Missing gameId query param")

    try:
        summary = await aggregator.build_player_stats_summary(player_id, game_id)
    except Exception:
        logger.exception(f"Error fetching player stats for {player_id}")
        raise InternalError("Failed to fetch player stats")
    return summary.model_dump(by_alias=True)
