"""
NBA player statistics aggregator.

Turns the provider's game-by-game stat lines into the recent-game log and the
season scoring average served by the player stats endpoint.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Dict, List, Optional

from ..core.errors import NotFoundError
from ..core.http import UpstreamError
from ..core.models import (
    PlayerGameLog,
    PlayerRef,
    PlayerStatsSummary,
    UpstreamPlayer,
    UpstreamStat,
    coalesce,
    format_game_date,
    minutes_or_default,
    opponent_abbreviation,
    parse_game_date,
    team_display_name,
)
from ..providers.balldontlie import BallDontLieClient
from ..services.games import GameResolver

logger = logging.getLogger(__name__)

RECENT_GAMES_LIMIT = 10


class PlayerStatsAggregator:
    """Build PlayerStatsSummary documents from upstream stat lines."""

    def __init__(
        self,
        client: BallDontLieClient,
        resolver: GameResolver,
        current_season: int,
        per_page: int = 100,
    ):
        self._client = client
        self._resolver = resolver
        self.current_season = current_season
        self.per_page = per_page

    # =========================================================================
    # Pure helpers
    # =========================================================================

    @staticmethod
    def sort_by_game_date(stats: List[UpstreamStat]) -> List[UpstreamStat]:
        """Most recent game first; undated lines last, ties keep fetch order."""
        dated = [(parse_game_date(stat.game_date), stat) for stat in stats]
        with_date = [item for item in dated if item[0] is not None]
        without_date = [stat for day, stat in dated if day is None]
        # sorted() is stable, reverse=True included
        with_date = sorted(with_date, key=lambda item: item[0], reverse=True)
        return [stat for _, stat in with_date] + without_date

    @staticmethod
    def season_average(stats: List[UpstreamStat]) -> float:
        """Mean points over games with playing time, to one decimal place.

        Args:
            stats: Stat lines for the season, in any order

        Returns:
            Average rounded half away from zero, or 0 when nobody played
        """
        played = [stat for stat in stats if stat.played]
        if not played:
            return 0.0
        total = sum(stat.pts or 0 for stat in played)
        average = Decimal(total) / Decimal(len(played))
        return float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    @staticmethod
    def to_game_log(stat: UpstreamStat) -> PlayerGameLog:
        """Normalize one stat line; the opponent is resolved for that game."""
        game = stat.game
        team_id = stat.team.id if stat.team is not None else None
        opponent = game.opponent_of(team_id) if game is not None else None
        return PlayerGameLog(
            date=format_game_date(stat.game_date),
            opponent=opponent_abbreviation(opponent),
            points=coalesce(stat.pts, 0),
            rebounds=coalesce(stat.reb, 0),
            assists=coalesce(stat.ast, 0),
            minutes=minutes_or_default(stat.minutes),
        )

    @classmethod
    def recent_games(
        cls, stats: List[UpstreamStat], limit: int = RECENT_GAMES_LIMIT
    ) -> List[PlayerGameLog]:
        return [cls.to_game_log(stat) for stat in cls.sort_by_game_date(stats)[:limit]]

    # =========================================================================
    # Upstream lookups
    # =========================================================================

    async def fetch_player(self, player_id: str) -> UpstreamPlayer:
        try:
            payload = await self._client.get_player(player_id)
        except UpstreamError as e:
            if e.status_code == 404:
                raise NotFoundError("Player", player_id) from e
            raise
        if not payload:
            raise NotFoundError("Player", player_id)
        return UpstreamPlayer.model_validate(payload)

    async def fetch_season_stats(self, player_id: str) -> List[UpstreamStat]:
        """Current-season stat lines, or the prior season's when there are none yet."""
        records: List[Dict[str, Any]] = await self._client.get_player_stats(
            player_id, self.current_season, per_page=self.per_page
        )
        logger.info(f"Found {len(records)} game stats for {self.current_season} season")

        if not records:
            fallback = self.current_season - 1
            logger.info(f"No {self.current_season} stats, trying {fallback}")
            records = await self._client.get_player_stats(
                player_id, fallback, per_page=self.per_page
            )
            logger.info(f"Found {len(records)} game stats for {fallback} season")

        return [UpstreamStat.model_validate(record) for record in records]

    # =========================================================================
    # Summary
    # =========================================================================

    async def build_player_stats_summary(
        self, player_id: str, game_id: str
    ) -> PlayerStatsSummary:
        """
        Recent-game log and season average for a player ahead of a game.

        Raises:
            NotFoundError: The player or the game is unknown upstream
        """
        player = await self.fetch_player(player_id)
        game = await self._resolver.resolve_game(game_id)
        logger.info(f"Building stats for {player.full_name} (ID: {player_id})")

        player_team_id: Optional[int] = player.team.id if player.team is not None else None
        opponent = game.source.opponent_of(player_team_id) if game.source is not None else None

        stats = await self.fetch_season_stats(player_id)
        season_avg = self.season_average(stats)
        last_games = self.recent_games(stats)

        logger.debug(
            f"Season average {season_avg} over {sum(1 for s in stats if s.played)} games played"
        )

        return PlayerStatsSummary(
            player=PlayerRef(id=player_id, name=player.full_name),
            opponent_team=team_display_name(opponent, "Opponent"),
            season_avg_points=season_avg,
            last10_games=last_games,
            last10_vs_opponent=[],
        )
