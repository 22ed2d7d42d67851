"""
Game lookups shared by the request handlers.

GameResolver keeps every game seen during the process lifetime keyed by id,
so the roster and stats endpoints skip the single-game fetch for games that
were already listed.
"""

import asyncio
import logging
import threading
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from ..core.errors import NotFoundError
from ..core.http import UpstreamError
from ..core.models import Game, Player, UpstreamGame, UpstreamPlayer
from ..providers.balldontlie import BallDontLieClient

logger = logging.getLogger(__name__)


class GameResolver:
    """Memoizes Game records by id; entries live as long as the process."""

    def __init__(self, client: BallDontLieClient):
        self._client = client
        self._games: dict[str, Game] = {}
        self._lock = threading.Lock()

    def get(self, game_id: str) -> Optional[Game]:
        with self._lock:
            return self._games.get(game_id)

    def register(self, game: Game) -> None:
        with self._lock:
            self._games[game.id] = game

    def __len__(self) -> int:
        with self._lock:
            return len(self._games)

    async def resolve_game(self, game_id: str) -> Game:
        """
        Return the game, fetching ``/games/{id}`` on first sight.

        Raises:
            NotFoundError: The provider has no such game
        """
        game = self.get(game_id)
        if game is not None:
            return game

        try:
            payload = await self._client.get_game(game_id)
        except UpstreamError as e:
            if e.status_code == 404:
                raise NotFoundError("Game", game_id) from e
            raise
        if not payload:
            raise NotFoundError("Game", game_id)

        game = Game.from_upstream(UpstreamGame.model_validate(payload))
        # Key by the requested id so later lookups hit regardless of formatting.
        with self._lock:
            self._games[game_id] = game
            if game.id:
                self._games[game.id] = game
        return game


def local_today(timezone: Optional[str] = None) -> date:
    """Today's calendar date on the server, or in ``timezone`` when given."""
    if timezone:
        return datetime.now(ZoneInfo(timezone)).date()
    return date.today()


async def list_today_games(
    client: BallDontLieClient,
    resolver: GameResolver,
    today: date,
) -> list[Game]:
    """Games scheduled for ``today``; each one is registered with the resolver."""
    day = today.isoformat()
    records = await client.get_games(day)

    games = []
    for record in records:
        game = Game.from_upstream(UpstreamGame.model_validate(record))
        resolver.register(game)
        games.append(game)

    logger.info(f"Found {len(games)} games for {day}")
    return games


async def list_game_players(
    client: BallDontLieClient,
    resolver: GameResolver,
    game_id: str,
    per_page: int = 25,
) -> list[Player]:
    """
    Active players of both teams in a game, home side first.

    A side without a team id is skipped. An empty list means rosters are not
    published yet.
    """
    game = await resolver.resolve_game(game_id)

    sides = [
        (game.home_team_id, game.home_team),
        (game.away_team_id, game.away_team),
    ]
    sides = [(team_id, team_name) for team_id, team_name in sides if team_id]

    rosters = await asyncio.gather(
        *[client.get_active_players(team_id, per_page=per_page) for team_id, _ in sides]
    )

    players = []
    for (team_id, team_name), roster in zip(sides, rosters):
        for record in roster:
            players.append(
                Player.from_upstream(UpstreamPlayer.model_validate(record), team_name, team_id)
            )

    logger.info(f"Returning {len(players)} players for game {game_id}")
    return players
