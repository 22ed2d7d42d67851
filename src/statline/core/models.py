"""
Pydantic models for upstream records and API responses.

Upstream models mirror the BallDontLie payloads. Every field is optional and
unknown fields are ignored; the helper functions below resolve defaults one
field at a time.

Response models are what the presentation layer consumes. They serialize with
camelCase aliases (``model_dump(by_alias=True)``).
"""

from __future__ import annotations

from datetime import date as calendar_date
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Appended to date-only start times so a consumer in another UTC offset
# still lands on the same calendar day.
MIDDAY_SUFFIX = "T12:00:00"

# Minutes values the provider reports for a player who did not get on the floor.
ZERO_MINUTES = frozenset({"0:00", "00"})

FALLBACK_ABBREVIATION = "OPP"


# =============================================================================
# Upstream records
# =============================================================================


class UpstreamModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UpstreamTeam(UpstreamModel):
    """Team reference embedded in games, players and stat lines."""

    id: Optional[int] = None
    abbreviation: Optional[str] = None
    name: Optional[str] = None
    full_name: Optional[str] = None
    city: Optional[str] = None


class UpstreamGame(UpstreamModel):
    """
    Game record.

    ``/games`` nests both teams; the game embedded in a ``/stats`` line may
    carry only ``home_team_id``/``visitor_team_id``.
    """

    id: Optional[int] = None
    date: Optional[str] = None
    start_datetime: Optional[str] = Field(default=None, alias="datetime")
    status: Optional[str] = None
    time: Optional[str] = None
    season: Optional[int] = None
    home_team: Optional[UpstreamTeam] = None
    visitor_team: Optional[UpstreamTeam] = None
    home_team_id: Optional[int] = None
    visitor_team_id: Optional[int] = None

    @property
    def home_id(self) -> Optional[int]:
        if self.home_team is not None and self.home_team.id is not None:
            return self.home_team.id
        return self.home_team_id

    @property
    def visitor_id(self) -> Optional[int]:
        if self.visitor_team is not None and self.visitor_team.id is not None:
            return self.visitor_team.id
        return self.visitor_team_id

    def opponent_of(self, team_id: Optional[int]) -> Optional[UpstreamTeam]:
        """The side facing ``team_id``: visitors when it is the home team, else home."""
        if team_id == self.home_id:
            return self.visitor_team
        return self.home_team


class UpstreamPlayer(UpstreamModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    position: Optional[str] = None
    team: Optional[UpstreamTeam] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


class UpstreamStat(UpstreamModel):
    """One player-game statistical line from ``/stats``."""

    id: Optional[int] = None
    pts: Optional[int] = None
    reb: Optional[int] = None
    ast: Optional[int] = None
    minutes: Optional[str] = Field(default=None, alias="min")
    team: Optional[UpstreamTeam] = None
    game: Optional[UpstreamGame] = None

    @field_validator("minutes", mode="before")
    @classmethod
    def _stringify_minutes(cls, value: Any) -> Any:
        # Older seasons report minutes as a bare number; a numeric zero means
        # the player did not play.
        if value is None or isinstance(value, str):
            return value
        if value == 0:
            return None
        return str(value)

    @property
    def game_date(self) -> Optional[str]:
        return self.game.date if self.game is not None else None

    @property
    def played(self) -> bool:
        """True when the line records non-zero playing time."""
        return bool(self.minutes) and self.minutes not in ZERO_MINUTES


# =============================================================================
# Field resolution
# =============================================================================


def coalesce(*values: Any) -> Any:
    """Return the first value that is not None."""
    for value in values:
        if value is not None:
            return value
    return None


def team_display_name(team: Optional[UpstreamTeam], placeholder: str) -> str:
    """Full name, then short name, then ``placeholder``."""
    if team is None:
        return placeholder
    return coalesce(team.full_name, team.name, placeholder)


def opponent_abbreviation(team: Optional[UpstreamTeam]) -> str:
    """
    Short label for a team.

    Falls back from the official abbreviation to the first three letters of
    the short name, then to the first three letters of the last word of the
    full name ("Toronto Raptors" -> "RAP"), then to "OPP".
    """
    if team is None:
        return FALLBACK_ABBREVIATION
    if team.abbreviation:
        return team.abbreviation
    if team.name:
        return team.name[:3].upper()
    if team.full_name:
        label = team.full_name.split(" ")[-1][:3].upper()
        if label:
            return label
    return FALLBACK_ABBREVIATION


def resolve_start_time(game: UpstreamGame) -> Optional[str]:
    """Tip-off value for a game, pinned to midday when only a date is known."""
    start_time = game.start_datetime or game.date
    if start_time and "T" not in start_time and ":" not in start_time:
        start_time = f"{start_time}{MIDDAY_SUFFIX}"
    return start_time


def parse_game_date(value: Optional[str]) -> Optional[calendar_date]:
    """Calendar date of an upstream ``YYYY-MM-DD[...]`` value, None if unusable."""
    if not value:
        return None
    try:
        return calendar_date.fromisoformat(value[:10])
    except ValueError:
        return None


def format_game_date(value: Optional[str]) -> str:
    """Short month/day label such as "Jan 5"; empty when there is no date."""
    parsed = parse_game_date(value)
    if parsed is None:
        return ""
    return f"{parsed.strftime('%b')} {parsed.day}"


def minutes_or_default(value: Optional[str]) -> str:
    return "0" if value is None else value


# =============================================================================
# Response models
# =============================================================================


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Game(ApiModel):
    """A game as listed for the presentation layer."""

    id: str
    home_team: str
    away_team: str
    home_team_id: Optional[int] = None
    away_team_id: Optional[int] = None
    start_time: Optional[str] = None
    status: Optional[str] = None
    time: Optional[str] = None
    # Parsed record the game was derived from; needed for opponent lookups.
    source: Optional[UpstreamGame] = Field(default=None, exclude=True, repr=False)

    @classmethod
    def from_upstream(cls, record: UpstreamGame) -> "Game":
        return cls(
            id="" if record.id is None else str(record.id),
            home_team=team_display_name(record.home_team, "Home"),
            away_team=team_display_name(record.visitor_team, "Away"),
            home_team_id=record.home_id,
            away_team_id=record.visitor_id,
            start_time=resolve_start_time(record),
            status=record.status,
            time=record.time or None,
            source=record,
        )


class Player(ApiModel):
    id: str
    name: str
    team: str
    team_id: Optional[int] = None
    position: str = "N/A"

    @classmethod
    def from_upstream(cls, record: UpstreamPlayer, team: str, team_id: Optional[int]) -> "Player":
        return cls(
            id="" if record.id is None else str(record.id),
            name=record.full_name,
            team=team,
            team_id=team_id,
            position=coalesce(record.position, "N/A"),
        )


class PlayerGameLog(ApiModel):
    """One historical game in a player's recent log."""

    date: str
    opponent: str
    points: int = 0
    rebounds: int = 0
    assists: int = 0
    minutes: str = "0"


class PlayerRef(ApiModel):
    id: str
    name: str


class PlayerStatsSummary(ApiModel):
    player: PlayerRef
    opponent_team: str
    season_avg_points: float
    last10_games: list[PlayerGameLog]
    # Head-to-head filtering is not implemented; always serialized as [].
    last10_vs_opponent: list[PlayerGameLog] = Field(default_factory=list)
