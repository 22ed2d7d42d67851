"""Tests for upstream record parsing and field resolution."""

from fakes import CELTICS, LAKERS, game, player

from statline.core.models import (
    Game,
    Player,
    PlayerStatsSummary,
    PlayerRef,
    UpstreamGame,
    UpstreamPlayer,
    UpstreamStat,
    UpstreamTeam,
    format_game_date,
    minutes_or_default,
    opponent_abbreviation,
    resolve_start_time,
    team_display_name,
)


class TestStartTime:
    def test_date_only_is_pinned_to_midday(self):
        record = UpstreamGame(date="2025-01-15")
        assert resolve_start_time(record) == "2025-01-15T12:00:00"

    def test_datetime_preferred_and_untouched(self):
        record = UpstreamGame.model_validate(
            {"date": "2025-01-15", "datetime": "2025-01-16T00:30:00.000Z"}
        )
        assert resolve_start_time(record) == "2025-01-16T00:30:00.000Z"

    def test_value_with_time_separator_untouched(self):
        assert resolve_start_time(UpstreamGame(date="2025-01-15 19:30")) == "2025-01-15 19:30"

    def test_missing(self):
        assert resolve_start_time(UpstreamGame()) is None


class TestTeamDisplayName:
    def test_full_name_first(self):
        assert team_display_name(UpstreamTeam.model_validate(CELTICS), "Home") == "Boston Celtics"

    def test_short_name_fallback(self):
        assert team_display_name(UpstreamTeam(name="Celtics"), "Home") == "Celtics"

    def test_placeholder(self):
        assert team_display_name(UpstreamTeam(), "Away") == "Away"
        assert team_display_name(None, "Home") == "Home"


class TestOpponentAbbreviation:
    def test_official_abbreviation(self):
        team = UpstreamTeam(abbreviation="TOR", name="Raptors", full_name="Toronto Raptors")
        assert opponent_abbreviation(team) == "TOR"

    def test_short_name(self):
        assert opponent_abbreviation(UpstreamTeam(name="Raptors")) == "RAP"

    def test_last_word_of_full_name(self):
        assert opponent_abbreviation(UpstreamTeam(full_name="Toronto Raptors")) == "RAP"

    def test_empty_abbreviation_falls_through(self):
        assert opponent_abbreviation(UpstreamTeam(abbreviation="", name="knicks")) == "KNI"

    def test_nothing_known(self):
        assert opponent_abbreviation(UpstreamTeam()) == "OPP"
        assert opponent_abbreviation(UpstreamTeam(full_name="Toronto ")) == "OPP"
        assert opponent_abbreviation(None) == "OPP"


class TestDatesAndMinutes:
    def test_format_game_date(self):
        assert format_game_date("2024-01-05") == "Jan 5"
        assert format_game_date("2024-12-25T00:00:00.000Z") == "Dec 25"

    def test_format_game_date_absent_or_garbage(self):
        assert format_game_date(None) == ""
        assert format_game_date("") == ""
        assert format_game_date("tomorrow") == ""

    def test_minutes_default(self):
        assert minutes_or_default(None) == "0"
        assert minutes_or_default("34:12") == "34:12"

    def test_numeric_minutes_become_strings(self):
        assert UpstreamStat.model_validate({"min": 35}).minutes == "35"

    def test_numeric_zero_minutes_is_missing(self):
        record = UpstreamStat.model_validate({"min": 0})
        assert record.minutes is None
        assert minutes_or_default(record.minutes) == "0"

    def test_played(self):
        assert UpstreamStat.model_validate({"min": "35"}).played
        assert UpstreamStat.model_validate({"min": "0"}).played
        for minutes in ("0:00", "00", "", None, 0, 0.0):
            assert not UpstreamStat.model_validate({"min": minutes}).played


class TestGameOpponent:
    def test_opponent_of_nested_teams(self):
        record = UpstreamGame.model_validate(game(1, CELTICS, LAKERS))
        assert record.opponent_of(2).full_name == "Los Angeles Lakers"
        assert record.opponent_of(14).full_name == "Boston Celtics"

    def test_flat_team_ids(self):
        record = UpstreamGame.model_validate({"home_team_id": 2, "visitor_team_id": 14})
        assert record.home_id == 2
        assert record.visitor_id == 14
        assert record.opponent_of(2) is None


class TestResponseModels:
    def test_game_serialization(self):
        record = UpstreamGame.model_validate(game(99, CELTICS, LAKERS, date="2025-01-15"))

        data = Game.from_upstream(record).model_dump(by_alias=True)

        assert data == {
            "id": "99",
            "homeTeam": "Boston Celtics",
            "awayTeam": "Los Angeles Lakers",
            "homeTeamId": 2,
            "awayTeamId": 14,
            "startTime": "2025-01-15T12:00:00",
            "status": "7:30 pm ET",
            "time": None,
        }

    def test_game_placeholders(self):
        data = Game.from_upstream(UpstreamGame(id=5)).model_dump(by_alias=True)
        assert data["homeTeam"] == "Home"
        assert data["awayTeam"] == "Away"
        assert data["homeTeamId"] is None

    def test_player_serialization(self):
        record = UpstreamPlayer.model_validate(player(237, "LeBron", "James", LAKERS, position=None))

        data = Player.from_upstream(record, "Los Angeles Lakers", 14).model_dump(by_alias=True)

        assert data == {
            "id": "237",
            "name": "LeBron James",
            "team": "Los Angeles Lakers",
            "teamId": 14,
            "position": "N/A",
        }

    def test_summary_keeps_empty_head_to_head(self):
        summary = PlayerStatsSummary(
            player=PlayerRef(id="42", name="Test Player"),
            opponent_team="Opponent",
            season_avg_points=0.0,
            last10_games=[],
        )

        data = summary.model_dump(by_alias=True)

        assert set(data) == {
            "player",
            "opponentTeam",
            "seasonAvgPoints",
            "last10Games",
            "last10VsOpponent",
        }
        assert data["last10VsOpponent"] == []
