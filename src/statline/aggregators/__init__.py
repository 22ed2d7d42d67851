"""Aggregators that reshape upstream stat lines."""

from .nba import RECENT_GAMES_LIMIT, PlayerStatsAggregator

__all__ = ["RECENT_GAMES_LIMIT", "PlayerStatsAggregator"]
