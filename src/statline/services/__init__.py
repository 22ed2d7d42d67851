"""Services composed by the request handlers."""

from .games import GameResolver, list_game_players, list_today_games, local_today

__all__ = ["GameResolver", "list_game_players", "list_today_games", "local_today"]
