"""API routers."""

from . import games, players

__all__ = ["games", "players"]
