"""
Statline

A read-through cache and aggregation layer over the BallDontLie NBA API.
It serves today's games, active rosters per game, and a player's recent-game
log with a season scoring average.

Usage:
    from statline import create_app

    app = create_app()
"""

from .api.main import create_app
from .core.config import Settings, get_settings

__version__ = "1.0.0"

__all__ = [
    "create_app",
    "Settings",
    "get_settings",
]
