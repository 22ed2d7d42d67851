"""Upstream data providers."""

from .balldontlie import BallDontLieClient

__all__ = ["BallDontLieClient"]
