"""
Pytest configuration for statline tests.

The upstream provider is replaced by FakeBallDontLie (see fakes.py), an httpx
MockTransport handler that serves canned payloads and records every request.
"""

import httpx
import pytest

from fakes import FakeBallDontLie
from statline.core.cache import TTLCache
from statline.core.config import Settings
from statline.providers.balldontlie import BallDontLieClient


@pytest.fixture
def fake_upstream() -> FakeBallDontLie:
    return FakeBallDontLie()


@pytest.fixture
def clock():
    """Controllable monotonic clock: clock.now is read, clock.advance moves it."""

    class Clock:
        now = 1000.0

        def __call__(self) -> float:
            return self.now

        def advance(self, seconds: float) -> None:
            self.now += seconds

    return Clock()


@pytest.fixture
def ttl_cache(clock) -> TTLCache:
    return TTLCache(ttl=120, clock=clock)


@pytest.fixture
def upstream(fake_upstream, ttl_cache) -> BallDontLieClient:
    return BallDontLieClient(
        api_key="test-key",
        cache=ttl_cache,
        transport=httpx.MockTransport(fake_upstream),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        balldontlie_api_key="test-key",
        current_season=2025,
        timezone=None,
    )


@pytest.fixture
def api_client(settings, upstream):
    """Sync test client for an app wired to the fake upstream."""
    from starlette.testclient import TestClient
    from statline.api.main import create_app

    with TestClient(create_app(settings=settings, upstream=upstream)) as c:
        yield c
