"""
Configuration management for Statline.

Uses Pydantic settings for type-safe configuration with environment variable support.
All settings can be overridden via environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Example:
        BALLDONTLIE_API_KEY=... CURRENT_SEASON=2025 statline serve
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ==========================================================================
    # Application Metadata
    # ==========================================================================
    app_name: str = "Statline API"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = Field(default="development", description="development, staging, production")
    log_level: str = "INFO"

    # ==========================================================================
    # Server
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 3001

    # ==========================================================================
    # CORS Configuration
    # ==========================================================================
    cors_allow_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins. The presentation layer is served separately.",
    )
    cors_allow_methods: list[str] = ["GET", "HEAD", "OPTIONS"]
    cors_allow_headers: list[str] = ["Accept", "Accept-Encoding", "Content-Type"]
    cors_expose_headers: list[str] = ["X-Process-Time"]

    # ==========================================================================
    # Upstream (BallDontLie)
    # ==========================================================================
    balldontlie_api_key: Optional[str] = Field(
        default=None,
        description="BallDontLie API key, sent in the Authorization header",
    )
    balldontlie_base_url: str = "https://api.balldontlie.io/v1"
    upstream_timeout: float = Field(default=30.0, gt=0)
    upstream_requests_per_minute: Optional[int] = Field(
        default=None,
        ge=1,
        description="Client-side rate limit for upstream calls (disabled when unset)",
    )

    # ==========================================================================
    # Caching Configuration
    # ==========================================================================
    cache_ttl_seconds: int = Field(default=120, ge=1, description="TTL for upstream responses (seconds)")

    # ==========================================================================
    # Season and paging
    # ==========================================================================
    current_season: int = Field(default=2025, description="Season year, e.g. 2025 for 2025-26")
    roster_page_size: int = Field(default=25, ge=1, le=100)
    stats_page_size: int = Field(default=100, ge=1, le=100)
    timezone: Optional[str] = Field(
        default=None,
        description="IANA zone used for 'today' in the games list (server local time when unset)",
    )


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
