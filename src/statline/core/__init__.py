"""
Core module for Statline.

This module provides the foundational components:
- Configuration management (config.py)
- Response cache (cache.py)
- Shared HTTP client infrastructure and upstream errors (http.py)
- Upstream and response models (models.py)
- Domain errors (errors.py)
"""

from .cache import CacheEntry, TTLCache
from .config import Settings, get_settings
from .errors import NotFoundError, StatlineError
from .http import BaseApiClient, ExternalAPIError, NetworkError, UpstreamError

__all__ = [
    "CacheEntry",
    "TTLCache",
    "Settings",
    "get_settings",
    "NotFoundError",
    "StatlineError",
    "BaseApiClient",
    "ExternalAPIError",
    "NetworkError",
    "UpstreamError",
]
