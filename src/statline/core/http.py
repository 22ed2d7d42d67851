"""
Shared HTTP client infrastructure for upstream API integrations.

Provides BaseApiClient with optional rate limiting and error mapping.
Requests are made exactly once: a failed call surfaces immediately as
UpstreamError (non-2xx) or NetworkError (transport failure).

Usage:
    class MyClient(BaseApiClient):
        BASE_URL = "https://api.example.com"

        def __init__(self, api_key: str):
            super().__init__(headers={"Authorization": api_key})

        async def get_data(self) -> dict:
            return await self._get("/data")
"""

import asyncio
import logging
import time
from typing import Any

import httpx

logger = logging.getLogger(__name__)

# Length of the response body kept on UpstreamError for diagnostics.
BODY_EXCERPT_LENGTH = 200


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class ExternalAPIError(Exception):
    """Base exception for external API errors."""

    def __init__(
        self,
        message: str,
        code: str = "EXTERNAL_API_ERROR",
        status_code: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code


class UpstreamError(ExternalAPIError):
    """The provider answered with a non-success status."""

    def __init__(self, status_code: int, body_prefix: str, service: str = "Upstream"):
        super().__init__(
            f"{service} error {status_code}: {body_prefix}",
            code="UPSTREAM_ERROR",
            status_code=status_code,
        )
        self.body_prefix = body_prefix


class NetworkError(ExternalAPIError):
    """The provider could not be reached."""

    def __init__(self, message: str):
        super().__init__(message, code="NETWORK_ERROR", status_code=503)


# ---------------------------------------------------------------------------
# Rate limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """Simple token bucket rate limiter for async API calls."""

    def __init__(self, requests_per_minute: int = 600):
        self.delay = 60.0 / requests_per_minute
        self._last_request = 0.0
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        """Wait until we can make a request."""
        async with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request
            if elapsed < self.delay:
                await asyncio.sleep(self.delay - elapsed)
            self._last_request = time.monotonic()


# ---------------------------------------------------------------------------
# Base client
# ---------------------------------------------------------------------------

class BaseApiClient:
    """
    Async HTTP client base.

    Subclasses set BASE_URL, configure auth, and add domain-specific methods.
    The underlying httpx client is created lazily on first use, which suits
    long-lived services; call close() at shutdown. It also works as an async
    context manager:

        async with MyClient(api_key="...") as client:
            data = await client._get("/endpoint")
    """

    BASE_URL: str = ""
    SERVICE_NAME: str = "Upstream"

    def __init__(
        self,
        *,
        base_url: str | None = None,
        headers: dict[str, str] | None = None,
        requests_per_minute: int | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = (base_url or self.BASE_URL).rstrip("/")
        self._default_headers = headers or {}
        self._rate_limiter = RateLimiter(requests_per_minute) if requests_per_minute else None
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    # -- Lifecycle -----------------------------------------------------------

    async def __aenter__(self) -> "BaseApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def client(self) -> httpx.AsyncClient:
        """Return the HTTP client, lazily creating it if needed."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=self._default_headers,
                timeout=httpx.Timeout(self._timeout),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    def is_configured(self) -> bool:
        """
        Check if the client has required configuration (API keys, etc.).

        Override in subclasses that need configuration validation.
        """
        return True

    # -- HTTP methods --------------------------------------------------------

    async def _get(
        self,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Make a single GET request and return the decoded JSON body.

        Raises:
            UpstreamError: If the API answers with a non-2xx status
            NetworkError: If the request cannot be completed
        """
        if self._rate_limiter is not None:
            await self._rate_limiter.acquire()

        try:
            response = await self.client.get(path, params=params or {})
        except httpx.RequestError as e:
            logger.error(f"Request to {path} failed: {e!r}")
            raise NetworkError(f"Request failed: {e}") from e

        if not response.is_success:
            logger.error(f"{self.SERVICE_NAME} returned {response.status_code} for {path}")
            raise UpstreamError(
                response.status_code,
                response.text[:BODY_EXCERPT_LENGTH],
                service=self.SERVICE_NAME,
            )

        return response.json()
