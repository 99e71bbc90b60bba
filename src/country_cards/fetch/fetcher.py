# ABOUTME: Rate-limited HTTP fetcher built on an injectable httpx.AsyncClient
# ABOUTME: Returns response bytes; non-200 statuses and transport failures raise FetchError without retry

from typing import Protocol

import httpx

from country_cards.errors import FetchError
from country_cards.fetch.rate_limit import RateLimiter
from country_cards.utils.logging import get_logger, log_api_call

DEFAULT_USER_AGENT = "country-cards/0.1 (https://github.com/country-cards/country-cards)"


class Fetcher(Protocol):
    """Protocol for retrieving the raw bytes behind a URL."""

    async def fetch(self, url: str) -> bytes: ...


class RateLimitedFetcher:
    """Fetch URLs one token at a time from a shared rate limiter."""

    def __init__(
        self,
        limiter: RateLimiter,
        client: httpx.AsyncClient | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = 30.0,
    ):
        self.limiter = limiter
        self._owns_client = client is None
        self.http_client = client or httpx.AsyncClient(  # Allow for dependency injection
            headers={"User-Agent": user_agent},
            timeout=timeout,
            follow_redirects=True,
        )
        self.logger = get_logger(__name__)

    @log_api_call("wikimedia")
    async def fetch(self, url: str) -> bytes:
        """Fetch ``url`` once the limiter grants a token.

        Raises:
            FetchError: On a non-200 response or a transport failure
        """
        await self.limiter.acquire()

        try:
            response = await self.http_client.get(url)
        except httpx.RequestError as e:
            raise FetchError(url, cause=e) from e

        if response.status_code != 200:
            raise FetchError(url, status=response.status_code, reason=response.reason_phrase)

        self.logger.debug("Fetched resource", url=url, size=len(response.content))
        return response.content

    async def aclose(self) -> None:
        """Close the HTTP client if this fetcher created it."""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "RateLimitedFetcher":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
