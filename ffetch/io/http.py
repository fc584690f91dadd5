"""aiohttp-backed HTTP client."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping

import aiohttp

from ..core.constants import DEFAULT_TIMEOUT_SECONDS
from ..core.enums import CachePolicy
from ..core.exceptions import NetworkError
from ..core.types import DEFAULT_CACHE, CacheConfig, HTTPResponse

logger = logging.getLogger(__name__)


def cache_headers(cache: CacheConfig) -> dict[str, str]:
    """Translate a cache hint into request headers.

    Args:
        cache: Cache hint for the request

    Returns:
        Headers to add to the request (empty for the default policy)
    """
    if cache.policy == CachePolicy.NO_CACHE:
        return {"Cache-Control": "no-cache", "Pragma": "no-cache"}
    if cache.policy == CachePolicy.CACHE_ONLY:
        return {"Cache-Control": "only-if-cached"}
    if cache.policy == CachePolicy.CACHE_ELSE_LOAD:
        return {"Cache-Control": "max-stale"}
    if cache.max_age is not None:
        return {"Cache-Control": f"max-age={cache.max_age}"}
    return {}


class AiohttpHTTPClient:
    """Async HTTP client wrapper.

    Session handling:
        - A session passed to the constructor is used as-is and never closed here.
        - `async with AiohttpHTTPClient() as client:` opens a session that is
          reused until the block exits.
        - Otherwise every fetch runs in its own short-lived session, so a
          pipeline built outside an event loop needs no cleanup.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession | None = None,
        *,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.headers = dict(headers or {})
        self._session = session
        self._owns_session = False

    @property
    def session(self) -> aiohttp.ClientSession | None:
        """Currently open session, if any."""
        if self._session is None or self._session.closed:
            return None
        return self._session

    async def fetch(self, url: str, cache: CacheConfig = DEFAULT_CACHE) -> HTTPResponse:
        """GET a URL and return its status, headers and body.

        Raises:
            NetworkError: On connection failures and timeouts
        """
        headers = {**self.headers, **cache_headers(cache)}
        try:
            session = self.session
            if session is not None:
                return await self._get(session, url, headers)
            async with aiohttp.ClientSession(timeout=self.timeout) as temporary:
                return await self._get(temporary, url, headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.debug(f"Request to {url} failed: {type(e).__name__}: {e}")
            raise NetworkError(f"Network error: {e}", url=url, cause=e) from e

    async def _get(
        self, session: aiohttp.ClientSession, url: str, headers: dict[str, str]
    ) -> HTTPResponse:
        async with session.get(url, headers=headers) as response:
            body = await response.read()
            return HTTPResponse(
                status=response.status,
                body=body,
                headers={k: str(v) for k, v in response.headers.items()},
            )

    async def close(self) -> None:
        """Close the session opened by this client."""
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()
        if self._owns_session:
            self._session = None
            self._owns_session = False

    async def __aenter__(self) -> AiohttpHTTPClient:
        """Context manager entry."""
        if self.session is None:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
            self._owns_session = True
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        await self.close()
