"""Core value types and the transport/parser ports.

Architecture:
    Entries, cache hints and raw HTTP responses are plain immutable values.
    The two external collaborators, the HTTP client that fetches a URL and
    the HTML parser that turns markup into a document, are described as
    Protocols so that any object with the right method can be plugged into
    a pipeline (the aiohttp/BeautifulSoup defaults, a mock, a recorder).

Key Types:
    - Entry: one record of an index page
    - CacheConfig: cache hint carried to the HTTP client
    - HTTPResponse: status, headers and body of one request
    - HTTPClient: fetch port
    - HTMLParser: parse port
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, TypeAlias, runtime_checkable

from .enums import CachePolicy

Entry: TypeAlias = dict[str, Any]


@dataclass(frozen=True)
class CacheConfig:
    """Cache hint passed unchanged to the HTTP client.

    Attributes:
        policy: Overall cache behaviour
        max_age: Freshness lifetime in seconds to request (None = server decides)
        ignore_server_cache_control: Whether a caching transport should prefer
            max_age over the server's Cache-Control headers
    """

    policy: CachePolicy = CachePolicy.DEFAULT
    max_age: int | None = None
    ignore_server_cache_control: bool = False

    def __post_init__(self) -> None:
        """Validate cache configuration."""
        if self.max_age is not None and self.max_age < 0:
            raise ValueError("CacheConfig max_age must be >= 0")


DEFAULT_CACHE = CacheConfig()
NO_CACHE = CacheConfig(policy=CachePolicy.NO_CACHE)
CACHE_ONLY = CacheConfig(policy=CachePolicy.CACHE_ONLY)
CACHE_ELSE_LOAD = CacheConfig(policy=CachePolicy.CACHE_ELSE_LOAD)


@dataclass(frozen=True)
class HTTPResponse:
    """Result of a single HTTP request."""

    status: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        """True for 2xx statuses."""
        return 200 <= self.status < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8, undecodable bytes replaced."""
        return self.body.decode("utf-8", errors="replace")


@runtime_checkable
class HTTPClient(Protocol):
    """Protocol for the transport used for index pages and documents.

    Implementations return a response for every HTTP status (404 included)
    and raise only for transport-level failures.
    """

    async def fetch(self, url: str, cache: CacheConfig) -> HTTPResponse:
        """Fetch a URL honouring the cache hint.

        Args:
            url: Absolute URL to request
            cache: Cache hint for this request

        Returns:
            HTTPResponse with status, headers and raw body

        Raises:
            NetworkError: If the request could not be completed
        """
        ...


@runtime_checkable
class HTMLParser(Protocol):
    """Protocol for turning fetched markup into a queryable document."""

    def parse(self, html: str) -> Any:
        """Parse an HTML string.

        Malformed markup should still produce a best-effort document.

        Raises:
            OperationFailedError: If the parser rejects the input outright
        """
        ...
