"""Pipeline configuration context."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field, replace
from typing import Union

from ..core.constants import DEFAULT_CHUNK_SIZE, DEFAULT_MAX_CONCURRENCY, WILDCARD_HOST
from ..core.exceptions import FFetchError
from ..core.types import DEFAULT_CACHE, CacheConfig, HTMLParser, HTTPClient
from ..io import AiohttpHTTPClient, BeautifulSoupParser

ErrorHook = Callable[[FFetchError], Union[None, Awaitable[None]]]


@dataclass(frozen=True)
class FFetchContext:
    """Configuration threaded through every pipeline stage.

    Instances are never mutated; builder methods derive new ones with
    `evolve` so pipelines sharing a context stay independent.

    Attributes:
        chunk_size: Entries requested per index page
        max_concurrency: Documents followed concurrently (<= 0 behaves as 1)
        sheet_name: Sheet selector for multi-sheet indexes
        cache: Cache hint forwarded to the HTTP client
        allowed_hosts: Hostnames documents may be followed to ("*" = any)
        http_client: Transport for pages and documents
        html_parser: Parser for followed documents
        error_hooks: Callbacks notified when pagination stops on an error
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    max_concurrency: int = DEFAULT_MAX_CONCURRENCY
    sheet_name: str | None = None
    cache: CacheConfig = DEFAULT_CACHE
    allowed_hosts: frozenset[str] = frozenset()
    http_client: HTTPClient = field(default_factory=AiohttpHTTPClient)
    html_parser: HTMLParser = field(default_factory=BeautifulSoupParser)
    error_hooks: tuple[ErrorHook, ...] = ()

    def __post_init__(self) -> None:
        """Validate context configuration."""
        if self.chunk_size < 1:
            raise ValueError("chunk_size must be >= 1")

    @property
    def batch_size(self) -> int:
        """Effective number of documents followed per batch."""
        return max(1, self.max_concurrency)

    def evolve(self, **changes) -> FFetchContext:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    def with_allowed_hosts(self, hosts: Iterable[str]) -> FFetchContext:
        """Return a copy whose allowlist also contains `hosts`.

        Hostnames are compared case-insensitively; adding a host twice is a no-op.
        """
        normalized = {host.strip().lower() for host in hosts if host and host.strip()}
        if normalized <= self.allowed_hosts:
            return self
        return replace(self, allowed_hosts=self.allowed_hosts | normalized)

    def allows_any_host(self) -> bool:
        return WILDCARD_HOST in self.allowed_hosts
