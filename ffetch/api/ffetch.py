"""Fluent pipeline facade over an index endpoint.

`FFetch` is the entry point: it wraps the index URL and an immutable
`FFetchContext`, and every builder or stage method returns a new pipeline
value. Nothing is fetched until the pipeline is iterated or collected.

Architecture:
    A pipeline is the index URL, a context and an ordered tuple of stages.
    Iterating it builds a fresh generator chain: the paginator at the bottom,
    then each stage wrapped around the previous one, all configured from the
    pipeline's final context. Because configuration is read at iteration
    time, `allow()` takes effect wherever it appears in the chain, and the
    same pipeline can be iterated again or by several consumers at once.

Example:
    >>> entries = await (
    ...     ffetch("https://example.com/query-index.json")
    ...     .filter(lambda entry: entry.get("template") == "blog")
    ...     .follow("path", "document")
    ...     .limit(10)
    ...     .all()
    ... )

See Also:
    - paginate: the paginator at the bottom of every chain
    - DocumentFollower: the `follow()` stage
"""

from __future__ import annotations

import copy
from collections.abc import AsyncGenerator, AsyncIterator, Callable, Iterable
from contextlib import aclosing
from typing import Any, Generic, Self, TypeVar
from urllib.parse import urlsplit

from ..core.enums import CachePolicy
from ..core.exceptions import InvalidURLError
from ..core.types import NO_CACHE, CacheConfig, Entry, HTMLParser, HTTPClient
from ..runtime.context import ErrorHook, FFetchContext
from ..runtime.follow import DocumentFollower
from ..runtime.operators import (
    Predicate,
    Transform,
    filter_items,
    limit_items,
    map_items,
    skip_items,
    slice_items,
)
from ..runtime.pagination import paginate

T = TypeVar("T")
U = TypeVar("U")

Stage = Callable[[AsyncIterator[Any], FFetchContext], AsyncIterator[Any]]


def _index_host(url: str) -> str:
    """Validate the index URL and return its hostname."""
    if not isinstance(url, str) or not url.strip():
        raise InvalidURLError(str(url))
    try:
        parts = urlsplit(url.strip())
        host = parts.hostname
    except ValueError as e:
        raise InvalidURLError(url) from e
    if parts.scheme not in ("http", "https") or not host:
        raise InvalidURLError(url)
    return host


class _Pipeline(Generic[T]):
    """Stage composition and terminal collectors shared by all pipelines."""

    def __init__(
        self,
        url: str,
        context: FFetchContext,
        stages: tuple[Stage, ...] = (),
    ) -> None:
        self._url = url
        self._context = context
        self._stages = stages

    @property
    def url(self) -> str:
        return self._url

    @property
    def context(self) -> FFetchContext:
        return self._context

    def __aiter__(self) -> AsyncGenerator[T, None]:
        stream: AsyncIterator[Any] = paginate(self._url, self._context)
        for stage in self._stages:
            stream = stage(stream, self._context)
        return stream  # type: ignore[return-value]

    def _with_stage(self, stage: Stage) -> Self:
        clone = copy.copy(self)
        clone._stages = self._stages + (stage,)
        return clone

    # Stages

    def map(self, transform: Transform[T, U]) -> FFetchMapped[U]:
        """Transform each item.

        Args:
            transform: Sync or async function applied to each item

        Returns:
            FFetchMapped pipeline of transformed items
        """
        stages = self._stages + (lambda source, _ctx: map_items(source, transform),)
        return FFetchMapped(self._url, self._context, stages)

    def filter(self, predicate: Predicate[T]) -> Self:
        """Keep items for which `predicate` (sync or async) is truthy."""
        return self._with_stage(lambda source, _ctx: filter_items(source, predicate))

    def limit(self, count: int) -> Self:
        """Keep at most `count` items; no further pages are fetched once reached."""
        return self._with_stage(lambda source, _ctx: limit_items(source, count))

    def skip(self, count: int) -> Self:
        """Drop the first `count` items."""
        return self._with_stage(lambda source, _ctx: skip_items(source, count))

    def slice(self, start: int, end: int) -> Self:
        """Keep items at positions [start, end)."""
        return self._with_stage(lambda source, _ctx: slice_items(source, start, end))

    # Terminal collectors

    async def all(self) -> list[T]:
        """Collect every item, in order."""
        async with aclosing(self.__aiter__()) as stream:
            return [item async for item in stream]

    async def first(self) -> T | None:
        """Return the first item, or None if the pipeline is empty."""
        async with aclosing(self.__aiter__()) as stream:
            async for item in stream:
                return item
        return None

    async def count(self) -> int:
        """Count yielded items (not the server-reported total)."""
        total = 0
        async with aclosing(self.__aiter__()) as stream:
            async for _ in stream:
                total += 1
        return total


class FFetchMapped(_Pipeline[T]):
    """Pipeline of transformed items, produced by `map()`.

    Supports the same stages and collectors as FFetch, except the
    entry-specific `follow()` and configuration builders.
    """


class FFetch(_Pipeline[Entry]):
    """Lazy, chainable view over a paginated index endpoint.

    Args:
        url: Absolute http(s) URL of the index (e.g. ".../query-index.json")
        context: Optional starting configuration

    Raises:
        InvalidURLError: If `url` is not an absolute http(s) URL

    Example:
        >>> index = FFetch("https://example.com/query-index.json").chunks(100)
        >>> async for entry in index.sheet("products"):
        ...     print(entry["path"])
    """

    def __init__(self, url: str, *, context: FFetchContext | None = None) -> None:
        host = _index_host(url)
        context = context or FFetchContext()
        super().__init__(url.strip(), context.with_allowed_hosts([host]))

    def _with_context(self, context: FFetchContext) -> FFetch:
        clone = copy.copy(self)
        clone._context = context
        return clone

    # Configuration

    def chunks(self, size: int) -> FFetch:
        """Set the number of entries requested per page (default 255).

        Raises:
            ValueError: If size < 1
        """
        return self._with_context(self._context.evolve(chunk_size=size))

    def sheet(self, name: str) -> FFetch:
        """Select a sheet of a multi-sheet index."""
        return self._with_context(self._context.evolve(sheet_name=name))

    def max_concurrency(self, limit: int) -> FFetch:
        """Set how many documents `follow()` fetches at once (<= 0 means one)."""
        return self._with_context(self._context.evolve(max_concurrency=limit))

    def with_max_concurrency(self, limit: int) -> FFetch:
        """Alias of `max_concurrency`."""
        return self.max_concurrency(limit)

    def cache(self, config: CacheConfig | CachePolicy) -> FFetch:
        """Set the cache hint sent with every page and document request."""
        if isinstance(config, CachePolicy):
            config = CacheConfig(policy=config)
        return self._with_context(self._context.evolve(cache=config))

    def reload_cache(self) -> FFetch:
        """Bypass caches for every request."""
        return self.cache(NO_CACHE)

    def with_cache_reload(self, reload: bool = True) -> FFetch:
        """Enable or disable cache bypass."""
        return self.cache(NO_CACHE if reload else CacheConfig())

    def with_http_client(self, client: HTTPClient) -> FFetch:
        """Use a custom HTTP client for pages and documents."""
        return self._with_context(self._context.evolve(http_client=client))

    def with_html_parser(self, parser: HTMLParser) -> FFetch:
        """Use a custom parser for followed documents."""
        return self._with_context(self._context.evolve(html_parser=parser))

    def allow(self, hosts: str | Iterable[str]) -> FFetch:
        """Allow `follow()` to fetch documents from more hostnames.

        The index host is always allowed. "*" allows every host and should
        only be used when every reference in the index is trusted.

        Args:
            hosts: Hostname or iterable of hostnames (e.g. "cdn.example.com")
        """
        if isinstance(hosts, str):
            hosts = [hosts]
        return self._with_context(self._context.with_allowed_hosts(hosts))

    def on_error(self, hook: ErrorHook) -> FFetch:
        """Register a callback for errors that end pagination early.

        Pagination stops silently on a failing page; the hook (sync or async)
        receives the error so callers can tell a truncated stream from a
        complete one. A 404 ends the stream normally and is not reported.
        """
        return self._with_context(
            self._context.evolve(error_hooks=self._context.error_hooks + (hook,))
        )

    # Document following

    def follow(self, field_name: str, new_field_name: str | None = None) -> FFetch:
        """Fetch and parse the document each entry references.

        Each entry gets the parsed document under `new_field_name` (defaults
        to `field_name`), or a diagnostic under `<new_field_name>_error`.
        Only hosts on the allowlist are fetched.

        Args:
            field_name: Field holding an absolute or index-relative URL
            new_field_name: Field receiving the parsed document
        """
        url = self._url

        def stage(source: AsyncIterator[Any], context: FFetchContext) -> AsyncIterator[Any]:
            return DocumentFollower(url, context, field_name, new_field_name).run(source)

        return self._with_stage(stage)


def ffetch(url: str, *, context: FFetchContext | None = None) -> FFetch:
    """Create an FFetch pipeline for an index URL.

    Raises:
        InvalidURLError: If `url` is not an absolute http(s) URL
    """
    return FFetch(url, context=context)
