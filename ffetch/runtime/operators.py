"""Lazy stream operators.

Each operator wraps an upstream async iterator in a new async generator
and pulls from it one item at a time. Nothing is buffered and upstream
order is preserved. When an operator finishes (exhausted, limit reached,
or closed by its consumer) it closes its upstream, so the paginator below
issues no further page requests.

Callbacks passed to `map_items` and `filter_items` may be plain functions
or coroutine functions. A callback that raises ends the stream: the error
is logged and the consumer sees a shorter stream, as with a failing page.
"""

from __future__ import annotations

import inspect
from collections.abc import AsyncGenerator, AsyncIterator, Awaitable, Callable
from contextlib import aclosing
from typing import Any, TypeVar, Union

from .telemetry import log_stage_failed

T = TypeVar("T")
U = TypeVar("U")

Transform = Callable[[T], Union[U, Awaitable[U]]]
Predicate = Callable[[T], Union[bool, Awaitable[bool]]]


async def _invoke(callback: Callable[[Any], Any], item: Any) -> Any:
    result = callback(item)
    if inspect.isawaitable(result):
        result = await result
    return result


async def map_items(
    source: AsyncIterator[T], transform: Transform[T, U]
) -> AsyncGenerator[U, None]:
    """Emit `transform(item)` for each upstream item."""
    async with aclosing(source):
        async for item in source:
            try:
                result = await _invoke(transform, item)
            except Exception as e:
                log_stage_failed(stage="map", error=e)
                return
            yield result


async def filter_items(
    source: AsyncIterator[T], predicate: Predicate[T]
) -> AsyncGenerator[T, None]:
    """Emit only the items for which `predicate(item)` is truthy."""
    async with aclosing(source):
        async for item in source:
            try:
                keep = await _invoke(predicate, item)
            except Exception as e:
                log_stage_failed(stage="filter", error=e)
                return
            if keep:
                yield item


async def limit_items(source: AsyncIterator[T], count: int) -> AsyncGenerator[T, None]:
    """Emit at most `count` items.

    Upstream is not pulled again after the last item is emitted.
    """
    async with aclosing(source):
        if count <= 0:
            return
        emitted = 0
        async for item in source:
            yield item
            emitted += 1
            if emitted >= count:
                return


async def skip_items(source: AsyncIterator[T], count: int) -> AsyncGenerator[T, None]:
    """Drop the first `count` items and emit the rest."""
    async with aclosing(source):
        skipped = 0
        async for item in source:
            if skipped < count:
                skipped += 1
                continue
            yield item


def slice_items(source: AsyncIterator[T], start: int, end: int) -> AsyncGenerator[T, None]:
    """Emit items at positions [start, end) of the upstream.

    Equivalent to skipping `start` items and then limiting to `end - start`;
    empty when `end <= start`.
    """
    start = max(start, 0)
    return limit_items(skip_items(source, start), end - start)
