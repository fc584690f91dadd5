"""Unit tests for lazy stream operators."""

from __future__ import annotations

import pytest

from ffetch.runtime import filter_items, limit_items, map_items, skip_items, slice_items


class CountingSource:
    """Async source that records how many items were pulled and whether it was closed."""

    def __init__(self, count: int) -> None:
        self.count = count
        self.pulled = 0
        self.closed = False

    async def stream(self):
        try:
            for i in range(self.count):
                self.pulled += 1
                yield i
        finally:
            self.closed = True


async def collect(stream):
    return [item async for item in stream]


class TestMapFilter:
    """Test map and filter stages."""

    @pytest.mark.asyncio
    async def test_map_sync(self):
        source = CountingSource(4)
        assert await collect(map_items(source.stream(), lambda x: x * 10)) == [0, 10, 20, 30]

    @pytest.mark.asyncio
    async def test_map_async(self):
        async def double(x):
            return x * 2

        assert await collect(map_items(CountingSource(3).stream(), double)) == [0, 2, 4]

    @pytest.mark.asyncio
    async def test_filter_sync_and_async(self):
        async def is_odd(x):
            return x % 2 == 1

        evens = await collect(filter_items(CountingSource(6).stream(), lambda x: x % 2 == 0))
        odds = await collect(filter_items(CountingSource(6).stream(), is_odd))
        assert evens == [0, 2, 4]
        assert odds == [1, 3, 5]

    @pytest.mark.asyncio
    async def test_failing_transform_ends_stream(self):
        """Items before a failing callback are kept and upstream is closed."""
        source = CountingSource(10)

        def explode_on_three(x):
            if x == 3:
                raise KeyError("missing")
            return x

        assert await collect(map_items(source.stream(), explode_on_three)) == [0, 1, 2]
        assert source.closed

    @pytest.mark.asyncio
    async def test_failing_predicate_ends_stream(self):
        source = CountingSource(10)
        result = await collect(filter_items(source.stream(), lambda x: 1 / (2 - x) > 0))
        assert result == [0, 1]
        assert source.closed


class TestLimitSkipSlice:
    """Test positional stages."""

    @pytest.mark.asyncio
    async def test_limit_does_not_overpull(self):
        """limit(k) pulls exactly k items and closes upstream."""
        source = CountingSource(100)
        assert await collect(limit_items(source.stream(), 3)) == [0, 1, 2]
        assert source.pulled == 3
        assert source.closed

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count", [0, -5])
    async def test_limit_non_positive(self, count):
        source = CountingSource(10)
        assert await collect(limit_items(source.stream(), count)) == []
        assert source.pulled == 0

    @pytest.mark.asyncio
    async def test_limit_larger_than_source(self):
        assert await collect(limit_items(CountingSource(3).stream(), 10)) == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_skip(self):
        assert await collect(skip_items(CountingSource(5).stream(), 2)) == [2, 3, 4]
        assert await collect(skip_items(CountingSource(5).stream(), 0)) == [0, 1, 2, 3, 4]
        assert await collect(skip_items(CountingSource(5).stream(), 9)) == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "start,end,expected",
        [
            (2, 5, [2, 3, 4]),
            (3, 3, []),
            (5, 2, []),
            (8, 15, [8, 9]),
            (-2, 2, [0, 1]),
        ],
    )
    async def test_slice(self, start, end, expected):
        assert await collect(slice_items(CountingSource(10).stream(), start, end)) == expected

    @pytest.mark.asyncio
    async def test_slice_stops_at_end(self):
        source = CountingSource(100)
        await collect(slice_items(source.stream(), 1, 4))
        assert source.pulled == 4
        assert source.closed

    @pytest.mark.asyncio
    async def test_chained_closing(self):
        """Closing the outermost stage closes the source."""
        source = CountingSource(100)
        stream = map_items(skip_items(source.stream(), 1), lambda x: x)
        assert await anext(stream) == 1
        await stream.aclose()
        assert source.closed
