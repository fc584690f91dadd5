"""Unit tests for core value types and ports."""

import pytest

from ffetch import AiohttpHTTPClient, BeautifulSoupParser
from ffetch.core import (
    CACHE_ONLY,
    DEFAULT_CACHE,
    NO_CACHE,
    CacheConfig,
    CachePolicy,
    HTMLParser,
    HTTPClient,
    HTTPResponse,
)
from tests.doubles import MockHTTPClient, RecordingParser


class TestCacheConfig:
    """Test CacheConfig value semantics."""

    def test_defaults(self):
        """Default hint leaves caching to the transport."""
        config = CacheConfig()
        assert config.policy == CachePolicy.DEFAULT
        assert config.max_age is None
        assert config.ignore_server_cache_control is False
        assert config == DEFAULT_CACHE

    def test_presets(self):
        """Presets carry their policy."""
        assert NO_CACHE.policy == CachePolicy.NO_CACHE
        assert CACHE_ONLY.policy == CachePolicy.CACHE_ONLY

    def test_negative_max_age_rejected(self):
        """max_age must not be negative."""
        with pytest.raises(ValueError):
            CacheConfig(max_age=-1)

    def test_frozen(self):
        """CacheConfig is immutable."""
        with pytest.raises(AttributeError):
            DEFAULT_CACHE.max_age = 10  # type: ignore[misc]

    def test_policy_values(self):
        """Policies are string enums."""
        assert CachePolicy("no-cache") is CachePolicy.NO_CACHE
        assert CachePolicy.CACHE_ELSE_LOAD.value == "cache-else-load"


class TestHTTPResponse:
    """Test HTTPResponse helpers."""

    @pytest.mark.parametrize("status,ok", [(200, True), (204, True), (301, False), (404, False)])
    def test_ok(self, status, ok):
        """Only 2xx statuses are ok."""
        assert HTTPResponse(status=status).ok is ok

    def test_text_replaces_invalid_bytes(self):
        """Undecodable bytes do not raise."""
        response = HTTPResponse(status=200, body=b"caf\xc3\xa9 \xff")
        assert response.text.startswith("café ")


def test_ports_are_structural():
    """Defaults and test doubles satisfy the ports without inheritance."""
    assert isinstance(AiohttpHTTPClient(), HTTPClient)
    assert isinstance(MockHTTPClient(), HTTPClient)
    assert isinstance(BeautifulSoupParser(), HTMLParser)
    assert isinstance(RecordingParser(), HTMLParser)
