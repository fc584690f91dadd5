"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from tests.doubles import MockHTTPClient, RecordingParser


@pytest.fixture
def mock_client():
    """Factory for MockHTTPClient instances."""

    def _make(entries: list[dict[str, Any]] | None = None, **kwargs: Any) -> MockHTTPClient:
        return MockHTTPClient(entries, **kwargs)

    return _make


@pytest.fixture
def parser() -> RecordingParser:
    """Parser that records its input."""
    return RecordingParser()
