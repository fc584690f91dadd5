"""Unit tests for the exception hierarchy."""

from ffetch.core import (
    DecodingError,
    DocumentNotFoundError,
    FFetchError,
    HostNotAllowedError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    OperationFailedError,
)


def test_all_errors_share_base():
    """Every library error is catchable as FFetchError."""
    for error in (
        InvalidURLError("x"),
        HostNotAllowedError("https://evil.com/", "evil.com"),
        NetworkError("boom"),
        DecodingError("bad json"),
        InvalidResponseError(),
        DocumentNotFoundError(),
        OperationFailedError("failed"),
    ):
        assert isinstance(error, FFetchError)


def test_invalid_url_default_message():
    """InvalidURLError falls back to a message naming the URL."""
    error = InvalidURLError("not a url")
    assert str(error) == "Invalid URL: not a url"
    assert error.url == "not a url"


def test_host_not_allowed_message():
    """HostNotAllowedError names the rejected host."""
    error = HostNotAllowedError("https://evil.com/page", "evil.com")
    assert str(error) == "Host 'evil.com' not allowed"
    assert error.host == "evil.com"
    assert isinstance(error, InvalidURLError)


def test_host_not_allowed_without_host():
    """A URL without a host is reported as 'unknown'."""
    error = HostNotAllowedError("file:///etc/passwd", None)
    assert str(error) == "Host 'unknown' not allowed"


def test_network_error_keeps_cause():
    """NetworkError carries the URL and the underlying exception."""
    cause = ConnectionResetError("reset")
    error = NetworkError("Network error: reset", url="https://example.com/", cause=cause)
    assert error.url == "https://example.com/"
    assert error.cause is cause


def test_invalid_response_status_code():
    """InvalidResponseError keeps the status code."""
    error = InvalidResponseError("HTTP 500", status_code=500)
    assert error.status_code == 500
    assert str(InvalidResponseError()) == "Invalid response format"


def test_document_not_found_is_404():
    """DocumentNotFoundError is an InvalidResponseError with status 404."""
    error = DocumentNotFoundError()
    assert error.status_code == 404
    assert isinstance(error, InvalidResponseError)
