"""Custom exception hierarchy."""

from __future__ import annotations


class FFetchError(Exception):
    """Base exception for all library errors."""

    pass


class InvalidURLError(FFetchError):
    """URL could not be parsed or resolved.

    Raised at construction time for a malformed index URL. The document
    follower uses it to describe reference fields that do not yield a URL.
    """

    def __init__(self, url: str, message: str | None = None) -> None:
        super().__init__(message or f"Invalid URL: {url}")
        self.url = url


class HostNotAllowedError(InvalidURLError):
    """Document URL points at a host outside the allowlist."""

    def __init__(self, url: str, host: str | None) -> None:
        super().__init__(url, f"Host '{host or 'unknown'}' not allowed")
        self.host = host


class NetworkError(FFetchError):
    """Transport-level failure (connectivity, timeout, cancelled request)."""

    def __init__(
        self,
        message: str,
        *,
        url: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.cause = cause


class DecodingError(FFetchError):
    """Index page body is not a well-formed JSON envelope."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidResponseError(FFetchError):
    """Response has an unexpected status or shape."""

    def __init__(
        self, message: str = "Invalid response format", status_code: int | None = None
    ) -> None:
        super().__init__(message)
        self.status_code = status_code


class DocumentNotFoundError(InvalidResponseError):
    """Followed document answered with 404."""

    def __init__(self, message: str = "Document not found") -> None:
        super().__init__(message, status_code=404)


class OperationFailedError(FFetchError):
    """Catch-all failure, e.g. an HTML parser rejecting its input."""

    pass
