"""Core types, enums and exceptions shared by every layer."""

from .constants import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_MAX_CONCURRENCY,
    DEFAULT_TIMEOUT_SECONDS,
    WILDCARD_HOST,
)
from .enums import CachePolicy
from .exceptions import (
    DecodingError,
    DocumentNotFoundError,
    FFetchError,
    HostNotAllowedError,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    OperationFailedError,
)
from .types import (
    CACHE_ELSE_LOAD,
    CACHE_ONLY,
    DEFAULT_CACHE,
    NO_CACHE,
    CacheConfig,
    Entry,
    HTMLParser,
    HTTPClient,
    HTTPResponse,
)

__all__ = [
    # Constants
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_MAX_CONCURRENCY",
    "DEFAULT_TIMEOUT_SECONDS",
    "WILDCARD_HOST",
    # Cache hints
    "CachePolicy",
    "CacheConfig",
    "DEFAULT_CACHE",
    "NO_CACHE",
    "CACHE_ONLY",
    "CACHE_ELSE_LOAD",
    # Types and ports
    "Entry",
    "HTTPResponse",
    "HTTPClient",
    "HTMLParser",
    # Exceptions
    "FFetchError",
    "InvalidURLError",
    "HostNotAllowedError",
    "NetworkError",
    "DecodingError",
    "InvalidResponseError",
    "DocumentNotFoundError",
    "OperationFailedError",
]
