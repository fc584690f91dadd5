"""FFetch - lazy, chainable client for paginated JSON index endpoints."""

from .api import FFetch, FFetchMapped, ffetch
from .core import (
    CACHE_ELSE_LOAD,
    CACHE_ONLY,
    DEFAULT_CACHE,
    NO_CACHE,
    CacheConfig,
    CachePolicy,
    DecodingError,
    DocumentNotFoundError,
    Entry,
    FFetchError,
    HostNotAllowedError,
    HTMLParser,
    HTTPClient,
    HTTPResponse,
    InvalidResponseError,
    InvalidURLError,
    NetworkError,
    OperationFailedError,
)
from .io import AiohttpHTTPClient, BeautifulSoupParser
from .models import PageResponse
from .runtime import FFetchContext

__version__ = "0.1.0"

__all__ = [
    # Pipeline
    "ffetch",
    "FFetch",
    "FFetchMapped",
    "FFetchContext",
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
    "PageResponse",
    # Default implementations
    "AiohttpHTTPClient",
    "BeautifulSoupParser",
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
