"""Default transport and parser implementations."""

from .html import BeautifulSoupParser
from .http import AiohttpHTTPClient, cache_headers

__all__ = [
    "AiohttpHTTPClient",
    "BeautifulSoupParser",
    "cache_headers",
]
