"""Core enumerations."""

from enum import Enum


class CachePolicy(str, Enum):
    """Cache behaviour hint forwarded to the HTTP client.

    The library never caches anything itself; the value is passed through
    unchanged and interpreted by the transport.
    """

    DEFAULT = "default"
    NO_CACHE = "no-cache"
    CACHE_ONLY = "cache-only"
    CACHE_ELSE_LOAD = "cache-else-load"
