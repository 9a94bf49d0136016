"""
Cache-Related Exceptions

All exceptions related to caching operations (Redis).
"""

from microkit.core.exceptions.base import MicrokitError


class CacheError(MicrokitError):
    """Base exception for cache-related errors."""
    pass


class CacheConnectionError(CacheError):
    """
    Raised when unable to connect to cache (Redis).

    Common causes:
    - Redis server is down
    - Network connectivity issues
    - Incorrect host/port configuration
    - Authentication failure
    """
    pass
