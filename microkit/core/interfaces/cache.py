"""
Cache Backend Protocol

This module defines the protocol for cache implementations, enabling
dependency injection and testing with in-memory fakes.

Contract:
- Values are JSON-serializable objects, not raw strings
- Operations report failure through their return value (False / default)
  instead of raising; a broken cache must never fail the request using it
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheBackend(Protocol):
    """
    Protocol defining the interface for cache implementations.

    Implementations:
    - RedisCache: Production Redis-backed cache
    """

    async def flush(self) -> bool:
        """
        Remove all entries.

        Returns:
            bool: True if the operation succeeded
        """
        ...

    async def get(self, key: str, default: Any = None) -> Any:
        """
        Get a value by key.

        Args:
            key: Cache key
            default: Returned if the key is missing or the read fails

        Returns:
            The decoded value, or ``default``
        """
        ...

    async def set(self, key: str, value: Any, ttl: int | bool | None = ...) -> bool:
        """
        Set or delete a value.

        Args:
            key: Cache key
            value: New value; None deletes the key
            ttl: Time-to-live in seconds; False or None keeps the value forever

        Returns:
            bool: True if the operation succeeded
        """
        ...
