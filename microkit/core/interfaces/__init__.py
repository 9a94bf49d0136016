"""
Core Interfaces Module

Protocols for pluggable components.

Components:
-----------
- **cache.py**: CacheBackend protocol for cache implementations
"""

from microkit.core.interfaces.cache import CacheBackend

__all__ = [
    "CacheBackend",
]
