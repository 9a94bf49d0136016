"""
Cache Module

Redis-backed JSON cache.
"""

from .redis_cache import RedisCache

__all__ = [
    "RedisCache",
]
