"""
In-memory cache layer for the turnover tracker.

Provides:
- ReadCache: single-slot TTL cache for the listed company collection
- CacheStatus: snapshot used by the cache-status report
"""

from .read_cache import CacheStatus, ReadCache

__all__ = [
    "CacheStatus",
    "ReadCache",
]
