"""
Single-slot TTL cache for the listed company collection.

Features:
- One cached collection with an expiry stamp
- get() hits only while now < expiry
- invalidate() drops the slot unconditionally (called after every write)
- Thread-safe operations with Lock
- Hit/miss counters for the cache-status report
"""

import copy
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass

from turnover.models import Company

logger = logging.getLogger(__name__)

DEFAULT_TTL = 30.0


@dataclass
class CacheStatus:
    """Snapshot of the read cache."""

    cached: bool
    size: int = 0
    expires_in: float | None = None
    hits: int = 0
    misses: int = 0

    def to_dict(self) -> dict:
        """Convert to dict."""
        return {
            "cached": self.cached,
            "size": self.size,
            "expires_in": self.expires_in,
            "hits": self.hits,
            "misses": self.misses,
        }


class ReadCache:
    """Time-boxed memo of the last successful list() result."""

    def __init__(self, ttl: float = DEFAULT_TTL, clock: Callable[[], float] = time.monotonic):
        """
        Initialize the cache.

        Args:
            ttl: Seconds a stored collection stays valid. Defaults to 30.
            clock: Monotonic time source
        """
        self.ttl = ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._value: list[Company] | None = None
        self._expiry = 0.0
        self._hits = 0
        self._misses = 0
        self._generation = 0

    def get(self) -> list[Company] | None:
        """
        Return the cached collection, or None on a miss.

        An empty cached collection is a hit and is returned as [].
        """
        with self._lock:
            if self._value is not None and self._clock() < self._expiry:
                self._hits += 1
                return copy.deepcopy(self._value)
            self._misses += 1
            return None

    @property
    def generation(self) -> int:
        """Bumped by every invalidate(); read it before fetching data to put()."""
        with self._lock:
            return self._generation

    def put(self, companies: list[Company], generation: int | None = None) -> bool:
        """
        Store a collection and restart the TTL.

        When generation is given and the cache was invalidated since it was
        read, the collection predates a write and is dropped.

        Returns:
            True if the collection was stored
        """
        with self._lock:
            if generation is not None and generation != self._generation:
                logger.debug("Dropping collection read before the last invalidation")
                return False
            self._value = copy.deepcopy(list(companies))
            self._expiry = self._clock() + self.ttl
        logger.debug(f"Cached {len(companies)} companies for {self.ttl:g}s")
        return True

    def invalidate(self) -> None:
        """Drop the cached collection."""
        with self._lock:
            self._value = None
            self._expiry = 0.0
            self._generation += 1

    def status(self) -> CacheStatus:
        with self._lock:
            now = self._clock()
            if self._value is None or now >= self._expiry:
                return CacheStatus(cached=False, hits=self._hits, misses=self._misses)
            return CacheStatus(
                cached=True,
                size=len(self._value),
                expires_in=self._expiry - now,
                hits=self._hits,
                misses=self._misses,
            )
