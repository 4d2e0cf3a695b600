"""
Tests for the single-slot read cache.

Tests cover:
- Hit/miss around the TTL boundary
- Invalidation
- Empty collections are cacheable
- Returned values are isolated from later mutation
- Status reporting
"""

from tests.fixtures import FakeClock, sample_company
from turnover.cache import CacheStatus, ReadCache


class TestReadCacheTTL:
    """Test expiry behaviour."""

    def test_miss_when_empty(self):
        """Test that a fresh cache misses."""
        cache = ReadCache(30, clock=FakeClock())
        assert cache.get() is None

    def test_hit_before_expiry(self):
        """Test that get() just before ttl elapses returns the stored value."""
        clock = FakeClock()
        cache = ReadCache(30, clock=clock)
        companies = [sample_company()]

        cache.put(companies)
        clock.advance(29.999)

        assert cache.get() == companies

    def test_miss_after_expiry(self):
        """Test that get() just after ttl elapses is a miss."""
        clock = FakeClock()
        cache = ReadCache(30, clock=clock)

        cache.put([sample_company()])
        clock.advance(30.001)

        assert cache.get() is None

    def test_put_restarts_ttl(self):
        """Test that a second put extends the expiry."""
        clock = FakeClock()
        cache = ReadCache(30, clock=clock)

        cache.put([])
        clock.advance(20)
        cache.put([sample_company()])
        clock.advance(20)

        assert cache.get() == [sample_company()]

    def test_empty_collection_is_a_hit(self):
        """Test that [] is cached rather than treated as a miss."""
        cache = ReadCache(30, clock=FakeClock())
        cache.put([])
        assert cache.get() == []


class TestReadCacheInvalidation:
    """Test invalidate()."""

    def test_invalidate_clears(self):
        """Test that invalidate forces a miss before the TTL."""
        cache = ReadCache(30, clock=FakeClock())
        cache.put([sample_company()])

        cache.invalidate()

        assert cache.get() is None

    def test_invalidate_empty_cache(self):
        """Test invalidating an empty cache (should not raise)."""
        cache = ReadCache(30, clock=FakeClock())
        cache.invalidate()
        assert cache.get() is None

    def test_put_after_invalidation_is_dropped(self):
        """Test that a collection read before an invalidation is not stored."""
        cache = ReadCache(30, clock=FakeClock())
        generation = cache.generation

        cache.invalidate()

        assert cache.put([sample_company()], generation) is False
        assert cache.get() is None

    def test_put_with_current_generation(self):
        cache = ReadCache(30, clock=FakeClock())
        assert cache.put([sample_company()], cache.generation) is True
        assert len(cache.get()) == 1


class TestReadCacheIsolation:
    """Test that callers cannot corrupt the cached snapshot."""

    def test_mutating_result_does_not_touch_cache(self):
        """Test that edits to a returned company are not visible on the next hit."""
        cache = ReadCache(30, clock=FakeClock())
        cache.put([sample_company()])

        first = cache.get()
        first[0].address = "changed"
        first[0].milestones[0].completed = False

        second = cache.get()
        assert second[0].address == "12 Elm St"
        assert second[0].milestones[0].completed is True

    def test_mutating_input_does_not_touch_cache(self):
        """Test that the stored snapshot is independent of the caller's list."""
        cache = ReadCache(30, clock=FakeClock())
        companies = [sample_company()]
        cache.put(companies)

        companies.append(sample_company(2))

        assert len(cache.get()) == 1


class TestReadCacheStatus:
    """Test status()."""

    def test_status_when_cached(self):
        """Test status reports size and remaining lifetime."""
        clock = FakeClock()
        cache = ReadCache(30, clock=clock)
        cache.put([sample_company(1), sample_company(2)])
        clock.advance(10)

        status = cache.status()

        assert status.cached is True
        assert status.size == 2
        assert status.expires_in == 20

    def test_status_counts_hits_and_misses(self):
        """Test hit/miss counters."""
        cache = ReadCache(30, clock=FakeClock())
        cache.get()
        cache.put([])
        cache.get()
        cache.get()

        status = cache.status()
        assert (status.hits, status.misses) == (2, 1)

    def test_status_after_expiry(self):
        """Test that an expired slot reports nothing cached."""
        clock = FakeClock()
        cache = ReadCache(30, clock=clock)
        cache.put([sample_company()])
        clock.advance(31)

        assert cache.status() == CacheStatus(cached=False, hits=0, misses=0)

    def test_to_dict(self):
        """Test dict conversion."""
        assert CacheStatus(cached=False).to_dict() == {
            "cached": False,
            "size": 0,
            "expires_in": None,
            "hits": 0,
            "misses": 0,
        }
