"""Unit tests for the in-memory SimpleTTLCache."""

import threading

from employee_directory.utils.simple_cache import SimpleTTLCache


class FakeClock:
    """Deterministic clock used to test expiration logic."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float) -> None:
        self.current += seconds


def test_set_and_get_updates_hit_miss_counters() -> None:
    cache: SimpleTTLCache[list[int]] = SimpleTTLCache(ttl_seconds=10)

    assert cache.get("k") is None
    cache.set("k", [1, 2])
    assert cache.get("k") == [1, 2]

    stats = cache.stats()
    assert stats["hits"] == 1
    assert stats["misses"] == 1
    assert stats["entries"] == 1


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache: SimpleTTLCache[str] = SimpleTTLCache(ttl_seconds=5, clock=clock)
    cache.set("k", "v")

    clock.advance(4.9)
    assert cache.get("k") == "v"

    clock.advance(1.0)
    assert cache.get("k") is None
    assert cache.stats()["evictions"] == 1


def test_zero_ttl_disables_caching() -> None:
    cache: SimpleTTLCache[str] = SimpleTTLCache(ttl_seconds=0)
    cache.set("k", "v")

    assert cache.get("k") is None
    assert cache.stats()["entries"] == 0


def test_invalidate_removes_entry() -> None:
    cache: SimpleTTLCache[str] = SimpleTTLCache(ttl_seconds=60)
    cache.set("k", "v")

    cache.invalidate("k")
    cache.invalidate("missing")

    assert cache.get("k") is None


def test_lru_eviction_when_over_capacity() -> None:
    cache: SimpleTTLCache[int] = SimpleTTLCache(ttl_seconds=60, max_entries=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.get("a")  # "b" becomes least recently used
    cache.set("c", 3)

    assert cache.get("b") is None
    assert cache.get("a") == 1
    assert cache.get("c") == 3


def test_clear_resets_everything() -> None:
    cache: SimpleTTLCache[int] = SimpleTTLCache(ttl_seconds=60)
    cache.set("a", 1)
    cache.get("a")
    cache.clear()

    assert cache.stats() == {
        "ttl_seconds": 60,
        "max_entries": 128,
        "entries": 0,
        "hits": 0,
        "misses": 0,
        "evictions": 0,
    }


def test_concurrent_access_is_safe() -> None:
    cache: SimpleTTLCache[int] = SimpleTTLCache(ttl_seconds=60, max_entries=50)

    def worker(offset: int) -> None:
        for i in range(200):
            cache.set(f"k{(offset + i) % 100}", i)
            cache.get(f"k{i % 100}")

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert cache.stats()["entries"] <= 50
