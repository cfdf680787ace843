"""
缓存模块单元测试。

覆盖范围:
- cache/base.py: CacheEntry, CacheStats, OptimizationCache Protocol
- cache/memory.py: MemoryCache（LRU、TTL、统计、并发）
- cache/keys.py: compute_cache_key
"""

from __future__ import annotations

import threading

import pytest

from token_saver.cache import (
    CacheEntry,
    CacheStats,
    MemoryCache,
    OptimizationCache,
    compute_cache_key,
)
from token_saver.models import ContentType, OptimizationOptions, OptimizationResult, Preset


def make_result(output: str = "out") -> OptimizationResult:
    return OptimizationResult(
        output=output,
        original_tokens=10,
        optimized_tokens=8,
        saved=2,
        savings_percent=20.0,
        strategies=["whitespace-compression"],
        content_type=ContentType.PROSE,
    )


class TestCacheEntry:
    def test_with_hit_is_immutable(self) -> None:
        entry = CacheEntry(value=make_result(), created_at=0.0)
        updated = entry.with_hit()
        assert updated.hit_count == 1
        assert entry.hit_count == 0

    def test_age(self) -> None:
        assert CacheEntry(value=make_result(), created_at=10.0).age(25.0) == 15.0


class TestCacheStats:
    def test_hit_rate(self) -> None:
        assert CacheStats(current_size=0, max_size=1, hits=3, misses=1).hit_rate == 0.75
        assert CacheStats(current_size=0, max_size=1).hit_rate == 0.0

    def test_to_dict(self) -> None:
        data = CacheStats(current_size=1, max_size=5, hits=1, misses=2).to_dict()
        assert data["hit_rate"] == pytest.approx(0.3333)
        assert data["max_size"] == 5


class TestMemoryCache:
    """MemoryCache 测试。"""

    def test_set_get(self, cache: MemoryCache) -> None:
        result = make_result()
        cache.set("k", result)
        assert cache.get("k") is result
        assert "k" in cache
        assert len(cache) == 1

    def test_miss(self, cache: MemoryCache) -> None:
        assert cache.get("missing") is None
        assert cache.stats().misses == 1

    def test_implements_protocol(self, cache: MemoryCache) -> None:
        assert isinstance(cache, OptimizationCache)

    def test_lru_eviction(self, clock) -> None:
        """超出容量时淘汰最久未使用的键；访问会刷新顺序。"""
        cache = MemoryCache(max_size=2, clock=clock)
        cache.set("a", make_result("a"))
        cache.set("b", make_result("b"))
        cache.get("a")
        cache.set("c", make_result("c"))
        assert cache.get("b") is None
        assert cache.get("a") is not None
        assert cache.get("c") is not None
        assert cache.stats().evictions == 1

    def test_overwrite_keeps_size(self, cache: MemoryCache) -> None:
        cache.set("k", make_result("1"))
        cache.set("k", make_result("2"))
        assert len(cache) == 1
        assert cache.get("k").output == "2"

    def test_ttl_expiration(self, cache: MemoryCache, clock) -> None:
        cache.set("k", make_result())
        clock.advance(3600)
        assert cache.get("k") is not None
        clock.advance(1)
        assert cache.get("k") is None
        assert "k" not in cache
        assert cache.stats().expirations == 1

    def test_hit_count(self, cache: MemoryCache) -> None:
        cache.set("k", make_result())
        cache.get("k")
        cache.get("k")
        assert cache.entry("k").hit_count == 2

    def test_stats(self, cache: MemoryCache) -> None:
        cache.set("k", make_result())
        cache.get("k")
        cache.get("nope")
        stats = cache.stats()
        assert stats.hits == 1
        assert stats.misses == 1
        assert stats.current_size == 1
        assert stats.max_size == 10

    def test_clear(self, cache: MemoryCache) -> None:
        cache.set("k", make_result())
        cache.get("k")
        cache.clear()
        assert len(cache) == 0
        assert cache.stats().hits == 0

    def test_delete(self, cache: MemoryCache) -> None:
        cache.set("k", make_result())
        assert cache.delete("k")
        assert not cache.delete("k")

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            MemoryCache(max_size=0)

    def test_concurrent_access(self) -> None:
        cache = MemoryCache(max_size=50)

        def worker(n: int) -> None:
            for i in range(200):
                key = f"{n}-{i % 60}"
                cache.set(key, make_result(key))
                cache.get(key)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(cache) <= 50
        stats = cache.stats()
        assert stats.current_size == len(cache)


class TestCacheKey:
    def test_deterministic(self) -> None:
        options = OptimizationOptions()
        assert compute_cache_key("text", options) == compute_cache_key("text", OptimizationOptions())
        assert compute_cache_key("text", options).startswith("opt:")

    def test_differs_by_input(self) -> None:
        options = OptimizationOptions()
        assert compute_cache_key("a", options) != compute_cache_key("b", options)

    def test_differs_by_options(self) -> None:
        assert compute_cache_key("a", OptimizationOptions()) != compute_cache_key(
            "a", OptimizationOptions(preset=Preset.ULTRA)
        )
