"""
内存缓存 — 有界 LRU + 读时 TTL 检查。

- 访问命中会把键移到最近使用端
- 读取时发现条目超过 TTL 则删除并视为未命中
- 超出容量时淘汰最久未使用的键
- get / set 都持有同一把锁（"读取-可能淘汰-写入"整体原子）

🏭 生产提示：多进程部署时每个进程各有一份缓存，
需要共享请实现 OptimizationCache 协议并注入编排器。
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import Callable

from token_saver.cache.base import CacheEntry, CacheStats
from token_saver.models.result import OptimizationResult

logger = logging.getLogger(__name__)


class MemoryCache:
    """
    线程安全的 LRU + TTL 缓存。

    基本用法::

        cache = MemoryCache(max_size=1000, ttl_seconds=3600)
        cache.set(key, result)
        cache.get(key)  # -> OptimizationResult | None

    属性:
        max_size: 最大条目数
        ttl_seconds: 条目存活时间（秒）；条目年龄严格大于该值才过期
        clock: 返回当前秒数的可调用对象，默认 time.time
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float = 3600,
        clock: Callable[[], float] = time.time,
    ):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self._max_size = max_size
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0
        self._expirations = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> OptimizationResult | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            if entry.age(self._clock()) > self._ttl:
                del self._entries[key]
                self._expirations += 1
                self._misses += 1
                logger.debug("Cache entry expired: %s", key[:16])
                return None
            self._entries[key] = entry.with_hit()
            self._entries.move_to_end(key)
            self._hits += 1
            return entry.value

    def set(self, key: str, value: OptimizationResult) -> None:
        with self._lock:
            if key in self._entries:
                del self._entries[key]
            self._entries[key] = CacheEntry(value=value, created_at=self._clock())
            while len(self._entries) > self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._evictions += 1
                logger.debug("Cache evicted LRU entry: %s", evicted[:16])

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """清空条目并重置统计。"""
        with self._lock:
            self._entries.clear()
            self._hits = self._misses = self._evictions = self._expirations = 0

    def entry(self, key: str) -> CacheEntry | None:
        """查看原始条目（不计命中、不刷新 LRU 顺序）。"""
        with self._lock:
            return self._entries.get(key)

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                current_size=len(self._entries),
                max_size=self._max_size,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                expirations=self._expirations,
            )
