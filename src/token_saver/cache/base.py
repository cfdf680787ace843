"""
缓存基础类型 — 缓存条目、统计信息、缓存协议。

设计原则：
- CacheEntry 不可变，命中时通过 with_hit() 产生新对象
- 时间戳使用注入的时钟（秒，float），便于测试 TTL 而无需 sleep
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol, runtime_checkable

from token_saver.models.result import OptimizationResult


@dataclass(frozen=True)
class CacheEntry:
    """
    缓存条目。

    属性:
        value: 缓存的优化结果
        created_at: 写入时刻（时钟秒数）
        hit_count: 命中次数
    """

    value: OptimizationResult
    created_at: float
    hit_count: int = 0

    def with_hit(self) -> CacheEntry:
        """返回命中次数 +1 的新条目。"""
        return replace(self, hit_count=self.hit_count + 1)

    def age(self, now: float) -> float:
        return now - self.created_at


@dataclass(frozen=True)
class CacheStats:
    """缓存统计快照。"""

    current_size: int
    max_size: int
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    expirations: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0

    def to_dict(self) -> dict[str, float | int]:
        return {
            "current_size": self.current_size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "expirations": self.expirations,
            "hit_rate": round(self.hit_rate, 4),
        }


@runtime_checkable
class OptimizationCache(Protocol):
    """编排器依赖的缓存接口：任何实现 get/set 的对象都可以注入。"""

    def get(self, key: str) -> OptimizationResult | None: ...

    def set(self, key: str, value: OptimizationResult) -> None: ...
