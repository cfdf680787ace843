"""优化结果缓存。"""

from token_saver.cache.base import CacheEntry, CacheStats, OptimizationCache
from token_saver.cache.keys import compute_cache_key
from token_saver.cache.memory import MemoryCache

__all__ = [
    "CacheEntry",
    "CacheStats",
    "MemoryCache",
    "OptimizationCache",
    "compute_cache_key",
]
