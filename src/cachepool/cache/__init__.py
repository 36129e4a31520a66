"""cachepool cache — driver contract, pool base and built-in drivers."""

from cachepool.cache.adapters.disk import DiskCacheDriver, DiskCacheItem
from cachepool.cache.adapters.memory import MemoryCacheItem, MemoryDriver
from cachepool.cache.item import CacheItem
from cachepool.cache.manager import CacheManager
from cachepool.cache.pool import CachePool
from cachepool.cache.ports.outbound import CacheDriver, KeyValueStore
from cachepool.cache.types import ClearResult, DriverStatistic

__all__ = [
    "CacheDriver",
    "CacheItem",
    "CacheManager",
    "CachePool",
    "ClearResult",
    "DiskCacheDriver",
    "DiskCacheItem",
    "DriverStatistic",
    "KeyValueStore",
    "MemoryCacheItem",
    "MemoryDriver",
]
