# File: favicon_scout/cache/__init__.py
"""favicon_scout.cache: Кэш найденных иконок по домену."""

from .gateway import CacheGateway, StoreResult
from .models import CacheRecord
from .store import CacheStore, MemoryCacheStore, SQLiteCacheStore

__all__ = [
    "CacheRecord",
    "CacheStore",
    "MemoryCacheStore",
    "SQLiteCacheStore",
    "CacheGateway",
    "StoreResult",
]
