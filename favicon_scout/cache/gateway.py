# favicon_scout/cache/gateway.py
"""
Async, non-raising access to a :class:`CacheStore`.

Store calls run in a worker thread; any exception becomes a failed
:class:`StoreResult`, logged once here.
"""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from favicon_scout.cache.models import CacheRecord
from favicon_scout.cache.store import CacheStore

logger = logging.getLogger("FaviconScout")

T = TypeVar("T")


@dataclass(slots=True)
class StoreResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[str] = None


class CacheGateway:
    """Wraps a store so that cache trouble never interrupts resolution."""

    def __init__(self, store: CacheStore) -> None:
        self.store = store

    async def get(self, domain: str) -> StoreResult[CacheRecord]:
        return await self._call("get", domain, self.store.get, domain)

    async def upsert(self, domain: str, favicon_url: str, size: str, format: str) -> StoreResult[None]:
        result = await self._call("upsert", domain, self.store.upsert, domain, favicon_url, size, format)
        if result.ok:
            logger.info("Cached favicon for %s (%s, %s)", domain, size, format)
        return result

    async def delete(self, domain: str) -> StoreResult[None]:
        result = await self._call("delete", domain, self.store.delete, domain)
        if result.ok:
            logger.info("Cleared cache for %s", domain)
        return result

    async def _call(self, op: str, domain: str, func: Callable[..., Any], *args: Any) -> StoreResult[Any]:
        try:
            value = await asyncio.to_thread(func, *args)
        except Exception as exc:
            logger.warning("Cache %s failed for %s: %s", op, domain, exc)
            return StoreResult(False, error=str(exc) or type(exc).__name__)
        return StoreResult(True, value=value)
