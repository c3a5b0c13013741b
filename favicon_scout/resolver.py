# File: favicon_scout/resolver.py
"""
Provider waterfall: cache first, then the providers one after another.

Provider order is a guarantee, not a preference: provider N+1 is only tried
after provider N has failed, and the first success wins regardless of its
declared size.
"""
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Optional, Protocol, Sequence

from favicon_scout.cache.gateway import CacheGateway
from favicon_scout.default_icon import default_icon
from favicon_scout.fetcher.models import FetchOutcome
from favicon_scout.providers import DEFAULT_PROVIDERS, ProviderDescriptor
from favicon_scout.utils import extract_domain

__all__ = ["FaviconResolver", "CACHE_TTL"]

logger = logging.getLogger("FaviconScout")

CACHE_TTL = timedelta(days=30)


class Fetcher(Protocol):
    async def fetch(self, url: str, timeout: float, *, content: bool = False, headers=None) -> FetchOutcome: ...


class FaviconResolver:
    """Resolves a favicon reference for a URL; never raises."""

    def __init__(
        self,
        fetcher: Fetcher,
        cache: CacheGateway,
        providers: Sequence[ProviderDescriptor] = DEFAULT_PROVIDERS,
        *,
        timeout: float = 5.0,
        ttl: timedelta = CACHE_TTL,
    ) -> None:
        self.fetcher = fetcher
        self.cache = cache
        self.providers = tuple(providers)
        self.timeout = timeout
        self.ttl = ttl

    async def resolve(self, url: str) -> str:
        """Cached favicon if fresh, otherwise the waterfall result."""
        try:
            domain = extract_domain(url)
            if not domain:
                logger.warning("Invalid domain in %r, using default icon", url)
                return default_icon()

            cached = await self.cache.get(domain)
            record = cached.value if cached.ok else None
            if record is not None and not record.is_stale(self.ttl):
                logger.debug("Using cached favicon for %s", domain)
                return record.favicon_url

            logger.info("Fetching favicon for %s", domain)
            return await self._waterfall(domain)
        except Exception:
            logger.exception("Unexpected error resolving favicon for %r", url)
            return default_icon()

    async def refresh(self, url: str) -> str:
        """Drop the cached record and run the waterfall unconditionally."""
        try:
            domain = extract_domain(url)
            if not domain:
                logger.warning("Invalid domain in %r, using default icon", url)
                return default_icon()
            await self.cache.delete(domain)
            logger.info("Refreshing favicon for %s", domain)
            return await self._waterfall(domain)
        except Exception:
            logger.exception("Unexpected error refreshing favicon for %r", url)
            return default_icon()

    async def clear(self, url: str) -> bool:
        """Best-effort removal of the cached record; False when nothing could be deleted."""
        domain = extract_domain(url)
        if not domain:
            return False
        result = await self.cache.delete(domain)
        return result.ok

    async def _waterfall(self, domain: str) -> str:
        for provider in self.providers:
            try:
                winner = await self._try_provider(provider, domain)
            except Exception:
                logger.exception("%s raised for %s, trying next provider", provider.name, domain)
                continue
            if winner is not None:
                await self.cache.upsert(domain, winner, provider.size, provider.format)
                return winner

        logger.info("Using default icon for %s", domain)
        icon = default_icon()
        await self.cache.upsert(domain, icon, "default", "svg")
        return icon

    async def _try_provider(self, provider: ProviderDescriptor, domain: str) -> Optional[str]:
        target = provider.build_url(domain)
        logger.debug("Trying %s for %s", provider.name, domain)
        outcome = await self.fetcher.fetch(target, self.timeout)
        if outcome.success and outcome.resolved_url:
            logger.info("%s succeeded for %s", provider.name, domain)
            return outcome.resolved_url
        logger.warning("%s failed for %s: %s", provider.name, domain, outcome.error)
        return None
