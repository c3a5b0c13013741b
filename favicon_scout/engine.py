# File: favicon_scout/engine.py
"""favicon_scout.engine: Фасад сервиса иконок, создаётся один раз на процесс и передаётся обработчикам."""

from __future__ import annotations

from typing import List, Optional

from aiohttp import ClientSession

from favicon_scout.cache import CacheGateway, CacheRecord, CacheStore, MemoryCacheStore, SQLiteCacheStore
from favicon_scout.config import FaviconConfig, load_config
from favicon_scout.default_icon import default_icon
from favicon_scout.fetcher import TimedFetcher
from favicon_scout.logger import logger
from favicon_scout.parser import IconCandidate
from favicon_scout.probe import PathProber
from favicon_scout.resolver import FaviconResolver
from favicon_scout.scanner import SiteScanner
from favicon_scout.utils import extract_domain

__all__ = ["FaviconService", "build_store"]


def build_store(config: FaviconConfig) -> CacheStore:
    """SQLite-хранилище, если задан cache_path, иначе кэш в памяти."""
    if config.cache_path is not None:
        return SQLiteCacheStore(config.cache_path)
    return MemoryCacheStore()


class FaviconService:
    """Точки входа для внешних вызывающих: resolve / refresh / scan.

    Используется как асинхронный контекстный менеджер::

        async with FaviconService(config) as service:
            icon = await service.resolve_favicon("github.com")
    """

    @staticmethod
    def load_config(path: Optional[str]) -> FaviconConfig:
        """Загружает конфиг из YAML/JSON или использует значения по умолчанию."""
        return load_config(path)

    def __init__(
        self,
        config: Optional[FaviconConfig] = None,
        store: Optional[CacheStore] = None,
        session: Optional[ClientSession] = None,
    ) -> None:
        """Инициализирует сервис; store и session можно передать снаружи."""
        self.config = config or FaviconConfig()
        self.store = store if store is not None else build_store(self.config)
        self._owns_store = store is None
        self.cache = CacheGateway(self.store)
        self._session = session
        self._owns_session = session is None
        self.resolver: Optional[FaviconResolver] = None
        self.scanner: Optional[SiteScanner] = None
        if session is not None:
            self._wire(session)

    async def __aenter__(self) -> FaviconService:
        if self._session is None:
            self._session = ClientSession(raise_for_status=False)
            self._wire(self._session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        if self._owns_store:
            closer = getattr(self.store, "close", None)
            if callable(closer):
                closer()

    def _wire(self, session: ClientSession) -> None:
        cfg = self.config
        fetcher = TimedFetcher(session, max_redirects=cfg.max_redirects)
        self.resolver = FaviconResolver(
            fetcher,
            self.cache,
            cfg.provider_descriptors(),
            timeout=cfg.provider_timeout,
            ttl=cfg.cache_ttl,
        )
        self.scanner = SiteScanner(
            fetcher,
            PathProber(fetcher, timeout=cfg.probe_timeout),
            page_timeout=cfg.page_timeout,
            manifest_timeout=cfg.manifest_timeout,
            user_agent=cfg.user_agent,
        )

    def _require_resolver(self) -> FaviconResolver:
        if self.resolver is None:
            raise RuntimeError("FaviconService is not started; use 'async with'")
        return self.resolver

    async def resolve_favicon(self, url: str) -> str:
        """Иконка из кэша, от провайдеров или по умолчанию."""
        return await self._require_resolver().resolve(url)

    async def refresh_favicon(self, url: str) -> str:
        """Сбрасывает кэш домена и заново опрашивает провайдеров."""
        return await self._require_resolver().refresh(url)

    async def clear_favicon(self, url: str) -> bool:
        return await self._require_resolver().clear(url)

    async def scan_site(self, url: str) -> List[IconCandidate]:
        """Все иконки сайта для ручного выбора; кэш не используется."""
        if self.scanner is None:
            raise RuntimeError("FaviconService is not started; use 'async with'")
        return await self.scanner.scan(url)

    async def cached_record(self, url: str) -> Optional[CacheRecord]:
        domain = extract_domain(url)
        if not domain:
            return None
        result = await self.cache.get(domain)
        if not result.ok:
            logger.warning("Cache lookup failed for %s", domain)
        return result.value

    @staticmethod
    def default_icon() -> str:
        return default_icon()
