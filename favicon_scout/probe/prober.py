"""Модуль для проверки стандартных путей иконок на сайте."""

import asyncio
import logging
from typing import Collection, List, Optional, Tuple

from favicon_scout.fetcher import TimedFetcher
from favicon_scout.parser.html_parser import IconCandidate

logger = logging.getLogger("FaviconScout")

# (путь, номинальный размер)
CONVENTIONAL_PATHS: Tuple[Tuple[str, str], ...] = (
    ("/apple-touch-icon.png", "180x180"),
    ("/apple-touch-icon-180x180.png", "180x180"),
    ("/apple-touch-icon-152x152.png", "152x152"),
    ("/apple-touch-icon-precomposed.png", "180x180"),
    ("/favicon-192x192.png", "192x192"),
    ("/favicon-96x96.png", "96x96"),
    ("/favicon-32x32.png", "32x32"),
    ("/favicon-16x16.png", "16x16"),
    ("/icon-192x192.png", "192x192"),
    ("/icon-512x512.png", "512x512"),
    ("/android-chrome-192x192.png", "192x192"),
    ("/android-chrome-512x512.png", "512x512"),
    ("/mstile-150x150.png", "150x150"),
    ("/favicon.ico", "32x32"),
    ("/favicon.png", "unknown"),
)


class PathProber:
    """Проверяет стандартные пути иконок параллельно, без ограничения пула."""

    def __init__(
        self,
        fetcher: TimedFetcher,
        timeout: float = 3.0,
        paths: Collection[Tuple[str, str]] = CONVENTIONAL_PATHS,
    ) -> None:
        """Инициализирует PathProber с fetcher, таймаутом на путь и списком путей."""
        self.fetcher = fetcher
        self.timeout = timeout
        self.paths = tuple(paths)

    async def probe(self, url: str, size: str) -> Optional[IconCandidate]:
        """Возвращает IconCandidate, если ресурс отвечает HTTP 200."""
        outcome = await self.fetcher.fetch(url, self.timeout)
        if outcome.success:
            return IconCandidate(url=url, size=size, type="probed")
        logger.debug("Probe miss %s: %s", url, outcome.error)
        return None

    async def run(self, origin: str, known: Collection[str] = ()) -> List[IconCandidate]:
        """Проверяет все пути, которых нет среди *known*, и ждёт завершения каждой проверки."""
        skip = set(known)
        tasks = []
        for path, size in self.paths:
            target = origin + path
            if target in skip:
                continue
            tasks.append(asyncio.create_task(self.probe(target, size)))
        logger.debug("Probing %d conventional paths on %s", len(tasks), origin)
        results = await asyncio.gather(*tasks, return_exceptions=True)
        found: List[IconCandidate] = []
        for result in results:
            if isinstance(result, BaseException):
                logger.warning("Probe failed on %s: %r", origin, result)
                continue
            if result is not None:
                found.append(result)
        return found
