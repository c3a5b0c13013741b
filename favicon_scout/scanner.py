# === FILE: favicon_scout/scanner.py ===
"""
Сканер сайта: все иконки, которые сайт объявляет или отдаёт по стандартным путям.

Используется для ручного выбора иконки; кэш не читает и не пишет.
"""
from __future__ import annotations

import logging
from typing import List

from favicon_scout.config import BROWSER_USER_AGENT
from favicon_scout.fetcher import TimedFetcher
from favicon_scout.parser import IconCandidate, ManifestError, parse_icon_links, parse_manifest_icons
from favicon_scout.probe import PathProber
from favicon_scout.utils import site_origin

__all__ = ["SiteScanner"]

logger = logging.getLogger("FaviconScout")

_HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


class SiteScanner:
    """HTML-ссылки, затем web manifest, затем параллельная проверка стандартных путей."""

    def __init__(
        self,
        fetcher: TimedFetcher,
        prober: PathProber,
        *,
        page_timeout: float = 8.0,
        manifest_timeout: float = 5.0,
        user_agent: str = BROWSER_USER_AGENT,
    ) -> None:
        self.fetcher = fetcher
        self.prober = prober
        self.page_timeout = page_timeout
        self.manifest_timeout = manifest_timeout
        self.headers = {"User-Agent": user_agent, "Accept": _HTML_ACCEPT}

    async def scan(self, url: str) -> List[IconCandidate]:
        """
        Возвращает найденные иконки в порядке обнаружения.

        Ошибки не пробрасываются: при сбое возвращается то, что успели собрать.
        """
        found: List[IconCandidate] = []
        try:
            origin = site_origin(url)
            logger.info("Scanning %s for favicons", origin)

            page = await self.fetcher.fetch(
                origin + "/", self.page_timeout, content=True, headers=self.headers
            )
            if not page.success or page.content is None:
                logger.info("Could not fetch HTML of %s: %s", origin, page.error)
                return found

            parsed = parse_icon_links(page.content, origin)
            found.extend(parsed.icons)

            if parsed.manifest_url:
                found.extend(await self._manifest_icons(parsed.manifest_url))

            found.extend(await self.prober.run(origin, known={icon.url for icon in found}))
            logger.info("Found %d icons on %s", len(found), origin)
        except Exception:
            logger.exception("Error scanning %r", url)
        return found

    async def _manifest_icons(self, manifest_url: str) -> List[IconCandidate]:
        outcome = await self.fetcher.fetch(
            manifest_url, self.manifest_timeout, content=True, headers=self.headers
        )
        if not outcome.success or outcome.content is None:
            logger.info("Could not fetch manifest %s: %s", manifest_url, outcome.error)
            return []
        try:
            return parse_manifest_icons(outcome.content, manifest_url)
        except ManifestError as exc:
            logger.info("Could not parse manifest: %s", exc)
            return []
