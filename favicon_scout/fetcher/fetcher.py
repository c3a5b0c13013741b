# favicon_scout/fetcher/fetcher.py
"""
Timed fetcher: one HTTP GET with a hard timeout per hop and manual redirect following.

Every outcome is folded into :class:`FetchOutcome`; transport exceptions never
reach the caller.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Mapping, Optional
from urllib.parse import urljoin

from aiohttp import (
    ClientError,
    ClientResponse,
    ClientSession,
    ClientTimeout,
    ServerTimeoutError,
)

from favicon_scout.fetcher.models import FetchOutcome

logger = logging.getLogger("FaviconScout")

_REDIRECT_STATUS = range(300, 400)


class TimedFetcher:
    """GET with timeout, redirect following and success/failure classification."""

    def __init__(self, session: ClientSession, max_redirects: int = 5) -> None:
        self.session = session
        self.max_redirects = max_redirects

    async def fetch(
        self,
        url: str,
        timeout: float,
        *,
        content: bool = False,
        headers: Optional[Mapping[str, str]] = None,
    ) -> FetchOutcome:
        """
        Fetch *url*; each redirect hop gets a fresh *timeout* (seconds).

        Existence mode (``content=False``) reports the final URL without reading
        the body; content mode returns the body text.
        """
        current = url
        for hop in range(self.max_redirects + 1):
            try:
                outcome, location = await self._get_once(current, timeout, content, headers)
            except ServerTimeoutError:
                return FetchOutcome.failed("Socket timeout")
            except asyncio.TimeoutError:
                return FetchOutcome.failed("Timeout")
            except (ClientError, ValueError, OSError) as exc:
                return FetchOutcome.failed(str(exc) or type(exc).__name__)

            if location is None:
                return outcome
            target = urljoin(current, location)
            logger.debug("Redirect %d: %s → %s", hop + 1, current, target)
            current = target

        logger.warning("Too many redirects for %s", url)
        return FetchOutcome.failed("Too many redirects")

    async def _get_once(
        self,
        url: str,
        timeout: float,
        content: bool,
        headers: Optional[Mapping[str, str]],
    ) -> tuple[FetchOutcome, Optional[str]]:
        """Single request; returns the outcome or a redirect target."""
        async with self.session.get(
            url,
            headers=headers,
            allow_redirects=False,
            raise_for_status=False,
            timeout=ClientTimeout(total=timeout, sock_connect=timeout),
        ) as resp:
            status = resp.status
            location = resp.headers.get("Location")
            if status in _REDIRECT_STATUS and location:
                self._discard(resp)
                return FetchOutcome.failed(f"HTTP {status}", status), location
            if status != 200:
                self._discard(resp)
                return FetchOutcome.failed(f"HTTP {status}", status), None
            if not content:
                self._discard(resp)
                return FetchOutcome.ok(url, status), None
            text = await resp.text(errors="replace")
            return FetchOutcome.ok(url, status, text), None

    @staticmethod
    def _discard(resp: ClientResponse) -> None:
        # body not needed; drop the connection instead of draining it
        resp.close()
