# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Dict, List, Optional

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from favicon_scout.cache import CacheGateway, MemoryCacheStore
from favicon_scout.fetcher import FetchOutcome
from favicon_scout.providers import ProviderDescriptor


class FakeFetcher:
    """
    In-memory stand-in for TimedFetcher.

    Unknown URLs fail with ``HTTP 404``; every call is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.routes: Dict[str, FetchOutcome] = {}
        self.delays: Dict[str, float] = {}
        self.calls: List[str] = []
        self.timeouts: List[float] = []

    def ok(self, url: str, content: Optional[str] = None, delay: float = 0.0) -> None:
        self.routes[url] = FetchOutcome.ok(url, 200, content)
        if delay:
            self.delays[url] = delay

    def fail(self, url: str, error: str = "Timeout") -> None:
        self.routes[url] = FetchOutcome.failed(error)

    async def fetch(self, url, timeout, *, content=False, headers=None) -> FetchOutcome:
        self.calls.append(url)
        self.timeouts.append(timeout)
        delay = self.delays.get(url, 0.0)
        if delay:
            await asyncio.sleep(min(delay, timeout))
            if delay > timeout:
                return FetchOutcome.failed("Timeout")
        return self.routes.get(url, FetchOutcome.failed("HTTP 404", 404))


class BrokenStore:
    """Cache store that is always unavailable."""

    def get(self, domain):
        raise ConnectionError("store down")

    def upsert(self, domain, favicon_url, size, format):
        raise ConnectionError("store down")

    def delete(self, domain):
        raise ConnectionError("store down")


@pytest.fixture()
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def memory_store() -> MemoryCacheStore:
    return MemoryCacheStore()


@pytest.fixture()
def gateway(memory_store) -> CacheGateway:
    return CacheGateway(memory_store)


@pytest.fixture()
def providers() -> tuple[ProviderDescriptor, ...]:
    """Five providers on fake hosts, mirroring the default waterfall."""
    return (
        ProviderDescriptor("P1", "https://p1.test/icon/{domain}", "256x256", "png"),
        ProviderDescriptor("P2", "https://p2.test/favicon/{domain}?size=256", "192x192", "png"),
        ProviderDescriptor("P3", "https://p3.test/s2?domain={domain}", "128x128", "png"),
        ProviderDescriptor("P4", "https://p4.test/{domain}?larger=true", "96x96", "png"),
        ProviderDescriptor("P5", "https://p5.test/ip3/{domain}.ico", "64x64", "ico"),
    )


@pytest_asyncio.fixture
async def session() -> AsyncIterator[ClientSession]:
    async with ClientSession() as s:
        yield s


@pytest_asyncio.fixture
async def serve(unused_tcp_port_factory) -> AsyncIterator[Callable[[web.Application], Awaitable[str]]]:
    """Start aiohttp apps on free local ports; yields a starter returning the base URL."""
    runners: List[web.AppRunner] = []

    async def _serve(app: web.Application) -> str:
        runner = web.AppRunner(app, handler_cancellation=True)
        await runner.setup()
        port = unused_tcp_port_factory()
        site = web.TCPSite(runner, "127.0.0.1", port)
        await site.start()
        runners.append(runner)
        return f"http://127.0.0.1:{port}"

    try:
        yield _serve
    finally:
        for runner in runners:
            await runner.cleanup()
