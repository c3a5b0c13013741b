# File: tests/test_resolver.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from favicon_scout.cache import CacheGateway, MemoryCacheStore
from favicon_scout.default_icon import default_icon
from favicon_scout.fetcher import FetchOutcome
from favicon_scout.providers import ProviderDescriptor
from favicon_scout.resolver import FaviconResolver

from conftest import BrokenStore

DOMAIN = "example.com"


def provider_urls(providers, domain=DOMAIN):
    return [p.build_url(domain) for p in providers]


@pytest.fixture()
def resolver(fake_fetcher, gateway, providers) -> FaviconResolver:
    return FaviconResolver(fake_fetcher, gateway, providers, timeout=5.0)


@pytest.mark.asyncio()
async def test_first_provider_wins_and_others_are_skipped(resolver, fake_fetcher, providers, memory_store):
    urls = provider_urls(providers)
    fake_fetcher.ok(urls[0])
    fake_fetcher.ok(urls[1])

    assert await resolver.resolve("https://Example.com/page") == urls[0]
    assert fake_fetcher.calls == [urls[0]]
    assert fake_fetcher.timeouts == [5.0]
    record = memory_store.get(DOMAIN)
    assert (record.favicon_url, record.size, record.format) == (urls[0], "256x256", "png")


@pytest.mark.asyncio()
async def test_waterfall_order_uses_second_provider_descriptor(resolver, fake_fetcher, providers, memory_store):
    urls = provider_urls(providers)
    fake_fetcher.fail(urls[0])
    fake_fetcher.ok(urls[1])
    fake_fetcher.ok(urls[2])

    assert await resolver.resolve(DOMAIN) == urls[1]
    assert fake_fetcher.calls == urls[:2]
    record = memory_store.get(DOMAIN)
    assert (record.size, record.format) == (providers[1].size, providers[1].format)


@pytest.mark.asyncio()
async def test_all_providers_fail_returns_default(resolver, fake_fetcher, providers, memory_store):
    result = await resolver.resolve(DOMAIN)

    assert result == default_icon()
    assert fake_fetcher.calls == provider_urls(providers)
    record = memory_store.get(DOMAIN)
    assert record.favicon_url == default_icon()
    assert (record.size, record.format) == ("default", "svg")


@pytest.mark.asyncio()
async def test_second_resolve_is_served_from_cache(resolver, fake_fetcher, providers):
    urls = provider_urls(providers)
    fake_fetcher.fail(urls[0])
    fake_fetcher.ok(urls[1])

    first = await resolver.resolve(DOMAIN)
    calls_after_first = list(fake_fetcher.calls)
    second = await resolver.resolve("http://EXAMPLE.com/other")

    assert first == second == urls[1]
    assert calls_after_first == urls[:2]
    assert fake_fetcher.calls == calls_after_first


@pytest.mark.asyncio()
async def test_default_icon_is_cached_too(resolver, fake_fetcher, providers):
    await resolver.resolve(DOMAIN)
    fake_fetcher.calls.clear()
    assert await resolver.resolve(DOMAIN) == default_icon()
    assert fake_fetcher.calls == []


@pytest.mark.asyncio()
async def test_stale_record_triggers_waterfall(fake_fetcher, providers):
    old = datetime.now(tz=timezone.utc) - timedelta(days=31)
    store = MemoryCacheStore(clock=lambda: old)
    store.upsert(DOMAIN, "https://old/icon.png", "16x16", "png")
    urls = provider_urls(providers)
    fake_fetcher.ok(urls[3])

    resolver = FaviconResolver(fake_fetcher, CacheGateway(store), providers)
    assert await resolver.resolve(DOMAIN) == urls[3]
    assert fake_fetcher.calls == urls[:4]


@pytest.mark.asyncio()
async def test_fresh_record_short_circuits(fake_fetcher, providers, memory_store, gateway):
    memory_store.upsert(DOMAIN, "https://cached/icon.png", "32x32", "png")
    resolver = FaviconResolver(fake_fetcher, gateway, providers)
    assert await resolver.resolve(DOMAIN) == "https://cached/icon.png"
    assert fake_fetcher.calls == []


@pytest.mark.asyncio()
async def test_refresh_bypasses_fresh_cache(resolver, fake_fetcher, providers, memory_store):
    memory_store.upsert(DOMAIN, "https://cached/icon.png", "32x32", "png")
    urls = provider_urls(providers)
    fake_fetcher.ok(urls[2])

    assert await resolver.refresh(DOMAIN) == urls[2]
    assert fake_fetcher.calls == urls[:3]
    assert memory_store.get(DOMAIN).favicon_url == urls[2]


@pytest.mark.asyncio()
async def test_refresh_then_resolve_queries_providers_once(resolver, fake_fetcher, providers):
    urls = provider_urls(providers)
    fake_fetcher.ok(urls[0])

    refreshed = await resolver.refresh(DOMAIN)
    resolved = await resolver.resolve(DOMAIN)
    assert refreshed == resolved == urls[0]
    assert fake_fetcher.calls == [urls[0]]


@pytest.mark.asyncio()
async def test_clear(resolver, memory_store):
    memory_store.upsert(DOMAIN, "https://cached/icon.png", "32x32", "png")
    assert await resolver.clear("https://example.com/x") is True
    assert memory_store.get(DOMAIN) is None
    assert await resolver.clear("") is False


@pytest.mark.asyncio()
async def test_broken_cache_does_not_block_resolution(fake_fetcher, providers):
    urls = provider_urls(providers)
    fake_fetcher.ok(urls[0])
    resolver = FaviconResolver(fake_fetcher, CacheGateway(BrokenStore()), providers)

    assert await resolver.resolve(DOMAIN) == urls[0]
    assert await resolver.refresh(DOMAIN) == urls[0]
    assert await resolver.clear(DOMAIN) is False


@pytest.mark.asyncio()
@pytest.mark.parametrize("raw", ["", "   ", "https://", "http://[::1", None, "example.com:abc"])
async def test_unresolvable_input_returns_default_without_network(resolver, fake_fetcher, raw):
    result = await resolver.resolve(raw)
    assert result == default_icon()
    assert result
    assert fake_fetcher.calls == []
    assert await resolver.refresh(raw) == default_icon()


@pytest.mark.asyncio()
async def test_raising_provider_is_skipped(gateway, providers, memory_store):
    urls = provider_urls(providers)

    class ExplodingFirstFetcher:
        def __init__(self):
            self.calls = []

        async def fetch(self, url, timeout, *, content=False, headers=None):
            self.calls.append(url)
            if url == urls[0]:
                raise RuntimeError("boom")
            return FetchOutcome.ok(url, 200)

    fetcher = ExplodingFirstFetcher()
    resolver = FaviconResolver(fetcher, gateway, providers)

    assert await resolver.resolve(DOMAIN) == urls[1]
    assert fetcher.calls == urls[:2]
    assert memory_store.get(DOMAIN).favicon_url == urls[1]


@pytest.mark.asyncio()
async def test_bad_template_does_not_stop_waterfall(fake_fetcher, gateway, memory_store):
    bad = ProviderDescriptor("Bad", "https://bad.test/{domain}?k={key}", "1x1", "png")
    good = ProviderDescriptor("Good", "https://good.test/{domain}", "64x64", "ico")
    fake_fetcher.ok("https://good.test/example.com")
    resolver = FaviconResolver(fake_fetcher, gateway, (bad, good))

    assert await resolver.resolve(DOMAIN) == "https://good.test/example.com"
    assert fake_fetcher.calls == ["https://good.test/example.com"]
    assert memory_store.get(DOMAIN).format == "ico"


@pytest.mark.asyncio()
async def test_every_provider_raising_returns_default(gateway, providers, memory_store):
    class ExplodingFetcher:
        async def fetch(self, url, timeout, *, content=False, headers=None):
            raise RuntimeError("boom")

    resolver = FaviconResolver(ExplodingFetcher(), gateway, providers)
    assert await resolver.resolve(DOMAIN) == default_icon()
    assert await resolver.refresh(DOMAIN) == default_icon()
    assert memory_store.get(DOMAIN).format == "svg"
