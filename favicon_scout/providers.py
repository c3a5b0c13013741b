# File: favicon_scout/providers.py
"""
External favicon providers, in priority order (highest visual quality first).
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

__all__ = ["ProviderDescriptor", "DEFAULT_PROVIDERS"]


@dataclass(frozen=True, slots=True)
class ProviderDescriptor:
    """One icon API: ``url_template`` is a ``str.format`` template with ``{domain}``."""

    name: str
    url_template: str
    size: str
    format: str

    def build_url(self, domain: str) -> str:
        return self.url_template.format(domain=domain)


DEFAULT_PROVIDERS: Tuple[ProviderDescriptor, ...] = (
    ProviderDescriptor("IconHorse", "https://icon.horse/icon/{domain}", "256x256", "png"),
    ProviderDescriptor(
        "FaviconExtractor",
        "https://www.faviconextractor.com/favicon/{domain}?size=256",
        "256x256",
        "png",
    ),
    ProviderDescriptor(
        "Google", "https://www.google.com/s2/favicons?domain={domain}&sz=256", "256x256", "png"
    ),
    ProviderDescriptor("FaviconIm", "https://favicon.im/{domain}?larger=true", "128x128", "png"),
    ProviderDescriptor("DuckDuckGo", "https://icons.duckduckgo.com/ip3/{domain}.ico", "64x64", "ico"),
)
