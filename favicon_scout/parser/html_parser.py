# === FILE: favicon_scout/parser/html_parser.py ===
"""HTML parsing utilities for FaviconScout.

Only the ``<link>`` tags matter here:

* icon links — ``rel="icon"``, ``rel="shortcut icon"``,
  ``rel="apple-touch-icon"`` (and its ``-precomposed`` variant);
* the web app manifest — ``rel="manifest"``.

Hrefs are made absolute against the page origin with
:func:`favicon_scout.utils.absolutize`.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import asdict, dataclass
from typing import Any, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from favicon_scout.utils import absolutize

__all__: Sequence[str] = ("IconCandidate", "ParsedIcons", "parse_icon_links")

_ICON_RELS = frozenset({"icon", "apple-touch-icon", "apple-touch-icon-precomposed"})


@dataclass(slots=True)
class IconCandidate:
    """One icon found on a site; ``type`` is apple-touch-icon, icon, manifest or probed."""

    url: str
    size: str
    type: str

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(slots=True)
class ParsedIcons:
    """Icons declared in the page head plus the manifest URL, if any."""

    icons: list[IconCandidate]
    manifest_url: Optional[str] = None


def _rel_tokens(tag: Tag) -> list[str]:
    rel = tag.get("rel")
    if rel is None:
        return []
    if isinstance(rel, str):
        rel = rel.split()
    return [token.lower() for token in rel]


def _attr(tag: Tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    if not isinstance(value, str) or not value.strip():
        return None
    return value.strip()


def parse_icon_links(html: str, origin: str) -> ParsedIcons:
    """Collect icon ``<link>`` tags in document order and the first manifest link."""
    soup = BeautifulSoup(html, "html.parser")
    icons: list[IconCandidate] = []
    manifest_url: Optional[str] = None

    for tag in soup.find_all("link"):
        if not isinstance(tag, Tag):
            continue
        tokens = _rel_tokens(tag)
        href = _attr(tag, "href")
        if href is None:
            continue

        if "manifest" in tokens:
            if manifest_url is None:
                manifest_url = absolutize(href, origin)
            continue

        if not _ICON_RELS.intersection(tokens):
            continue
        kind = "apple-touch-icon" if any(t.startswith("apple-touch-icon") for t in tokens) else "icon"
        icons.append(
            IconCandidate(
                url=absolutize(href, origin),
                size=_attr(tag, "sizes") or "unknown",
                type=kind,
            )
        )

    return ParsedIcons(icons=icons, manifest_url=manifest_url)
