# File: favicon_scout/parser/manifest_parser.py
"""favicon_scout.parser.manifest_parser: Разбор web app manifest и извлечение иконок."""

from __future__ import annotations

import json
from typing import Any, List
from urllib.parse import urljoin

from favicon_scout.parser.html_parser import IconCandidate

__all__ = ["ManifestError", "parse_manifest_icons"]


class ManifestError(ValueError):
    """Manifest не является корректным JSON-объектом."""


def parse_manifest_icons(text: str, manifest_url: str) -> List[IconCandidate]:
    """
    Возвращает иконки из ``icons[]`` манифеста с абсолютными URL.

    Относительные ``src`` разрешаются от URL самого манифеста (как в W3C),
    а не от origin сайта.
    Некорректный JSON или не-объект верхнего уровня → ManifestError.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ManifestError(f"invalid manifest JSON at {manifest_url}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"manifest at {manifest_url} is not an object")

    icons = data.get("icons") or []
    if not isinstance(icons, list):
        raise ManifestError(f"manifest icons at {manifest_url} is not a list")

    found: List[IconCandidate] = []
    for entry in icons:
        if not isinstance(entry, dict):
            continue
        src = entry.get("src")
        if not isinstance(src, str) or not src.strip():
            continue
        sizes = entry.get("sizes")
        found.append(
            IconCandidate(
                url=urljoin(manifest_url, src.strip()),
                size=sizes if isinstance(sizes, str) and sizes else "unknown",
                type="manifest",
            )
        )
    return found
