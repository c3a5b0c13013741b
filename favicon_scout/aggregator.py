# File: favicon_scout/aggregator.py
"""favicon_scout.aggregator: Сборка отчёта по результатам сканирования иконок."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence, TypedDict

from favicon_scout.parser import IconCandidate
from favicon_scout.utils import extract_domain


class IconInfo(TypedDict):
    """Иконка в отчёте."""

    url: str
    size: str
    type: str


@dataclass(slots=True)
class ScanReport:
    """Результат сканирования одного сайта."""

    site: str
    domain: Optional[str] = None
    icons: List[IconInfo] = field(default_factory=list)
    counts: Dict[str, int] = field(default_factory=dict)

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScanReport."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(site: str, candidates: Sequence[IconCandidate]) -> ScanReport:
    """Собирает иконки и их количество по типу в ScanReport."""
    icons: List[IconInfo] = [
        {"url": c.url, "size": c.size, "type": c.type} for c in candidates
    ]
    counts = Counter(c.type for c in candidates)
    return ScanReport(
        site=site,
        domain=extract_domain(site),
        icons=icons,
        counts=dict(counts),
    )
