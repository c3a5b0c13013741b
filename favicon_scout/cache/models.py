# favicon_scout/cache/models.py
"""
Cache record model: one row per domain.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional


def utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(slots=True)
class CacheRecord:
    """Resolved favicon for a domain and when it was last checked (UTC)."""

    domain: str
    favicon_url: str
    size: str
    format: str
    last_checked_at: datetime

    def is_stale(self, ttl: timedelta, now: Optional[datetime] = None) -> bool:
        """True when the record is older than *ttl*; an age equal to *ttl* is still fresh."""
        checked = self.last_checked_at
        if checked.tzinfo is None:
            checked = checked.replace(tzinfo=timezone.utc)
        return (now or utc_now()) - checked > ttl

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["last_checked_at"] = self.last_checked_at.isoformat()
        return data
