# favicon_scout/fetcher/models.py
"""
Data models for the timed fetcher.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(slots=True)
class FetchOutcome:
    """Result of a single timed GET (redirects included). Never persisted."""

    success: bool
    resolved_url: Optional[str] = None
    error: Optional[str] = None
    content: Optional[str] = None
    status: Optional[int] = None

    @classmethod
    def ok(cls, url: str, status: int, content: Optional[str] = None) -> FetchOutcome:
        return cls(True, resolved_url=url, content=content, status=status)

    @classmethod
    def failed(cls, error: str, status: Optional[int] = None) -> FetchOutcome:
        return cls(False, error=error, status=status)
