# File: favicon_scout/fetcher/__init__.py
"""favicon_scout.fetcher: HTTP GET с таймаутом и обработкой редиректов."""

from .fetcher import TimedFetcher
from .models import FetchOutcome

__all__ = ["TimedFetcher", "FetchOutcome"]
