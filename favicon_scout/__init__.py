# favicon_scout/__init__.py
"""
FaviconScout package initializer.
Defines package version and exposes the service facade.
"""
__version__ = "0.1.0"

from favicon_scout.engine import FaviconService  # noqa: E402
from favicon_scout.parser import IconCandidate  # noqa: E402

__all__ = ["__version__", "FaviconService", "IconCandidate"]
