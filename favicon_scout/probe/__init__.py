# File: favicon_scout/probe/__init__.py
"""favicon_scout.probe: Проверка стандартных путей иконок."""

from .prober import CONVENTIONAL_PATHS, PathProber

__all__ = ["CONVENTIONAL_PATHS", "PathProber"]
