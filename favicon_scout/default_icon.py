# File: favicon_scout/default_icon.py
"""Fallback icon used when no provider can resolve a favicon."""

from __future__ import annotations

import base64
from typing import Final

__all__ = ["DEFAULT_ICON_SVG", "default_icon"]

DEFAULT_ICON_SVG: Final[str] = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 100 100">'
    '<rect width="100" height="100" fill="#e0e0e0" rx="10"/>'
    '<path d="M32 20h36a4 4 0 0 1 4 4v58l-22-14-22 14V24a4 4 0 0 1 4-4z" fill="#757575"/>'
    "</svg>"
)

_DEFAULT_ICON_URI: Final[str] = "data:image/svg+xml;base64," + base64.b64encode(
    DEFAULT_ICON_SVG.encode("utf-8")
).decode("ascii")


def default_icon() -> str:
    """Return the bookmark glyph as a self-contained ``data:`` URI."""
    return _DEFAULT_ICON_URI
