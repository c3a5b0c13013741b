# File: favicon_scout/parser/__init__.py
"""favicon_scout.parser: Разбор HTML и web manifest."""

from .html_parser import IconCandidate, ParsedIcons, parse_icon_links
from .manifest_parser import ManifestError, parse_manifest_icons

__all__ = ["IconCandidate", "ParsedIcons", "parse_icon_links", "ManifestError", "parse_manifest_icons"]
