# File: favicon_scout/exceptions.py
"""favicon_scout.exceptions: Иерархия исключений пакета."""

from __future__ import annotations

__all__ = ["FaviconScoutError", "ConfigError", "CacheStoreError"]


class FaviconScoutError(Exception):
    """Базовое исключение FaviconScout."""


class ConfigError(FaviconScoutError, ValueError):
    """Файл конфигурации не удалось прочитать или разобрать."""


class CacheStoreError(FaviconScoutError):
    """Хранилище кэша недоступно или вернуло ошибку."""

    def __init__(self, operation: str, domain: str, reason: str) -> None:
        self.operation = operation
        self.domain = domain
        self.reason = reason
        super().__init__(f"cache {operation} failed for {domain}: {reason}")
