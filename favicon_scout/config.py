# === FILE: favicon_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации FaviconScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from datetime import timedelta
from pathlib import Path
from typing import Any, List, Optional, Tuple, Union

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from favicon_scout.exceptions import ConfigError
from favicon_scout.providers import DEFAULT_PROVIDERS, ProviderDescriptor

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)


class ProviderConfig(BaseModel):
    """Описание одного внешнего API иконок."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1)
    url_template: str = Field(..., description="Шаблон URL с плейсхолдером {domain}.")
    size: str = "unknown"
    format: str = "unknown"

    @field_validator("url_template")
    def _check_placeholder(cls, v: str) -> str:
        if "{domain}" not in v:
            raise ValueError("url_template должен содержать {domain}")
        try:
            v.format(domain="example.com")
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"url_template не подставляется: {exc!r}") from exc
        return v

    def to_descriptor(self) -> ProviderDescriptor:
        return ProviderDescriptor(self.name, self.url_template, self.size, self.format)


def _default_providers() -> List[ProviderConfig]:
    return [
        ProviderConfig(name=p.name, url_template=p.url_template, size=p.size, format=p.format)
        for p in DEFAULT_PROVIDERS
    ]


class FaviconConfig(BaseModel):
    """Конфигурация сервиса иконок (таймауты в секундах)."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(BROWSER_USER_AGENT, min_length=1, description="User-Agent для HTML-страниц.")
    provider_timeout: float = Field(5.0, gt=0, description="Таймаут запроса к API иконок.")
    page_timeout: float = Field(8.0, gt=0, description="Таймаут загрузки HTML-страницы.")
    manifest_timeout: float = Field(5.0, gt=0, description="Таймаут загрузки web manifest.")
    probe_timeout: float = Field(3.0, gt=0, description="Таймаут проверки стандартного пути.")
    max_redirects: int = Field(5, ge=0, description="Максимум редиректов на один запрос.")
    cache_ttl_days: float = Field(30, gt=0, description="Срок свежести записи кэша (дней).")
    cache_path: Optional[Path] = Field(None, description="SQLite-файл кэша; None — кэш в памяти.")
    providers: List[ProviderConfig] = Field(default_factory=_default_providers, min_length=1)

    @field_validator("cache_path", mode="before")
    def _expand_cache_path(cls, v: Any) -> Any:
        if isinstance(v, str) and v:
            return Path(v).expanduser()
        return v

    @property
    def cache_ttl(self) -> timedelta:
        return timedelta(days=self.cache_ttl_days)

    def provider_descriptors(self) -> Tuple[ProviderDescriptor, ...]:
        return tuple(p.to_descriptor() for p in self.providers)


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ConfigError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> FaviconConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект FaviconConfig.
    Без пути берётся configs/default.yaml, а если его нет — встроенные значения.
    Явно указанный, но отсутствующий файл даёт FileNotFoundError.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return FaviconConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ConfigError(f"Неподдерживаемый формат конфига: {suffix}")

    try:
        return FaviconConfig(**data)
    except ValidationError:
        raise
