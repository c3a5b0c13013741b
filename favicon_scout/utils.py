# File: favicon_scout/utils.py
"""favicon_scout.utils: Утилиты для нормализации URL, извлечения домена и построения абсолютных ссылок."""

from __future__ import annotations

from typing import Optional, Sequence
from urllib.parse import urljoin, urlparse

from favicon_scout.logger import logger

__all__: Sequence[str] = (
    "ensure_scheme",
    "extract_domain",
    "site_origin",
    "absolutize",
)

_SCHEMES = ("http://", "https://")


def ensure_scheme(url: str) -> str:
    """Добавляет ``https://``, если у URL нет схемы http(s)."""
    if not url.lower().startswith(_SCHEMES):
        return "https://" + url
    return url


def extract_domain(url: object) -> Optional[str]:
    """Возвращает домен в нижнем регистре или None для неразбираемого ввода.

    ``"Example.COM/x"`` и ``"https://example.com/x"`` дают один и тот же ключ.
    Исключения наружу не выбрасываются.
    """
    if not isinstance(url, str) or not url.strip():
        logger.debug("Cannot extract domain from %r", url)
        return None
    try:
        parsed = urlparse(ensure_scheme(url))
        hostname = parsed.hostname
        parsed.port  # некорректный порт → ValueError
    except ValueError as exc:
        logger.warning("Error extracting domain from %r: %s", url, exc)
        return None
    if not hostname:
        logger.debug("No hostname in %r", url)
        return None
    return hostname.lower()


def site_origin(url: str) -> str:
    """Возвращает ``scheme://netloc`` (порт сохраняется)."""
    parsed = urlparse(ensure_scheme(url))
    if not parsed.netloc:
        raise ValueError(f"URL without host: {url!r}")
    return f"{parsed.scheme.lower()}://{parsed.netloc.lower()}"


def absolutize(href: str, origin: str) -> str:
    """Делает ссылку из атрибута ``href`` абсолютной относительно *origin*.

    * ``//cdn.host/x`` → схема origin + ссылка;
    * ``/x`` → origin + ссылка;
    * ``http(s)://…`` → без изменений;
    * всё остальное считается путём от корня сайта.
    """
    href = href.strip()
    if href.startswith("//"):
        return f"{urlparse(origin).scheme}:{href}"
    if href.startswith("/"):
        return origin + href
    if href.lower().startswith(_SCHEMES):
        return href
    return urljoin(origin + "/", href)
