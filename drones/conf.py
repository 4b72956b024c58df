"""Catalog settings with defaults, read from ``settings.CATALOG``."""

from typing import Any

from django.conf import settings

DEFAULTS: dict[str, Any] = {
    "DEFAULT_PAGE_SIZE": 10,
    "MAX_PAGE_SIZE": 100,
    "CACHE_TIMEOUT": 300,
}


def catalog_setting(name: str) -> Any:
    return getattr(settings, "CATALOG", {}).get(name, DEFAULTS[name])
