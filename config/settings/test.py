"""Test settings: in-memory SQLite and a private local-memory cache."""

from .base import *  # noqa: F401,F403

SECRET_KEY = "test-secret-key"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "drones-tests",
    }
}

CATALOG = {
    "DEFAULT_PAGE_SIZE": 10,
    "MAX_PAGE_SIZE": 100,
    "CACHE_TIMEOUT": 300,
}
