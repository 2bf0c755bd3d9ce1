"""
Development Settings
====================
Overrides production `settings.py` for safe local development.

- DEBUG mode enabled
- No HTTPS / HSTS / secure cookie enforcement
- Local-only allowed hosts
- Verbose logging and fast hashing
"""

from __future__ import annotations

from .settings import *  # import production defaults

# ============================================================
# Environment / Debug
# ============================================================
DEBUG = True
ENV = "development"

ALLOWED_HOSTS = ["127.0.0.1", "localhost", "0.0.0.0", "testserver"]

TEMPLATES[0]["APP_DIRS"] = True
TEMPLATES[0]["OPTIONS"]["debug"] = True
TEMPLATES[0]["OPTIONS"].pop("loaders", None)

STORAGES["staticfiles"]["BACKEND"] = "django.contrib.staticfiles.storage.StaticFilesStorage"


# ============================================================
# Security Overrides (force HTTP)
# ============================================================
SECURE_SSL_REDIRECT = False
SECURE_HSTS_SECONDS = 0
SECURE_HSTS_INCLUDE_SUBDOMAINS = False
SECURE_HSTS_PRELOAD = False

SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

CSRF_TRUSTED_ORIGINS = [
    "http://127.0.0.1:8000",
    "http://localhost:8000",
]


# ============================================================
# Logging Configuration
# ============================================================
LOGGING["root"]["level"] = "DEBUG"

for logger_name in ("apps.core", "apps.verify_meta_tags"):
    LOGGING["loggers"].setdefault(
        logger_name,
        {
            "handlers": ["console"],
            "level": "DEBUG",
            "propagate": False,
        },
    )


# ============================================================
# Caching (local memory)
# ============================================================
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "TIMEOUT": 300,
    }
}


# ============================================================
# Password Hashers (fast)
# ============================================================
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]
