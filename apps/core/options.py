"""
apps.core.options
=================

Key-value option store shared by every plugin app.

✔ get / set / delete by option name
✔ Whole-value writes (no partial field updates)
✔ Read-through Django cache, invalidated on every write
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from django.conf import settings
from django.core.cache import cache

from .models import Option
from .utils.logging import log_event

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "option"
DEFAULT_TTL_SECONDS = 300

_MISS = object()


def option_cache_key(name: str) -> str:
    """
    Canonical cache key for an option.

    Example:
        option_cache_key("verify-meta-tags") → "option::verify-meta-tags"
    """
    return f"{CACHE_KEY_PREFIX}::{(name or '').strip()}"


class OptionStore:
    """
    Thin facade over the `Option` table.

    Absent options are never cached, so the first write after a delete is
    visible immediately.
    """

    def __init__(self, ttl: Optional[int] = None):
        self._ttl = ttl

    @property
    def ttl(self) -> int:
        if self._ttl is not None:
            return self._ttl
        return int(getattr(settings, "OPTIONS_CACHE_TTL", DEFAULT_TTL_SECONDS))

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    def get(self, name: str, default: Any = None) -> Any:
        key = option_cache_key(name)
        cached = cache.get(key, _MISS)
        if cached is not _MISS:
            return cached

        option = Option.objects.filter(name=name).only("value").first()
        if option is None:
            return default

        cache.set(key, option.value, timeout=self.ttl)
        return option.value

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    def set(self, name: str, value: Any) -> None:
        Option.objects.update_or_create(name=name, defaults={"value": value})
        self.invalidate(name)
        log_event(logger, "info", "Option saved", option=name)

    def delete(self, name: str) -> bool:
        deleted, _ = Option.objects.filter(name=name).delete()
        self.invalidate(name)
        if deleted:
            log_event(logger, "info", "Option deleted", option=name)
        return bool(deleted)

    @staticmethod
    def invalidate(name: str) -> None:
        cache.delete(option_cache_key(name))


# Default store used by views, hooks and management commands.
options = OptionStore()
