"""
apps.verify_meta_tags.services
==============================
Load, sanitize, persist and remove the plugin settings.

✓ One record per site, stored under OPTION_KEY
✓ Every field always present (missing or malformed → "")
✓ Sanitized on load and on save, so stored junk heals itself
✓ Store passed explicitly; nothing here holds state
"""

from __future__ import annotations

import enum
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, Mapping, Union

from apps.core.options import OptionStore
from apps.core.utils.logging import log_event
from apps.core.utils.sanitize import strip_markup, strip_slashes

logger = logging.getLogger(__name__)

OPTION_KEY = "verify-meta-tags"

DEFAULTS: Dict[str, str] = {
    "google": "",
    "pinterest": "",
    "analytics": "",
}


# =====================================================================
# FIELD POLICIES
# =====================================================================
class FieldPolicy(enum.Enum):
    PLAIN_TEXT = "text"
    TRUSTED_HTML = "html"

    @property
    def sanitizer(self) -> Callable[[Any], str]:
        return _SANITIZERS[self]


_SANITIZERS: Dict[FieldPolicy, Callable[[Any], str]] = {
    # No markup allowed in a meta tag value
    FieldPolicy.PLAIN_TEXT: strip_markup,
    # Admin-only content, printed verbatim
    FieldPolicy.TRUSTED_HTML: strip_slashes,
}

FIELD_POLICIES: Dict[str, FieldPolicy] = {
    "google": FieldPolicy.PLAIN_TEXT,
    "pinterest": FieldPolicy.PLAIN_TEXT,
    "analytics": FieldPolicy.TRUSTED_HTML,
}


# =====================================================================
# RECORD
# =====================================================================
@dataclass(frozen=True)
class VerificationSettings:
    google: str = ""
    pinterest: str = ""
    analytics: str = ""

    def as_dict(self) -> Dict[str, str]:
        return asdict(self)


def sanitize(raw: Any) -> VerificationSettings:
    """
    Merge ``raw`` over DEFAULTS and clean every field by its policy.

    Anything that is not a mapping counts as an empty record; values that
    are not strings fall back to the default.
    """
    source = raw if isinstance(raw, Mapping) else {}
    values = {}
    for name, policy in FIELD_POLICIES.items():
        value = source.get(name, DEFAULTS[name])
        if not isinstance(value, str):
            value = DEFAULTS[name]
        values[name] = policy.sanitizer(value)
    return VerificationSettings(**values)


def sanitize_settings(raw: Any) -> Dict[str, str]:
    """Sanitize callback for the settings group; returns a plain mapping."""
    return sanitize(raw).as_dict()


# =====================================================================
# PERSISTENCE
# =====================================================================
def load(store: OptionStore) -> VerificationSettings:
    return sanitize(store.get(OPTION_KEY))


def persist(store: OptionStore, record: Union[VerificationSettings, Mapping[str, Any]]) -> VerificationSettings:
    """Overwrite the stored record as a whole, sanitized first."""
    if isinstance(record, VerificationSettings):
        record = record.as_dict()
    record = sanitize(record)
    store.set(OPTION_KEY, record.as_dict())
    log_event(
        logger,
        "info",
        "Verification settings saved",
        google=bool(record.google),
        pinterest=bool(record.pinterest),
        analytics=bool(record.analytics),
    )
    return record


def uninstall(store: OptionStore) -> None:
    """Delete the stored record. Runs without any loaded state."""
    store.delete(OPTION_KEY)
    log_event(logger, "info", "Verify Meta Tags uninstalled", option=OPTION_KEY)
