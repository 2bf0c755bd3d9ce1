from __future__ import annotations

from django.utils.html import format_html
from django.utils.safestring import SafeString, mark_safe

from .services import VerificationSettings

GOOGLE_META_NAME = "google-site-verification"
PINTEREST_META_NAME = "p:domain_verify"


def render_head(settings: VerificationSettings) -> SafeString:
    """
    Markup for the page <head>: google meta, pinterest meta, analytics.

    Empty fields emit nothing. Meta values are escaped; the analytics block
    is printed as stored.
    """
    parts = []
    if settings.google:
        parts.append(
            format_html('<meta name="{}" content="{}" />', GOOGLE_META_NAME, settings.google)
        )
    if settings.pinterest:
        parts.append(
            format_html('<meta name="{}" content="{}" />', PINTEREST_META_NAME, settings.pinterest)
        )
    if settings.analytics:
        parts.append(mark_safe(settings.analytics))
    return mark_safe("\n".join(parts))
