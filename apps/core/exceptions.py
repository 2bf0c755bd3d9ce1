"""
apps.core.exceptions
====================

Unified error responses for the host views.

✓ JSON for AJAX / JSON requests, plain text otherwise
✓ Internal details hidden when DEBUG=False
✓ Permission messages are user-facing and always shown
"""

from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import HttpRequest, HttpResponse, JsonResponse
from django.utils.translation import gettext_lazy as _

log = logging.getLogger(__name__)

PERMISSION_DENIED_MESSAGE = _("You do not have sufficient permissions to access this page.")


# ============================================================
#  Utility helpers
# ============================================================
def _is_json_request(request: Optional[HttpRequest]) -> bool:
    """Detect JSON or AJAX requests for correct response type."""
    if not request:
        return False

    content_type = (request.content_type or "").lower()

    return (
        request.headers.get("x-requested-with") == "XMLHttpRequest"
        or content_type.startswith("application/json")
        or content_type.endswith("+json")
    )


def _public_message(exc: Optional[Exception], code: int) -> str:
    if isinstance(exc, PermissionDenied):
        return str(exc) or str(PERMISSION_DENIED_MESSAGE)
    if exc is not None and settings.DEBUG:
        return f"{exc.__class__.__name__}: {exc}"
    return {
        400: str(_("Bad request")),
        403: str(PERMISSION_DENIED_MESSAGE),
        404: str(_("Not found")),
    }.get(code, str(_("Internal server error")))


def json_error_response(
    exc: Optional[Exception],
    code: int = 500,
    error: str = "internal_error",
) -> JsonResponse:
    """
    Hardened JSON error response.
    Internal exception details are hidden when DEBUG=False.
    """
    return JsonResponse(
        {
            "ok": False,
            "error": error,
            "message": _public_message(exc, code),
            "status": code,
        },
        status=code,
        json_dumps_params={"ensure_ascii": False},
    )


# ============================================================
#  Synchronous Django view fallback
# ============================================================
def handle_view_exception(
    request: HttpRequest,
    exc: Optional[Exception],
    code: int = 500,
    error: str = "internal_error",
) -> HttpResponse:
    """
    Generic handler for standard Django views.
    Returns JSON for AJAX/JSON requests; otherwise text/plain.
    """
    if code >= 500:
        log.error("View exception caught: %s", exc, exc_info=settings.DEBUG)
    else:
        log.warning("Request rejected (%s): %s", code, exc)

    if _is_json_request(request):
        return json_error_response(exc, code=code, error=error)

    return HttpResponse(
        _public_message(exc, code),
        status=code,
        content_type="text/plain; charset=utf-8",
    )
