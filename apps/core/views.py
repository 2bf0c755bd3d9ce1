# apps/core/views.py
"""
Core views.

 - public home page (plugins inject into its <head> via `head_render`)
 - generic options pages registered through `apps.core.settings_api`
 - error handlers wired in verifymeta.urls
"""

from __future__ import annotations

import logging

from django.contrib import messages
from django.core.exceptions import PermissionDenied
from django.http import Http404, HttpRequest, HttpResponse
from django.shortcuts import redirect, render
from django.utils.translation import gettext as _
from django.views.decorators.cache import never_cache
from django.views.decorators.http import require_GET, require_http_methods

from .exceptions import PERMISSION_DENIED_MESSAGE, handle_view_exception
from .settings_api import OptionsForm, registry, user_can
from .utils.logging import log_event

logger = logging.getLogger(__name__)


# ============================================================
# PUBLIC PAGES
# ============================================================
@require_GET
def home(request: HttpRequest) -> HttpResponse:
    return render(request, "core/home.html")


# ============================================================
# OPTIONS PAGES
# ============================================================
@never_cache
@require_GET
def options_index(request: HttpRequest) -> HttpResponse:
    """List the options pages the current user may open."""
    pages = [p for p in registry.pages() if user_can(request.user, p.capability)]
    if not pages:
        raise PermissionDenied(PERMISSION_DENIED_MESSAGE)
    return render(request, "core/options_index.html", {"pages": pages})


@never_cache
@require_http_methods(["GET", "POST"])
def options_page(request: HttpRequest, slug: str) -> HttpResponse:
    """
    Render and save a registered options page.

    The capability check happens before anything is rendered; a denied
    user gets the 403 handler and no form markup.
    """
    page = registry.get_page(slug)
    if page is None:
        raise Http404("Unknown options page")

    if not user_can(request.user, page.capability):
        logger.warning("options_page denied: user=%s page=%s", request.user, slug)
        raise PermissionDenied(PERMISSION_DENIED_MESSAGE)

    group = registry.get_group(page.option_group)
    if group is None:
        raise Http404("Options page has no registered settings group")

    if request.method == "POST":
        form = OptionsForm(page, data=request.POST, prefix=group.option_key)
        if form.is_valid():
            group.save(form.cleaned_data)
            log_event(
                logger,
                "info",
                "Options saved",
                page=page.slug,
                option=group.option_key,
                user=str(request.user),
            )
            messages.success(request, _("Settings saved."))
            return redirect(f"{request.path}?settings-updated=true")
    else:
        form = OptionsForm(page, initial=dict(group.current()), prefix=group.option_key)

    return render(
        request,
        "core/options_page.html",
        {
            "page": page,
            "form": form,
            "styles": registry.page_styles(page),
        },
    )


# ============================================================
# ERROR HANDLERS
# ============================================================
def error_400_view(request, exception=None):
    return handle_view_exception(request, exception, code=400, error="bad_request")


def error_403_view(request, exception=None):
    return handle_view_exception(request, exception, code=403, error="forbidden")


def error_404_view(request, exception=None):
    return handle_view_exception(request, exception, code=404, error="not_found")


def error_500_view(request):
    return handle_view_exception(request, None, code=500, error="server_error")
