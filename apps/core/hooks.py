"""
apps.core.hooks
===============

Lifecycle notifications plugin apps attach to.

    init              every request, before the view runs
    admin_init        admin-area requests only, after `init`
    admin_menu        admin-area requests only, after `admin_init`
    head_render       while a template prints its <head>; receivers return markup
    plugin_uninstall  once, when an app is removed (`uninstall_plugin` command)

All receivers get ``request`` as keyword argument except `plugin_uninstall`,
which gets ``store`` (the option store to clean up) and returns True when it
handled the app named by ``sender``.
"""

from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.dispatch import Signal
from django.http import HttpRequest

logger = logging.getLogger(__name__)

DEFAULT_ADMIN_AREA_PREFIXES = ("/admin/", "/options/")

init = Signal()
admin_init = Signal()
admin_menu = Signal()
head_render = Signal()
plugin_uninstall = Signal()


def is_admin_request(request: Optional[HttpRequest]) -> bool:
    if request is None:
        return False
    prefixes = tuple(getattr(settings, "ADMIN_AREA_PREFIXES", DEFAULT_ADMIN_AREA_PREFIXES))
    return request.path.startswith(prefixes)


def collect_head(request: Optional[HttpRequest] = None) -> str:
    """
    Fire `head_render` and join the markup returned by receivers.

    A failing receiver is logged and skipped; the page still renders.
    """
    chunks: list[str] = []
    for receiver, response in head_render.send_robust(sender=None, request=request):
        if isinstance(response, Exception):
            logger.error(
                "head_render receiver %r failed",
                receiver,
                exc_info=(type(response), response, response.__traceback__),
            )
            continue
        if isinstance(response, str) and response:
            chunks.append(response)
    return "\n".join(chunks)
