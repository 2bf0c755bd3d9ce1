"""
apps.core.middleware.lifecycle
------------------------------
Fires the plugin lifecycle hooks for every request.

- `init` on every request
- `admin_init` then `admin_menu` on admin-area requests
- Must run after AuthenticationMiddleware so receivers can see request.user
"""

from __future__ import annotations

import logging
from typing import Callable

from django.http import HttpRequest, HttpResponse

from apps.core import hooks

logger = logging.getLogger(__name__)


class LifecycleMiddleware:
    """Notify plugin apps before the view runs."""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        hooks.init.send(sender=self.__class__, request=request)

        if hooks.is_admin_request(request):
            hooks.admin_init.send(sender=self.__class__, request=request)
            hooks.admin_menu.send(sender=self.__class__, request=request)
            logger.debug("LifecycleMiddleware: admin hooks fired for %s", request.path)

        return self.get_response(request)
