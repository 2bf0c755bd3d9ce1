"""
WSGI config for the project.

This file exposes the WSGI callable as a module-level variable named
``application`` and is safe for production reverse-proxy setups.
"""

import os
from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "verifymeta.settings")

application = get_wsgi_application()


__all__ = ["application"]
