"""
URL configuration for the project.

  - Django admin (raw option store)
  - Options pages under /options/ (admin area: fires admin_init/admin_menu)
  - Public home page
  - JSON/plain-text error handlers
"""

from __future__ import annotations

from django.conf import settings
from django.contrib import admin
from django.contrib.staticfiles.urls import staticfiles_urlpatterns
from django.urls import include, path

from apps.core import views as core_views

urlpatterns = [
    path("admin/", admin.site.urls),
    path("", include(("apps.core.urls", "core"), namespace="core")),
    path("", core_views.home, name="home"),
]

if settings.DEBUG:
    urlpatterns += staticfiles_urlpatterns()


handler400 = "apps.core.views.error_400_view"
handler403 = "apps.core.views.error_403_view"
handler404 = "apps.core.views.error_404_view"
handler500 = "apps.core.views.error_500_view"
