# apps/core/urls.py
"""
Core URL configuration.

Namespace: "core"

Options pages live under the admin area prefix so that `admin_init` /
`admin_menu` fire before the view runs (see apps.core.middleware.lifecycle).
"""

from django.urls import path

from . import views

app_name = "core"

urlpatterns = [
    path("options/", views.options_index, name="options_index"),
    path("options/<slug:slug>/", views.options_page, name="options_page"),
]
