"""
apps.verify_meta_tags.hooks
===========================
Receivers wiring the plugin into the host lifecycle (apps.core.hooks).

    ready()            → connect(): init, plugin_uninstall
    init               → on_init: load settings for the request,
                         connect head_render (+ admin hooks on admin requests)
    admin_init         → on_admin_init: stylesheet + settings group
    admin_menu         → on_admin_menu: options page, sections, fields
    head_render        → on_head_render: meta tags + analytics
    plugin_uninstall   → on_uninstall: drop the stored record
"""

from __future__ import annotations

from typing import Optional

from django import forms
from django.http import HttpRequest

from apps.core import hooks
from apps.core.options import OptionStore, options
from apps.core.settings_api import registry

from . import services
from .head import render_head

APP_LABEL = "verify_meta_tags"
OPTIONS_PAGE = "vmt-options-page"
ID_SECTION = "vmt-options-section"
ANALYTICS_SECTION = "vmt-options-analytics-section"
STYLE_HANDLE = "vmt-style-admin"
STYLE_PATH = "verify_meta_tags/admin.css"

# Per-request loaded settings
REQUEST_ATTR = "verify_meta_tags"

option_store: OptionStore = options


def connect() -> None:
    hooks.init.connect(on_init, dispatch_uid="verify_meta_tags.init")
    hooks.plugin_uninstall.connect(on_uninstall, dispatch_uid="verify_meta_tags.uninstall")


# =====================================================================
# init
# =====================================================================
def on_init(sender, request: Optional[HttpRequest] = None, **kwargs) -> None:
    if request is not None:
        setattr(request, REQUEST_ATTR, services.load(option_store))

    if hooks.is_admin_request(request):
        hooks.admin_init.connect(on_admin_init, dispatch_uid="verify_meta_tags.admin_init")
        hooks.admin_menu.connect(on_admin_menu, dispatch_uid="verify_meta_tags.admin_menu")
    hooks.head_render.connect(on_head_render, dispatch_uid="verify_meta_tags.head_render")


# =====================================================================
# Admin
# =====================================================================
def on_admin_init(sender, **kwargs) -> None:
    registry.register_style(STYLE_HANDLE, STYLE_PATH)
    registry.register_setting(
        OPTIONS_PAGE,
        services.OPTION_KEY,
        services.sanitize_settings,
        persist_callback=services.persist,
        store=option_store,
    )


def on_admin_menu(sender, **kwargs) -> None:
    registry.add_options_page(
        OPTIONS_PAGE,
        page_title="Verify Meta Tags Plugin Options",
        menu_title="Verify Meta Tags",
        capability="manage_options",
    )
    registry.enqueue_style(OPTIONS_PAGE, STYLE_HANDLE)

    registry.add_settings_section(
        ID_SECTION,
        "Owner Verification Meta Tags",
        OPTIONS_PAGE,
        description="Set verification IDs for web services",
    )
    registry.add_settings_field(
        "google", "Google Verification ID", OPTIONS_PAGE, ID_SECTION, _verify_id_field()
    )
    registry.add_settings_field(
        "pinterest", "Pinterest Verification ID", OPTIONS_PAGE, ID_SECTION, _verify_id_field()
    )

    registry.add_settings_section(
        ANALYTICS_SECTION,
        "Site Statistics Tracking",
        OPTIONS_PAGE,
        description="Enter code block used for site analytics",
    )
    registry.add_settings_field(
        "analytics",
        "Analytics code",
        OPTIONS_PAGE,
        ANALYTICS_SECTION,
        forms.CharField(
            required=False,
            strip=False,
            widget=forms.Textarea(attrs={"class": "analytics"}),
        ),
    )


def _verify_id_field() -> forms.CharField:
    return forms.CharField(
        required=False,
        widget=forms.TextInput(attrs={"class": "verify-id"}),
    )


# =====================================================================
# Page head
# =====================================================================
def on_head_render(sender, request: Optional[HttpRequest] = None, **kwargs) -> str:
    settings = getattr(request, REQUEST_ATTR, None)
    if settings is None:
        settings = services.load(option_store)
    return render_head(settings)


# =====================================================================
# Uninstall
# =====================================================================
def on_uninstall(sender, store: Optional[OptionStore] = None, **kwargs) -> bool:
    if sender != APP_LABEL:
        return False
    services.uninstall(store if store is not None else options)
    return True
