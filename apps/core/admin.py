"""
apps.core.admin
===============
Admin for the raw option store.

✔ Search / export of stored options
✔ Saves go through the model, so option caches are invalidated by signals
"""

from __future__ import annotations

import logging

from django.contrib import admin
from django.utils.translation import gettext_lazy as _
from import_export.admin import ExportMixin

from .models import Option

logger = logging.getLogger(__name__)


@admin.register(Option)
class OptionAdmin(ExportMixin, admin.ModelAdmin):
    list_display = ("name", "updated_at")
    search_fields = ("name",)
    ordering = ("name",)
    readonly_fields = ("updated_at",)
    list_per_page = 50
    save_on_top = True

    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        logger.info("Option %s updated by %s", obj.name, request.user)

    def delete_model(self, request, obj):
        logger.info("Option %s deleted by %s", obj.name, request.user)
        super().delete_model(request, obj)


admin.site.site_header = _("Administration")
admin.site.site_title = _("Admin Portal")
admin.site.index_title = _("Site Configuration")
