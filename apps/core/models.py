"""
Site-wide key-value option storage.

✓ One row per option name (global, not per-user)
✓ JSON values: plugins persist whole mappings under a single key
✓ Carries the `manage_options` permission used for options pages
"""

from __future__ import annotations

from django.db import models


class Option(models.Model):
    name = models.CharField(max_length=191, unique=True)
    value = models.JSONField(default=dict, blank=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name = "Option"
        verbose_name_plural = "Options"
        permissions = [
            ("manage_options", "Can manage site options"),
        ]

    def __str__(self) -> str:
        return self.name
