from __future__ import annotations

from django import template
from django.utils.safestring import mark_safe

from apps.core import hooks

register = template.Library()


@register.simple_tag(takes_context=True)
def render_head(context):
    """
    Print whatever plugins attached to `head_render` return.

    Receiver output is trusted markup and is not escaped here; escaping of
    stored values is each receiver's job.
    """
    return mark_safe(hooks.collect_head(context.get("request")))
