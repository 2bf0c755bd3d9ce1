from __future__ import annotations

import html
from typing import Any

import bleach


def strip_markup(value: Any) -> str:
    """
    Reduce ``value`` to plain text.

    Tags and comments are removed and entities decoded; the cycle repeats
    until stable so that encoded markup cannot survive as real markup.
    A pass never lengthens the value, so the loop ends.
    """
    if not isinstance(value, str) or not value:
        return ""
    text = value
    while True:
        cleaned = html.unescape(
            bleach.clean(text, tags=set(), attributes={}, strip=True, strip_comments=True)
        )
        if cleaned == text:
            break
        text = cleaned
    return text.strip()


def strip_slashes(value: Any) -> str:
    """Drop backslash escaping in front of double quotes, keep everything else."""
    if not isinstance(value, str) or not value:
        return ""
    return value.replace('\\"', '"')
