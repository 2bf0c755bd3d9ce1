"""
Verify Meta Tags plugin.

Site-ownership verification tokens (Google, Pinterest) and an analytics
snippet, edited on an options page and printed into every page <head>.

This module intentionally does not execute any logic on import.
All behaviour lives in apps.verify_meta_tags.services / head / hooks.
"""

__all__: list[str] = []
