"""
Verify Meta Tags project package.

This file MUST remain minimal and side-effect free: no Django imports,
no I/O, no settings access. Metadata only.
"""

__all__ = ["__version__", "__author__", "__description__"]

__version__ = "0.1.0"
__author__ = "Verify Meta Tags contributors"
__description__ = "Site verification meta tags and analytics injection for Django sites."
