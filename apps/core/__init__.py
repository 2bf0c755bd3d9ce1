"""
Core application package.

Host services for plugin apps: option store, lifecycle hooks, options-page
registry. Keep this file free of side effects so imports remain predictable
and safe in management commands, migrations, and tests.
"""

__all__: list[str] = []
