"""Local Django apps."""
