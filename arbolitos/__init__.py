"""Command-line tracker for personal plants and their growth updates."""

__version__ = "0.1.0"
