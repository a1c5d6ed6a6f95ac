"""Blink: search ranking and launch dispatch for a macOS application launcher."""

__version__ = "0.1.0"
