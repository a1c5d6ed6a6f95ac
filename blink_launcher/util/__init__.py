"""Utility module for blink-launcher."""

from .patterns import matches_pattern, expand_path
from .shell import ShellResult, run

__all__ = ["matches_pattern", "expand_path", "ShellResult", "run"]
