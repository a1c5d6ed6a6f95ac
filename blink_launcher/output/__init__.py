"""Output formatting module."""

from .render import render_human, render_json, render_launch

__all__ = ["render_human", "render_json", "render_launch"]
