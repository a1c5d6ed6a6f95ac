"""Scanners module for discovering applications."""

from .apps import fetch_installed_applications, read_app_bundle, resolve_custom_apps

__all__ = ["fetch_installed_applications", "read_app_bundle", "resolve_custom_apps"]
