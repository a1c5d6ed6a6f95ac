"""Application discovery for macOS."""

import logging
import plistlib
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from blink_launcher.models import ApplicationRecord, CustomApp
from blink_launcher.util.patterns import expand_path
from blink_launcher.util.shell import run

logger = logging.getLogger(__name__)

MDFIND_BINARY = "/usr/bin/mdfind"
SPOTLIGHT_QUERY = "kMDItemContentType == 'com.apple.application-bundle'"


def _default_scan_paths() -> list[Path]:
    return [
        Path("/Applications"),
        Path("/System/Applications"),
        Path.home() / "Applications",
    ]


def fetch_installed_applications(scan_paths: Iterable[Path] | None = None) -> list[ApplicationRecord]:
    """
    Enumerate installed applications.

    Spotlight is asked for every application bundle first. If it is not
    available (or returns nothing), the standard application folders are
    scanned instead.

    Args:
        scan_paths: Folders to scan when Spotlight is unavailable
            (default: /Applications, /System/Applications, ~/Applications)

    Returns:
        Application records in discovery order. Bundles without a usable
        name are skipped.

    Example:
        >>> apps = fetch_installed_applications()
        >>> [app for app in apps if app.display_name == "Safari"]
        [ApplicationRecord(display_name='Safari', path='/Applications/Safari.app', ...)]
    """
    bundle_paths = _spotlight_bundle_paths()
    if not bundle_paths:
        logger.info("Spotlight returned no applications, scanning folders")
        bundle_paths = _scan_bundle_paths(scan_paths or _default_scan_paths())

    apps = []
    for bundle_path in bundle_paths:
        record = read_app_bundle(bundle_path)
        if record:
            apps.append(record)
    return apps


def _spotlight_bundle_paths() -> list[Path]:
    try:
        result = run([MDFIND_BINARY, SPOTLIGHT_QUERY], timeout=30)
    except OSError as e:
        # Includes FileNotFoundError, PermissionError and TimeoutError
        logger.debug("mdfind unavailable: %s", e)
        return []

    if not result.success:
        logger.debug("mdfind exited with %d: %s", result.code, result.err)
        return []

    return [Path(line) for line in result.lines]


def _scan_bundle_paths(scan_paths: Iterable[Path]) -> list[Path]:
    bundles = []
    for scan_path in scan_paths:
        if not scan_path.exists():
            continue
        try:
            for item in sorted(scan_path.iterdir()):
                if item.is_dir() and item.suffix == ".app":
                    bundles.append(item)
        except OSError as e:
            logger.debug("Skipping %s: %s", scan_path, e)
    return bundles


def _read_info_plist(bundle_path: Path) -> dict:
    info_plist = bundle_path / "Contents" / "Info.plist"
    if not info_plist.exists():
        return {}
    try:
        with open(info_plist, "rb") as f:
            data = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException, ValueError) as e:
        logger.debug("Unreadable Info.plist in %s: %s", bundle_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _plist_string(plist_data: dict, key: str) -> str | None:
    # Info.plist values are untyped; only non-empty strings count
    value = plist_data.get(key)
    if isinstance(value, str) and value.strip():
        return value
    return None


def read_app_bundle(bundle_path: Path) -> ApplicationRecord | None:
    """
    Build a record for one .app bundle.

    The name is CFBundleDisplayName, then CFBundleName, then the bundle's
    file name without ".app".

    Returns:
        ApplicationRecord, or None if no name could be determined
    """
    plist_data = _read_info_plist(bundle_path)
    name = (
        _plist_string(plist_data, "CFBundleDisplayName")
        or _plist_string(plist_data, "CFBundleName")
        or bundle_path.stem
    )
    if not name.strip():
        return None

    try:
        return ApplicationRecord(
            display_name=name,
            path=str(bundle_path),
            package_identifier=_plist_string(plist_data, "CFBundleIdentifier"),
        )
    except ValidationError as e:
        logger.debug("Skipping %s: %s", bundle_path, e)
        return None


def resolve_custom_apps(custom_apps: Iterable[CustomApp]) -> list[ApplicationRecord]:
    """
    Turn config entries into application records.

    Entries whose path does not exist are skipped. The configured name is
    kept even when the bundle declares another one.
    """
    records = []
    for custom_app in custom_apps:
        path = Path(expand_path(custom_app.path))
        if not path.exists():
            logger.warning("Custom app '%s' not found at %s", custom_app.name, path)
            continue

        is_bundle = path.suffix == ".app" and path.is_dir()
        bundle_id = _plist_string(_read_info_plist(path), "CFBundleIdentifier") if is_bundle else None
        records.append(ApplicationRecord(
            display_name=custom_app.name,
            path=str(path),
            package_identifier=bundle_id,
            is_cli=not is_bundle,
        ))
    return records
