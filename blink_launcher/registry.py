"""Persistent list of applications that must not be multi-launched."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_REGISTRY_PATH = Path.home() / ".config" / "blink" / "single-instance-apps"

DEFAULT_SINGLE_INSTANCE_APPS = (
    "Finder",
    "System Settings",
    "System Preferences",
    "Activity Monitor",
)

_HEADER = """# Blink Single-Instance Apps
# If nothing happens when selecting a specific app, try adding it to this list.
# Apps listed here are opened without the -n flag, so an existing window is
# activated instead of a new instance being started.
#
# One app name per line (case-sensitive, must match the name shown in results)
# Lines starting with # are comments
"""


class SingleInstanceRegistry:
    """Plain-text registry of single-instance application names."""

    def __init__(self, path: Path | str = DEFAULT_REGISTRY_PATH):
        self.path = Path(path).expanduser()

    def load(self) -> set[str]:
        """
        Read the registry, creating it with defaults on first use.

        Returns:
            Set of application display names. Falls back to the built-in
            defaults when the file cannot be read.
        """
        if not self.path.exists():
            self._write_defaults()

        try:
            contents = self.path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read %s (%s), using defaults", self.path, e)
            return set(DEFAULT_SINGLE_INSTANCE_APPS)

        return {
            line.strip()
            for line in contents.splitlines()
            if line.strip() and not line.strip().startswith("#")
        }

    def add(self, name: str) -> bool:
        """
        Append a name to the registry.

        Returns:
            True if the name was added, False if it was already present
        """
        name = name.strip()
        if not name:
            raise ValueError("Application name must not be empty")

        if name in self.load():
            logger.info("'%s' is already a single-instance app", name)
            return False

        existing = self.path.read_text(encoding="utf-8")
        prefix = "" if not existing or existing.endswith("\n") else "\n"
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(f"{prefix}{name}\n")

        logger.info("Marked '%s' as a single-instance app", name)
        return True

    def _write_defaults(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(_HEADER + "\n" + "\n".join(DEFAULT_SINGLE_INSTANCE_APPS) + "\n", encoding="utf-8")
        except OSError as e:
            logger.warning("Could not create %s: %s", self.path, e)
