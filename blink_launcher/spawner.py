"""Process spawning for launched applications."""

import logging
import subprocess
from typing import Any, Callable

from blink_launcher.models import InstanceMode

logger = logging.getLogger(__name__)

OPEN_BINARY = "/usr/bin/open"

Runner = Callable[[list[str]], Any]


def _popen(cmd: list[str]) -> subprocess.Popen:
    return subprocess.Popen(
        cmd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        start_new_session=True,
    )


class FireAndForgetSpawn:
    """
    Opens applications through ``open -a`` without waiting on the result.

    Launch failures are never raised: a missing ``open`` binary or a refused
    exec is logged at DEBUG and reported only through the return value of
    ``spawn``. The exit status of ``open`` itself is not observed.
    """

    def __init__(self, runner: Runner | None = None, open_binary: str = OPEN_BINARY):
        self._runner = runner or _popen
        self.open_binary = open_binary

    def build_command(self, display_name: str, mode: InstanceMode) -> list[str]:
        """Command line for opening an application by display name."""
        if mode == InstanceMode.NEW_INSTANCE:
            return [self.open_binary, "-n", "-a", display_name]
        return [self.open_binary, "-a", display_name]

    def spawn(self, display_name: str, mode: InstanceMode) -> bool:
        """
        Start the application.

        Returns:
            True if the opener was started, False if it could not be
        """
        cmd = self.build_command(display_name, mode)
        try:
            self._runner(cmd)
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug("Launch of '%s' failed: %s", display_name, e)
            return False
        return True
