"""Run macOS command-line tools such as mdfind and capture their output."""

import subprocess
from dataclasses import dataclass


@dataclass
class ShellResult:
    """Exit status and decoded output of one tool invocation."""

    code: int
    out: str
    err: str

    @property
    def success(self) -> bool:
        return self.code == 0

    @property
    def lines(self) -> list[str]:
        """Stdout split into non-blank lines (one bundle path each for mdfind)."""
        return [line for line in self.out.split("\n") if line.strip()]

    def __bool__(self) -> bool:
        return self.success


def run(cmd: list[str], timeout: int = 10) -> ShellResult:
    """
    Invoke a tool directly (no shell) and collect what it printed.

    Spotlight queries are passed as a single argument, so they need no
    quoting.

    Args:
        cmd: Tool path and arguments, e.g.
            ``['/usr/bin/mdfind', "kMDItemContentType == 'com.apple.application-bundle'"]``
        timeout: Seconds to wait before giving up (default: 10)

    Returns:
        ShellResult; a non-zero exit status is reported, not raised

    Raises:
        TimeoutError: The tool did not finish within ``timeout``
        OSError: The tool could not be started (missing or not executable)
    """
    try:
        completed = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
            shell=False,
            check=False
        )
    except subprocess.TimeoutExpired as e:
        raise TimeoutError(f"{cmd[0]} gave no answer within {timeout}s") from e

    return ShellResult(
        code=completed.returncode,
        out=_clean(completed.stdout),
        err=_clean(completed.stderr)
    )


def _clean(text: str | None) -> str:
    # mdfind ends every path with "\n"; strip line-ending variants and padding
    return (text or "").replace("\r\n", "\n").replace("\r", "\n").strip()
