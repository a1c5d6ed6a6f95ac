"""Wildcard and path helpers shared by the config store and the engine."""

import re
from functools import lru_cache
from pathlib import Path


@lru_cache(maxsize=256)
def _compile_wildcard(pattern: str) -> re.Pattern[str]:
    # Only '*' is special; every other character is literal
    regex = "".join(".*" if part == "*" else re.escape(part) for part in re.split(r"(\*)", pattern))
    return re.compile(regex, re.IGNORECASE | re.DOTALL)


def matches_pattern(name: str, pattern: str) -> bool:
    """
    Check a name against a wildcard pattern.

    The match is anchored at both ends and case-insensitive; ``*`` matches
    zero or more characters.

    Example:
        >>> matches_pattern("Chrome Helper", "*helper*")
        True
        >>> matches_pattern("Helper Tools", "*Helper")
        False
    """
    return _compile_wildcard(pattern).fullmatch(name) is not None


def expand_path(path: str) -> str:
    """Expand a leading '~' to the user's home directory."""
    if path.startswith("~"):
        return str(Path(path).expanduser())
    return path
