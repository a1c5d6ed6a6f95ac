"""Shortcut lookup table built from alias rules."""

import logging
from typing import Iterable

from blink_launcher.models import AliasRule

logger = logging.getLogger(__name__)


class AliasIndex:
    """
    Mapping from lowercase shortcut to canonical application name.

    The index is derived from the alias rules and rebuilt wholesale when the
    config is reloaded. When two rules declare the same shortcut the rule
    processed last wins.
    """

    def __init__(self, mapping: dict[str, str] | None = None):
        self._targets: dict[str, str] = dict(mapping or {})

    @classmethod
    def build(cls, rules: Iterable[AliasRule]) -> "AliasIndex":
        """Build an index from alias rules, in order."""
        targets: dict[str, str] = {}
        for rule in rules:
            for shortcut in rule.shortcuts:
                key = shortcut.lower()
                previous = targets.get(key)
                if previous is not None and previous != rule.app:
                    logger.debug("Alias '%s' reassigned from '%s' to '%s'", key, previous, rule.app)
                targets[key] = rule.app
        return cls(targets)

    def lookup(self, query: str) -> str | None:
        """Target application for an exact shortcut, or None."""
        return self._targets.get(query.lower())

    def targets_with_prefix(self, query: str) -> set[str]:
        """Lowercased targets of every shortcut starting with the query."""
        prefix = query.lower()
        return {target.lower() for shortcut, target in self._targets.items() if shortcut.startswith(prefix)}

    def __len__(self) -> int:
        return len(self._targets)

    def __contains__(self, shortcut: object) -> bool:
        return isinstance(shortcut, str) and shortcut.lower() in self._targets

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AliasIndex):
            return NotImplemented
        return self._targets == other._targets

    def __repr__(self) -> str:
        return f"AliasIndex({self._targets!r})"
