"""Catalog building and search ranking."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from blink_launcher.aliases import AliasIndex
from blink_launcher.models import (
    AliasRule,
    ApplicationRecord,
    ExclusionRules,
    MatchResult,
    ScoredApplication,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 50

# Tier scores. Alias tiers are evaluated before the exact-name tier, so an
# application reached through an alias scores 950/850 even if its name also
# equals the query.
SCORE_EXACT_NAME = 1000
SCORE_ALIAS_EXACT = 950
SCORE_PREFIX = 900
SCORE_ALIAS_PREFIX = 850
SCORE_SUBSTRING = 500

Catalog = tuple[ApplicationRecord, ...]


def build_catalog(
    custom_apps: Iterable[ApplicationRecord],
    discovered_apps: Iterable[ApplicationRecord],
    exclusion_rules: ExclusionRules | None = None,
) -> Catalog:
    """
    Build the searchable catalog.

    Custom entries come before discovered ones, so a custom entry wins when
    both share a path. Excluded names and patterns are dropped, and the
    remainder is sorted by path (case-insensitive) as the base order for
    empty-query listings and score ties.

    Args:
        custom_apps: Entries declared in the config (highest priority)
        discovered_apps: Entries reported by the OS application index
        exclusion_rules: Names and wildcard patterns to hide

    Returns:
        Immutable, path-sorted tuple of application records
    """
    rules = exclusion_rules or ExclusionRules()
    seen_paths: set[str] = set()
    kept: list[ApplicationRecord] = []

    for app in [*custom_apps, *discovered_apps]:
        if app.path in seen_paths:
            continue
        seen_paths.add(app.path)
        if rules.excludes(app.display_name):
            continue
        kept.append(app)

    return tuple(sorted(kept, key=lambda app: app.path.lower()))


def fuzzy_score(query: str, target: str) -> int:
    """
    Score an in-order subsequence match of query within target.

    Each matched character earns ``1 + run`` where ``run`` is the number of
    matches immediately preceding it, so adjacent matches score higher than
    scattered ones. Returns 0 unless every query character was consumed.

    Example:
        >>> fuzzy_score("psh", "photoshop")
        4
        >>> fuzzy_score("xyz", "finder")
        0
    """
    query = query.lower()
    target = target.lower()
    query_index = 0
    score = 0
    consecutive = 0

    for char in target:
        if query_index >= len(query):
            break
        if query[query_index] == char:
            score += 1 + consecutive
            consecutive += 1
            query_index += 1
        else:
            consecutive = 0

    return score if query_index == len(query) else 0


def _score_name(name: str, query: str, alias_target: str | None, prefix_targets: set[str]) -> int | None:
    # name, query and targets are already lowercased
    if alias_target is not None and name == alias_target:
        return SCORE_ALIAS_EXACT
    if name in prefix_targets:
        return SCORE_ALIAS_PREFIX
    if name == query:
        return SCORE_EXACT_NAME
    if name.startswith(query):
        return SCORE_PREFIX
    if query in name:
        return SCORE_SUBSTRING

    score = fuzzy_score(query, name)
    return score if score > 0 else None


def _alias_targets(query: str, alias_index: AliasIndex) -> tuple[str | None, set[str]]:
    target = alias_index.lookup(query)
    return (target.lower() if target is not None else None), alias_index.targets_with_prefix(query)


def score_candidate(
    query: str,
    application: ApplicationRecord,
    alias_index: AliasIndex,
    alias_targets: tuple[str | None, set[str]] | None = None,
) -> int | None:
    """
    Score one application against a non-empty query.

    Args:
        query: Query text (compared case-insensitively)
        application: Candidate to score
        alias_index: Shortcut index for the current config
        alias_targets: Exact and prefix alias targets for the query, when the
            caller scores many candidates for the same query

    Returns:
        The score of the first tier that applies, or None if none does
    """
    query = query.lower()
    if alias_targets is None:
        alias_targets = _alias_targets(query, alias_index)
    alias_target, prefix_targets = alias_targets
    return _score_name(application.display_name.lower(), query, alias_target, prefix_targets)


def search(
    query: str,
    catalog: Sequence[ApplicationRecord],
    alias_index: AliasIndex,
    limit: int = DEFAULT_LIMIT,
) -> MatchResult:
    """
    Rank catalog entries for a query.

    An empty query lists the first ``limit`` entries in catalog order.
    Otherwise every entry is scored, unmatched entries are dropped, and the
    rest are sorted by score (highest first) with ties kept in catalog order.

    Args:
        query: Raw text typed by the user
        catalog: Catalog produced by build_catalog
        alias_index: Shortcut index for the current config
        limit: Maximum number of results (default: 50)

    Returns:
        MatchResult with at most ``limit`` entries

    Raises:
        ValueError: If limit is negative
    """
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    if not query:
        return MatchResult(
            query=query,
            matches=[ScoredApplication(application=app) for app in catalog[:limit]],
        )

    alias_targets = _alias_targets(query.lower(), alias_index)

    scored: list[ScoredApplication] = []
    for app in catalog:
        score = score_candidate(query, app, alias_index, alias_targets)
        if score is not None:
            scored.append(ScoredApplication(application=app, score=score))

    # sorted() is stable, so equal scores keep catalog order
    ranked = sorted(scored, key=lambda match: -match.score)
    return MatchResult(query=query, matches=ranked[:limit])


@dataclass(frozen=True)
class CatalogSnapshot:
    """Catalog and alias index published together."""

    catalog: Catalog = ()
    alias_index: AliasIndex = field(default_factory=AliasIndex)


class MatchEngine:
    """
    Owns the current catalog snapshot and answers searches against it.

    ``rebuild`` builds a new snapshot off to the side and publishes it with a
    single reference assignment; ``search`` reads whichever snapshot is
    current when it starts.
    """

    def __init__(self, snapshot: CatalogSnapshot | None = None):
        self._snapshot = snapshot or CatalogSnapshot()

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    @property
    def catalog(self) -> Catalog:
        return self._snapshot.catalog

    @property
    def alias_index(self) -> AliasIndex:
        return self._snapshot.alias_index

    def rebuild(
        self,
        custom_apps: Iterable[ApplicationRecord],
        discovered_apps: Iterable[ApplicationRecord],
        exclusion_rules: ExclusionRules | None = None,
        alias_rules: Iterable[AliasRule] = (),
    ) -> CatalogSnapshot:
        """Rebuild catalog and alias index, then publish them."""
        snapshot = CatalogSnapshot(
            catalog=build_catalog(custom_apps, discovered_apps, exclusion_rules),
            alias_index=AliasIndex.build(alias_rules),
        )
        self._snapshot = snapshot
        logger.info(
            "Catalog rebuilt: %d applications, %d aliases",
            len(snapshot.catalog),
            len(snapshot.alias_index),
        )
        return snapshot

    def search(self, query: str, limit: int = DEFAULT_LIMIT) -> MatchResult:
        snapshot = self._snapshot
        return search(query, snapshot.catalog, snapshot.alias_index, limit=limit)
