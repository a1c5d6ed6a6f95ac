"""Tests for catalog building and search ranking."""

import unittest

from blink_launcher.aliases import AliasIndex
from blink_launcher.engine import (
    MatchEngine,
    SCORE_ALIAS_EXACT,
    SCORE_ALIAS_PREFIX,
    SCORE_EXACT_NAME,
    SCORE_PREFIX,
    SCORE_SUBSTRING,
    build_catalog,
    fuzzy_score,
    score_candidate,
    search,
)
from blink_launcher.models import AliasRule, ApplicationRecord, ExclusionRules


def app(name: str, path: str | None = None, **kwargs) -> ApplicationRecord:
    return ApplicationRecord(display_name=name, path=path or f"/Applications/{name}.app", **kwargs)


class TestBuildCatalog(unittest.TestCase):
    """Test catalog construction."""

    def test_sorted_by_path_case_insensitive(self):
        catalog = build_catalog([], [app("b", "/Applications/b.app"), app("A", "/Applications/A.app"),
                                     app("c", "/Applications/C.app")])
        self.assertEqual([a.path for a in catalog],
                         ["/Applications/A.app", "/Applications/b.app", "/Applications/C.app"])

    def test_custom_entry_wins_duplicate_path(self):
        custom = app("My Code", "/Applications/Visual Studio Code.app", is_cli=True)
        discovered = app("Code", "/Applications/Visual Studio Code.app", package_identifier="com.microsoft.VSCode")

        catalog = build_catalog([custom], [discovered])

        self.assertEqual(len(catalog), 1)
        self.assertEqual(catalog[0].display_name, "My Code")
        self.assertIsNone(catalog[0].package_identifier)
        self.assertTrue(catalog[0].is_cli)

    def test_duplicate_discovered_keeps_first(self):
        catalog = build_catalog([], [app("First", "/x.app"), app("Second", "/x.app")])
        self.assertEqual([a.display_name for a in catalog], ["First"])

    def test_exact_name_exclusion(self):
        rules = ExclusionRules(names={"Migration Assistant"})
        catalog = build_catalog([], [app("Migration Assistant"), app("Safari")], rules)
        self.assertEqual([a.display_name for a in catalog], ["Safari"])

    def test_excluded_custom_entry_still_shadows_path(self):
        rules = ExclusionRules(names={"Old Tool"})
        custom = app("Old Tool", "/Applications/Tool.app")
        discovered = app("Tool", "/Applications/Tool.app")

        self.assertEqual(build_catalog([custom], [discovered], rules), ())

    def test_exact_name_exclusion_is_case_sensitive(self):
        rules = ExclusionRules(names={"safari"})
        catalog = build_catalog([], [app("Safari")], rules)
        self.assertEqual(len(catalog), 1)

    def test_pattern_exclusion(self):
        rules = ExclusionRules(patterns=["*Helper*"])
        catalog = build_catalog([], [app("Chrome Helper"), app("helper tool"), app("Chrome")], rules)
        self.assertEqual([a.display_name for a in catalog], ["Chrome"])

        # Excluded apps never surface, whatever the query
        for query in ["", "helper", "Chrome Helper", "chr"]:
            names = [a.display_name for a in search(query, catalog, AliasIndex()).applications()]
            self.assertNotIn("Chrome Helper", names)

    def test_pattern_is_anchored(self):
        rules = ExclusionRules(patterns=["*Uninstaller"])
        catalog = build_catalog([], [app("Uninstaller Pro"), app("Adobe Uninstaller")], rules)
        self.assertEqual([a.display_name for a in catalog], ["Uninstaller Pro"])

    def test_idempotent(self):
        custom = [app("Tool", "/opt/tool", is_cli=True)]
        discovered = [app("Safari"), app("Notes"), app("Finder", "/System/Library/CoreServices/Finder.app")]
        rules = ExclusionRules(patterns=["*Helper*"])

        self.assertEqual(build_catalog(custom, discovered, rules), build_catalog(custom, discovered, rules))

    def test_empty_inputs(self):
        self.assertEqual(build_catalog([], []), ())


class TestFuzzyScore(unittest.TestCase):
    """Test subsequence scoring."""

    def test_consecutive_runs_score_higher(self):
        self.assertEqual(fuzzy_score("psh", "Photoshop"), 4)
        self.assertEqual(fuzzy_score("psh", "Pixelmator Something"), 3)
        self.assertGreater(fuzzy_score("psh", "Photoshop"), fuzzy_score("psh", "Pixelmator Something"))

    def test_adjacency_bonus(self):
        self.assertEqual(fuzzy_score("pt", "xptx"), 3)
        self.assertEqual(fuzzy_score("pt", "xpxt"), 2)

    def test_incomplete_subsequence_is_zero(self):
        self.assertEqual(fuzzy_score("xyz", "Finder"), 0)
        self.assertEqual(fuzzy_score("sp", "ps"), 0)

    def test_case_insensitive(self):
        self.assertEqual(fuzzy_score("VSC", "visual studio code"), fuzzy_score("vsc", "Visual Studio Code"))


class TestScoring(unittest.TestCase):
    """Test tier precedence for a single candidate."""

    def setUp(self):
        self.aliases = AliasIndex.build([AliasRule(app="Code", shortcuts=["vsc", "vscode"])])

    def test_exact_name(self):
        self.assertEqual(score_candidate("safari", app("Safari"), AliasIndex()), SCORE_EXACT_NAME)

    def test_prefix(self):
        self.assertEqual(score_candidate("saf", app("Safari"), AliasIndex()), SCORE_PREFIX)

    def test_substring(self):
        self.assertEqual(score_candidate("far", app("Safari"), AliasIndex()), SCORE_SUBSTRING)

    def test_fuzzy(self):
        self.assertEqual(score_candidate("sfr", app("Safari"), AliasIndex()), fuzzy_score("sfr", "safari"))

    def test_no_match(self):
        self.assertIsNone(score_candidate("xyz", app("Finder"), AliasIndex()))

    def test_exact_alias(self):
        self.assertEqual(score_candidate("VSC", app("Code"), self.aliases), SCORE_ALIAS_EXACT)

    def test_alias_prefix(self):
        self.assertEqual(score_candidate("vsco", app("Code"), self.aliases), SCORE_ALIAS_PREFIX)
        self.assertEqual(score_candidate("vs", app("Code"), self.aliases), SCORE_ALIAS_PREFIX)

    def test_alias_dominates_exact_name(self):
        aliases = AliasIndex.build([AliasRule(app="Notes", shortcuts=["notes"])])
        # Exact name would be 1000, but the alias tier is checked first
        self.assertEqual(score_candidate("notes", app("Notes"), aliases), SCORE_ALIAS_EXACT)

        aliases = AliasIndex.build([AliasRule(app="Notes", shortcuts=["notesapp"])])
        self.assertEqual(score_candidate("notes", app("Notes"), aliases), SCORE_ALIAS_PREFIX)

    def test_alias_does_not_affect_other_apps(self):
        self.assertEqual(score_candidate("vsc", app("vsc"), self.aliases), SCORE_EXACT_NAME)

    def test_search_scores_match_candidate_scores(self):
        catalog = [app("Code"), app("vsc"), app("Visual Studio Code"), app("Finder")]
        result = search("vsc", catalog, self.aliases)

        for match in result.matches:
            self.assertEqual(match.score, score_candidate("vsc", match.application, self.aliases))
        self.assertEqual([a.display_name for a in result.applications()], ["vsc", "Code", "Visual Studio Code"])


class TestSearch(unittest.TestCase):
    """Test ranked search over a catalog."""

    def setUp(self):
        self.catalog = build_catalog([], [
            app("Safari"),
            app("Photoshop"),
            app("Pixelmator Something"),
            app("Code"),
            app("vsc", "/usr/local/bin/vsc", is_cli=True),
            app("Finder", "/System/Library/CoreServices/Finder.app"),
            app("Notes"),
            app("Sublime Text"),
        ])
        self.aliases = AliasIndex.build([AliasRule(app="Code", shortcuts=["vsc", "editor"])])

    def test_empty_query_returns_base_order(self):
        result = search("", self.catalog, self.aliases)
        self.assertEqual(result.applications(), list(self.catalog))

    def test_empty_query_respects_limit(self):
        catalog = build_catalog([], [app(f"App {i:03d}") for i in range(80)])
        result = search("", catalog, AliasIndex())
        self.assertEqual(len(result), 50)
        self.assertEqual(result.applications(), list(catalog[:50]))

    def test_empty_catalog(self):
        self.assertEqual(len(search("safari", (), AliasIndex())), 0)
        self.assertEqual(len(search("", (), AliasIndex())), 0)

    def test_alias_and_literal_name_both_returned(self):
        result = search("vsc", self.catalog, self.aliases)
        scores = {m.application.display_name: m.score for m in result.matches}

        self.assertEqual(scores["vsc"], SCORE_EXACT_NAME)
        self.assertEqual(scores["Code"], SCORE_ALIAS_EXACT)
        self.assertEqual([a.display_name for a in result.applications()][:2], ["vsc", "Code"])

    def test_unmatched_candidates_dropped(self):
        result = search("xyz", self.catalog, self.aliases)
        self.assertEqual(len(result), 0)

    def test_fuzzy_ranking(self):
        names = [a.display_name for a in search("psh", self.catalog, self.aliases).applications()]
        self.assertEqual(names, ["Photoshop", "Pixelmator Something"])

    def test_ties_keep_catalog_order(self):
        catalog = build_catalog([], [app("Notes", "/b/Notes.app"), app("Notes", "/a/Notes.app")])
        result = search("notes", catalog, AliasIndex())
        self.assertEqual([a.path for a in result.applications()], ["/a/Notes.app", "/b/Notes.app"])

    def test_ranking_by_tier(self):
        catalog = build_catalog([], [
            app("Terminal Helper Tool"),
            app("Term"),
            app("Terminal"),
            app("Xterm"),
        ])
        names = [a.display_name for a in search("term", catalog, AliasIndex()).applications()]
        # The two prefix matches tie at 900 and keep path order (' ' sorts before '.')
        self.assertEqual(names, ["Term", "Terminal Helper Tool", "Terminal", "Xterm"])

    def test_limit(self):
        result = search("e", self.catalog, self.aliases, limit=2)
        self.assertEqual(len(result), 2)
        self.assertEqual(len(search("e", self.catalog, self.aliases, limit=0)), 0)

    def test_negative_limit_rejected(self):
        with self.assertRaises(ValueError):
            search("e", self.catalog, self.aliases, limit=-1)

    def test_query_preserved(self):
        self.assertEqual(search("SaF", self.catalog, self.aliases).query, "SaF")


class TestAliasIndex(unittest.TestCase):
    """Test alias index maintenance."""

    def test_case_insensitive_shortcuts(self):
        index = AliasIndex.build([AliasRule(app="Google Chrome", shortcuts=["GC", "Browser"])])
        self.assertEqual(index.lookup("gc"), "Google Chrome")
        self.assertEqual(index.lookup("BROWSER"), "Google Chrome")
        self.assertIn("Gc", index)

    def test_last_rule_wins(self):
        index = AliasIndex.build([
            AliasRule(app="Safari", shortcuts=["web"]),
            AliasRule(app="Google Chrome", shortcuts=["web"]),
        ])
        self.assertEqual(index.lookup("web"), "Google Chrome")
        self.assertEqual(len(index), 1)

    def test_prefix_targets(self):
        index = AliasIndex.build([
            AliasRule(app="Code", shortcuts=["vscode"]),
            AliasRule(app="Vim", shortcuts=["vi"]),
        ])
        self.assertEqual(index.targets_with_prefix("v"), {"code", "vim"})
        self.assertEqual(index.targets_with_prefix("vs"), {"code"})
        self.assertEqual(index.targets_with_prefix("x"), set())

    def test_rebuild_is_deterministic(self):
        rules = [AliasRule(app="Code", shortcuts=["vsc"]), AliasRule(app="Vim", shortcuts=["vi"])]
        self.assertEqual(AliasIndex.build(rules), AliasIndex.build(rules))

    def test_missing_lookup(self):
        self.assertIsNone(AliasIndex().lookup("anything"))


class TestMatchEngine(unittest.TestCase):
    """Test snapshot publication."""

    def test_rebuild_replaces_snapshot(self):
        engine = MatchEngine()
        self.assertEqual(len(engine.search("")), 0)

        first = engine.rebuild([], [app("Safari")], alias_rules=[AliasRule(app="Safari", shortcuts=["web"])])
        self.assertEqual(engine.search("web").first().display_name, "Safari")

        second = engine.rebuild([], [app("Notes")])
        self.assertIsNot(first, second)
        self.assertEqual(len(engine.search("web")), 0)
        self.assertEqual(engine.catalog, (app("Notes"),))

        # The old snapshot is untouched
        self.assertEqual(first.catalog, (app("Safari"),))

    def test_exclusions_applied(self):
        engine = MatchEngine()
        engine.rebuild([], [app("Chrome Helper"), app("Chrome")], ExclusionRules(patterns=["*helper*"]))
        self.assertEqual([a.display_name for a in engine.catalog], ["Chrome"])


if __name__ == "__main__":
    unittest.main()
