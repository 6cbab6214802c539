"""Tests for rule source discovery."""

from __future__ import annotations

from pathlib import Path

from skill_triggers.config import RuleSource, RuleTier
from skill_triggers.discovery import (
    SourceRoots,
    discover_sources,
    global_plugin_sources,
    project_plugin_sources,
)

HOME = Path("/home/dev")
PROJECT = Path("/work/app")
FAKE_ROOTS = SourceRoots(home=HOME, project_dir=PROJECT)

GLOBAL_FILE = HOME / ".claude" / "skills" / "skill-rules.json"
PROJECT_FILE = PROJECT / ".claude" / "skills" / "skill-rules.json"
MARKETPLACES = HOME / ".claude" / "plugins" / "marketplaces"
PROJECT_PLUGINS = PROJECT / ".claude" / "plugins"


def _tiers(sources: list[RuleSource]) -> list[RuleTier]:
    return [s.tier for s in sources]


# ---------------------------------------------------------------------------
# Real filesystem
# ---------------------------------------------------------------------------


class TestDiscoverSourcesOnDisk:
    """Discovery against files written under tmp_path."""

    def test_no_files_discovers_nothing(self, roots: SourceRoots) -> None:
        """Empty home and project produce no sources."""
        assert discover_sources(roots) == []

    def test_discovers_all_four_tiers(self, roots: SourceRoots, write_rules) -> None:
        """One file per tier yields one source per tier."""
        global_path = write_rules("global")
        gp_path = write_rules("global-plugin", marketplace="acme", plugin="dev")
        pp_path = write_rules("project-plugin", plugin="local")
        project_path = write_rules("project")

        sources = discover_sources(roots)

        by_tier = {s.tier: s.path for s in sources}
        assert by_tier == {
            RuleTier.GLOBAL: global_path,
            RuleTier.GLOBAL_PLUGIN: gp_path,
            RuleTier.PROJECT_PLUGIN: pp_path,
            RuleTier.PROJECT: project_path,
        }

    def test_priority_follows_tier(self, roots: SourceRoots, write_rules) -> None:
        """Each source's priority is its tier rank."""
        write_rules("global")
        write_rules("global-plugin")
        write_rules("project-plugin")
        write_rules("project")

        ranks = {s.tier: s.priority for s in discover_sources(roots)}

        assert ranks == {
            RuleTier.GLOBAL: 1,
            RuleTier.GLOBAL_PLUGIN: 2,
            RuleTier.PROJECT_PLUGIN: 3,
            RuleTier.PROJECT: 4,
        }

    def test_multiple_marketplace_plugins(self, roots: SourceRoots, write_rules) -> None:
        """Every plugin of every marketplace is scanned."""
        write_rules("global-plugin", marketplace="acme", plugin="one")
        write_rules("global-plugin", marketplace="acme", plugin="two")
        write_rules("global-plugin", marketplace="other", plugin="three")

        sources = discover_sources(roots)

        assert _tiers(sources) == [RuleTier.GLOBAL_PLUGIN] * 3
        plugins = [s.path.parent.parent.name for s in sources]
        assert plugins == ["one", "two", "three"]

    def test_plugin_without_rules_file_skipped(self, roots: SourceRoots, write_rules) -> None:
        """A plugin directory without skills/skill-rules.json contributes nothing."""
        write_rules("project-plugin", plugin="has-rules")
        (roots.project_dir / ".claude" / "plugins" / "empty").mkdir()

        sources = discover_sources(roots)

        assert len(sources) == 1
        assert sources[0].path.parent.parent.name == "has-rules"

    def test_file_entry_in_plugins_dir_ignored(self, roots: SourceRoots, write_rules) -> None:
        """Non-directory entries in a plugins directory are skipped."""
        write_rules("project-plugin", plugin="real")
        (roots.project_dir / ".claude" / "plugins" / "README.md").write_text("notes")

        sources = discover_sources(roots)

        assert len(sources) == 1

    def test_plugins_path_is_a_file(self, roots: SourceRoots, write_rules) -> None:
        """A marketplace whose plugins path is a file is skipped silently."""
        marketplace = roots.home / ".claude" / "plugins" / "marketplaces" / "broken"
        marketplace.mkdir(parents=True)
        (marketplace / "plugins").write_text("not a directory")
        write_rules("global")

        sources = discover_sources(roots)

        assert _tiers(sources) == [RuleTier.GLOBAL]

    def test_directory_named_like_rules_file_ignored(self, roots: SourceRoots) -> None:
        """Only regular files count as sources."""
        (roots.project_dir / ".claude" / "skills" / "skill-rules.json").mkdir(parents=True)

        assert discover_sources(roots) == []

    def test_plugin_root_not_scanned(self, roots: SourceRoots, tmp_path: Path) -> None:
        """The plugin root hint does not add sources."""
        plugin_root = tmp_path / "plugin"
        rules = plugin_root / "skills" / "skill-rules.json"
        rules.parent.mkdir(parents=True)
        rules.write_text('{"skills": {}}')

        with_hint = SourceRoots(
            home=roots.home,
            project_dir=roots.project_dir,
            plugin_root=plugin_root,
        )

        assert discover_sources(with_hint) == []


# ---------------------------------------------------------------------------
# Injected filesystem
# ---------------------------------------------------------------------------


class TestDiscoverSourcesInjected:
    """Discovery against the in-memory filesystem."""

    def test_uses_injected_filesystem(self, make_fs) -> None:
        """Sources are discovered without touching the real disk."""
        fs = make_fs({GLOBAL_FILE: "{}", PROJECT_FILE: "{}"})

        sources = discover_sources(FAKE_ROOTS, fs)

        assert sources == [
            RuleSource(path=GLOBAL_FILE, tier=RuleTier.GLOBAL),
            RuleSource(path=PROJECT_FILE, tier=RuleTier.PROJECT),
        ]

    def test_unlistable_marketplaces_dir(self, make_fs) -> None:
        """A permission error on the marketplace root drops that tier only."""
        plugin_file = MARKETPLACES / "acme" / "plugins" / "dev" / "skills" / "skill-rules.json"
        fs = make_fs(
            {GLOBAL_FILE: "{}", plugin_file: "{}", PROJECT_FILE: "{}"},
            unlistable=[MARKETPLACES],
        )

        sources = discover_sources(FAKE_ROOTS, fs)

        assert _tiers(sources) == [RuleTier.GLOBAL, RuleTier.PROJECT]

    def test_unlistable_marketplace_skips_only_that_marketplace(self, make_fs) -> None:
        """A failing marketplace does not hide the others."""
        bad = MARKETPLACES / "bad" / "plugins" / "p" / "skills" / "skill-rules.json"
        good = MARKETPLACES / "good" / "plugins" / "p" / "skills" / "skill-rules.json"
        fs = make_fs(
            {bad: "{}", good: "{}"},
            unlistable=[MARKETPLACES / "bad" / "plugins"],
        )

        sources = global_plugin_sources(FAKE_ROOTS, fs)

        assert [s.path for s in sources] == [good]

    def test_unlistable_project_plugins(self, make_fs) -> None:
        """A permission error on the project plugins directory is not fatal."""
        plugin_file = PROJECT_PLUGINS / "dev" / "skills" / "skill-rules.json"
        fs = make_fs({plugin_file: "{}"}, unlistable=[PROJECT_PLUGINS])

        assert project_plugin_sources(FAKE_ROOTS, fs) == []

    def test_missing_directories(self, make_fs) -> None:
        """Missing tier directories yield nothing."""
        assert discover_sources(FAKE_ROOTS, make_fs()) == []
