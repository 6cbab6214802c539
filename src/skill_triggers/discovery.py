"""Rule source discovery across the four configuration tiers.

Locates every ``skill-rules.json`` that currently exists on disk:

1. Global: ``~/.claude/skills/skill-rules.json``
2. Global plugin: ``~/.claude/plugins/marketplaces/*/plugins/*/skills/skill-rules.json``
3. Project plugin: ``<project>/.claude/plugins/*/skills/skill-rules.json``
4. Project: ``<project>/.claude/skills/skill-rules.json``

Scan failures never abort discovery; the affected directory simply
contributes no sources.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from skill_triggers.config import RuleSource, RuleTier
from skill_triggers.filesystem import FileSystem, LocalFileSystem

logger = logging.getLogger(__name__)

RULES_FILENAME = "skill-rules.json"

# Location of the rule file relative to a plugin directory.
_PLUGIN_RULES_PATH = Path("skills") / RULES_FILENAME


@dataclass(frozen=True)
class SourceRoots:
    """Root locations discovery is parameterized by.

    Attributes:
        home: User home directory.
        project_dir: Project directory.
        plugin_root: Root of the plugin running the hook. Accepted for
            completeness; discovery does not read it.
    """

    home: Path
    project_dir: Path
    plugin_root: Path | None = None


def _list_subdirs(path: Path, fs: FileSystem) -> list[Path]:
    """Return child directories of ``path``, or nothing if it cannot be scanned."""
    if not fs.is_dir(path):
        logger.debug("Plugin directory does not exist, skipping: %s", path)
        return []

    try:
        names = fs.list_dir(path)
    except OSError as exc:
        logger.debug("Cannot scan plugin directory %s: %s", path, exc)
        return []

    return [path / name for name in names if fs.is_dir(path / name)]


def _existing(path: Path, tier: RuleTier, fs: FileSystem) -> list[RuleSource]:
    if fs.is_file(path):
        return [RuleSource(path=path, tier=tier)]
    return []


def global_sources(roots: SourceRoots, fs: FileSystem) -> list[RuleSource]:
    """Rule file directly under the home directory."""
    path = roots.home / ".claude" / "skills" / RULES_FILENAME
    return _existing(path, RuleTier.GLOBAL, fs)


def global_plugin_sources(roots: SourceRoots, fs: FileSystem) -> list[RuleSource]:
    """Rule files of every marketplace plugin (marketplace -> plugin)."""
    base = roots.home / ".claude" / "plugins" / "marketplaces"
    sources: list[RuleSource] = []

    for marketplace in _list_subdirs(base, fs):
        for plugin in _list_subdirs(marketplace / "plugins", fs):
            sources.extend(_existing(plugin / _PLUGIN_RULES_PATH, RuleTier.GLOBAL_PLUGIN, fs))

    return sources


def project_plugin_sources(roots: SourceRoots, fs: FileSystem) -> list[RuleSource]:
    """Rule files of plugins installed in the project."""
    base = roots.project_dir / ".claude" / "plugins"
    sources: list[RuleSource] = []

    for plugin in _list_subdirs(base, fs):
        sources.extend(_existing(plugin / _PLUGIN_RULES_PATH, RuleTier.PROJECT_PLUGIN, fs))

    return sources


def project_sources(roots: SourceRoots, fs: FileSystem) -> list[RuleSource]:
    """Rule file directly under the project directory."""
    path = roots.project_dir / ".claude" / "skills" / RULES_FILENAME
    return _existing(path, RuleTier.PROJECT, fs)


def discover_sources(
    roots: SourceRoots,
    fs: FileSystem | None = None,
) -> list[RuleSource]:
    """Discover rule files from all four tiers.

    Only files confirmed to exist are returned. Order is tier by tier, but
    callers must not rely on it; the merger sorts by rank.

    Args:
        roots: Home and project locations to scan.
        fs: Filesystem to scan. Defaults to the local filesystem.

    Returns:
        Discovered ``RuleSource`` objects.
    """
    fs = fs or LocalFileSystem()

    sources = [
        *global_sources(roots, fs),
        *global_plugin_sources(roots, fs),
        *project_plugin_sources(roots, fs),
        *project_sources(roots, fs),
    ]

    logger.debug(
        "Discovered %d rule source(s): %s",
        len(sources),
        ", ".join(f"{s.tier.value}={s.path}" for s in sources) or "none",
    )
    return sources
