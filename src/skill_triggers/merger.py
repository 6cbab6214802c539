"""Merging of rule sources into a single rule set.

Sources are folded in ascending rank, so for a given skill name the
declaration from the highest tier replaces any earlier one wholesale.
A source that cannot be loaded is recorded as skipped and does not take
part in the merge; it never prevents the other sources from loading.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from skill_triggers.config import RuleSource, SkillRule, SkillRulesFile
from skill_triggers.errors import RuleFileError
from skill_triggers.filesystem import FileSystem, LocalFileSystem
from skill_triggers.loader import load_rules_file

logger = logging.getLogger(__name__)

MERGED_VERSION = "1.0"


@dataclass(frozen=True)
class Loaded:
    """A source whose rule file loaded successfully."""

    source: RuleSource
    rules: SkillRulesFile


@dataclass(frozen=True)
class Skipped:
    """A source left out of the merge.

    Attributes:
        source: The source that was skipped.
        reason: Why it was skipped (missing, unreadable, or malformed).
    """

    source: RuleSource
    reason: str


SourceResult = Loaded | Skipped


@dataclass
class MergedRuleSet:
    """Rules from all sources, keyed by skill name.

    Attributes:
        version: Version of the merged document.
        skills: Winning rule for each skill name, with ``source`` stamped.
        results: Load outcome of every source, in merge order.
    """

    version: str = MERGED_VERSION
    skills: dict[str, SkillRule] = field(default_factory=dict)
    results: list[SourceResult] = field(default_factory=list)

    @property
    def loaded(self) -> list[Loaded]:
        """Sources that contributed to the merge."""
        return [r for r in self.results if isinstance(r, Loaded)]

    @property
    def skipped(self) -> list[Skipped]:
        """Sources that were left out."""
        return [r for r in self.results if isinstance(r, Skipped)]


def load_source(source: RuleSource, fs: FileSystem | None = None) -> SourceResult:
    """Load one source without raising for file errors.

    Args:
        source: Source to load.
        fs: Filesystem to read from. Defaults to the local filesystem.

    Returns:
        ``Loaded`` with the parsed rules, or ``Skipped`` with the reason.
    """
    try:
        rules = load_rules_file(source.path, fs)
    except RuleFileError as exc:
        logger.warning("Skipping %s rule source: %s", source.tier.value, exc)
        return Skipped(source=source, reason=str(exc))

    return Loaded(source=source, rules=rules)


def merge_rules(
    sources: list[RuleSource],
    fs: FileSystem | None = None,
) -> MergedRuleSet:
    """Merge rule sources by rank.

    Sources are sorted ascending by rank (stable, so sources of the same
    tier keep their discovery order). Each rule replaces any earlier rule
    of the same name and has its ``source`` set to the tier it came from.

    Args:
        sources: Discovered sources, in any order.
        fs: Filesystem to read from. Defaults to the local filesystem.

    Returns:
        The merged rule set, including the per-source load outcomes.
    """
    fs = fs or LocalFileSystem()
    merged = MergedRuleSet()

    for source in sorted(sources, key=lambda s: s.priority):
        result = load_source(source, fs)
        merged.results.append(result)

        if isinstance(result, Skipped):
            continue

        for name, rule in result.rules.skills.items():
            previous = merged.skills.get(name)
            if previous is not None:
                logger.debug(
                    "Skill '%s' from %s scope overrides %s scope",
                    name,
                    source.tier.value,
                    previous.source.value if previous.source else "unknown",
                )
            merged.skills[name] = rule.model_copy(update={"source": source.tier})

    return merged
