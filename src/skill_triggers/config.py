"""Skill rule data models and enums."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class RuleTier(str, Enum):
    """Configuration tier a rule file was discovered at.

    Each tier carries a fixed rank; higher ranks override lower ones when
    the same skill name is declared more than once.

    Attributes:
        GLOBAL: ``~/.claude/skills/skill-rules.json`` (rank 1).
        GLOBAL_PLUGIN: Marketplace plugins under ``~/.claude/plugins`` (rank 2).
        PROJECT_PLUGIN: Plugins under ``<project>/.claude/plugins`` (rank 3).
        PROJECT: ``<project>/.claude/skills/skill-rules.json`` (rank 4).
    """

    GLOBAL = "global"
    GLOBAL_PLUGIN = "global-plugin"
    PROJECT_PLUGIN = "project-plugin"
    PROJECT = "project"

    @property
    def rank(self) -> int:
        """Fixed override rank for this tier (1 = lowest)."""
        return _TIER_RANK[self]


_TIER_RANK: dict[RuleTier, int] = {
    RuleTier.GLOBAL: 1,
    RuleTier.GLOBAL_PLUGIN: 2,
    RuleTier.PROJECT_PLUGIN: 3,
    RuleTier.PROJECT: 4,
}


class SkillType(str, Enum):
    """Kind of skill a rule points at."""

    GUARDRAIL = "guardrail"
    DOMAIN = "domain"


class Enforcement(str, Enum):
    """How strongly a matched rule affects the caller.

    Attributes:
        BLOCK: Block the prompt until the skill is invoked (critical rules only).
        SUGGEST: Recommend the skill in the injected context.
        WARN: Mention the skill without blocking.
    """

    BLOCK = "block"
    SUGGEST = "suggest"
    WARN = "warn"


class Priority(str, Enum):
    """Declared urgency of a rule.

    Member order is the display order of the verdict buckets.
    """

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def header(self) -> str:
        """Bucket heading used in the injected context."""
        return _PRIORITY_HEADERS[self]


_PRIORITY_HEADERS: dict[Priority, str] = {
    Priority.CRITICAL: "CRITICAL SKILLS (REQUIRED)",
    Priority.HIGH: "RECOMMENDED SKILLS",
    Priority.MEDIUM: "SUGGESTED SKILLS",
    Priority.LOW: "OPTIONAL SKILLS",
}


class MatchType(str, Enum):
    """Trigger category that satisfied a rule."""

    KEYWORD = "keyword"
    INTENT = "intent"


class PromptTriggers(BaseModel):
    """Prompt conditions under which a rule matches.

    Attributes:
        keywords: Literal strings matched as case-insensitive substrings.
        intent_patterns: Regular expressions searched case-insensitively.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    keywords: list[str] = Field(
        default_factory=list,
        description="Case-insensitive substrings",
    )
    intent_patterns: list[str] = Field(
        default_factory=list,
        alias="intentPatterns",
        description="Case-insensitive regular expressions",
    )

    @field_validator("keywords", "intent_patterns", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SkillRule(BaseModel):
    """A single skill rule as declared in ``skill-rules.json``.

    Fields the engine does not interpret (``description``, ``fileTriggers``
    and so on) are kept as extras so a merged rule equals its declaration.

    Attributes:
        type: Skill category, if declared.
        enforcement: Effect on the caller when matched.
        priority: Verdict bucket when matched.
        prompt_triggers: Trigger set; a rule without one never matches.
        source: Tier the rule was merged from. Set by the merger only.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    type: SkillType | None = None
    enforcement: Enforcement
    priority: Priority
    prompt_triggers: PromptTriggers | None = Field(default=None, alias="promptTriggers")
    source: RuleTier | None = None


class SkillRulesFile(BaseModel):
    """Root structure of a ``skill-rules.json`` document.

    Attributes:
        version: Free-form format version string. Numbers are read as text.
        skills: Rules keyed by skill name.
    """

    version: str = "1.0"
    skills: dict[str, SkillRule]

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @model_validator(mode="before")
    @classmethod
    def _drop_declared_source(cls, data: Any) -> Any:
        """Discard ``source`` keys from raw rules; provenance comes from the merge."""
        if isinstance(data, dict) and isinstance(data.get("skills"), dict):
            data = {
                **data,
                "skills": {
                    name: (
                        {k: v for k, v in rule.items() if k != "source"}
                        if isinstance(rule, dict)
                        else rule
                    )
                    for name, rule in data["skills"].items()
                },
            }
        return data


@dataclass(frozen=True)
class RuleSource:
    """A discovered ``skill-rules.json`` file.

    Attributes:
        path: Absolute path of the rule file.
        tier: Tier the file was found at.
    """

    path: Path
    tier: RuleTier

    @property
    def priority(self) -> int:
        """Override rank, derived from the tier only."""
        return self.tier.rank


@dataclass(frozen=True)
class Match:
    """A rule that matched the current prompt.

    Attributes:
        name: Skill name.
        match_type: Trigger category that matched.
        rule: The merged rule configuration.
    """

    name: str
    match_type: MatchType
    rule: SkillRule
