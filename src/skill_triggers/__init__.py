"""
Skill Triggers - prompt-time skill activation for Claude Code hooks.

Discovers ``skill-rules.json`` files across four tiers (global,
global-plugin, project-plugin, project), merges them by tier rank, and
matches each rule's keywords and intent patterns against the submitted
prompt.

Quick Start:
    >>> from pathlib import Path
    >>> from skill_triggers import SourceRoots, evaluate_prompt
    >>> roots = SourceRoots(home=Path.home(), project_dir=Path.cwd())
    >>> verdict = evaluate_prompt("create a new skill", roots)
    >>> verdict.should_block
    False

As a hook (reads the payload on stdin):
    $ echo '{"prompt": "add a skill"}' | skill-triggers
"""

from skill_triggers.config import (
    Enforcement,
    Match,
    MatchType,
    Priority,
    PromptTriggers,
    RuleSource,
    RuleTier,
    SkillRule,
    SkillRulesFile,
    SkillType,
)
from skill_triggers.discovery import SourceRoots, discover_sources
from skill_triggers.errors import (
    HookInputError,
    RuleFileError,
    RuleFileNotFoundError,
    RuleFileParseError,
    RuleFileReadError,
    SkillTriggerError,
)
from skill_triggers.filesystem import FileSystem, LocalFileSystem
from skill_triggers.hook import HookInput, evaluate_prompt, parse_hook_input, run_hook
from skill_triggers.loader import load_rules_file, parse_rules_document
from skill_triggers.matcher import group_matches, match_rule, match_rules
from skill_triggers.merger import Loaded, MergedRuleSet, Skipped, load_source, merge_rules
from skill_triggers.settings import HookSettings
from skill_triggers.verdict import HookOutput, Verdict, build_verdict

__all__ = [
    # Models
    "Enforcement",
    "Match",
    "MatchType",
    "Priority",
    "PromptTriggers",
    "RuleSource",
    "RuleTier",
    "SkillRule",
    "SkillRulesFile",
    "SkillType",
    # Discovery
    "FileSystem",
    "LocalFileSystem",
    "SourceRoots",
    "discover_sources",
    # Loading and merging
    "Loaded",
    "MergedRuleSet",
    "Skipped",
    "load_rules_file",
    "load_source",
    "merge_rules",
    "parse_rules_document",
    # Matching
    "HookOutput",
    "Verdict",
    "build_verdict",
    "group_matches",
    "match_rule",
    "match_rules",
    # Hook
    "HookInput",
    "HookSettings",
    "evaluate_prompt",
    "parse_hook_input",
    "run_hook",
    # Errors
    "HookInputError",
    "RuleFileError",
    "RuleFileNotFoundError",
    "RuleFileParseError",
    "RuleFileReadError",
    "SkillTriggerError",
    # Version
    "__version__",
]

__version__ = "0.1.0"
