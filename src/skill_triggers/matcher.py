"""Prompt trigger matching.

Each rule contributes at most one match. Keywords are checked first as
case-insensitive substrings; intent patterns are only tried when no
keyword matched.
"""

from __future__ import annotations

import logging
import re

from skill_triggers.config import Match, MatchType, Priority, SkillRule
from skill_triggers.merger import MergedRuleSet

logger = logging.getLogger(__name__)


def _keyword_hit(keywords: list[str], normalized_prompt: str) -> bool:
    return any(keyword.casefold() in normalized_prompt for keyword in keywords)


def _intent_hit(name: str, patterns: list[str], prompt: str) -> bool:
    for pattern in patterns:
        try:
            if re.search(pattern, prompt, re.IGNORECASE):
                return True
        except re.error as exc:
            logger.warning(
                "Ignoring invalid intent pattern %r for skill '%s': %s",
                pattern,
                name,
                exc,
            )
    return False


def match_rule(
    name: str,
    rule: SkillRule,
    prompt: str,
    *,
    normalized_prompt: str | None = None,
) -> Match | None:
    """Evaluate one rule's triggers against a prompt.

    Args:
        name: Skill name.
        rule: Rule to evaluate.
        prompt: Prompt as submitted.
        normalized_prompt: Case-folded prompt, when already computed.

    Returns:
        A ``Match`` labelled with the first trigger category that was
        satisfied, or ``None``.
    """
    triggers = rule.prompt_triggers
    if triggers is None:
        return None

    if normalized_prompt is None:
        normalized_prompt = prompt.casefold()

    if _keyword_hit(triggers.keywords, normalized_prompt):
        return Match(name=name, match_type=MatchType.KEYWORD, rule=rule)

    if _intent_hit(name, triggers.intent_patterns, prompt):
        return Match(name=name, match_type=MatchType.INTENT, rule=rule)

    return None


def match_rules(rule_set: MergedRuleSet, prompt: str) -> list[Match]:
    """Return every rule in ``rule_set`` that matches ``prompt``."""
    normalized = prompt.casefold()
    matches: list[Match] = []

    for name, rule in rule_set.skills.items():
        match = match_rule(name, rule, prompt, normalized_prompt=normalized)
        if match is not None:
            logger.debug("Skill '%s' matched by %s", name, match.match_type.value)
            matches.append(match)

    return matches


def group_matches(matches: list[Match]) -> dict[Priority, list[Match]]:
    """Partition matches by declared priority.

    The result always has one bucket per ``Priority`` member, in display
    order, so every match lands in exactly one bucket.
    """
    groups: dict[Priority, list[Match]] = {priority: [] for priority in Priority}
    for match in matches:
        groups[match.rule.priority].append(match)
    return groups
