"""Verdict construction and hook output serialization."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from jinja2 import Environment, StrictUndefined
from pydantic import BaseModel, ConfigDict, Field

from skill_triggers.config import Enforcement, Match, Priority
from skill_triggers.matcher import group_matches

HOOK_EVENT_NAME = "UserPromptSubmit"

# Block tags sit at column 0; trim_blocks drops the newline after each.
CONTEXT_TEMPLATE = """\
SKILL ACTIVATION CHECK

{% for group in groups %}
{{ group.header }}:
{% for name in group.names %}
  - {{ name }}
{% endfor %}

{% endfor %}
ACTION: Use Skill tool BEFORE responding
"""

_env = Environment(
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
    autoescape=False,
)
_context_template = _env.from_string(CONTEXT_TEMPLATE)


class HookSpecificOutput(BaseModel):
    """Event-scoped part of the hook payload."""

    model_config = ConfigDict(populate_by_name=True)

    hook_event_name: str = Field(default=HOOK_EVENT_NAME, alias="hookEventName")
    additional_context: str = Field(alias="additionalContext")


class HookOutput(BaseModel):
    """Payload written to stdout for the host.

    Attributes:
        hook_specific_output: Context to inject before the prompt is handled.
        decision: ``"block"`` when a critical blocking skill matched.
        reason: Why the prompt was blocked.
    """

    model_config = ConfigDict(populate_by_name=True)

    hook_specific_output: HookSpecificOutput = Field(alias="hookSpecificOutput")
    decision: Literal["block"] | None = None
    reason: str | None = None

    def to_json(self) -> str:
        """Serialize with wire field names, omitting unset decision fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


@dataclass
class Verdict:
    """Outcome of matching one prompt.

    Attributes:
        matches: Every matched rule.
        groups: Matches bucketed by priority, in display order. Derived
            from ``matches``.
    """

    matches: list[Match]
    groups: dict[Priority, list[Match]] = field(init=False)

    def __post_init__(self) -> None:
        self.groups = group_matches(self.matches)

    @property
    def blocking(self) -> list[str]:
        """Names of matched critical rules whose enforcement is ``block``."""
        return [
            m.name
            for m in self.groups.get(Priority.CRITICAL, [])
            if m.rule.enforcement is Enforcement.BLOCK
        ]

    @property
    def should_block(self) -> bool:
        return bool(self.blocking)

    @property
    def additional_context(self) -> str:
        """Human-readable summary of the matched skills."""
        groups = [
            {"header": priority.header, "names": [m.name for m in matches]}
            for priority, matches in self.groups.items()
            if matches
        ]
        return _context_template.render(groups=groups)

    @property
    def reason(self) -> str | None:
        if not self.should_block:
            return None
        return (
            f"Critical skill required: {', '.join(self.blocking)}. "
            "Please use the skill tool to invoke these skills first."
        )

    def to_output(self) -> HookOutput | None:
        """Build the hook payload, or ``None`` when nothing matched."""
        if not self.matches:
            return None

        return HookOutput(
            hook_specific_output=HookSpecificOutput(
                additional_context=self.additional_context,
            ),
            decision="block" if self.should_block else None,
            reason=self.reason,
        )


def build_verdict(matches: list[Match]) -> Verdict:
    """Group matches by priority and wrap them in a ``Verdict``."""
    return Verdict(matches=list(matches))
