"""One discovery, merge and match cycle for a submitted prompt."""

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from skill_triggers.discovery import SourceRoots, discover_sources
from skill_triggers.errors import HookInputError
from skill_triggers.filesystem import FileSystem, LocalFileSystem
from skill_triggers.matcher import match_rules
from skill_triggers.merger import merge_rules
from skill_triggers.verdict import Verdict, build_verdict

logger = logging.getLogger(__name__)


class HookInput(BaseModel):
    """Payload the host writes to stdin.

    Only ``prompt`` is used; the remaining fields are accepted so that
    newer hosts can add fields without breaking the hook.
    """

    model_config = ConfigDict(extra="allow")

    prompt: str
    session_id: str | None = None
    transcript_path: str | None = None
    cwd: str | None = None
    permission_mode: str | None = None


def parse_hook_input(raw: str) -> HookInput:
    """Parse the stdin payload.

    Args:
        raw: Everything read from stdin.

    Returns:
        Validated ``HookInput``.

    Raises:
        HookInputError: If the payload is empty, not a JSON object, or has
            no string ``prompt``.
    """
    if not raw.strip():
        raise HookInputError("no input received on stdin")

    try:
        data: Any = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise HookInputError(f"stdin is not valid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise HookInputError("expected a JSON object, got " + type(data).__name__)

    try:
        return HookInput.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(p) for p in e["loc"]) for e in exc.errors())
        raise HookInputError(f"invalid field(s): {fields}") from exc


def evaluate_prompt(
    prompt: str,
    roots: SourceRoots,
    fs: FileSystem | None = None,
) -> Verdict:
    """Discover and merge rule sources, then match them against ``prompt``.

    Args:
        prompt: Prompt as submitted by the user.
        roots: Home and project locations to discover rules under.
        fs: Filesystem to use. Defaults to the local filesystem.

    Returns:
        The verdict for this prompt.
    """
    fs = fs or LocalFileSystem()

    sources = discover_sources(roots, fs)
    rule_set = merge_rules(sources, fs)
    matches = match_rules(rule_set, prompt)

    logger.debug(
        "Matched %d of %d skill(s) from %d source(s)",
        len(matches),
        len(rule_set.skills),
        len(rule_set.loaded),
    )
    return build_verdict(matches)


def run_hook(
    raw: str,
    roots: SourceRoots,
    fs: FileSystem | None = None,
) -> str | None:
    """Run the full hook cycle on a raw stdin payload.

    Args:
        raw: Everything read from stdin.
        roots: Home and project locations to discover rules under.
        fs: Filesystem to use. Defaults to the local filesystem.

    Returns:
        The JSON document to write to stdout, or ``None`` when no skill matched.

    Raises:
        HookInputError: If the payload is malformed.
    """
    hook_input = parse_hook_input(raw)
    output = evaluate_prompt(hook_input.prompt, roots, fs).to_output()
    return output.to_json() if output is not None else None
