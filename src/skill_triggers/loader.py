"""Loader for ``skill-rules.json`` files."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from skill_triggers.config import SkillRulesFile
from skill_triggers.errors import (
    RuleFileNotFoundError,
    RuleFileParseError,
    RuleFileReadError,
)
from skill_triggers.filesystem import FileSystem, LocalFileSystem


def _format_validation_error(exc: ValidationError) -> str:
    """Flatten a pydantic error into ``loc: msg`` pairs."""
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error["loc"]) or "<root>"
        parts.append(f"{loc}: {error['msg']}")
    return "; ".join(parts)


def parse_rules_document(text: str, path: str | Path) -> SkillRulesFile:
    """Parse the text of a rule file.

    Args:
        text: Raw file content.
        path: File path (for error messages).

    Returns:
        Validated ``SkillRulesFile``.

    Raises:
        RuleFileParseError: If the text is not JSON or does not match the
            rule file structure.
    """
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RuleFileParseError(path, f"Invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise RuleFileParseError(
            path,
            "Rule file must be a JSON object, got " + type(data).__name__,
        )

    try:
        return SkillRulesFile.model_validate(data)
    except ValidationError as exc:
        raise RuleFileParseError(path, _format_validation_error(exc)) from exc


def load_rules_file(
    path: str | Path,
    fs: FileSystem | None = None,
) -> SkillRulesFile:
    """Load and validate a ``skill-rules.json`` file.

    Args:
        path: Path to the rule file. Supports ``~`` expansion.
        fs: Filesystem to read from. Defaults to the local filesystem.

    Returns:
        Validated ``SkillRulesFile``.

    Raises:
        RuleFileNotFoundError: If the file does not exist.
        RuleFileReadError: On permission denied, IO errors, or non UTF-8 content.
        RuleFileParseError: If the file is not valid JSON or has the wrong structure.

    Example:
        >>> rules = load_rules_file("~/.claude/skills/skill-rules.json")
        >>> sorted(rules.skills)
        ['backend-dev-guidelines', 'skill-developer']

    Supported format:
        {
          "version": "1.0",
          "skills": {
            "skill-developer": {
              "type": "domain",
              "enforcement": "suggest",
              "priority": "high",
              "promptTriggers": {
                "keywords": ["skill", "skill-rules"],
                "intentPatterns": ["(create|add).*?skill"]
              }
            }
          }
        }
    """
    fs = fs or LocalFileSystem()
    file_path = Path(path).expanduser()

    if not fs.is_file(file_path):
        raise RuleFileNotFoundError(file_path)

    try:
        content = fs.read_text(file_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise RuleFileReadError(file_path, cause=exc) from exc

    return parse_rules_document(content, file_path)
