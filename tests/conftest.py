"""Shared test fixtures and configuration for skill-triggers tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any

import pytest

from skill_triggers.discovery import SourceRoots


class FakeFileSystem:
    """In-memory ``FileSystem`` for tests.

    Directories are implied by the files they contain. Paths listed in
    ``unreadable`` raise on read; paths in ``unlistable`` raise on listing.
    """

    def __init__(
        self,
        files: dict[Path | str, str] | None = None,
        *,
        unreadable: Iterable[Path | str] = (),
        unlistable: Iterable[Path | str] = (),
    ) -> None:
        self.files = {Path(p): content for p, content in (files or {}).items()}
        self.unreadable = {Path(p) for p in unreadable}
        self.unlistable = {Path(p) for p in unlistable}
        self.reads: list[Path] = []

    def add(self, path: Path | str, content: str) -> None:
        self.files[Path(path)] = content

    def _dirs(self) -> set[Path]:
        dirs: set[Path] = set()
        for path in self.files:
            dirs.update(path.parents)
        return dirs

    def is_file(self, path: Path) -> bool:
        return path in self.files

    def is_dir(self, path: Path) -> bool:
        return path in self._dirs()

    def list_dir(self, path: Path) -> list[str]:
        if path in self.unlistable:
            raise PermissionError(f"Permission denied: {path}")
        if not self.is_dir(path):
            raise FileNotFoundError(f"No such directory: {path}")
        children = {p.name for p in (*self.files, *self._dirs()) if p.parent == path and p != path}
        return sorted(children)

    def read_text(self, path: Path) -> str:
        self.reads.append(path)
        if path in self.unreadable:
            raise PermissionError(f"Permission denied: {path}")
        if path not in self.files:
            raise FileNotFoundError(f"No such file: {path}")
        return self.files[path]


def rule(
    *,
    type: str = "domain",
    enforcement: str = "suggest",
    priority: str = "high",
    keywords: list[str] | None = None,
    intent_patterns: list[str] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build a raw rule entry as it appears in skill-rules.json."""
    entry: dict[str, Any] = {
        "type": type,
        "enforcement": enforcement,
        "priority": priority,
        **extra,
    }
    triggers: dict[str, Any] = {}
    if keywords is not None:
        triggers["keywords"] = keywords
    if intent_patterns is not None:
        triggers["intentPatterns"] = intent_patterns
    if triggers:
        entry["promptTriggers"] = triggers
    return entry


def rules_document(skills: dict[str, dict[str, Any]], version: str = "1.0") -> str:
    """Serialize a skill-rules.json document."""
    return json.dumps({"version": version, "skills": skills})


@pytest.fixture
def fake_fs() -> FakeFileSystem:
    """Provide an empty in-memory filesystem."""
    return FakeFileSystem()


@pytest.fixture
def roots(tmp_path: Path) -> SourceRoots:
    """Provide home and project roots under ``tmp_path``."""
    home = tmp_path / "home"
    project = tmp_path / "project"
    home.mkdir()
    project.mkdir()
    return SourceRoots(home=home, project_dir=project)


@pytest.fixture
def write_rules(roots: SourceRoots) -> Callable[..., Path]:
    """Factory fixture that writes a rule file at a given tier.

    Usage:
        def test_something(write_rules):
            write_rules("project", {"x": rule(keywords=["x"])})
            write_rules("global-plugin", {...}, marketplace="m", plugin="p")
            write_rules("global", raw="{not json")
    """

    def _write(
        tier: str,
        skills: dict[str, dict[str, Any]] | None = None,
        *,
        raw: str | None = None,
        marketplace: str = "official",
        plugin: str = "toolkit",
    ) -> Path:
        if tier == "global":
            path = roots.home / ".claude" / "skills" / "skill-rules.json"
        elif tier == "global-plugin":
            path = (
                roots.home / ".claude" / "plugins" / "marketplaces" / marketplace
                / "plugins" / plugin / "skills" / "skill-rules.json"
            )
        elif tier == "project-plugin":
            path = (
                roots.project_dir / ".claude" / "plugins" / plugin
                / "skills" / "skill-rules.json"
            )
        elif tier == "project":
            path = roots.project_dir / ".claude" / "skills" / "skill-rules.json"
        else:
            raise ValueError(f"Unknown tier: {tier}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(raw if raw is not None else rules_document(skills or {}), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def make_rule() -> Callable[..., dict[str, Any]]:
    """Factory fixture returning raw rule entries.

    Usage:
        def test_something(make_rule):
            entry = make_rule(priority="critical", enforcement="block", keywords=["deploy"])
    """
    return rule


@pytest.fixture
def make_document() -> Callable[..., str]:
    """Factory fixture returning serialized skill-rules.json documents."""
    return rules_document


@pytest.fixture
def make_fs() -> type[FakeFileSystem]:
    """Factory fixture returning the in-memory filesystem class.

    Usage:
        def test_something(make_fs):
            fs = make_fs({"/home/u/.claude/skills/skill-rules.json": "{}"}, unreadable=[...])
    """
    return FakeFileSystem


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    """Drop handlers installed by setup_logging so they do not outlive a test."""
    yield
    logger = logging.getLogger("skill_triggers")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
