"""Environment-driven settings for the hook."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from skill_triggers.discovery import SourceRoots


class HookSettings(BaseSettings):
    """Settings read from the environment the host runs the hook in.

    Attributes:
        home: User home directory (``HOME``).
        project_dir: Project directory (``CLAUDE_PROJECT_DIR``, defaults to
            the current working directory).
        plugin_root: Root of the plugin providing the hook (``CLAUDE_PLUGIN_ROOT``).
        log_level: Level for diagnostics on stderr (``SKILL_TRIGGERS_LOG_LEVEL``).
    """

    model_config = SettingsConfigDict(
        env_prefix="SKILL_TRIGGERS_",
        populate_by_name=True,
        extra="ignore",
    )

    home: Path = Field(default_factory=Path.home, validation_alias="HOME")
    project_dir: Path = Field(default_factory=Path.cwd, validation_alias="CLAUDE_PROJECT_DIR")
    plugin_root: Path | None = Field(default=None, validation_alias="CLAUDE_PLUGIN_ROOT")
    log_level: str = Field(default="WARNING", description="Logging level name")

    @field_validator("home", mode="before")
    @classmethod
    def _empty_home(cls, value: Any) -> Any:
        return value or Path.home()

    @field_validator("project_dir", mode="before")
    @classmethod
    def _empty_project_dir(cls, value: Any) -> Any:
        return value or Path.cwd()

    @field_validator("plugin_root", mode="before")
    @classmethod
    def _empty_plugin_root(cls, value: Any) -> Any:
        return value or None

    @field_validator("log_level")
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    def roots(self) -> SourceRoots:
        """Root locations for rule discovery."""
        return SourceRoots(
            home=self.home,
            project_dir=self.project_dir,
            plugin_root=self.plugin_root,
        )
