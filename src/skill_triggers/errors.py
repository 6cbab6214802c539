"""Skill trigger exceptions."""

from __future__ import annotations

from pathlib import Path


class SkillTriggerError(Exception):
    """Base exception for all skill trigger errors.

    All custom exceptions in this package inherit from this class,
    allowing callers to catch every trigger error with a single handler.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class RuleFileError(SkillTriggerError):
    """Base class for errors raised while loading a ``skill-rules.json`` file.

    Attributes:
        path: Filesystem path of the rule file.
    """

    def __init__(self, path: str | Path, message: str) -> None:
        """Initialize the error.

        Args:
            path: Filesystem path of the rule file.
            message: Human-readable error message.
        """
        self.path = Path(path)
        super().__init__(message)

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.message))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, message={self.message!r})"


class RuleFileNotFoundError(RuleFileError):
    """Raised when a rule file does not exist."""

    def __init__(self, path: str | Path) -> None:
        """Initialize the error.

        Args:
            path: Filesystem path that was checked.
        """
        super().__init__(path, f"Rule file not found: {Path(path)}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path),))


class RuleFileReadError(RuleFileError):
    """Raised on permission denied, disk errors, or undecodable bytes.

    Attributes:
        cause: Original exception that caused the read failure.
    """

    def __init__(self, path: str | Path, cause: Exception | None = None) -> None:
        """Initialize the error.

        Args:
            path: Filesystem path that could not be read.
            cause: Original exception that caused the read failure.
        """
        self.cause = cause
        cause_str = f" ({cause})" if cause else ""
        super().__init__(path, f"Failed to read rule file {Path(path)}{cause_str}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (_rebuild_rule_file_read_error, (str(self.path), self.cause))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, cause={self.cause!r})"


class RuleFileParseError(RuleFileError):
    """Raised when a rule file is not valid JSON or has the wrong structure.

    Attributes:
        detail: Description of the parse failure.
    """

    def __init__(self, path: str | Path, detail: str) -> None:
        """Initialize the error.

        Args:
            path: Filesystem path of the rule file.
            detail: Description of the parse failure.
        """
        self.detail = detail
        super().__init__(path, f"Failed to parse rule file {Path(path)}: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (str(self.path), self.detail))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(path={str(self.path)!r}, detail={self.detail!r})"


class HookInputError(SkillTriggerError):
    """Raised when the hook payload on stdin is missing or malformed.

    Attributes:
        detail: Description of what is wrong with the payload.
    """

    def __init__(self, detail: str) -> None:
        """Initialize the error.

        Args:
            detail: Description of what is wrong with the payload.
        """
        self.detail = detail
        super().__init__(f"Invalid hook input: {detail}")

    def __reduce__(self) -> tuple:
        """Support pickling by returning constructor arguments."""
        return (type(self), (self.detail,))

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(detail={self.detail!r})"


def _rebuild_rule_file_read_error(
    path: str,
    cause: Exception | None,
) -> RuleFileReadError:
    """Rebuild a RuleFileReadError from pickled arguments."""
    return RuleFileReadError(path, cause=cause)
