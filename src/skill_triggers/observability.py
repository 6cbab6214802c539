"""Logging setup.

stdout carries the hook payload, so all diagnostics go to stderr.
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "skill_triggers"

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logging(
    level: str | int = logging.WARNING,
    *,
    stream: TextIO | None = None,
    fmt: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Configure the package logger to write to stderr.

    Calling this more than once replaces the handler installed by the
    previous call instead of stacking another one.

    Args:
        level: Level name or number.
        stream: Stream to write to. Defaults to ``sys.stderr``.
        fmt: Log record format.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_skill_triggers", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler._skill_triggers = True  # type: ignore[attr-defined]
    logger.addHandler(handler)

    return logger
