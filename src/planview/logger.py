"""Logging for planview with verbosity-driven semantic levels."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

# Custom levels sit between the standard ones
CHANGES_LEVEL = 25  # Between INFO (20) and WARNING (30): derived results
CHECKS_LEVEL = 15  # Between DEBUG (10) and INFO (20): fetches and inputs

logging.addLevelName(CHANGES_LEVEL, "CHANGES")
logging.addLevelName(CHECKS_LEVEL, "CHECKS")

VERBOSITY_SILENT = 0
VERBOSITY_CHANGES = 1
VERBOSITY_CHECKS = 2
VERBOSITY_DEBUG = 3

_LEVEL_BY_VERBOSITY = {
    VERBOSITY_SILENT: logging.WARNING,
    VERBOSITY_CHANGES: CHANGES_LEVEL,
    VERBOSITY_CHECKS: CHECKS_LEVEL,
    VERBOSITY_DEBUG: logging.DEBUG,
}


class PlanviewLogger(logging.Logger):
    """Logger with one method per verbosity level.

    - changes(): level 1, derived schedule results (timeline, critical path)
    - checks(): level 2, what was fetched from the task store
    - debug(): level 3, per-node traversal details
    """

    def changes(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a derived result (verbosity level 1)."""
        if self.isEnabledFor(CHANGES_LEVEL):
            self._log(CHANGES_LEVEL, msg, args, **kwargs)

    def checks(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an input check (verbosity level 2)."""
        if self.isEnabledFor(CHECKS_LEVEL):
            self._log(CHECKS_LEVEL, msg, args, **kwargs)


def get_logger() -> PlanviewLogger:
    """Return the planview logger singleton."""
    logging.setLoggerClass(PlanviewLogger)
    logger = logging.getLogger("planview")
    assert isinstance(logger, PlanviewLogger)
    return logger


def setup_logger(verbosity: int, stream: TextIO | None = None) -> None:
    """Configure the planview logger.

    Safe to call repeatedly; previous handlers are replaced.

    Args:
        verbosity: 0=warnings and errors, 1=changes, 2=checks, 3=debug
        stream: Output stream, defaults to sys.stderr
    """
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(_LEVEL_BY_VERBOSITY.get(verbosity, logging.DEBUG))

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False


def reset_logger() -> None:
    """Drop handlers and restore the default level (used between tests)."""
    logger = get_logger()
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)
    logger.propagate = True


def debug_enabled() -> bool:
    """Check if debug-level logging is enabled (verbosity >= 3)."""
    return get_logger().isEnabledFor(logging.DEBUG)
