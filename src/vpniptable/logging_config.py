"""
Logging configuration for vpniptable.

Console logging on stderr plus an optional rotating log file, and counters
for failures the application recovers from (dropped storage entries,
corrupt documents).
"""

import logging
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Any


LOGGER_NAME = "vpniptable"
DEFAULT_LOG_FILE = Path.home() / ".vpniptable" / "logs" / "vpniptable.log"

CONSOLE_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
FILE_FORMAT = '%(asctime)s | %(levelname)-8s | %(name)-28s | %(funcName)-16s | %(lineno)-4d | %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger(__name__)


def setup_logging(
    level: str = "WARNING",
    log_file: Path | str | None = None,
    enable_console: bool = True,
) -> logging.Logger:
    """
    Configure the package logger.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ...)
        log_file: Also write DEBUG-level records to this rotating file
        enable_console: Log to stderr at the given level

    Returns:
        The "vpniptable" logger
    """
    numeric_level = getattr(logging, level.upper())

    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(logging.DEBUG if log_file else numeric_level)
    root.handlers.clear()

    # stdout carries command output (exports), so logs go to stderr
    if enable_console:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT, DATE_FORMAT))
        root.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(log_path, maxBytes=1048576, backupCount=3, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, DATE_FORMAT))
        root.addHandler(file_handler)

    root.propagate = False
    return root


def configure_logging(debug: bool = False, log_to_file: bool = False, level: str = "WARNING") -> None:
    """Set up logging from CLI flags."""
    setup_logging(
        level="DEBUG" if debug else level,
        log_file=DEFAULT_LOG_FILE if log_to_file else None,
    )


class ErrorTracker:
    """Count recovered failures by type."""

    def __init__(self):
        self.errors: dict[str, int] = {}

    def log_error(
        self,
        error_type: str,
        message: str,
        exception: Exception | None = None,
        context: dict[str, Any] | None = None,
    ) -> None:
        self.errors[error_type] = self.errors.get(error_type, 0) + 1

        log_msg = f"{error_type}: {message}"
        if context:
            log_msg += f" | Context: {context}"
        logger.warning(log_msg, exc_info=exception)

    def counts(self) -> dict[str, int]:
        return self.errors.copy()

    def reset(self) -> None:
        self.errors.clear()


_error_tracker = ErrorTracker()


def track_error(
    error_type: str,
    message: str,
    exception: Exception | None = None,
    context: dict[str, Any] | None = None,
) -> None:
    """Log a recovered failure and count it."""
    _error_tracker.log_error(error_type, message, exception, context)


def get_error_stats() -> dict[str, int]:
    """Recovered failure counts by type."""
    return _error_tracker.counts()


def reset_error_stats() -> None:
    _error_tracker.reset()
