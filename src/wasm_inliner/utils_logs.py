# src/wasm_inliner/utils_logs.py
"""The package logger: TRACE and SILENT levels, tagged output, stdout/stderr split.

The active level lives in `current_runtime["log_level"]`; every
`get_logger()` call re-syncs the logger with it.
"""

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from typing import Any, cast

from .meta import PROGRAM_PACKAGE
from .runtime import current_runtime
from .utils import safe_log

RESET = "\033[0m"
CYAN = "\033[36m"
YELLOW = "\033[93m"
RED = "\033[91m"
GREEN = "\033[92m"
GRAY = "\033[90m"

TRACE_LEVEL = logging.DEBUG - 5
SILENT_LEVEL = logging.CRITICAL + 1
logging.addLevelName(TRACE_LEVEL, "TRACE")

# name → numeric level, least to most severe; "silent" disables all output
LEVELS: dict[str, int] = {
    "trace": TRACE_LEVEL,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "silent": SILENT_LEVEL,
}
LEVEL_ORDER = list(LEVELS)

# (color, tag) printed before the message; info has no tag
TAG_STYLES: dict[int, tuple[str, str]] = {
    TRACE_LEVEL: (GRAY, "[TRACE]"),
    logging.DEBUG: (CYAN, "[DEBUG]"),
    logging.WARNING: ("", "⚠️ "),
    logging.ERROR: ("", "❌ "),
    logging.CRITICAL: ("", "💥 "),
}


class LoggerWithTrace(logging.Logger):
    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, **kwargs)

    def error_if_not_debug(self, msg: str, *args: Any) -> None:
        """Log an error; include the active traceback only when debugging."""
        self.error(msg, *args, exc_info=self.isEnabledFor(logging.DEBUG))

    def critical_if_not_debug(self, msg: str, *args: Any) -> None:
        """Log a critical error; include the traceback only when debugging."""
        self.critical(msg, *args, exc_info=self.isEnabledFor(logging.DEBUG))


class TagFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        color, tag = TAG_STYLES.get(record.levelno, ("", ""))
        if not tag:
            return msg
        return f"{colorize(tag, color) if color else tag} {msg}"


class DualStreamHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Send info/debug/trace to stdout, warnings and worse to stderr."""

    def emit(self, record: logging.LogRecord) -> None:
        # looked up per record so pytest's capsys/monkeypatch see the output
        self.stream = sys.stderr if record.levelno >= logging.WARNING else sys.stdout
        super().emit(record)


def _build_logger() -> LoggerWithTrace:
    # setLoggerClass is process-wide; restore it so other libraries are unaffected
    previous = logging.getLoggerClass()
    logging.setLoggerClass(LoggerWithTrace)
    try:
        logger = cast("LoggerWithTrace", logging.getLogger(PROGRAM_PACKAGE))
    finally:
        logging.setLoggerClass(previous)

    if not any(isinstance(h, DualStreamHandler) for h in logger.handlers):
        handler = DualStreamHandler()
        handler.setFormatter(TagFormatter("%(message)s"))
        logger.addHandler(handler)
    logger.propagate = False
    return logger


_logger = _build_logger()


def get_logger() -> LoggerWithTrace:
    """Return the package logger at the runtime's current level."""
    level = str(current_runtime.get("log_level")).lower()
    _logger.setLevel(LEVELS.get(level, logging.INFO))
    return _logger


def get_log_level() -> str:
    """Return the runtime log level, or 'error' if it is unset or unknown."""
    level = current_runtime.get("log_level")
    if level in LEVELS:
        return cast("str", level)
    safe_log(f"[LOGGER ERROR] ❌ Unknown log level: {level!r}")
    return "error"


def set_log_level(level: str) -> None:
    current_runtime["log_level"] = level.lower()
    get_logger()


@contextmanager
def temporary_log_level(level: str) -> Generator[None, None, None]:
    prev = current_runtime["log_level"]
    set_log_level(level)
    try:
        yield
    finally:
        set_log_level(prev)


def log_dynamic(level: str, message: str) -> None:
    """Log `message` at a level given by name (e.g. 'info', 'trace')."""
    logger = get_logger()
    name = level.lower()
    if name in LEVELS and name != "silent":
        getattr(logger, name)(message)
    else:
        logger.error("Unknown log level: %r", level)


def colorize(text: str, color: str, *, use_color: bool | None = None) -> str:
    if use_color is None:
        use_color = current_runtime["use_color"]
    return f"{color}{text}{RESET}" if use_color else text
