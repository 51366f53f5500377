"""
Logging configuration — one-time setup for the scaffold CLI.

Every module logs through ``logging.getLogger(__name__)`` and inherits
whatever this installs on the root logger. Records are stamped with the
generator step that emitted them (``%(step)s``, e.g. ``ember:all:writing``),
so output from nested hook runs stays attributable.

Levels are resolved in precedence order:
    CLI flag  >  SCAFFOLD_LOG_LEVEL env var  >  WARNING (default)

Optional file output via SCAFFOLD_LOG_FILE / SCAFFOLD_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from contextvars import ContextVar
from typing import Iterator

# "<resolved>:<step>" of the step currently running in this context
current_step: ContextVar[str] = ContextVar("scaffold_step", default="-")

# (format, datefmt) per console level; the first entry whose level is
# >= the configured level wins
_CONSOLE_FORMATS: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(step)s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(step)s] %(message)s", "%H:%M:%S"),
)
_FMT_MINIMAL = "%(message)s"

_FMT_FILE = "%(asctime)s %(levelname)-5s %(step)s %(name)s:%(lineno)d  %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

# asyncio logs slow-callback and debug chatter we never want at INFO
_NOISY_LOGGERS = ("asyncio",)


class StepFilter(logging.Filter):
    """Attach the running step (or ``-``) to every record as ``step``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "step"):
            record.step = current_step.get()
        return True


@contextlib.contextmanager
def step_scope(generator: str, step: str) -> Iterator[None]:
    """Mark ``generator:step`` as the running step for the enclosed block."""
    token = current_step.set(f"{generator}:{step}")
    try:
        yield
    finally:
        current_step.reset(token)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure logging for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Level for the log file; defaults to ``level``.
        quiet_third_party: Keep noisy library loggers at WARNING unless
            running at DEBUG.
    """
    numeric_level = _parse_level(level)
    fmt, datefmt = _console_format(numeric_level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_handler(logging.StreamHandler(sys.stderr), numeric_level, fmt, datefmt))

    effective_level = numeric_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)
        root.addHandler(_handler(
            logging.FileHandler(log_file, encoding="utf-8"),
            file_level,
            _FMT_FILE,
            _DATEFMT_FILE,
        ))

    root.setLevel(effective_level)

    if quiet_third_party and numeric_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _console_format(numeric_level: int) -> tuple[str, str | None]:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if numeric_level <= threshold:
            return fmt, datefmt
    return _FMT_MINIMAL, None


def _handler(handler: logging.Handler, level: int, fmt: str, datefmt: str | None) -> logging.Handler:
    handler.setLevel(level)
    handler.addFilter(StepFilter())
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (WARNING if unknown)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
