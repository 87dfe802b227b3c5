"""
Logging configuration — set up once by the CLI before a run starts.

Every module logs through ``logging.getLogger(__name__)``. What the
user sees as progress ("Installing Plugins...") is not logging; it goes
through the orchestrator's reporter. Logs are the diagnostic channel:
quiet by default, timestamped with ``-v``, file:line with ``--debug``.

Level precedence:
    --debug  >  --verbose  >  --quiet  >  BOOTSTRAPPER_LOG_LEVEL  >  WARNING

BOOTSTRAPPER_LOG_FILE adds a file handler, always at full detail
format, at BOOTSTRAPPER_LOG_FILE_LEVEL (default: the console level).
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "BOOTSTRAPPER_LOG_LEVEL"
ENV_FILE = "BOOTSTRAPPER_LOG_FILE"
ENV_FILE_LEVEL = "BOOTSTRAPPER_LOG_FILE_LEVEL"

_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FMT_DEFAULT = ("%(levelname)s: %(message)s", None)
_FMT_FILE = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%Y-%m-%d %H:%M:%S")

# Library loggers held at WARNING below --debug
_NOISY_LOGGERS = ("urllib3",)


def resolve_level(
    verbose: bool = False,
    quiet: bool = False,
    debug: bool = False,
) -> str:
    """Pick the console level name from CLI flags and the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    return os.environ.get(ENV_LEVEL, "WARNING")


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure the root logger for the whole process.

    Args:
        level: Console level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional log file path (default: BOOTSTRAPPER_LOG_FILE).
        log_file_level: Level for the file (default: BOOTSTRAPPER_LOG_FILE_LEVEL,
            then ``level``).
    """
    console_level = _parse_level(level)
    log_file = log_file or os.environ.get(ENV_FILE)
    log_file_level = log_file_level or os.environ.get(ENV_FILE_LEVEL)

    fmt, datefmt = _format_for(console_level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(fmt, datefmt=datefmt))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(*_FMT_FILE))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    if console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    logging.raiseExceptions = False


def _format_for(level: int) -> tuple[str, str | None]:
    for threshold in sorted(_FORMATS):
        if level <= threshold:
            return _FORMATS[threshold]
    return _FMT_DEFAULT


def _parse_level(level: str | None) -> int:
    """Convert a level name to its numeric value (WARNING if unknown)."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING
