"""
Logging configuration for the helmgen CLI.

Generators write straight to the terminal helmgen runs in, so our own
log lines share stderr with whatever the generators print. Every
console line is therefore tagged ``helmgen:`` and kept to one line.

Level precedence:
    --debug / --verbose / --quiet  >  HELMGEN_LOG_LEVEL  >  WARNING

HELMGEN_LOG_FILE adds a file log (level HELMGEN_LOG_FILE_LEVEL, default
the console level) with timestamps, for CI runs where the terminal
output is interleaved.
"""

from __future__ import annotations

import logging
import os
import sys

ENV_LEVEL = "HELMGEN_LOG_LEVEL"
ENV_FILE = "HELMGEN_LOG_FILE"
ENV_FILE_LEVEL = "HELMGEN_LOG_FILE_LEVEL"

# console format per minimum level; the walk logs "File: ..., Command: ..." at DEBUG
_CONSOLE_FORMATS = {
    logging.DEBUG: "helmgen: %(levelname)s %(name)s:%(lineno)d %(message)s",
    logging.INFO: "helmgen: %(message)s",
    logging.WARNING: "helmgen: %(levelname)s: %(message)s",
}

_FILE_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_FILE_DATEFMT = "%Y-%m-%dT%H:%M:%S"


def resolve_level(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Pick the console level name from CLI flags, then the environment."""
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
    """Install the console handler (and optional file handler) on the root logger.

    Replaces any handlers already installed, so calling it twice is safe.
    """
    console_level = parse_level(level)
    fmt_key = max(k for k in _CONSOLE_FORMATS if k <= max(console_level, logging.DEBUG))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter(_CONSOLE_FORMATS[fmt_key]))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setLevel(file_level)
        handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)
    logging.raiseExceptions = False


def setup_from_environment(debug: bool = False, verbose: bool = False, quiet: bool = False) -> str:
    """Configure logging from CLI flags and HELMGEN_LOG_* variables.

    Returns:
        The console level name that was applied.
    """
    level = resolve_level(debug=debug, verbose=verbose, quiet=quiet)
    setup_logging(
        level=level,
        log_file=os.environ.get(ENV_FILE),
        log_file_level=os.environ.get(ENV_FILE_LEVEL),
    )
    return level


def parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
