"""
Logging configuration — one root setup for the CLI.

Modules log through ``logging.getLogger(__name__)``; ``setup_logging``
is called once from main.py and decides where records go.

Console level, highest precedence first:
    --debug / --verbose / --quiet  >  $WSP_LOG_LEVEL  >  WARNING

A second handler writes to $WSP_LOG_FILE when set, at
$WSP_LOG_FILE_LEVEL (default: the console level). Toolchain stderr is
logged at INFO and stdout at DEBUG, so ``--verbose`` surfaces cargo and
wasm-pack diagnostics.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping

LEVEL_ENV = "WSP_LOG_LEVEL"
FILE_ENV = "WSP_LOG_FILE"
FILE_LEVEL_ENV = "WSP_LOG_FILE_LEVEL"

# Console formats by threshold: (max level, format, datefmt)
_CONSOLE_FORMATS = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
)
_CONSOLE_DEFAULT = "%(message)s"

_FILE_FORMAT = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str | None) -> int:
    """Convert a level name to its numeric constant (unknown → WARNING)."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric


def resolve_level(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(LEVEL_ENV, "WARNING")


def _console_formatter(numeric_level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_FORMATS:
        if numeric_level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_DEFAULT)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> None:
    """Install the console handler and, optionally, a file handler.

    Args:
        level: Console level name.
        log_file: Log file path (default: $WSP_LOG_FILE).
        log_file_level: File level name (default: $WSP_LOG_FILE_LEVEL,
            then ``level``).
        environ: Environment to read defaults from (default: os.environ).
    """
    env = os.environ if environ is None else environ
    log_file = log_file or env.get(FILE_ENV) or None
    log_file_level = log_file_level or env.get(FILE_LEVEL_ENV) or None

    console_level = parse_level(level)
    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(_console_formatter(console_level))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)
    root_level = console_level

    if log_file:
        file_level = parse_level(log_file_level) if log_file_level else console_level
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
        root.addHandler(file_handler)
        root_level = min(root_level, file_level)

    root.setLevel(root_level)

    # A broken stderr must not turn logging into a crash
    logging.raiseExceptions = False
