"""
Logging configuration — set up once by the CLI at process start.

Every module logs through ``logging.getLogger(__name__)``; installer
state transitions and orchestrator phases reach the console and,
optionally, an append-only log file (the install.log of a run).

Level precedence:
    --debug / --verbose / --quiet  >  HOSTPREP_LOG_LEVEL  >  WARNING

File output: HOSTPREP_LOG_FILE, at HOSTPREP_LOG_FILE_LEVEL (defaults
to the console level).
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

ENV_LEVEL = "HOSTPREP_LOG_LEVEL"
ENV_FILE = "HOSTPREP_LOG_FILE"
ENV_FILE_LEVEL = "HOSTPREP_LOG_FILE_LEVEL"

# Console formats by verbosity: bare messages by default, timestamps
# once the user asks for progress, source location for debugging.
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(levelname)-7s] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(message)s", None),
}

_FILE_FORMAT = "%(asctime)s [%(levelname)-7s] %(name)s — %(message)s"
_FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# urllib3 only shows up if something pulls in requests; kept quiet regardless
_NOISY_LOGGERS = ("urllib3", "charset_normalizer")


def resolve_level(
    *,
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str:
    """Pick the console level from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if environ is None else environ
    return env.get(ENV_LEVEL, "WARNING")


def _parse_level(level: str | None) -> int:
    """Level name → numeric constant; unknown names mean WARNING."""
    numeric = getattr(logging, (level or "").upper(), None)
    return numeric if isinstance(numeric, int) else logging.WARNING


def _console_handler(level: int) -> logging.Handler:
    if level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_FORMATS[logging.DEBUG]
    elif level <= logging.INFO:
        fmt, datefmt = _CONSOLE_FORMATS[logging.INFO]
    else:
        fmt, datefmt = _CONSOLE_FORMATS[logging.WARNING]
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str, level: int) -> logging.Handler:
    Path(path).expanduser().parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(Path(path).expanduser(), mode="a", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATEFMT))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for the whole process.

    Replaces any handlers installed by an earlier call, so calling it
    again (e.g. from tests) does not duplicate output.
    """
    console_level = _parse_level(level)
    handlers = [_console_handler(console_level)]
    root_level = console_level

    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        handlers.append(_file_handler(log_file, file_level))
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(root_level)

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    # a broken log file must never abort an install
    logging.raiseExceptions = False
