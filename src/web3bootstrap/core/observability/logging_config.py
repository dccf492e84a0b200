"""
Logging for the bootstrapper.

Status lines and the summary are printed by the CLI on stdout; log
records go to stderr and, optionally, to a file that keeps a record of
every installer command that ran.

The console level comes from the first source that sets one:
``--debug`` / ``--verbose`` / ``--quiet``, then ``W3B_LOG_LEVEL``,
then WARNING.
"""

from __future__ import annotations

import logging
import os
import sys

LEVEL_ENV = "W3B_LOG_LEVEL"
FILE_ENV = "W3B_LOG_FILE"
FILE_LEVEL_ENV = "W3B_LOG_FILE_LEVEL"

# (most verbose level shown, format, date format); first match wins
_CONSOLE_STYLES: tuple[tuple[int, str, str | None], ...] = (
    (logging.DEBUG, "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    (logging.INFO, "%(asctime)s %(message)s", "%H:%M:%S"),
)
_CONSOLE_PLAIN = "%(message)s"

_FILE_STYLE = ("%(asctime)s %(levelname)s %(name)s  %(message)s", "%Y-%m-%dT%H:%M:%S")


def level_from_flags(
    debug: bool = False,
    verbose: bool = False,
    quiet: bool = False,
    env: dict[str, str] | None = None,
) -> str:
    """Pick the console level name from CLI flags, then the environment."""
    if debug:
        return "DEBUG"
    if verbose:
        return "INFO"
    if quiet:
        return "ERROR"
    env = os.environ if env is None else env
    return env.get(LEVEL_ENV) or "WARNING"


def to_level(name: str | None, default: int = logging.WARNING) -> int:
    """Numeric level for ``name``; unknown or empty names give ``default``."""
    if not name:
        return default
    value = logging.getLevelName(name.strip().upper())
    return value if isinstance(value, int) else default


def console_formatter(level: int) -> logging.Formatter:
    for threshold, fmt, datefmt in _CONSOLE_STYLES:
        if level <= threshold:
            return logging.Formatter(fmt, datefmt=datefmt)
    return logging.Formatter(_CONSOLE_PLAIN)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> logging.Logger:
    """Install the console (and optional file) handler on the root logger.

    Safe to call more than once: previous handlers are replaced.

    Args:
        level: Console level name.
        log_file: Append log records to this path as well.
        log_file_level: Level for the file; defaults to the console level.

    Returns:
        The root logger.
    """
    console_level = to_level(level)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(console_formatter(console_level))
    handlers: list[logging.Handler] = [console]

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(to_level(log_file_level, default=console_level))
        file_handler.setFormatter(logging.Formatter(*_FILE_STYLE))
        handlers.append(file_handler)

    root = logging.getLogger()
    for old in list(root.handlers):
        root.removeHandler(old)
        if isinstance(old, logging.FileHandler):
            old.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(min(h.level for h in handlers))

    logging.raiseExceptions = False
    return root
