"""
Logging configuration: console output and the install run log.

``setup_logging`` runs once at startup from main.py and only attaches
the console handler.  Commands that change the machine (install,
uninstall) then call ``start_run_log``, which re-configures logging with
the run log attached.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Console level precedence:
    CLI flag  >  DEVSTACK_LOG_LEVEL env var  >  WARNING (default)

Run log location:
    DEVSTACK_LOG_FILE env var  >  config ``log_file``  (``install_log.txt``)

The run log is appended to, so successive runs accumulate in the same
file.  It records at INFO (or DEVSTACK_LOG_FILE_LEVEL) regardless of
the console level: every command, its output and every outcome.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

# Console formats, by level
_CONSOLE_FORMATS: dict[int, tuple[str, str | None]] = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
    logging.WARNING: ("%(message)s", None),
}

_FMT_RUN_LOG = "%(asctime)s %(levelname)-5s %(name)s  %(message)s"
_DATEFMT_RUN_LOG = "%Y-%m-%d %H:%M:%S"

ENV_LOG_LEVEL = "DEVSTACK_LOG_LEVEL"
ENV_LOG_FILE = "DEVSTACK_LOG_FILE"
ENV_LOG_FILE_LEVEL = "DEVSTACK_LOG_FILE_LEVEL"


def _console_handler(numeric_level: int) -> logging.Handler:
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _CONSOLE_FORMATS[logging.DEBUG]
    elif numeric_level <= logging.INFO:
        fmt, datefmt = _CONSOLE_FORMATS[logging.INFO]
    else:
        fmt, datefmt = _CONSOLE_FORMATS[logging.WARNING]

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(numeric_level)
    handler.setFormatter(logging.Formatter(fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: str = "WARNING",
    log_file: Path | str | None = None,
    log_file_level: str | None = "INFO",
) -> None:
    """Configure Python logging for the entire process.

    Replaces any handlers already on the root logger, so calling it a
    second time (to attach the run log) does not duplicate output.

    Args:
        level: Console log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional run log path; parent directories are created.
        log_file_level: Level for the run log.  ``None`` uses ``level``.

    Raises:
        OSError: When the run log can't be opened.
    """
    numeric_level = _parse_level(level)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_console_handler(numeric_level))

    # The root must let through whatever the lowest handler wants
    effective_level = numeric_level

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(path, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_RUN_LOG, datefmt=_DATEFMT_RUN_LOG))
        root.addHandler(fh)

    root.setLevel(effective_level)


def run_log_path(configured: Path) -> Path:
    """Where this run's log goes: ``DEVSTACK_LOG_FILE`` or the config path."""
    override = os.environ.get(ENV_LOG_FILE)
    return Path(override).expanduser() if override else configured


def start_run_log(level: str, configured: Path) -> Path:
    """Re-configure logging with the append-mode run log attached.

    Args:
        level: Console level chosen at startup.
        configured: The config's ``log_file``, already expanded.

    Returns:
        The run log path in use.

    Raises:
        OSError: When the run log directory or file can't be created.
    """
    path = run_log_path(configured)
    setup_logging(
        level=level,
        log_file=path,
        log_file_level=os.environ.get(ENV_LOG_FILE_LEVEL, "INFO"),
    )
    logging.getLogger(__name__).debug("Run log: %s", path)
    return path


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.WARNING
    numeric = getattr(logging, level.upper(), None)
    if not isinstance(numeric, int):
        return logging.WARNING
    return numeric
