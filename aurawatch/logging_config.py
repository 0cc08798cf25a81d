"""
Logging setup for Aurawatch.

Every module logs through ``get_logger(__name__)``, which places its
logger under the ``aurawatch`` package logger. ``setup_logging`` is
called once by the CLI or the daemon and decides where those records go.
"""

import logging
import logging.handlers
import sys
from pathlib import Path

PACKAGE_LOGGER = "aurawatch"
DEFAULT_LOG_FILENAME = "aurawatch.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_log_file(log_file: str | Path) -> Path:
    """
    Path of the file to log to.

    A directory (existing, or given with a trailing separator) gets
    ``aurawatch.log`` inside it.
    """
    path = Path(log_file)
    if path.is_dir() or str(log_file).endswith(("/", "\\")):
        path = path / DEFAULT_LOG_FILENAME
    return path


def setup_logging(
    level: str = "INFO",
    log_file: str | Path | None = None,
    max_bytes: int = 5 * 1024 * 1024,
    backup_count: int = 3
) -> None:
    """
    Send Aurawatch's records to stdout and, optionally, a rotating file.

    Calling this again replaces (and closes) the handlers installed by
    the previous call.

    Args:
        level: Level name; unknown names mean INFO
        log_file: File or directory for a rotating log, created if missing
        max_bytes: Size at which the log file rotates
        backup_count: Rotated files to keep
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        path = resolve_log_file(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8"
        ))

    for handler in handlers:
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    package_logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """Logger for a module, always under the ``aurawatch`` package logger."""
    prefix = f"{PACKAGE_LOGGER}."
    if name.startswith(prefix):
        name = name[len(prefix):]
    return logging.getLogger(prefix + name)
