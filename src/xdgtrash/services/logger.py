# Filename: logger.py
# Author: Rich Lewis @RichLewis007
# Description: Logging configuration for the xdg-trash command. Keeps a small rotating
#              history of trashed items on disk and prints warnings to the console.

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from .config import default_log_dir

LOG_FILE_NAME = "xdg-trash.log"

# One line per trashed item; a few hundred KiB holds thousands of entries.
_MAX_LOG_BYTES = 256 * 1024
_BACKUP_COUNT = 3

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _level(name: str, default: int) -> int:
    return getattr(logging, name.upper(), default)


def _get_log_path(log_dir: Path | None = None) -> Path:
    # Return the path to the rotating log file, creating folders as needed.
    path = log_dir if log_dir is not None else default_log_dir()
    path.mkdir(parents=True, exist_ok=True)
    return path / LOG_FILE_NAME


def configure(
    *,
    log_level: str = "WARNING",
    history_level: str = "INFO",
    log_dir: Path | None = None,
) -> Path:
    """Install the console handler and the on-disk history for the CLI.

    ``log_level`` filters the console. The history file always records at
    ``history_level`` or finer, so every completed or failed trash operation
    is kept even when the console is quiet. Returns the history file path.
    """
    console_level = _level(log_level, logging.WARNING)
    file_level = min(_level(history_level, logging.INFO), console_level)

    log_path = _get_log_path(log_dir)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=_MAX_LOG_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
        errors="backslashreplace",
    )
    file_handler.setFormatter(formatter)
    file_handler.setLevel(file_level)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level)

    root = logging.getLogger()
    for handler in root.handlers:
        handler.close()
    root.handlers.clear()
    root.setLevel(min(file_level, console_level))
    root.addHandler(file_handler)
    root.addHandler(console_handler)
    return log_path
