# src/taskpad/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskpad.log"

FILE_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
# The console shares the terminal with the task list; keep it short.
CONSOLE_FORMAT = "[%(levelname)s] %(message)s"


class TaskpadConsoleFilter(logging.Filter):
    """
    Console gets taskpad records at the handler level (recoveries, storage
    failures); third-party and py.warnings records only from ERROR up.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "taskpad" or record.name.startswith("taskpad."):
            return True
        return record.levelno >= logging.ERROR


def level_from_name(name: str, default: int = logging.INFO) -> int:
    """Map "debug"/"WARNING"/... to a logging level; unknown names give `default`."""
    level = logging.getLevelName(str(name).strip().upper())
    return level if isinstance(level, int) else default


def setup_logging(settings, *, file_level: int = logging.DEBUG) -> Path:
    """
    Configure the root logger from settings and return the log file path.

    - console (stderr): settings.log_level, short format, TaskpadConsoleFilter
    - file (<settings.data_dir>/taskpad.log): everything from file_level

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(settings.data_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(min(file_level, level_from_name(settings.log_level)))

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level_from_name(settings.log_level))
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    console.addFilter(TaskpadConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
