# src/taskpad/logging_setup.py

"""
Root logging for the taskpad process.

The console shares the terminal with the REPL prompt, so it only shows taskpad's own
records; everything at file_level goes to <log_dir>/taskpad.log.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "taskpad.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Per-logger console floors. The reminder loop's INFO lines repeat what ConsoleNotifier prints.
CONSOLE_FLOORS: dict[str, int] = {
    "taskpad.tasks.due_notifier": logging.WARNING,
}


class _ConsoleNoiseFilter(logging.Filter):
    def __init__(self, app_prefix: str = "taskpad.", foreign_floor: int = logging.ERROR) -> None:
        super().__init__()
        self.app_prefix = app_prefix
        self.foreign_floor = foreign_floor

    def filter(self, record: logging.LogRecord) -> bool:
        if not record.name.startswith(self.app_prefix):
            # Libraries and captured py.warnings.
            return record.levelno >= self.foreign_floor
        return record.levelno >= CONSOLE_FLOORS.get(record.name, logging.NOTSET)


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskpad",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """Install console and file handlers on the root logger. Returns the log file path."""
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(_ConsoleNoiseFilter())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)

    for handler in (console, file_handler):
        handler.setFormatter(formatter)
        root.addHandler(handler)

    logging.captureWarnings(True)
    return log_file
