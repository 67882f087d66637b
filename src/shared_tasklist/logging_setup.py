# src/shared_tasklist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "shared-tasklist.log"

# Minimum console level per logger prefix; longest matching prefix wins.
# Loggers outside this table only reach the console at ERROR.
_CONSOLE_THRESHOLDS: dict[str, int] = {
    "shared_tasklist": logging.NOTSET,
    # One line per task per pass; at INFO it would bury the REPL prompt.
    "shared_tasklist.tasks.task_worker": logging.WARNING,
    "py.warnings": logging.ERROR,
}


class _ReplConsoleFilter(logging.Filter):
    """
    Decide which records reach the stderr handler while the REPL owns the terminal.

    Store, adapter and command logs are shown at the handler's level, so refused
    claims and corrupt list files are visible immediately. Worker chatter and
    library loggers (asyncio, dotenv) only show up when something is wrong.
    Everything still goes to the log file.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= _console_threshold(record.name)


def _console_threshold(name: str) -> int:
    best, best_len = logging.ERROR, -1
    for prefix, level in _CONSOLE_THRESHOLDS.items():
        if (name == prefix or name.startswith(prefix + ".")) and len(prefix) > best_len:
            best, best_len = level, len(prefix)
    return best


def setup_logging(
    *,
    log_dir: str | Path = ".local/shared-tasklist",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Install the console and file handlers on the root logger.

    The file lives next to the task lists (<log_dir>/shared-tasklist.log) and
    receives every record down to file_level, including per-task store debug
    lines. Replaces any handlers already on the root, so calling it twice
    does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ReplConsoleFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    logging.captureWarnings(True)
    return log_file
