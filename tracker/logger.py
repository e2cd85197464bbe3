"""
Logging for habitgrid.

Everything logs under the `habitgrid` logger:
- logs/system.log  store loads/saves, reloads, habit changes (INFO+)
- logs/error.log   failed reloads and startup aborts (ERROR+)
- stderr           warnings only, so the shell output stays readable
"""
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGS_DIR = Path(os.getenv("HABITGRID_LOGS_DIR", "") or Path(__file__).parent.parent / "logs")

MAX_BYTES = 1024 * 1024
BACKUP_COUNT = 2

ROOT_LOGGER_NAME = "habitgrid"


def _rotating(path: Path, level: int, formatter: logging.Formatter) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def setup_logging(log_level: int = logging.INFO, console_level: int = logging.WARNING) -> logging.Logger:
    """Attach file and console handlers to the `habitgrid` logger. Safe to call twice."""
    LOGS_DIR.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.setLevel(logging.DEBUG)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)

    file_format = logging.Formatter(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
    )
    root.addHandler(_rotating(LOGS_DIR / "system.log", log_level, file_format))
    root.addHandler(_rotating(LOGS_DIR / "error.log", logging.ERROR, file_format))

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    root.addHandler(console)
    return root


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Logger for one habitgrid module, e.g. get_logger("store")."""
    if name:
        return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
    return logging.getLogger(ROOT_LOGGER_NAME)
