"""
Centralized filesystem paths for habit stores.
"""
import os
from pathlib import Path
from typing import Optional

PROJECT_ROOT = Path(__file__).parent.parent

HABIT_FILE_NAME = "habit_record.json"
AUTO_HABIT_FILE_NAME = "habit_record[auto].json"


def get_data_dir() -> Path:
    """
    Return runtime data directory.

    Priority:
    1. HABITGRID_DATA_DIR env var
    2. <project_root>/data
    """
    raw = os.getenv("HABITGRID_DATA_DIR", "").strip()
    if raw:
        return Path(raw).expanduser()
    return PROJECT_ROOT / "data"


def _ensure_store(path: Path) -> Path:
    # A fresh install starts with two empty stores.
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("[]", encoding="utf-8")
    return path


def habit_file(data_dir: Optional[Path] = None) -> Path:
    """Manual habit store, created empty if missing."""
    return _ensure_store((data_dir or get_data_dir()) / HABIT_FILE_NAME)


def auto_habit_file(data_dir: Optional[Path] = None) -> Path:
    """Auto habit store, created empty if missing."""
    return _ensure_store((data_dir or get_data_dir()) / AUTO_HABIT_FILE_NAME)
