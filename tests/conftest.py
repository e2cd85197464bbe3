import os
import sys
from pathlib import Path

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

# Keep tests deterministic: no background watcher threads.
os.environ.setdefault("HABITGRID_DISABLE_WATCHERS", "1")


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Never touch the real habit stores."""
    data_dir = tmp_path / "data"
    monkeypatch.setenv("HABITGRID_DATA_DIR", str(data_dir))
    return data_dir
