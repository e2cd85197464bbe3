"""
Auto-store watcher for habitgrid.

Polls the auto habit file's mtime on a daemon thread and posts a FileEvent
to a queue when it changes. The App drains the queue between commands, so
the watcher never touches habits itself.
"""
import os
import queue
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from tracker.config_manager import config
from tracker.logger import get_logger

logger = get_logger("watcher")


@dataclass(frozen=True)
class FileEvent:
    path: Path
    mtime: float


def watchers_disabled() -> bool:
    # Keep tests deterministic and avoid long-lived watcher side effects.
    if os.getenv("PYTEST_CURRENT_TEST"):
        return True
    return os.getenv("HABITGRID_DISABLE_WATCHERS", "0").lower() in {"1", "true", "yes"}


class AutoStoreWatcher:
    """Single producer for the App's file event queue."""

    def __init__(
        self,
        path: Path,
        events: Optional["queue.Queue[FileEvent]"] = None,
        interval: Optional[float] = None,
    ):
        self.path = Path(path)
        self.events: "queue.Queue[FileEvent]" = events if events is not None else queue.Queue()
        self.interval = interval if interval is not None else config.WATCH_INTERVAL_SECONDS
        self._last_mtime = self._current_mtime()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def _current_mtime(self) -> float:
        try:
            return self.path.stat().st_mtime
        except OSError:
            return 0.0

    def mark_seen(self) -> None:
        """Forget changes made by our own writes."""
        self._last_mtime = self._current_mtime()

    def check(self) -> Optional[FileEvent]:
        """Post an event if the file changed since the last check."""
        mtime = self._current_mtime()
        if mtime == self._last_mtime:
            return None
        self._last_mtime = mtime
        event = FileEvent(self.path, mtime)
        self.events.put(event)
        logger.info(f"Change detected in {self.path}")
        return event

    def start(self) -> bool:
        """Start the polling thread. Returns False when watchers are disabled."""
        if watchers_disabled():
            return False
        if self._thread is not None:
            return True

        def watch():
            while not self._stop.wait(self.interval):
                self.check()

        self._thread = threading.Thread(target=watch, name="habitgrid-watcher", daemon=True)
        self._thread.start()
        logger.info(f"Watching {self.path} every {self.interval}s")
        return True

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=self.interval * 2)
            self._thread = None
