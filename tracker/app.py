"""
App: the habitgrid orchestrator.

Owns the ordered habit list, the shared navigation cursor, the focus index
and the status message. Commands come in as Command values (see
tracker.command), mutate habits and report through `message`. State is
persisted in two stores split by provenance: manual habits and auto habits
(fed by an external writer, reloaded when the auto file changes).
"""
import queue
from datetime import date
from pathlib import Path
from typing import List, Optional

from tracker import paths
from tracker.command import Command, CommandKind, help_text, parse_command
from tracker.config_manager import config
from tracker.cursor import Cursor, Direction
from tracker.exceptions import CommandLineError, StoreError
from tracker.habits import GoalKind, Habit, TrackEvent, ViewMode, habit_from_goal
from tracker.logger import get_logger
from tracker.message import Message, StatusLine
from tracker.store import load_habits, save_habits

logger = get_logger("app")


class App:
    """Orchestrates habits, cursor, focus and persistence."""

    def __init__(
        self,
        habits: Optional[List[Habit]] = None,
        manual_path: Optional[Path] = None,
        auto_path: Optional[Path] = None,
        file_events: Optional[queue.Queue] = None,
    ):
        self.habits: List[Habit] = habits if habits is not None else []
        self.focus = 0
        self.cursor = Cursor()
        self.message = Message.startup()
        self.manual_path = manual_path
        self.auto_path = auto_path
        self.file_events = file_events
        self.watcher = None

    # ------------------------------------------------------------------
    # Lookup helpers
    # ------------------------------------------------------------------
    def _find(self, name: str) -> Optional[Habit]:
        for habit in self.habits:
            if habit.name == name:
                return habit
        return None

    def list_habits(self) -> List[str]:
        return [h.name for h in self.habits]

    def visible_habits(self) -> List[Habit]:
        return [h for h in self.habits if h.is_visible()]

    def focused_habit(self) -> Optional[Habit]:
        visible = self.visible_habits()
        if not visible:
            return None
        return visible[min(self.focus, len(visible) - 1)]

    def _clamp_focus(self) -> None:
        visible_count = len(self.visible_habits())
        self.focus = min(self.focus, max(visible_count - 1, 0))

    # ------------------------------------------------------------------
    # Collection mutations
    # ------------------------------------------------------------------
    def add_habit(self, habit: Habit) -> None:
        self.habits.append(habit)

    def add(self, name: str, goal: Optional[GoalKind] = None, auto: bool = False) -> bool:
        if self._find(name) is not None:
            self.message.error(f"Habit `{name}` already exist")
            return False
        habit = habit_from_goal(name, goal, auto)
        habit.cursor = self.cursor.copy()
        self.add_habit(habit)
        logger.info(f"Added {habit!r}")
        self.message.info(f"Habit `{name}` added")
        return True

    def delete(self, name: str) -> bool:
        for i, habit in enumerate(self.habits):
            if habit.name == name:
                del self.habits[i]
                self.focus = 0
                logger.info(f"Deleted habit `{name}`")
                self.message.info(f"Habit deleted: `{name}`")
                return True
        self.message.error(f"Could not delete habit `{name}`")
        return False

    def rename(self, old_name: str, new_name: str) -> bool:
        habit = self._find(old_name)
        if habit is None:
            self.message.error(f"Could not rename habit `{old_name}`: `{old_name}` not found")
            return False
        if self._find(new_name) is not None:
            self.message.error(f"Could not rename habit `{old_name}`: `{new_name}` already exists")
            return False
        habit.rename(new_name)
        self.message.info(f"`{old_name}` renamed to `{new_name}`")
        return True

    def backfill(self, name: str = "all") -> bool:
        today = date.today()
        if name == "all":
            for habit in self.habits:
                habit.backfill(today)
            self.message.info("All habits were backfilled")
            return True
        habit = self._find(name)
        if habit is None:
            self.message.error(f"Could not backfill habit `{name}`")
            return False
        habit.backfill(today)
        self.message.info(f"Habit was backfilled: `{name}`")
        return True

    def hide(self, name: str) -> bool:
        habit = self._find(name)
        if habit is None:
            self.message.error(f"Habit not found: `{name}`")
            return False
        habit.hide()
        self._clamp_focus()
        self.message.info(f"Habit was hidden: `{name}`")
        return True

    def unhide(self, name: str) -> bool:
        habit = self._find(name)
        if habit is None:
            self.message.error(f"Habit not found: `{name}`")
            return False
        habit.unhide()
        self.message.info(f"Habit was unhidden: `{name}`")
        return True

    def track(self, name: str, event: TrackEvent) -> None:
        """Track today's value of an auto habit; anything else is ignored."""
        for habit in self.habits:
            if habit.name == name and habit.is_auto():
                habit.modify(date.today(), event)
                self.message.info(f"Tracked `{name}`: {habit.summary(date.today())}")
                return

    def track_focused(self, event: TrackEvent) -> None:
        """Interactive +/- on the focused habit at its own cursor date."""
        habit = self.focused_habit()
        if habit is not None:
            habit.modify(habit.cursor.value, event)

    # ------------------------------------------------------------------
    # View mode
    # ------------------------------------------------------------------
    def get_mode(self) -> ViewMode:
        habit = self.focused_habit()
        if habit is None:
            return ViewMode.DAY
        return habit.view_mode

    def set_mode(self, mode: ViewMode) -> None:
        habit = self.focused_habit()
        if habit is not None:
            habit.view_mode = mode

    # ------------------------------------------------------------------
    # Navigation: the shared cursor and every habit cursor move together
    # ------------------------------------------------------------------
    def sift_forward(self) -> None:
        self.cursor.month_forward()
        for habit in self.habits:
            habit.month_forward()

    def sift_backward(self) -> None:
        self.cursor.month_backward()
        for habit in self.habits:
            habit.month_backward()

    def reset_cursor(self) -> None:
        self.cursor.reset()
        for habit in self.habits:
            habit.reset_cursor()

    def move_cursor(self, direction: Direction) -> None:
        self.cursor.small_seek(direction)
        for habit in self.habits:
            habit.move_cursor(direction)

    def set_focus(self, direction: Direction) -> None:
        """Move focus across the visible grid, clamping at both ends."""
        visible_count = len(self.visible_habits())
        if visible_count == 0:
            self.focus = 0
            return
        last = visible_count - 1
        width = config.GRID_WIDTH
        if direction == Direction.RIGHT:
            if self.focus < last:
                self.focus += 1
        elif direction == Direction.LEFT:
            if self.focus > 0:
                self.focus -= 1
        elif direction == Direction.DOWN:
            if self.focus + width < last:
                self.focus += width
            else:
                self.focus = last
        elif direction == Direction.UP:
            if self.focus - width >= 0:
                self.focus -= width
            else:
                self.focus = 0

    # ------------------------------------------------------------------
    # Status
    # ------------------------------------------------------------------
    def clear_message(self) -> None:
        self.message.clear()

    def status(self) -> StatusLine:
        today = date.today()
        remaining = sum(h.remaining(today) for h in self.habits)
        total = sum(h.goal_total() for h in self.habits)
        completed = total - remaining
        hidden_count = sum(1 for h in self.habits if not h.is_visible())

        if self.cursor.value == today:
            timestamp = today.strftime("%d/%b/%y")
        else:
            since = (today - self.cursor.value).days
            plural = "" if since == 1 else "s"
            timestamp = f"{self.cursor.value.isoformat()} ({since} day{plural} ago)"

        summary = (
            f"{completed} completed, {remaining} remaining, "
            f"{hidden_count} hidden --{self.get_mode()}--"
        )
        return StatusLine(summary, timestamp)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def manual_store_path(self) -> Path:
        if self.manual_path is None:
            self.manual_path = paths.habit_file()
        return self.manual_path

    def auto_store_path(self) -> Path:
        if self.auto_path is None:
            self.auto_path = paths.auto_habit_file()
        return self.auto_path

    @classmethod
    def load_state(
        cls,
        manual_path: Optional[Path] = None,
        auto_path: Optional[Path] = None,
        file_events: Optional[queue.Queue] = None,
    ) -> "App":
        """Build an App from both stores. StoreError is left to the caller."""
        manual_path = manual_path or paths.habit_file()
        auto_path = auto_path or paths.auto_habit_file()
        habits = load_habits(manual_path)
        manual_names = {h.name for h in habits}
        for habit in load_habits(auto_path):
            if habit.name in manual_names:
                raise StoreError(
                    f"Habit `{habit.name}` in {auto_path.name} duplicates a habit in {manual_path.name}",
                    path=auto_path,
                )
            habits.append(habit)
        return cls(habits, manual_path=manual_path, auto_path=auto_path, file_events=file_events)

    def save_state(self) -> None:
        """Write manual and auto habits to their own stores. StoreWriteError propagates."""
        manual = [h for h in self.habits if not h.is_auto()]
        auto = [h for h in self.habits if h.is_auto()]
        save_habits(manual, self.manual_store_path())
        save_habits(auto, self.auto_store_path())
        if self.watcher is not None:
            self.watcher.mark_seen()

    def reload_auto(self) -> bool:
        """
        Replace the auto habits with the current content of the auto store.

        The file is parsed completely before anything changes; on failure the
        in-memory habits are kept and the error is reported.
        """
        path = self.auto_store_path()
        try:
            loaded = load_habits(path)
        except StoreError as e:
            logger.error(f"Auto habit reload failed: {e.message}")
            self.message.error(f"Could not reload auto habits: {e.message}")
            return False

        manual_names = {h.name for h in self.habits if not h.is_auto()}
        clashes = [h.name for h in loaded if h.name in manual_names]
        if clashes:
            logger.error(f"Auto habit reload rejected: `{clashes[0]}` is already a manual habit")
            self.message.error(f"Could not reload auto habits: `{clashes[0]}` is already a manual habit")
            return False

        previous = {h.name: h for h in self.habits if h.is_auto()}
        for habit in loaded:
            old = previous.get(habit.name)
            if old is not None:
                habit.visible = old.visible
                habit.view_mode = old.view_mode
                habit.cursor = old.cursor
            else:
                habit.cursor = self.cursor.copy()

        kept = [h for h in self.habits if not h.is_auto()]
        self.habits = kept + loaded
        self._clamp_focus()
        logger.info(f"Reloaded {len(loaded)} auto habit(s) from {path}")
        self.message.info("Auto habits reloaded")
        return True

    def poll_file_events(self) -> bool:
        """Drain pending file events; reload the auto store once if any arrived."""
        if self.file_events is None:
            return False
        pending = 0
        while True:
            try:
                self.file_events.get_nowait()
            except queue.Empty:
                break
            pending += 1
        if not pending:
            return False
        return self.reload_auto()

    # ------------------------------------------------------------------
    # Command dispatch
    # ------------------------------------------------------------------
    def dispatch(self, command: Command) -> bool:
        """Apply one command. Returns True when the caller should quit."""
        kind = command.kind
        if kind == CommandKind.ADD:
            self.add(command.name, command.goal, command.auto)
        elif kind == CommandKind.DELETE:
            self.delete(command.name)
        elif kind == CommandKind.RENAME:
            self.rename(command.name, command.new_name)
        elif kind == CommandKind.TRACK_UP:
            self.track(command.name, TrackEvent.INCREMENT)
        elif kind == CommandKind.TRACK_DOWN:
            self.track(command.name, TrackEvent.DECREMENT)
        elif kind == CommandKind.BACKFILL:
            self.backfill(command.name or "all")
        elif kind == CommandKind.HIDE:
            self.hide(command.name)
        elif kind == CommandKind.UNHIDE:
            self.unhide(command.name)
        elif kind == CommandKind.MONTH_NEXT:
            self.sift_forward()
        elif kind == CommandKind.MONTH_PREV:
            self.sift_backward()
        elif kind == CommandKind.HELP:
            self.message.info(help_text(command.topic))
        elif kind in (CommandKind.WRITE, CommandKind.QUIT, CommandKind.WRITE_AND_QUIT):
            self.save_state()
            if kind == CommandKind.WRITE:
                self.message.info("Wrote habits to disk")
            return kind != CommandKind.WRITE
        return False

    def handle(self, line: str) -> bool:
        """Parse and dispatch one command line."""
        try:
            command = parse_command(line)
        except CommandLineError as e:
            logger.debug(f"Rejected command `{line}`: {e}")
            self.message.error(str(e))
            return False
        return self.dispatch(command)
