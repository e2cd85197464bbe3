# habitgrid core: habit models, navigation cursor, stores and the App orchestrator.

from tracker.app import App
from tracker.cursor import Cursor, Direction
from tracker.habits import Bit, Count, Float, GoalKind, Habit, TrackEvent, ViewMode

__all__ = [
    "App",
    "Bit",
    "Count",
    "Cursor",
    "Direction",
    "Float",
    "GoalKind",
    "Habit",
    "TrackEvent",
    "ViewMode",
]
