"""
Habit models for habitgrid.

A habit owns its name, goal, a sparse date -> value history ("stats"),
a local navigation cursor and some view state. The set of variants is
closed: Bit (yes/no), Count (integer) and Float (fixed precision decimal).
"""
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any, Dict, Optional

from tracker.config_manager import config
from tracker.cursor import Cursor, Direction


class TrackEvent(Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"


class ViewMode(str, Enum):
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    YEAR = "YEAR"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class GoalKind:
    """Goal requested by an `add` command, before a habit exists."""
    kind: str                # bit | count | float
    value: int = 1           # count target, or float target in smallest units
    precision: int = 0       # float only

    @classmethod
    def bit(cls) -> "GoalKind":
        return cls("bit")

    @classmethod
    def count(cls, value: int) -> "GoalKind":
        return cls("count", value)

    @classmethod
    def fractional(cls, value: int, precision: int) -> "GoalKind":
        return cls("float", value, precision)


class Habit(ABC):
    """Common capability set of every habit variant."""

    kind: str = ""

    def __init__(self, name: str, auto: bool = False):
        self.name = name
        self.stats: Dict[date, Any] = {}
        self.auto = auto
        self.visible = True
        self.view_mode = ViewMode.DAY
        self.cursor = Cursor()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, auto={self.auto}, entries={len(self.stats)})"

    # --- history ---

    def get_by_date(self, d: date) -> Optional[Any]:
        return self.stats.get(d)

    def insert_entry(self, d: date, value: Any) -> None:
        self.stats[d] = value

    def backfill(self, today: Optional[date] = None) -> None:
        """
        Materialize every missing day from the earliest entry through today
        with the variant's failure value. A gap is a missed day.
        """
        if not self.stats:
            return
        today = today or date.today()
        target = min(self.stats)
        while target <= today:
            if target not in self.stats:
                self.stats[target] = self.failure_value()
            target += timedelta(days=1)

    @abstractmethod
    def failure_value(self) -> Any:
        ...

    @abstractmethod
    def modify(self, d: date, event: TrackEvent) -> None:
        ...

    # --- goal arithmetic ---

    @abstractmethod
    def reached_goal(self, d: date) -> bool:
        ...

    @abstractmethod
    def remaining(self, d: date) -> int:
        ...

    @abstractmethod
    def goal_total(self) -> int:
        """Numeric target used when summing goals across variants."""

    @abstractmethod
    def goal_kind(self) -> GoalKind:
        ...

    @abstractmethod
    def format_value(self, value: Any) -> str:
        ...

    def summary(self, d: date) -> str:
        """Cell text for one date."""
        value = self.get_by_date(d)
        if value is None:
            return config.FUTURE_CHR if d > date.today() else "-"
        return self.format_value(value)

    # --- identity and visibility ---

    def rename(self, new_name: str) -> None:
        self.name = new_name

    def hide(self) -> None:
        self.visible = False

    def unhide(self) -> None:
        self.visible = True

    def is_visible(self) -> bool:
        return self.visible

    def is_auto(self) -> bool:
        return self.auto

    # --- cursor delegation ---

    def move_cursor(self, direction: Direction) -> None:
        self.cursor.small_seek(direction)

    def month_forward(self) -> None:
        self.cursor.month_forward()

    def month_backward(self) -> None:
        self.cursor.month_backward()

    def reset_cursor(self) -> None:
        self.cursor.reset()


class Bit(Habit):
    """Yes/no habit. The goal is always True."""

    kind = "bit"

    def __init__(self, name: str, auto: bool = False):
        super().__init__(name, auto)
        self.goal = True

    def failure_value(self) -> bool:
        return False

    def modify(self, d: date, event: TrackEvent) -> None:
        val = self.stats.get(d)
        if val is None:
            if event == TrackEvent.INCREMENT:
                self.stats[d] = True
            return
        if event == TrackEvent.INCREMENT:
            self.stats[d] = not val
        elif val:
            self.stats[d] = False
        else:
            # Decrementing an explicit False forgets the day.
            del self.stats[d]

    def reached_goal(self, d: date) -> bool:
        val = self.stats.get(d)
        return val is not None and val >= self.goal

    def remaining(self, d: date) -> int:
        return 0 if self.stats.get(d) else 1

    def goal_total(self) -> int:
        return 1

    def goal_kind(self) -> GoalKind:
        return GoalKind.bit()

    def format_value(self, value: bool) -> str:
        return config.TRUE_CHR if value else config.FALSE_CHR


class Count(Habit):
    """Integer habit, e.g. 20 pushups a day."""

    kind = "count"

    def __init__(self, name: str, goal: int = 0, auto: bool = False):
        super().__init__(name, auto)
        self.goal = goal

    def failure_value(self) -> int:
        return 0

    def modify(self, d: date, event: TrackEvent) -> None:
        val = self.stats.get(d)
        if val is None:
            if event == TrackEvent.INCREMENT:
                self.stats[d] = 1
            return
        if event == TrackEvent.INCREMENT:
            self.stats[d] = val + 1
        else:
            self.stats[d] = max(val - 1, 0)

    def reached_goal(self, d: date) -> bool:
        val = self.stats.get(d)
        return val is not None and val >= self.goal

    def remaining(self, d: date) -> int:
        return max(self.goal - self.stats.get(d, 0), 0)

    def goal_total(self) -> int:
        return self.goal

    def goal_kind(self) -> GoalKind:
        return GoalKind.count(self.goal)

    def format_value(self, value: int) -> str:
        return str(value)


class Float(Habit):
    """
    Fixed precision decimal habit, e.g. 2.5 km a day.

    Values and goal are stored as integer counts of the smallest unit
    (10 ** -precision); value 25 with precision 1 means 2.5.
    """

    kind = "float"

    def __init__(self, name: str, goal: int = 0, precision: int = 0, auto: bool = False):
        super().__init__(name, auto)
        self.goal = goal
        self.precision = precision

    def to_decimal(self, units: int) -> float:
        return units / (10 ** self.precision)

    def failure_value(self) -> int:
        return 0

    def modify(self, d: date, event: TrackEvent) -> None:
        val = self.stats.get(d)
        if val is None:
            if event == TrackEvent.INCREMENT:
                self.stats[d] = 1
            return
        if event == TrackEvent.INCREMENT:
            self.stats[d] = val + 1
        else:
            self.stats[d] = max(val - 1, 0)

    def reached_goal(self, d: date) -> bool:
        val = self.stats.get(d)
        if val is None:
            return False
        return self.to_decimal(val) >= self.to_decimal(self.goal) - config.FLOAT_EPSILON

    def remaining(self, d: date) -> int:
        gap = self.to_decimal(self.goal) - self.to_decimal(self.stats.get(d, 0))
        if gap <= config.FLOAT_EPSILON:
            return 0
        return math.ceil(gap - config.FLOAT_EPSILON)

    def goal_total(self) -> int:
        return max(math.ceil(self.to_decimal(self.goal) - config.FLOAT_EPSILON), 0)

    def goal_kind(self) -> GoalKind:
        return GoalKind.fractional(self.goal, self.precision)

    def format_value(self, value: int) -> str:
        return f"{self.to_decimal(value):.{self.precision}f}"


HABIT_TYPES = {
    Bit.kind: Bit,
    Count.kind: Count,
    Float.kind: Float,
}


def habit_from_goal(name: str, goal: Optional[GoalKind], auto: bool) -> Habit:
    """Build the variant matching an `add` request; no goal means Count(0)."""
    if goal is None:
        return Count(name, 0, auto)
    if goal.kind == Bit.kind:
        return Bit(name, auto)
    if goal.kind == Float.kind:
        return Float(name, goal.value, goal.precision, auto)
    return Count(name, goal.value, auto)
