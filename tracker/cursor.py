"""
Navigation cursor: the date a view is anchored to, independent of today.
"""
import calendar
from datetime import date, timedelta
from enum import Enum
from typing import Optional


class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    NONE = "none"


# Day offsets applied by small_seek; one grid row is one week.
SEEK_OFFSETS = {
    Direction.LEFT: -1,
    Direction.RIGHT: 1,
    Direction.UP: -7,
    Direction.DOWN: 7,
    Direction.NONE: 0,
}


def _last_day_of_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def add_months(d: date, months: int) -> date:
    """Same day-of-month `months` away, clamped to that month's last day."""
    if months == 0:
        return d
    m0 = (d.month - 1) + months
    year = d.year + (m0 // 12)
    month = (m0 % 12) + 1
    day = min(d.day, _last_day_of_month(year, month))
    return date(year, month, day)


class Cursor:
    """Holds one calendar date. All moves clamp instead of failing."""

    def __init__(self, value: Optional[date] = None):
        self.value = value or date.today()

    def __eq__(self, other) -> bool:
        if isinstance(other, Cursor):
            return self.value == other.value
        return NotImplemented

    def __repr__(self) -> str:
        return f"Cursor({self.value.isoformat()})"

    def month_forward(self) -> None:
        self.value = add_months(self.value, 1)

    def month_backward(self) -> None:
        self.value = add_months(self.value, -1)

    def reset(self) -> None:
        self.value = date.today()

    def shift(self, days: int) -> None:
        try:
            self.value = self.value + timedelta(days=days)
        except OverflowError:
            self.value = date.max if days > 0 else date.min

    def small_seek(self, direction: Direction) -> None:
        self.shift(SEEK_OFFSETS[direction])

    def copy(self) -> "Cursor":
        return Cursor(self.value)
