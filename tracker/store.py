"""
Habit store: JSON persistence for one provenance-specific habit list.

Each store file holds an ordered JSON array of tagged records:

    [{"kind": "count", "name": "pushups", "goal": 20, "auto": false,
      "stats": {"2026-10-01": 12}}]

Records are validated with pydantic; a file that cannot be read or does
not match the schema raises StoreError and nothing is half-loaded.
"""
import json
from datetime import date
from pathlib import Path
from typing import Annotated, Dict, Iterable, List, Literal, Union

from pydantic import BaseModel, Field, NonNegativeInt, StrictBool, TypeAdapter, ValidationError

from tracker.exceptions import StoreError, StoreWriteError
from tracker.habits import Bit, Count, Float, Habit
from tracker.logger import get_logger

logger = get_logger("store")


class _RecordBase(BaseModel):
    name: str
    # Older records predate auto habits.
    auto: StrictBool = False


class BitRecord(_RecordBase):
    kind: Literal["bit"]
    goal: StrictBool = True
    stats: Dict[date, StrictBool] = Field(default_factory=dict)


class CountRecord(_RecordBase):
    kind: Literal["count"]
    goal: NonNegativeInt = 0
    stats: Dict[date, NonNegativeInt] = Field(default_factory=dict)


class FloatRecord(_RecordBase):
    kind: Literal["float"]
    goal: NonNegativeInt = 0
    precision: NonNegativeInt = 0
    stats: Dict[date, NonNegativeInt] = Field(default_factory=dict)


HabitRecord = Annotated[Union[BitRecord, CountRecord, FloatRecord], Field(discriminator="kind")]

_STORE_ADAPTER = TypeAdapter(List[HabitRecord])


def record_to_habit(record: Union[BitRecord, CountRecord, FloatRecord]) -> Habit:
    if isinstance(record, BitRecord):
        habit: Habit = Bit(record.name, record.auto)
    elif isinstance(record, FloatRecord):
        habit = Float(record.name, record.goal, record.precision, record.auto)
    else:
        habit = Count(record.name, record.goal, record.auto)
    habit.stats = dict(record.stats)
    return habit


def habit_to_dict(habit: Habit) -> dict:
    d = {
        "kind": habit.kind,
        "name": habit.name,
        "goal": habit.goal,
        "auto": habit.auto,
    }
    if isinstance(habit, Float):
        d["precision"] = habit.precision
    d["stats"] = {day.isoformat(): value for day, value in sorted(habit.stats.items())}
    return d


def parse_habits(raw: str, source: str = "<string>") -> List[Habit]:
    """Parse a whole store payload; raises StoreError on any schema violation."""
    try:
        records = _STORE_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise StoreError(f"Invalid habit record in {source}: {e.error_count()} error(s), first: "
                         f"{e.errors()[0]['msg']}", path=source) from e
    seen = set()
    for record in records:
        if record.name in seen:
            raise StoreError(f"Duplicate habit `{record.name}` in {source}", path=source)
        seen.add(record.name)
    return [record_to_habit(r) for r in records]


def load_habits(path: Path) -> List[Habit]:
    """Load every habit stored at `path`."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise StoreError(f"Couldn't open {path.name}: {e}", path=path) from e

    habits = parse_habits(raw, source=str(path))
    logger.info(f"Loaded {len(habits)} habit(s) from {path}")
    return habits


def save_habits(habits: Iterable[Habit], path: Path) -> None:
    """Overwrite `path` with the given habits, in order."""
    payload = [habit_to_dict(h) for h in habits]
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
    except OSError as e:
        raise StoreWriteError(f"Unable to write {path}: {e}", path=path) from e
    logger.info(f"Saved {len(payload)} habit(s) to {path}")
