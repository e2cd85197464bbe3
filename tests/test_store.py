import json
from datetime import date, timedelta

import pytest

from tracker.exceptions import StoreError, StoreWriteError
from tracker.habits import Bit, Count, Float
from tracker.store import habit_to_dict, load_habits, parse_habits, save_habits

TODAY = date.today()


def _identity(habit):
    return (
        habit.kind,
        habit.name,
        habit.stats,
        habit.goal,
        habit.auto,
        getattr(habit, "precision", None),
    )


def test_save_then_load_every_variant(tmp_path):
    bit = Bit("read")
    bit.insert_entry(TODAY, True)
    bit.insert_entry(TODAY - timedelta(days=1), False)
    count = Count("pushups", 20, auto=True)
    count.insert_entry(TODAY, 12)
    fractional = Float("run", 25, 1)
    fractional.insert_entry(TODAY - timedelta(days=3), 17)
    habits = [bit, count, fractional]

    path = tmp_path / "habit_record.json"
    save_habits(habits, path)
    loaded = load_habits(path)

    assert [_identity(h) for h in loaded] == [_identity(h) for h in habits]


def test_save_then_load_empty_collection(tmp_path):
    path = tmp_path / "habit_record.json"
    save_habits([], path)
    assert json.loads(path.read_text(encoding="utf-8")) == []
    assert load_habits(path) == []


def test_records_are_tagged_with_iso_dates():
    habit = Float("run", 25, 1)
    habit.insert_entry(date(2026, 10, 1), 12)
    assert habit_to_dict(habit) == {
        "kind": "float",
        "name": "run",
        "goal": 25,
        "auto": False,
        "precision": 1,
        "stats": {"2026-10-01": 12},
    }


def test_missing_auto_defaults_to_manual():
    raw = json.dumps([{"kind": "count", "name": "pushups", "goal": 20, "stats": {"2026-10-01": 3}}])
    habit = parse_habits(raw)[0]
    assert habit.auto is False
    assert habit.get_by_date(date(2026, 10, 1)) == 3


@pytest.mark.parametrize(
    "payload",
    [
        "not json at all",
        json.dumps({"kind": "bit", "name": "read"}),
        json.dumps([{"kind": "bit"}]),
        json.dumps([{"kind": "weekly", "name": "read"}]),
        json.dumps([{"kind": "count", "name": "pushups", "stats": {"2026-10-01": -1}}]),
        json.dumps([{"kind": "count", "name": "pushups", "stats": {"yesterday": 1}}]),
        json.dumps([{"kind": "bit", "name": "read", "stats": {"2026-10-01": "yes"}}]),
    ],
)
def test_malformed_payloads_raise_store_error(payload):
    with pytest.raises(StoreError):
        parse_habits(payload)


def test_unreadable_file_raises_store_error(tmp_path):
    with pytest.raises(StoreError) as info:
        load_habits(tmp_path / "missing.json")
    assert "missing.json" in info.value.get_user_message()


def test_write_failure_raises_store_write_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    with pytest.raises(StoreWriteError):
        save_habits([Bit("read")], blocker / "habit_record.json")


def test_duplicate_names_in_one_store_raise_store_error():
    raw = json.dumps([
        {"kind": "bit", "name": "read"},
        {"kind": "count", "name": "read", "goal": 3},
    ])
    with pytest.raises(StoreError) as info:
        parse_habits(raw, source="habit_record.json")
    assert "`read`" in info.value.message
    assert info.value.path == "habit_record.json"
