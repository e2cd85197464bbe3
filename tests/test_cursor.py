from datetime import date, timedelta

from tracker.cursor import Cursor, Direction, add_months


def test_month_forward_keeps_day_of_month():
    cursor = Cursor(date(2026, 3, 14))
    cursor.month_forward()
    assert cursor.value == date(2026, 4, 14)


def test_month_forward_clamps_to_last_day():
    cursor = Cursor(date(2026, 1, 31))
    cursor.month_forward()
    assert cursor.value == date(2026, 2, 28)


def test_month_backward_clamps_in_leap_year():
    cursor = Cursor(date(2024, 3, 31))
    cursor.month_backward()
    assert cursor.value == date(2024, 2, 29)


def test_month_steps_cross_year_boundaries():
    assert add_months(date(2025, 12, 15), 1) == date(2026, 1, 15)
    assert add_months(date(2026, 1, 15), -1) == date(2025, 12, 15)


def test_small_seek_day_and_week_offsets():
    start = date(2026, 6, 10)
    cursor = Cursor(start)
    cursor.small_seek(Direction.LEFT)
    assert cursor.value == start - timedelta(days=1)
    cursor.small_seek(Direction.RIGHT)
    cursor.small_seek(Direction.DOWN)
    assert cursor.value == start + timedelta(days=7)
    cursor.small_seek(Direction.UP)
    cursor.small_seek(Direction.NONE)
    assert cursor.value == start


def test_shift_clamps_instead_of_overflowing():
    cursor = Cursor(date.max)
    cursor.shift(1)
    assert cursor.value == date.max


def test_reset_snaps_to_today():
    cursor = Cursor(date(2000, 1, 1))
    cursor.reset()
    assert cursor.value == date.today()
