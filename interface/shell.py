"""
Line-mode shell for habitgrid.

Reads one command per line, applies it to the App and prints the habit
list with the status line. Single-character keys drive focus, the cursor
and interactive tracking; everything else goes through the command parser.
Pending auto-store changes are applied between lines.
"""
from typing import Callable, List, Optional

from tracker.app import App
from tracker.cursor import Direction
from tracker.habits import TrackEvent, ViewMode

PROMPT = ": "


def cycle_mode(app: App) -> None:
    modes = list(ViewMode)
    app.set_mode(modes[(modes.index(app.get_mode()) + 1) % len(modes)])


KEYMAP = {
    "+": lambda app: app.track_focused(TrackEvent.INCREMENT),
    "-": lambda app: app.track_focused(TrackEvent.DECREMENT),
    ">": lambda app: app.set_focus(Direction.RIGHT),
    "<": lambda app: app.set_focus(Direction.LEFT),
    "^": lambda app: app.set_focus(Direction.UP),
    "v": lambda app: app.set_focus(Direction.DOWN),
    "[": lambda app: app.move_cursor(Direction.LEFT),
    "]": lambda app: app.move_cursor(Direction.RIGHT),
    ".": lambda app: app.reset_cursor(),
    "m": cycle_mode,
}


def render(app: App) -> str:
    """Text view: one row per visible habit, then status and message."""
    lines: List[str] = []
    focused = app.focused_habit()
    for habit in app.visible_habits():
        marker = ">" if habit is focused else " "
        day = habit.cursor.value
        goal = habit.goal_kind()
        tag = "auto" if habit.is_auto() else "manual"
        lines.append(
            f"{marker} {habit.name:<20} {habit.summary(day):>8}  "
            f"[{goal.kind} {habit.goal_total()}] {tag}"
        )
    status = app.status()
    lines.append(f"{status.summary}    {status.timestamp}")
    if app.message.text:
        prefix = "E: " if app.message.is_error() else ""
        lines.append(f"{prefix}{app.message.text}")
    return "\n".join(lines)


def handle_line(app: App, line: str) -> bool:
    """Apply one input line. Returns True when the shell should exit."""
    key = line.strip()
    action = KEYMAP.get(key)
    if action is not None:
        action(app)
        return False
    return app.handle(line)


def run_shell(
    app: App,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    max_lines: Optional[int] = None,
) -> None:
    """Interactive loop until quit/wq or end of input."""
    write(render(app))
    count = 0
    while max_lines is None or count < max_lines:
        app.poll_file_events()
        try:
            line = read(PROMPT)
        except (EOFError, KeyboardInterrupt):
            write("")
            break
        count += 1
        app.clear_message()
        if handle_line(app, line):
            break
        app.poll_file_events()
        write(render(app))
