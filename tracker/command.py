"""
Command line parsing for habitgrid.

Turns one line typed at the `:` prompt (or passed with `habitgrid command`)
into a Command value the App can dispatch.
"""
import re
import shlex
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from tracker.exceptions import CommandLineError
from tracker.habits import GoalKind


class CommandKind(Enum):
    ADD = "add"
    DELETE = "delete"
    RENAME = "rename"
    TRACK_UP = "track-up"
    TRACK_DOWN = "track-down"
    BACKFILL = "backfill"
    HIDE = "hide"
    UNHIDE = "unhide"
    MONTH_NEXT = "month-next"
    MONTH_PREV = "month-prev"
    HELP = "help"
    WRITE = "write"
    QUIT = "quit"
    WRITE_AND_QUIT = "wq"
    BLANK = "blank"


@dataclass(frozen=True)
class Command:
    kind: CommandKind
    name: Optional[str] = None
    new_name: Optional[str] = None
    goal: Optional[GoalKind] = None
    auto: bool = False
    topic: Optional[str] = None


ALIASES = {
    "a": "add",
    "aa": "add-auto",
    "d": "delete",
    "tup": "track-up",
    "tdown": "track-down",
    "bf": "backfill",
    "mnext": "month-next",
    "mprev": "month-prev",
    "h": "help",
    "?": "help",
    "w": "write",
    "q": "quit",
}

HELP_TOPICS = {
    "add": "add <habit-name> [goal]     (alias: a)",
    "add-auto": "add-auto <habit-name> [goal]     (alias: aa)",
    "delete": "delete <habit-name>     (alias: d)",
    "rename": "rename <habit-name> <new-name>",
    "month-prev": "month-prev     (alias: mprev)",
    "month-next": "month-next     (alias: mnext)",
    "track-up": "track-up <auto-habit-name>     (alias: tup)",
    "track-down": "track-down <auto-habit-name>     (alias: tdown)",
    "backfill": "backfill [<habit-name>|all]     (alias: bf)",
    "hide": "hide <habit-name>",
    "unhide": "unhide <habit-name>",
    "quit": "quit habitgrid     (alias: q)",
    "write": "write current state to disk     (alias: w)",
    "wq": "write current state to disk and quit habitgrid",
    "help": "help [<command>|commands|keys]     (aliases: h, ?)",
    "commands": "add, add-auto, delete, rename, backfill, hide, unhide, "
                "month-{prev,next}, track-{up,down}, write, wq, help, quit",
    "keys": "+/- track focused habit, </> and ^/v move focus, [/] move cursor a day, . reset cursor, m cycle view mode",
}

HELP_SUMMARY = "help <command>|commands|keys"

_DECIMAL_GOAL = re.compile(r"^(\d+)\.(\d+)$")


def help_text(topic: Optional[str]) -> str:
    if not topic:
        return HELP_SUMMARY
    topic = ALIASES.get(topic, topic)
    return HELP_TOPICS.get(topic, "unknown command or help topic.")


def parse_goal(raw: Optional[str]) -> GoalKind:
    """
    Parse the optional goal argument of `add`.

    No goal or `1` means a yes/no habit, any other whole number a counted
    habit and a decimal such as `2.5` a fractional habit whose precision is
    the number of digits after the point.
    """
    if raw is None:
        return GoalKind.bit()
    if raw.isdigit():
        value = int(raw)
        if value == 1:
            return GoalKind.bit()
        return GoalKind.count(value)
    match = _DECIMAL_GOAL.match(raw)
    if match:
        whole, frac = match.groups()
        return GoalKind.fractional(int(whole + frac), len(frac))
    raise CommandLineError(f"Invalid goal `{raw}`: expected a whole number or a decimal", command="add")


def _require(args: List[str], count: int, command: str, usage: str) -> None:
    if len(args) < count:
        raise CommandLineError(f"Missing argument for `{command}`, usage: {usage}", command=command)


def parse_command(line: str) -> Command:
    """Parse one command line. Raises CommandLineError on bad input."""
    try:
        tokens = shlex.split(line.strip())
    except ValueError as e:
        raise CommandLineError(f"Could not parse `{line.strip()}`: {e}") from e

    if not tokens:
        return Command(CommandKind.BLANK)

    head, args = tokens[0], tokens[1:]
    name = ALIASES.get(head, head)
    usage = HELP_TOPICS.get(name, "")

    if name in ("add", "add-auto"):
        _require(args, 1, name, usage)
        goal = parse_goal(args[1] if len(args) > 1 else None)
        return Command(CommandKind.ADD, name=args[0], goal=goal, auto=(name == "add-auto"))
    if name == "delete":
        _require(args, 1, name, usage)
        return Command(CommandKind.DELETE, name=args[0])
    if name == "rename":
        _require(args, 2, name, usage)
        return Command(CommandKind.RENAME, name=args[0], new_name=args[1])
    if name == "track-up":
        _require(args, 1, name, usage)
        return Command(CommandKind.TRACK_UP, name=args[0])
    if name == "track-down":
        _require(args, 1, name, usage)
        return Command(CommandKind.TRACK_DOWN, name=args[0])
    if name == "backfill":
        return Command(CommandKind.BACKFILL, name=args[0] if args else "all")
    if name == "hide":
        _require(args, 1, name, usage)
        return Command(CommandKind.HIDE, name=args[0])
    if name == "unhide":
        _require(args, 1, name, usage)
        return Command(CommandKind.UNHIDE, name=args[0])
    if name == "month-next":
        return Command(CommandKind.MONTH_NEXT)
    if name == "month-prev":
        return Command(CommandKind.MONTH_PREV)
    if name == "help":
        return Command(CommandKind.HELP, topic=args[0] if args else None)
    if name == "write":
        return Command(CommandKind.WRITE)
    if name == "quit":
        return Command(CommandKind.QUIT)
    if name == "wq":
        return Command(CommandKind.WRITE_AND_QUIT)

    raise CommandLineError(f"Invalid command: `{head}`", command=head)
