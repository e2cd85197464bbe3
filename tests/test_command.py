import pytest

from tracker.command import Command, CommandKind, help_text, parse_command, parse_goal
from tracker.exceptions import CommandLineError
from tracker.habits import GoalKind


def test_add_parses_goal_variants():
    assert parse_command("add read") == Command(CommandKind.ADD, name="read", goal=GoalKind.bit())
    assert parse_command("a pushups 20").goal == GoalKind.count(20)
    assert parse_command("add run 2.5").goal == GoalKind.fractional(25, 1)
    assert parse_command("add read 1").goal == GoalKind.bit()


def test_add_auto_sets_provenance():
    command = parse_command("aa steps 8000")
    assert command.kind == CommandKind.ADD
    assert command.auto is True
    assert command.goal == GoalKind.count(8000)


def test_quoted_names_keep_spaces():
    command = parse_command('rename "morning run" "evening run"')
    assert command.name == "morning run"
    assert command.new_name == "evening run"


def test_aliases_and_simple_commands():
    assert parse_command("tup steps") == Command(CommandKind.TRACK_UP, name="steps")
    assert parse_command("tdown steps") == Command(CommandKind.TRACK_DOWN, name="steps")
    assert parse_command("mnext").kind == CommandKind.MONTH_NEXT
    assert parse_command("mprev").kind == CommandKind.MONTH_PREV
    assert parse_command("w").kind == CommandKind.WRITE
    assert parse_command("q").kind == CommandKind.QUIT
    assert parse_command("wq").kind == CommandKind.WRITE_AND_QUIT
    assert parse_command("   ").kind == CommandKind.BLANK


def test_backfill_defaults_to_all():
    assert parse_command("bf").name == "all"
    assert parse_command("backfill read").name == "read"


def test_help_topics():
    assert parse_command("? add").topic == "add"
    assert help_text(None) == "help <command>|commands|keys"
    assert help_text("tup").startswith("track-up")
    assert help_text("nope") == "unknown command or help topic."


@pytest.mark.parametrize("line", ["add", "delete", "rename only-one", "hide", "track-up", "frobnicate", 'add "unbalanced'])
def test_bad_lines_raise(line):
    with pytest.raises(CommandLineError):
        parse_command(line)


def test_invalid_goal_raises():
    with pytest.raises(CommandLineError):
        parse_goal("-3")
    with pytest.raises(CommandLineError):
        parse_goal("two")
