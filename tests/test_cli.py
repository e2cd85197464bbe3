import json
from datetime import date

import pytest
from click.testing import CliRunner

from cli.habit_cmd import habitgrid
from interface.shell import handle_line, render, run_shell
from tracker.app import App
from tracker.habits import Count, GoalKind
from tracker.paths import AUTO_HABIT_FILE_NAME, HABIT_FILE_NAME
from tracker.store import load_habits, save_habits

TODAY = date.today()


def test_list_prints_manual_then_auto(tmp_path):
    save_habits([Count("pushups", 20)], tmp_path / HABIT_FILE_NAME)
    save_habits([Count("steps", 8000, auto=True)], tmp_path / AUTO_HABIT_FILE_NAME)

    result = CliRunner().invoke(habitgrid, ["--data-dir", str(tmp_path), "list"])

    assert result.exit_code == 0
    assert result.output.splitlines() == ["pushups", "steps"]


def test_fresh_data_dir_gets_empty_stores(tmp_path):
    data_dir = tmp_path / "fresh"
    result = CliRunner().invoke(habitgrid, ["--data-dir", str(data_dir), "list"])

    assert result.exit_code == 0
    assert json.loads((data_dir / HABIT_FILE_NAME).read_text(encoding="utf-8")) == []
    assert json.loads((data_dir / AUTO_HABIT_FILE_NAME).read_text(encoding="utf-8")) == []


def test_command_tracks_auto_habit_and_saves(tmp_path):
    save_habits([Count("steps", 3, auto=True)], tmp_path / AUTO_HABIT_FILE_NAME)

    result = CliRunner().invoke(habitgrid, ["--data-dir", str(tmp_path), "command", "tup steps"])

    assert result.exit_code == 0
    steps = load_habits(tmp_path / AUTO_HABIT_FILE_NAME)[0]
    assert steps.get_by_date(TODAY) == 1


def test_command_rejects_non_track_commands(tmp_path):
    result = CliRunner().invoke(habitgrid, ["--data-dir", str(tmp_path), "command", "add read"])
    assert result.exit_code == 2
    assert "only track-up and track-down" in result.output


def test_malformed_store_is_fatal_at_startup(tmp_path):
    (tmp_path / HABIT_FILE_NAME).write_text("{broken", encoding="utf-8")
    (tmp_path / AUTO_HABIT_FILE_NAME).write_text("[]", encoding="utf-8")

    result = CliRunner().invoke(habitgrid, ["--data-dir", str(tmp_path), "list"])

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_run_shell_session_writes_on_wq(tmp_path):
    result = CliRunner().invoke(
        habitgrid,
        ["--data-dir", str(tmp_path), "run"],
        input="add pushups 20\n+\n+\nwq\n",
    )

    assert result.exit_code == 0
    saved = load_habits(tmp_path / HABIT_FILE_NAME)
    assert [h.name for h in saved] == ["pushups"]
    assert saved[0].get_by_date(TODAY) == 2


def test_shell_keys_and_render():
    app = App()
    app.add("read", GoalKind.bit())
    app.add("pushups", GoalKind.count(20))
    handle_line(app, ">")
    handle_line(app, "+")
    handle_line(app, "m")
    assert app.focus == 1
    assert app.habits[1].get_by_date(TODAY) == 1

    view = render(app)
    assert "> pushups" in view
    assert "--WEEK--" in view


def test_run_shell_stops_at_end_of_input():
    app = App()
    lines = iter(["add read", "frobnicate"])
    output = []

    def read(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError

    run_shell(app, read=read, write=output.append)

    assert app.list_habits() == ["read"]
    assert "E: Invalid command: `frobnicate`" in "\n".join(output)


def test_main_entry_point_runs_cli(tmp_path, monkeypatch, capsys):
    import main

    monkeypatch.setattr(main, "setup_logging", lambda: None)
    save_habits([Count("pushups", 20)], tmp_path / HABIT_FILE_NAME)
    monkeypatch.setattr("sys.argv", ["habitgrid", "--data-dir", str(tmp_path), "list"])

    with pytest.raises(SystemExit) as info:
        main.main()

    assert info.value.code == 0
    assert capsys.readouterr().out.splitlines() == ["pushups"]
