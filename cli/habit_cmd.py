"""
CLI 命令：habitgrid
交互式 shell、习惯列表与无界面 track 命令入口
"""
import queue
import sys
from pathlib import Path
from typing import Optional

import click

from interface.shell import run_shell
from tracker import paths
from tracker.app import App
from tracker.command import CommandKind, parse_command
from tracker.exceptions import CommandLineError, HabitGridError, StoreError
from tracker.logger import get_logger
from tracker.watcher import AutoStoreWatcher

logger = get_logger("cli")

HEADLESS_COMMANDS = (CommandKind.TRACK_UP, CommandKind.TRACK_DOWN)


def _load_app(data_dir: Optional[Path], file_events: Optional[queue.Queue] = None) -> App:
    """Load both stores; an unreadable or malformed store is fatal."""
    try:
        return App.load_state(
            paths.habit_file(data_dir),
            paths.auto_habit_file(data_dir),
            file_events=file_events,
        )
    except StoreError as e:
        logger.error(f"Startup aborted: {e.message}")
        click.echo(f"Error: {e.get_user_message()}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    envvar="HABITGRID_DATA_DIR",
    default=None,
    help="Directory holding habit_record.json and habit_record[auto].json",
)
@click.pass_context
def habitgrid(ctx: click.Context, data_dir: Optional[Path]):
    """habitgrid: track recurring goals on a calendar grid"""
    ctx.ensure_object(dict)
    ctx.obj["data_dir"] = data_dir


@habitgrid.command()
@click.pass_context
def run(ctx: click.Context):
    """Start the interactive line-mode shell"""
    events: queue.Queue = queue.Queue()
    app = _load_app(ctx.obj["data_dir"], file_events=events)
    watcher = AutoStoreWatcher(app.auto_store_path(), events)
    app.watcher = watcher
    watcher.start()
    try:
        run_shell(app)
    except HabitGridError as e:
        click.echo(f"Error: {e.get_user_message()}", err=True)
        sys.exit(1)
    finally:
        watcher.stop()


@habitgrid.command(name="list")
@click.pass_context
def list_habits(ctx: click.Context):
    """List all habits, one per line"""
    app = _load_app(ctx.obj["data_dir"])
    for name in app.list_habits():
        click.echo(name)


@habitgrid.command()
@click.argument("line")
@click.pass_context
def command(ctx: click.Context, line: str):
    """Run one track-up/track-down command against auto habits and save"""
    try:
        parsed = parse_command(line)
    except CommandLineError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    if parsed.kind not in HEADLESS_COMMANDS:
        click.echo("Error: only track-up and track-down are supported here", err=True)
        sys.exit(2)

    app = _load_app(ctx.obj["data_dir"])
    app.dispatch(parsed)
    try:
        app.save_state()
    except HabitGridError as e:
        click.echo(f"Error: {e.get_user_message()}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    habitgrid()
