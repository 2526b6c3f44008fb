"""
Command Line Interface for taskdeck.
"""

import sys
import click
from pathlib import Path
from .version import VERSION
from .data import Store
from .data.core import default_data_dir
from .config import load_config
from .recovery import TaskDeckError
from .logs import get_logger, setup_logging

log = get_logger("cli")


def _fail(error: TaskDeckError):
    log.critical(str(error))
    click.echo(f"taskdeck - ERROR: {error}", err=True)
    sys.exit(1)


def _open_store(data_dir: Path) -> tuple:
    store = Store(data_dir)
    migrated = store.check()
    return store, migrated


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="taskdeck")
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path), default=None,
              help='Directory holding the data and config files (default: ~/.config/taskdeck)')
@click.pass_context
def main(ctx, data_dir):
    """
    taskdeck - projects and tasks in your terminal.

    Without a command, opens the interactive view.
    """
    ctx.ensure_object(dict)
    ctx.obj['data_dir'] = data_dir if data_dir is not None else default_data_dir()
    if ctx.invoked_subcommand is None:
        run_interactive(ctx.obj['data_dir'])


def run_interactive(data_dir: Path):
    """Resolve the data file, read the configuration and hand the terminal to the UI."""
    # imported here so `status`/`path` work where curses is unavailable
    from .tui import start_curses
    from .view import App

    try:
        store, migrated = _open_store(data_dir)
        config = load_config(data_dir)
        app = App(store, show_help=config.ui.show_help, migrated=migrated)
    except TaskDeckError as e:
        _fail(e)

    setup_logging(console=False)
    try:
        start_curses(app)
    except TaskDeckError as e:
        setup_logging()
        _fail(e)


@main.command()
@click.pass_context
def status(ctx):
    """Show the data file version and a summary of every project."""
    try:
        store, migrated = _open_store(ctx.obj['data_dir'])
        projects = store.read()
    except TaskDeckError as e:
        _fail(e)

    if migrated:
        click.echo("Data file upgraded to the latest format.")
    click.echo(f"Version: {VERSION}")
    click.echo(f"Data version: {store.context.version}")
    click.echo(f"Data file: {store.path}")
    if not projects:
        click.echo("No projects yet.")
        return
    for project in projects:
        click.echo(f"[{project.done_count()}/{len(project.tasks)}] {project.title}")


@main.command()
@click.pass_context
def path(ctx):
    """Print the path of the active data file."""
    try:
        store, _ = _open_store(ctx.obj['data_dir'])
    except TaskDeckError as e:
        _fail(e)
    click.echo(str(store.path))


if __name__ == "__main__":
    main()
