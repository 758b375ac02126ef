"""Main entry point for the terminal todo editor."""
from __future__ import annotations
import curses
import logging
import signal

import click

from termtodo import __version__
from termtodo.cli import CLI
from termtodo.config import Settings
from termtodo.logging_setup import setup_logging
from termtodo.session import Session
from termtodo.storage import DEFAULT_TODO_FILE, Storage
from termtodo.theme import Theme
from termtodo.view import View

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')

logger = logging.getLogger(__name__)


def _signal_exit(signum, _frame):
    """Turn SIGTERM/SIGHUP into SystemExit so curses.wrapper restores the terminal."""
    raise SystemExit(128 + signum)


def build_cli(settings: Settings) -> CLI:
    session = Session(Storage(settings.todo_file))
    view = View(Theme(settings.palette, enabled=settings.color))
    return CLI(session, view)


@click.command()
@click.option('--file', '-f', 'todo_file', default=str(DEFAULT_TODO_FILE), show_default=True,
              envvar='TODO_FILE', type=click.Path(dir_okay=False),
              help='JSON file holding the todo list.')
@click.option('--log-file', envvar='TODO_LOG_FILE', type=click.Path(dir_okay=False),
              help='Write a debug log here (nothing is logged otherwise).')
@click.option('--log-level', envvar='TODO_LOG_LEVEL', default='INFO', show_default=True,
              type=click.Choice(LOG_LEVELS, case_sensitive=False))
@click.option('--no-color', is_flag=True, help='Disable colors (also honours NO_COLOR).')
@click.version_option(__version__, prog_name='termtodo')
def main(todo_file, log_file, log_level, no_color):
    """Edit a todo list in the terminal.

    Keys: e new task, Enter edit selected, Space toggle, Del remove,
    j/k or arrows move, q quit.
    """
    settings = Settings.from_options(todo_file, log_file=log_file, log_level=log_level, no_color=no_color)
    setup_logging(settings.log_file, settings.log_level)
    logger.info("Starting with %s", settings.todo_file)

    for sig in (signal.SIGTERM, getattr(signal, 'SIGHUP', None)):
        if sig is not None:
            signal.signal(sig, _signal_exit)

    app = build_cli(settings)
    try:
        app.run()
    except OSError as exc:
        logger.exception("Saving the todo list failed")
        raise click.ClickException(f"could not save {settings.todo_file}: {exc}") from exc
    except curses.error as exc:
        logger.exception("Terminal error")
        raise click.ClickException(f"terminal error: {exc}") from exc
    logger.info("Exiting normally")


if __name__ == "__main__":
    main()
