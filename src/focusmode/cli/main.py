"""
FocusMode CLI — `focusmode` command.

Commands:
  focusmode auth login             Log in, token saved to ~/.focusmode/config.json
  focusmode sessions <cmd>         Study sessions (planned -> inprogress -> completed)
  focusmode notes <cmd>            Notes
  focusmode books <cmd>            Reading list
  focusmode timers <cmd>           Focus timers
  focusmode stats today            Today's study time
  focusmode health                 API health check

Without a login every command works against the local store.
"""

import asyncio
import json
import logging
from typing import Any, Iterable, Optional, Sequence

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
    from rich.markup import escape
    from rich.table import Table
except ImportError:
    raise SystemExit("CLI requires extras: pip install focusmode[cli]")

from focusmode.app import FocusModeApp
from focusmode.controller import ERROR, SUCCESS, Outcome
from focusmode.errors import FocusModeError

console = Console()
err_console = Console(stderr=True)


def notify(kind: str, message: str) -> None:
    """Render controller notifications as transient messages."""
    style = "green" if kind == SUCCESS else "red"
    err_console.print(f"[{style}]{escape(message)}[/{style}]")


def _get_app() -> FocusModeApp:
    return FocusModeApp.from_config(notify=notify)


def _run(coro, failure: Optional[str] = None):
    """Run a command coroutine; a FocusModeError is reported through notify and exits 1."""
    try:
        return asyncio.run(coro)
    except FocusModeError as e:
        notify(ERROR, f"{failure}: {e.message}" if failure else e.message)
        raise SystemExit(1)


def _finish(outcome: Optional[Outcome]) -> None:
    if outcome is None or not outcome.ok:
        raise SystemExit(1)


def _dump(items: Iterable[Any]) -> None:
    click.echo(json.dumps([item.model_dump() for item in items], indent=2))


def _table(title: str, columns: Sequence[str], rows: Iterable[Sequence[Any]]) -> None:
    table = Table(title=title)
    for i, column in enumerate(columns):
        table.add_column(column, style="bold" if i == 0 else None)
    for row in rows:
        table.add_row(*("" if value is None else str(value) for value in row))
    console.print(table)


def _source_note(source: Any) -> str:
    return f"[dim]source: {source.value}[/dim]" if source is not None else ""


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool):
    """FocusMode CLI: plan, run and review study sessions."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@main.command("health")
def health_cmd():
    """Check that the FocusMode API is reachable."""

    async def _health():
        async with _get_app() as app:
            return await app.client.health()

    result = _run(_health(), failure="API unavailable")
    console.print(f"[green]{result.get('service', 'API')}: {result.get('status', 'OK')}[/green]")


# Register subcommands from separate modules
from focusmode.cli.auth import auth
from focusmode.cli.books import books
from focusmode.cli.notes import notes
from focusmode.cli.sessions import sessions
from focusmode.cli.stats import stats
from focusmode.cli.timers import timers

main.add_command(auth)
main.add_command(sessions)
main.add_command(notes)
main.add_command(books)
main.add_command(timers)
main.add_command(stats)


if __name__ == "__main__":
    main()
