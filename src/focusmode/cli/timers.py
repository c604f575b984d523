"""CLI: focusmode timers list|start|complete|delete"""

import click
from rich.console import Console

console = Console()


def _get_app():
    from focusmode.cli.main import _get_app
    return _get_app()


def _run(coro):
    from focusmode.cli.main import _run
    return _run(coro)


def _finish(outcome):
    from focusmode.cli.main import _finish
    _finish(outcome)


@click.group()
def timers():
    """Focus timer log."""


@timers.command("list")
@click.option("--json-output", "--json", is_flag=True)
def timers_list(json_output):
    """List focus timers."""
    from focusmode.cli.main import _dump, _source_note, _table

    async def _list():
        async with _get_app() as app:
            return await app.timers.load(), app.timers.source

    items, source = _run(_list())
    if json_output:
        _dump(items)
        return
    if not items:
        console.print("[dim]No focus timers yet.[/dim]")
        return
    _table(
        f"Focus timers ({len(items)})",
        ["ID", "Type", "Minutes", "Task", "Started", "Done"],
        [
            (t.id, t.timer_type, t.duration, t.task_description, t.started_at, "yes" if t.completed else "no")
            for t in items
        ],
    )
    console.print(_source_note(source))


@timers.command("start")
@click.option("--type", "timer_type", default="pomodoro")
@click.option("--duration", default=25, type=int, help="Minutes")
@click.option("--task", "task_description", default="")
def timers_start(timer_type, duration, task_description):
    """Log a new running timer."""

    async def _start():
        async with _get_app() as app:
            return await app.timers.start({
                "timer_type": timer_type, "duration": duration, "task_description": task_description,
            })

    _finish(_run(_start()))


@timers.command("complete")
@click.argument("timer_id")
def timers_complete(timer_id):
    """Mark a timer completed."""

    async def _complete():
        async with _get_app() as app:
            await app.timers.load()
            return await app.timers.complete(timer_id)

    _finish(_run(_complete()))


@timers.command("delete")
@click.argument("timer_id")
def timers_delete(timer_id):
    """Delete a timer entry."""

    async def _delete():
        async with _get_app() as app:
            return await app.timers.delete(timer_id)

    _finish(_run(_delete()))
