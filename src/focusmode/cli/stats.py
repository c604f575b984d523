"""CLI: focusmode stats today"""

import json

import click
from rich.console import Console

console = Console()


def _get_app():
    from focusmode.cli.main import _get_app
    return _get_app()


def _run(coro):
    from focusmode.cli.main import _run
    return _run(coro)


@click.group()
def stats():
    """Study statistics."""


@stats.command("today")
@click.option("--json-output", "--json", is_flag=True)
def stats_today(json_output):
    """Minutes studied and sessions completed today."""

    async def _today():
        async with _get_app() as app:
            return await app.stats.today(), app.stats.source

    result, source = _run(_today())
    if json_output:
        click.echo(json.dumps(result.model_dump(), indent=2))
        return
    console.print(f"Today: [bold]{result.total_minutes}[/bold] minutes over [bold]{result.total_sessions}[/bold] completed sessions")
    console.print(f"[dim]source: {source.value}[/dim]")
