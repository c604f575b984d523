"""CLI: focusmode sessions list|create|update|delete|start|complete"""

import click
from rich.console import Console

from focusmode.models.session import STATUSES

console = Console()

STATUS_TEXT = {
    "planned": "Planned",
    "inprogress": "In progress",
    "completed": "Completed",
}


def _get_app():
    from focusmode.cli.main import _get_app
    return _get_app()


def _run(coro):
    from focusmode.cli.main import _run
    return _run(coro)


def _finish(outcome):
    from focusmode.cli.main import _finish
    _finish(outcome)


def _render(items, source, json_output: bool) -> None:
    from focusmode.cli.main import _dump, _source_note, _table
    if json_output:
        _dump(items)
        return
    if not items:
        console.print("[dim]No study sessions yet. Add one with `focusmode sessions create`.[/dim]")
        return
    _table(
        f"Study sessions ({len(items)})",
        ["ID", "Title", "Subject", "Minutes", "Status", "Created"],
        [
            (s.id, s.title, s.subject, s.duration, STATUS_TEXT.get(s.status, s.status), (s.created_at or "")[:10])
            for s in items
        ],
    )
    console.print(_source_note(source))


@click.group()
def sessions():
    """Study session management."""


@sessions.command("list")
@click.option("--status", type=click.Choice(["all", *STATUSES]), default="all")
@click.option("--search", default=None, help="Match title, subject or description")
@click.option("--json-output", "--json", is_flag=True)
def sessions_list(status, search, json_output):
    """List study sessions, newest first."""

    async def _list():
        async with _get_app() as app:
            await app.sessions.load()
            _render(app.sessions.visible(query=search, status=status), app.sessions.source, json_output)

    _run(_list())


@sessions.command("create")
@click.option("--title", prompt=True)
@click.option("--subject", default="")
@click.option("--duration", default=25, type=int, help="Minutes")
@click.option("--status", type=click.Choice(STATUSES), default="planned")
@click.option("--description", "--notes", default="")
def sessions_create(title, subject, duration, status, description):
    """Plan a new study session."""

    async def _create():
        async with _get_app() as app:
            return await app.sessions.create({
                "title": title,
                "subject": subject,
                "duration": duration,
                "status": status,
                "description": description,
            })

    _finish(_run(_create()))


@sessions.command("update")
@click.argument("session_id")
@click.option("--title", default=None)
@click.option("--subject", default=None)
@click.option("--duration", default=None, type=int)
@click.option("--description", "--notes", default=None)
def sessions_update(session_id, title, subject, duration, description):
    """Edit a study session; omitted fields keep their value.

    Status only moves forward, through `start` and `complete`.
    """

    async def _update():
        async with _get_app() as app:
            await app.sessions.load()
            changes = {
                "title": title, "subject": subject, "duration": duration, "description": description,
            }
            return await app.sessions.update(session_id, {k: v for k, v in changes.items() if v is not None})

    _finish(_run(_update()))


@sessions.command("delete")
@click.argument("session_id")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
def sessions_delete(session_id, yes):
    """Delete a study session."""
    if not yes:
        click.confirm(f"Delete session {session_id}?", abort=True)

    async def _delete():
        async with _get_app() as app:
            await app.sessions.load()
            return await app.sessions.delete(session_id)

    _finish(_run(_delete()))


@sessions.command("start")
@click.argument("session_id")
def sessions_start(session_id):
    """Start a planned session."""

    async def _start():
        async with _get_app() as app:
            await app.sessions.load()
            return await app.sessions.start(session_id)

    _finish(_run(_start()))


@sessions.command("complete")
@click.argument("session_id")
def sessions_complete(session_id):
    """Complete a session in progress."""

    async def _complete():
        async with _get_app() as app:
            await app.sessions.load()
            return await app.sessions.complete(session_id)

    _finish(_run(_complete()))
