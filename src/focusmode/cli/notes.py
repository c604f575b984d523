"""CLI: focusmode notes list|create|update|delete"""

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
def notes():
    """Study notes."""


@notes.command("list")
@click.option("--category", default="all")
@click.option("--search", default=None)
@click.option("--json-output", "--json", is_flag=True)
def notes_list(category, search, json_output):
    """List notes, newest first."""
    from focusmode.cli.main import _dump, _source_note, _table

    async def _list():
        async with _get_app() as app:
            await app.notes.load()
            return app.notes.visible(query=search, category=category), app.notes.source

    items, source = _run(_list())
    if json_output:
        _dump(items)
        return
    if not items:
        console.print("[dim]No notes yet.[/dim]")
        return
    _table(
        f"Notes ({len(items)})",
        ["ID", "Title", "Category", "Content", "Created"],
        [(n.id, n.title, n.category, n.content[:60], (n.created_at or "")[:10]) for n in items],
    )
    console.print(_source_note(source))


@notes.command("create")
@click.option("--title", prompt=True)
@click.option("--content", prompt=True)
@click.option("--category", default="study")
def notes_create(title, content, category):
    """Write a new note."""

    async def _create():
        async with _get_app() as app:
            return await app.notes.create({"title": title, "content": content, "category": category})

    _finish(_run(_create()))


@notes.command("update")
@click.argument("note_id")
@click.option("--title", default=None)
@click.option("--content", default=None)
@click.option("--category", default=None)
def notes_update(note_id, title, content, category):
    """Edit a note; omitted fields keep their value."""

    async def _update():
        async with _get_app() as app:
            await app.notes.load()
            changes = {"title": title, "content": content, "category": category}
            return await app.notes.update(note_id, {k: v for k, v in changes.items() if v is not None})

    _finish(_run(_update()))


@notes.command("delete")
@click.argument("note_id")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
def notes_delete(note_id, yes):
    """Delete a note."""
    if not yes:
        click.confirm(f"Delete note {note_id}?", abort=True)

    async def _delete():
        async with _get_app() as app:
            return await app.notes.delete(note_id)

    _finish(_run(_delete()))
