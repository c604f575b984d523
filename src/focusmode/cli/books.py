"""CLI: focusmode books list|add|update|toggle|delete"""

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
def books():
    """Reading list."""


@books.command("list")
@click.option("--unread", is_flag=True, help="Only books not finished yet")
@click.option("--json-output", "--json", is_flag=True)
def books_list(unread, json_output):
    """List books."""
    from focusmode.cli.main import _dump, _source_note, _table

    async def _list():
        async with _get_app() as app:
            await app.books.load()
            return app.books.visible(is_complete=False if unread else None), app.books.source

    items, source = _run(_list())
    if json_output:
        _dump(items)
        return
    if not items:
        console.print("[dim]No books yet.[/dim]")
        return
    _table(
        f"Books ({len(items)})",
        ["ID", "Title", "Author", "Category", "Done"],
        [(b.id, b.title, b.author, b.category, "yes" if b.is_complete else "no") for b in items],
    )
    console.print(_source_note(source))


@books.command("add")
@click.option("--title", prompt=True)
@click.option("--author", default="")
@click.option("--category", default="academic")
@click.option("--description", default="")
def books_add(title, author, category, description):
    """Add a book to the reading list."""

    async def _add():
        async with _get_app() as app:
            return await app.books.create({
                "title": title, "author": author, "category": category, "description": description,
            })

    _finish(_run(_add()))


@books.command("update")
@click.argument("book_id")
@click.option("--title", default=None)
@click.option("--author", default=None)
@click.option("--category", default=None)
@click.option("--description", default=None)
def books_update(book_id, title, author, category, description):
    """Edit a book; omitted fields keep their value."""

    async def _update():
        async with _get_app() as app:
            await app.books.load()
            changes = {"title": title, "author": author, "category": category, "description": description}
            return await app.books.update(book_id, {k: v for k, v in changes.items() if v is not None})

    _finish(_run(_update()))


@books.command("toggle")
@click.argument("book_id")
def books_toggle(book_id):
    """Mark a book finished, or unfinished again."""

    async def _toggle():
        async with _get_app() as app:
            await app.books.load()
            return await app.books.toggle(book_id)

    _finish(_run(_toggle()))


@books.command("delete")
@click.argument("book_id")
@click.option("-y", "--yes", is_flag=True, help="Do not ask for confirmation")
def books_delete(book_id, yes):
    """Remove a book."""
    if not yes:
        click.confirm(f"Delete book {book_id}?", abort=True)

    async def _delete():
        async with _get_app() as app:
            return await app.books.delete(book_id)

    _finish(_run(_delete()))
