"""CLI: focusmode auth register|login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from focusmode import config
from focusmode.context import SessionContext

console = Console()


def _get_app():
    from focusmode.cli.main import _get_app
    return _get_app()


def _run(coro, failure: Optional[str] = None):
    from focusmode.cli.main import _run
    return _run(coro, failure)


def _remember_base_url(base_url: Optional[str]) -> None:
    if base_url:
        config.save_config({**config.load_config(), "base_url": base_url})


@click.group()
def auth():
    """Authentication commands."""


@auth.command("register")
@click.option("--base-url", default=None, help="FocusMode API base URL")
@click.option("--name", prompt=True)
@click.option("--email", prompt=True)
@click.password_option()
def auth_register(base_url: Optional[str], name: str, email: str, password: str):
    """Create an account and log in."""
    _remember_base_url(base_url)

    async def _register():
        async with _get_app() as app:
            with console.status("Creating account..."):
                result = await app.auth.register(name, email, password)
        console.print(f"[green]Registered as {result['user']['email']} (ID: {result['user']['id']})[/green]")

    _run(_register(), failure="Registration failed")


@auth.command("login")
@click.option("--base-url", default=None, help="FocusMode API base URL")
@click.option("--email", prompt=True)
@click.option("--password", prompt=True, hide_input=True)
def auth_login(base_url: Optional[str], email: str, password: str):
    """Log in with email and password."""
    _remember_base_url(base_url)

    async def _login():
        async with _get_app() as app:
            with console.status("Logging in..."):
                result = await app.auth.login(email, password)
        user = result.get("user") or {}
        console.print(f"[green]Logged in as {user.get('email', email)} (ID: {user.get('id')})[/green]")
        console.print(f"[dim]Token saved to {config.config_file()}[/dim]")

    _run(_login(), failure="Login failed")


@auth.command("status")
def auth_status():
    """Show current auth status."""
    context = SessionContext.from_config()
    if context.is_logged_in():
        user = context.user
        console.print(f"[green]Logged in[/green] as {user.email if user else 'unknown'} (ID: {user.id if user else '?'})")
    elif context.token:
        console.print("[yellow]Session expired. Run `focusmode auth login`; using local data.[/yellow]")
    else:
        console.print("[yellow]Not logged in. Using local data; run `focusmode auth login` to sync.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    SessionContext.from_config().sign_out()
    console.print("[green]Logged out.[/green]")
