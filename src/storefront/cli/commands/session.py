"""Session commands: login, logout, whoami, refresh."""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from ...auth import mask_token

console = Console()


@click.command()
@click.option("--email", "-e", prompt=True, help="Account email")
@click.option("--password", "-p", prompt=True, hide_input=True, help="Account password")
@click.pass_obj
def login(obj, email: str, password: str) -> None:
    """Log in and store the session."""
    auth = obj.shop.auth.login(email, password)
    name = auth.user.name if auth.user else email
    console.print(f"[green]✓ Logged in as {name}[/green]")
    if auth.user and auth.user.is_admin:
        console.print("[dim]Admin endpoints available[/dim]")


@click.command()
@click.pass_obj
def logout(obj) -> None:
    """Forget the stored session."""
    obj.shop.auth.logout()
    console.print("[green]✓ Logged out[/green]")


@click.command()
@click.option("--show-tokens", is_flag=True, help="Show masked tokens")
@click.pass_obj
def whoami(obj, show_tokens: bool) -> None:
    """Show the logged-in user."""
    user = obj.shop.auth.current_user()
    if user is None:
        console.print("[yellow]Not logged in[/yellow]")
        return

    table = Table(title="Current Session")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Name", user.name)
    table.add_row("Email", user.email)
    table.add_row("Role", user.role)
    if show_tokens:
        store = obj.shop.client.store
        table.add_row("Access token", mask_token(store.get_token()))
        table.add_row("Refresh token", mask_token(store.get_refresh_token()))
    console.print(table)


@click.command()
@click.pass_obj
def refresh(obj) -> None:
    """Exchange the refresh token for a new session."""
    ok: Optional[bool] = obj.shop.client.refresh()
    if ok:
        console.print("[green]✓ Session refreshed[/green]")
    else:
        console.print("[red]✗ Session could not be refreshed; log in again[/red]")
        click.get_current_context().exit(2)
