"""Configuration management command."""

from typing import Optional, Tuple

import click
from rich.console import Console
from rich.prompt import Confirm
from rich.table import Table

from ...core.config import ConfigManager
from ...exceptions import UserAbortError

console = Console()


@click.command()
@click.option("--show", is_flag=True, help="Show current configuration")
@click.option("--set", "set_pair", nargs=2, metavar="KEY VALUE",
              help="Set a value, e.g. --set api.base_url https://shop.example.com")
@click.option("--get", "get_key", metavar="KEY", help="Print one value")
@click.option("--reset", is_flag=True, help="Reset configuration to defaults")
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation")
@click.pass_obj
def config(obj, show: bool, set_pair: Optional[Tuple[str, str]],
           get_key: Optional[str], reset: bool, yes: bool) -> None:
    """Manage configuration.

    \b
    Examples:
        storefront config --show
        storefront config --set api.timeout 10
        storefront config --get session.encrypt_tokens
        storefront config --reset
    """
    config_manager: ConfigManager = obj.config_manager

    if reset:
        if not yes and not Confirm.ask("Are you sure you want to reset all configuration?"):
            raise UserAbortError("configuration left unchanged")
        config_manager.reset_config()
        console.print("[green]✓ Configuration reset to defaults[/green]")
        return

    if set_pair:
        key, value = set_pair
        config_manager.set_value(key, value)
        console.print(f"[green]✓ {key} = {config_manager.get_value(key)}[/green]")
        return

    if get_key:
        console.print(str(config_manager.get_value(get_key)))
        return

    show_configuration(config_manager)


def show_configuration(config_manager: ConfigManager) -> None:
    """Display current configuration."""
    config = config_manager.load_config()

    table = Table(title="Storefront Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Config File", str(config_manager.config_file))
    table.add_row("API URL", config.api.base_url)
    table.add_row("Timeout", f"{config.api.timeout}s")
    table.add_row("Refresh Attempts", str(config.refresh.max_attempts))
    table.add_row("Refresh Backoff", config.refresh.strategy.value)
    table.add_row("Session File", str(config_manager.credentials_file))
    table.add_row("Encrypt Tokens", str(config.session.encrypt_tokens))
    table.add_row("Log Level", config.logging.level.value)
    table.add_row("Log Format", config.logging.format)
    console.print(table)
