#!/usr/bin/env python3
"""storefront CLI main entry point.

Operator command line for the storefront API: session management, raw
authenticated requests, orders and dashboard statistics.
"""

from pathlib import Path
from typing import Optional

import click

from .. import __version__
from ..exceptions import ConfigurationError
from ..logging import LoggingConfig, configure_logging, get_logger
from .commands.config import config as config_command
from .commands.dashboard import stats
from .commands.orders import orders, track
from .commands.request import request_command
from .commands.session import login, logout, refresh, whoami
from .context import CliContext
from .error_handlers import handle_cli_errors


def setup_logging(context: CliContext, verbose: int = 0) -> None:
    """Configure logging from the loaded configuration; -v/-vv raise the level."""
    try:
        settings = context.config.logging
        level = settings.level.value
        format_type = settings.format
        output = list(settings.output)
        file_path = settings.file_path
    except ConfigurationError:
        # The command itself reports the configuration problem.
        level, format_type, output, file_path = "WARNING", "console", ["console"], None

    if verbose:
        level = "DEBUG" if verbose > 1 else "INFO"

    configure_logging(LoggingConfig(
        level=level,
        format_type=format_type,
        output=output,
        file_path=file_path,
        service_name="storefront-cli",
        version=__version__,
    ))
    get_logger("storefront.cli").debug("storefront CLI started", version=__version__)


@click.group()
@click.version_option(version=__version__, prog_name="storefront")
@click.option(
    "--config", "-c",
    "config_file",
    type=click.Path(path_type=Path),
    help="Configuration file path"
)
@click.option("--api-url", help="Override the API base URL for this call")
@click.option(
    "--verbose", "-v",
    count=True,
    help="Increase verbosity (-v for INFO, -vv for DEBUG)"
)
@click.pass_context
def cli(ctx: click.Context, config_file: Optional[Path], api_url: Optional[str],
        verbose: int) -> None:
    """storefront: command line client for the storefront API.

    \b
    Examples:
        storefront login -e admin@example.com
        storefront orders list --all
        storefront track 42 customer@example.com
        storefront request GET /api/dashboard/stats
    """
    context = CliContext(config_file, api_url)
    ctx.obj = context
    ctx.call_on_close(context.close)
    setup_logging(context, verbose)


cli.add_command(login)
cli.add_command(logout)
cli.add_command(whoami)
cli.add_command(refresh)
cli.add_command(request_command)
cli.add_command(orders)
cli.add_command(track)
cli.add_command(stats)
cli.add_command(config_command)


def main() -> None:
    """Main entry point for the CLI."""
    handle_cli_errors(cli)()


if __name__ == "__main__":
    main()
