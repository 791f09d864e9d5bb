"""
Centralized error handling for the CLI.

Maps the exception hierarchy to a rich-rendered message and an exit code.
"""

import sys

from rich.console import Console

from ..exceptions import (
    ApiRequestError,
    AuthorizationError,
    CLIError,
    ConfigurationError,
    CredentialStoreError,
    StorefrontError,
    TransportError,
)
from ..logging import get_logger

console = Console(stderr=True)
logger = get_logger("storefront.cli.error")

EXIT_GENERAL = 1
EXIT_AUTH = 2
EXIT_CONFIG = 3
EXIT_CONNECTION = 4
EXIT_SESSION_STORE = 5
EXIT_API = 6


def handle_cli_errors(func):
    """Decorator to handle all CLI errors with proper formatting and exit codes."""
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except KeyboardInterrupt:
            _print_error("\nOperation cancelled by user", "yellow")
            sys.exit(EXIT_GENERAL)
        except AuthorizationError as e:
            _report(e, "Not authorized")
            sys.exit(EXIT_AUTH)
        except TransportError as e:
            _report(e, "Connection error")
            sys.exit(EXIT_CONNECTION)
        except ApiRequestError as e:
            _report(e, f"API error{f' ({e.status_code})' if e.status_code else ''}")
            sys.exit(EXIT_API)
        except ConfigurationError as e:
            _report(e, "Configuration error")
            sys.exit(EXIT_CONFIG)
        except CredentialStoreError as e:
            _report(e, "Session store error")
            sys.exit(EXIT_SESSION_STORE)
        except CLIError as e:
            _report(e, "Error")
            sys.exit(EXIT_GENERAL)
        except StorefrontError as e:
            _report(e, "Error")
            sys.exit(EXIT_GENERAL)
    return wrapper


def _print_error(message: str, style: str = "red"):
    console.print(f"[{style}]{message}[/{style}]")


def _report(e: StorefrontError, title: str) -> None:
    _print_error(f"{title}: {e.message}")
    if e.help_text:
        console.print(f"[blue]Hint: {e.help_text}[/blue]")
    if e.user_action:
        console.print(f"[green]Action: {e.user_action}[/green]")
    if e.technical_details:
        console.print(f"[dim]Details: {e.technical_details}[/dim]")
    console.print(f"[dim]Error ID: {e.correlation_id}[/dim]")

    logger.error(f"{title}: {e.message}",
                 error_code=e.error_code,
                 correlation_id=e.correlation_id)
