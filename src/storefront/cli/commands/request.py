"""Raw authenticated API request."""

import json
from typing import Optional, Tuple

import click
from rich.console import Console

from ...api.client import encode_json
from ...exceptions import InvalidCommandError

console = Console()

METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@click.command(name="request")
@click.argument("method", type=click.Choice(METHODS, case_sensitive=False))
@click.argument("path")
@click.option("--data", "-d", help="JSON request body")
@click.option("--header", "-H", "headers", multiple=True, help="Extra header 'Name: value'")
@click.pass_obj
def request_command(obj, method: str, path: str, data: Optional[str],
                    headers: Tuple[str, ...]) -> None:
    """Send METHOD PATH with the stored session and print the JSON result.

    \b
    Examples:
        storefront request GET /api/orders
        storefront request PUT /api/orders/42/status -d '{"delivery_status": "shipped"}'
    """
    body = None
    if data is not None:
        try:
            body = json.loads(data)
        except ValueError as e:
            raise InvalidCommandError("request", f"--data is not valid JSON: {e}") from e

    extra = {}
    for header in headers:
        name, sep, value = header.partition(":")
        if not sep or not name.strip():
            raise InvalidCommandError("request", f"bad header {header!r}, expected 'Name: value'")
        extra[name.strip()] = value.strip()

    result = obj.shop.client.request(method.upper(), path, body, extra or None)
    if result is None:
        console.print("[dim](no content)[/dim]")
    else:
        console.print_json(encode_json(result))
