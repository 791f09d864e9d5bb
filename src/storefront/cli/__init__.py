"""Command line interface for storefront-client."""

from .main import cli, main

__all__ = ["cli", "main"]
