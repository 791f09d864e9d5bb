"""HTTP transport for storefront-client."""

from .client import HttpClient
from .responses import error_message, is_success, parse_json

__all__ = ["HttpClient", "error_message", "is_success", "parse_json"]
