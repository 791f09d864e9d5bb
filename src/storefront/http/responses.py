"""
Response helpers shared by the request client and the token refresher.
"""

from typing import Any

import requests

from storefront.exceptions.api import ResponseParseError
from storefront.exceptions.templates import ErrorMessageTemplates


def is_success(status_code: int) -> bool:
    return 200 <= status_code < 300


def error_message(response: requests.Response) -> str:
    """Human-readable message for a failed response.

    The JSON body's ``message`` wins; a JSON body without one falls back to
    ``HTTP <status>``; a body that is not JSON falls back to the reason phrase.
    """
    fallback = ErrorMessageTemplates.HTTP_STATUS.format(status=response.status_code)
    try:
        body = response.json()
    except ValueError:
        return response.reason or fallback

    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return fallback


def error_payload(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def parse_json(response: requests.Response, method: str, path: str) -> Any:
    """Parsed JSON body of a successful response; None when there is no body."""
    if response.status_code == 204 or not response.content or not response.content.strip():
        return None
    try:
        return response.json()
    except ValueError as e:
        raise ResponseParseError(method, path, response.status_code, str(e)) from e
