"""
Common plumbing for resource wrappers.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar
from urllib.parse import quote, urlencode

T = TypeVar("T")


def segment(value: Any) -> str:
    """A single URL path segment."""
    return quote(str(value), safe="")


def with_query(path: str, params: Mapping[str, Any]) -> str:
    """Append the params that have a value; the path is unchanged when none do."""
    given = {k: v for k, v in params.items() if v not in (None, "", False)}
    if not given:
        return path
    return f"{path}?{urlencode(given, quote_via=quote)}"


def message_of(payload: Any) -> Optional[str]:
    if isinstance(payload, Mapping):
        message = payload.get("message")
        return str(message) if message is not None else None
    return None


def without_none(data: Mapping[str, Any]) -> dict:
    return {k: v for k, v in data.items() if v is not None}


class Resource:
    """A group of endpoints sharing one ApiClient."""

    def __init__(self, client):
        self.client = client

    @property
    def base_url(self) -> str:
        return self.client.base_url

    def _many(self, payload: Optional[Iterable[Any]], convert: Callable[[Any], T]) -> List[T]:
        return [convert(item) for item in payload or [] if isinstance(item, Mapping)]

    def _one(self, payload: Any, convert: Callable[[Any], T]) -> Optional[T]:
        """Convert a single object; an empty reply (204 or no body) gives None."""
        return convert(payload) if isinstance(payload, Mapping) else None
