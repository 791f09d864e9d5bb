"""
Coercion helpers shared by the wire-shape normalizers.

The API is loose about key names and value types; these helpers pick the
first usable key and coerce values into one canonical type.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional

from storefront.constants import Endpoints

_MISSING = (None, "")


def first_present(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Value of the first key that is present and not empty."""
    for key in keys:
        value = data.get(key)
        if value not in _MISSING:
            return value
    return default


def to_decimal(value: Any, default: Decimal = Decimal("0")) -> Decimal:
    if value in _MISSING:
        return default
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return default


def to_int(value: Any, default: int = 0) -> int:
    if value in _MISSING:
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default


def to_float(value: Any, default: float = 0.0) -> float:
    if value in _MISSING:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def to_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes", "on")
    return bool(value)


def to_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """ISO-8601 timestamp (a trailing ``Z`` included) or None."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def split_list(value: Any, separator: str) -> List[str]:
    """A list as-is, or a string split on ``separator``; blanks dropped."""
    if not value:
        return []
    if isinstance(value, (list, tuple)):
        items: Iterable[Any] = value
    else:
        items = str(value).split(separator)
    return [str(item).strip() for item in items if str(item).strip()]


def resolve_image_url(path: Optional[str], base_url: str) -> Optional[str]:
    """Absolute URL for an image reference.

    Absolute URLs and root-relative paths pass through; a bare file name is
    served from the API's upload directory.
    """
    if not path:
        return None
    if path.startswith("http") or path.startswith("/"):
        return path
    return f"{base_url.rstrip('/')}{Endpoints.UPLOADS_PREFIX}/{path}"
