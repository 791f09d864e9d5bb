"""Site-wide settings and editable CMS pages."""

from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .common import first_present, parse_timestamp


@dataclass
class SocialLinks:
    facebook: Optional[str] = None
    instagram: Optional[str] = None
    twitter: Optional[str] = None
    youtube: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        return {k: v for k, v in asdict(self).items() if v}


@dataclass
class PageContent:
    slug: str
    title: str
    content: str
    id: Optional[str] = None
    updated_at: Optional[datetime] = None


def social_links_from_api(data: Optional[Mapping[str, Any]]) -> SocialLinks:
    """Accepts the ``{key, value}`` setting envelope or the bare mapping."""
    data = data or {}
    value = data.get("value") if isinstance(data.get("value"), Mapping) else data
    return SocialLinks(
        facebook=value.get("facebook") or None,
        instagram=value.get("instagram") or None,
        twitter=value.get("twitter") or None,
        youtube=value.get("youtube") or None,
    )


def page_from_api(data: Mapping[str, Any]) -> PageContent:
    return PageContent(
        id=data.get("id"),
        slug=str(data.get("slug") or ""),
        title=str(data.get("title") or ""),
        content=str(data.get("content") or ""),
        updated_at=parse_timestamp(first_present(data, "updatedAt", "updated_at")),
    )
