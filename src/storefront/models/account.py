"""
Account resources: authentication results, profiles, addresses, wishlist
entries and contact messages.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from .catalog import Product, product_from_api
from .common import first_present, parse_timestamp, to_bool, to_str


@dataclass
class UserProfile:
    id: str
    name: str
    email: str
    role: str = "user"
    avatar: Optional[str] = None
    phone: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


@dataclass
class AuthResponse:
    """Result of a login, registration or token refresh."""

    token: str
    refresh_token: Optional[str]
    user: Optional[UserProfile]
    raw_user: Optional[Dict[str, Any]] = None


@dataclass
class Address:
    id: Optional[str]
    first_name: str = ""
    last_name: str = ""
    line1: str = ""
    line2: str = ""
    landmark: Optional[str] = None
    pincode: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    phone: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None

    @property
    def full_name(self) -> str:
        if self.name:
            return self.name
        return f"{self.first_name} {self.last_name}".strip()

    def lines(self):
        """Printable address lines, blanks skipped."""
        locality = " ".join(p for p in (f"{self.city}, {self.state}".strip(", "), self.pincode) if p)
        candidates = [self.line1, self.line2, self.landmark, locality, self.country]
        return [line for line in candidates if line]


@dataclass
class WishlistItem:
    id: Optional[str]
    product_id: str
    product: Optional[Product] = None


@dataclass
class ContactMessage:
    id: str
    name: str
    email: str
    message: str
    is_read: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def user_from_api(data: Mapping[str, Any]) -> UserProfile:
    return UserProfile(
        id=str(data.get("id", "")),
        name=str(data.get("name") or ""),
        email=str(data.get("email") or ""),
        role=str(data.get("role") or "user"),
        avatar=data.get("avatar"),
        phone=to_str(data.get("phone")),
        created_at=parse_timestamp(first_present(data, "createdAt", "created_at")),
    )


def auth_response_from_api(data: Mapping[str, Any]) -> AuthResponse:
    raw_user = data.get("user")
    return AuthResponse(
        token=str(data.get("token") or ""),
        refresh_token=first_present(data, "refreshToken", "refresh_token"),
        user=user_from_api(raw_user) if isinstance(raw_user, Mapping) else None,
        raw_user=dict(raw_user) if isinstance(raw_user, Mapping) else None,
    )


def address_from_api(data: Mapping[str, Any]) -> Address:
    """Saved addresses and order shipping snapshots share this shape."""
    return Address(
        id=to_str(data.get("id")),
        first_name=str(data.get("first_name") or ""),
        last_name=str(data.get("last_name") or ""),
        line1=str(first_present(data, "flat_house_no", "address_line1", default="")),
        line2=str(first_present(data, "area_street", "address_line2", default="")),
        landmark=data.get("landmark") or None,
        pincode=str(first_present(data, "pincode", "postal_code", "zip", default="")),
        city=str(data.get("city") or ""),
        state=str(data.get("state") or ""),
        country=str(data.get("country") or ""),
        phone=to_str(data.get("phone")),
        email=data.get("email"),
        name=data.get("name"),
    )


def wishlist_item_from_api(data: Mapping[str, Any], base_url: str) -> WishlistItem:
    product_data = data.get("Product") if isinstance(data.get("Product"), Mapping) else data
    product_id = first_present(data, "product_id", "id")
    product = product_from_api(product_data, base_url) if product_data.get("name") else None
    return WishlistItem(
        id=to_str(data.get("id")),
        product_id=str(product_id or ""),
        product=product,
    )


def contact_message_from_api(data: Mapping[str, Any]) -> ContactMessage:
    return ContactMessage(
        id=str(data.get("id", "")),
        name=str(data.get("name") or ""),
        email=str(data.get("email") or ""),
        message=str(data.get("message") or ""),
        is_read=to_bool(data.get("is_read")),
        created_at=parse_timestamp(first_present(data, "createdAt", "created_at")),
        updated_at=parse_timestamp(first_present(data, "updatedAt", "updated_at")),
    )
