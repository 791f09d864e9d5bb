"""
Account endpoints: profile, saved addresses, wishlist and contact messages.
"""

from typing import Any, List, Mapping, Optional

from storefront.models import (
    Address,
    ContactMessage,
    UserProfile,
    WishlistItem,
    address_from_api,
    contact_message_from_api,
    user_from_api,
    wishlist_item_from_api,
)

from .base import Resource, message_of, segment, without_none


class UsersResource(Resource):
    PATH = "/api/users"

    def profile(self) -> Optional[UserProfile]:
        return self._one(self.client.get(f"{self.PATH}/profile"), user_from_api)

    def update_profile(self, **fields: Any) -> Optional[UserProfile]:
        """Update profile fields; ``password`` requires ``currentPassword``."""
        payload = self.client.put(f"{self.PATH}/profile", without_none(fields))
        return self._one(payload, user_from_api)

    def addresses(self) -> List[Address]:
        return self._many(self.client.get(f"{self.PATH}/address"), address_from_api)

    def save_address(self, data: Mapping[str, Any]) -> Optional[Address]:
        return self._one(self.client.post(f"{self.PATH}/address", dict(data)), address_from_api)

    def update_address(self, address_id: str, data: Mapping[str, Any]) -> Optional[Address]:
        path = f"{self.PATH}/address/{segment(address_id)}"
        return self._one(self.client.put(path, dict(data)), address_from_api)

    def delete_address(self, address_id: str) -> Optional[str]:
        return message_of(self.client.delete(f"{self.PATH}/address/{segment(address_id)}"))

    def list_all(self) -> List[UserProfile]:
        return self._many(self.client.get(self.PATH), user_from_api)


class WishlistResource(Resource):
    PATH = "/api/wishlist"

    def list(self) -> List[WishlistItem]:
        return self._many(self.client.get(self.PATH), self._item)

    def add(self, product_id: str) -> Optional[WishlistItem]:
        return self._one(self.client.post(self.PATH, {"product_id": product_id}), self._item)

    def contains(self, product_id: str) -> bool:
        payload = self.client.get(f"{self.PATH}/check/{segment(product_id)}") or {}
        return bool(payload.get("inWishlist"))

    def remove(self, product_id: str) -> Optional[str]:
        return message_of(self.client.delete(f"{self.PATH}/{segment(product_id)}"))

    def _item(self, data: Mapping[str, Any]) -> WishlistItem:
        return wishlist_item_from_api(data, self.base_url)


class ContactResource(Resource):
    PATH = "/api/contact"

    def submit(self, name: str, email: str, message: str) -> Optional[str]:
        body = {"name": name, "email": email, "message": message}
        return message_of(self.client.post(self.PATH, body))

    def list_all(self) -> List[ContactMessage]:
        return self._many(self.client.get(self.PATH), contact_message_from_api)

    def mark_read(self, message_id: str) -> Optional[ContactMessage]:
        payload = self.client.put(f"{self.PATH}/{segment(message_id)}/read", {})
        return self._one(payload, contact_message_from_api)
