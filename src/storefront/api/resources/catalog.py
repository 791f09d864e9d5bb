"""
Catalog endpoints: products, image uploads, categories, banners, concerns
and reviews.
"""

from typing import Any, Dict, List, Mapping, Optional

from storefront.api.client import Multipart
from storefront.models import (
    Banner,
    Category,
    Concern,
    Product,
    Review,
    UploadedImage,
    banner_from_api,
    category_from_api,
    concern_from_api,
    product_from_api,
    review_from_api,
    uploaded_image_from_api,
)

from .base import Resource, message_of, segment, with_query


class ProductsResource(Resource):
    PATH = "/api/products"

    def list(self, search: Optional[str] = None, category: Optional[str] = None,
             sort: Optional[str] = None, featured: bool = False) -> List[Product]:
        path = with_query(self.PATH, {
            "search": search,
            "category": category,
            "sort": sort,
            "featured": "true" if featured else None,
        })
        return self._many(self.client.get(path), self._product)

    def get(self, product_id: str) -> Optional[Product]:
        return self._one(self.client.get(f"{self.PATH}/{segment(product_id)}"), self._product)

    def create(self, data: Mapping[str, Any]) -> Optional[Product]:
        return self._one(self.client.post(self.PATH, dict(data)), self._product)

    def update(self, product_id: str, data: Mapping[str, Any]) -> Optional[Product]:
        payload = self.client.put(f"{self.PATH}/{segment(product_id)}", dict(data))
        return self._one(payload, self._product)

    def delete(self, product_id: str) -> Optional[str]:
        return message_of(self.client.delete(f"{self.PATH}/{segment(product_id)}"))

    def _product(self, data: Mapping[str, Any]) -> Product:
        return product_from_api(data, self.base_url)


class UploadsResource(Resource):
    PATH = "/api/upload"

    def upload_image(self, filename: str, content: bytes,
                     content_type: str = "application/octet-stream") -> Optional[UploadedImage]:
        """Upload an image; the returned URL is stored on products and banners."""
        form = Multipart(files={"image": (filename, content, content_type)})
        return self._one(self.client.upload(self.PATH, form), uploaded_image_from_api)


class _ManagedListResource(Resource):
    """Admin-managed list: public active entries plus full CRUD."""

    PATH = ""

    def list_active(self):
        return self._many(self.client.get(self.PATH), self._convert)

    def list_all(self):
        return self._many(self.client.get(f"{self.PATH}/all"), self._convert)

    def create(self, data: Mapping[str, Any]):
        return self._one(self.client.post(self.PATH, dict(data)), self._convert)

    def update(self, item_id: str, data: Mapping[str, Any]):
        payload = self.client.put(f"{self.PATH}/{segment(item_id)}", dict(data))
        return self._one(payload, self._convert)

    def delete(self, item_id: str) -> Optional[str]:
        return message_of(self.client.delete(f"{self.PATH}/{segment(item_id)}"))

    def _convert(self, data: Mapping[str, Any]):
        raise NotImplementedError


class CategoriesResource(_ManagedListResource):
    PATH = "/api/categories"

    def list(self) -> List[Category]:
        return self.list_active()

    def from_products(self) -> List[str]:
        """Distinct category names currently used by products."""
        return [str(name) for name in self.client.get(f"{self.PATH}/from-products") or []]

    def _convert(self, data: Mapping[str, Any]) -> Category:
        return category_from_api(data, self.base_url)


class BannersResource(_ManagedListResource):
    PATH = "/api/banners"

    def _convert(self, data: Mapping[str, Any]) -> Banner:
        return banner_from_api(data, self.base_url)


class ConcernsResource(_ManagedListResource):
    PATH = "/api/concerns"

    def _convert(self, data: Mapping[str, Any]) -> Concern:
        return concern_from_api(data, self.base_url)


class ReviewsResource(Resource):
    PATH = "/api/reviews"

    def for_product(self, product_id: str) -> List[Review]:
        return self._many(self.client.get(self._product_path(product_id)), self._review)

    def add(self, product_id: str, rating: int, comment: str,
            user_name: str) -> Optional[Review]:
        body: Dict[str, Any] = {"rating": rating, "comment": comment, "user_name": user_name}
        return self._one(self.client.post(self._product_path(product_id), body), self._review)

    def featured(self, limit: Optional[int] = None) -> List[Review]:
        path = with_query(f"{self.PATH}/featured", {"limit": limit})
        return self._many(self.client.get(path), self._review)

    def list_all(self) -> List[Review]:
        return self._many(self.client.get(self.PATH), self._review)

    def delete(self, review_id: str) -> Optional[str]:
        return message_of(self.client.delete(f"{self.PATH}/{segment(review_id)}"))

    def _product_path(self, product_id: str) -> str:
        return f"{ProductsResource.PATH}/{segment(product_id)}/reviews"

    def _review(self, data: Mapping[str, Any]) -> Review:
        return review_from_api(data, self.base_url)
