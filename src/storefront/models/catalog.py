"""
Catalog resources: products, categories, banners, concerns and reviews.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Mapping, Optional

from .common import (
    first_present,
    parse_timestamp,
    resolve_image_url,
    split_list,
    to_bool,
    to_decimal,
    to_float,
    to_int,
    to_str,
)


@dataclass
class ProductOption:
    """A purchasable variant of a product."""

    label: str
    price: Decimal
    stock: Optional[int] = None
    image: Optional[str] = None

    @property
    def in_stock(self) -> bool:
        return self.stock is None or self.stock > 0


@dataclass
class Product:
    id: str
    name: str
    price: Decimal
    original_price: Decimal
    stock: int = 0
    rating: float = 0.0
    reviews_count: int = 0
    description: Optional[str] = None
    size: Optional[str] = None
    category: Optional[str] = None
    image_url: Optional[str] = None
    images: List[str] = field(default_factory=list)
    before_after_image: Optional[str] = None
    benefits: List[str] = field(default_factory=list)
    ingredients: List[str] = field(default_factory=list)
    direction: Optional[str] = None
    options: List[ProductOption] = field(default_factory=list)
    is_featured: bool = False
    sku: Optional[str] = None

    @property
    def on_sale(self) -> bool:
        return self.original_price > self.price

    @property
    def in_stock(self) -> bool:
        if self.options:
            return any(option.in_stock for option in self.options)
        return self.stock > 0


@dataclass
class Category:
    id: str
    name: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True


@dataclass
class Banner:
    id: str
    image_url: Optional[str]
    title: Optional[str] = None
    link: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True


@dataclass
class Concern:
    id: str
    title: str
    image_url: Optional[str] = None
    sort_order: int = 0
    is_active: bool = True


@dataclass
class Review:
    id: str
    rating: int
    comment: str
    user_name: str
    created_at: Optional[datetime] = None
    product_name: Optional[str] = None
    product_image_url: Optional[str] = None


def product_option_from_api(data: Mapping[str, Any], base_url: str) -> ProductOption:
    stock = data.get("stock")
    return ProductOption(
        label=str(data.get("label", "")),
        price=to_decimal(data.get("price")),
        stock=None if stock in (None, "") else to_int(stock),
        image=resolve_image_url(data.get("image"), base_url),
    )


def product_from_api(data: Mapping[str, Any], base_url: str) -> Product:
    """Canonical Product from any known product wire shape."""
    price = to_decimal(first_present(data, "sale_price", "price"))
    image = first_present(data, "imageUrl", "image_url", "imagePath", "image_path")
    options = data.get("options") if isinstance(data.get("options"), list) else []
    return Product(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        price=price,
        original_price=to_decimal(first_present(data, "original_price", "price"), default=price),
        stock=to_int(data.get("stock")),
        rating=to_float(data.get("rating")),
        reviews_count=to_int(first_present(data, "reviews_count", "reviewsCount")),
        description=first_present(data, "description", "product_description", "productDescription"),
        size=data.get("size"),
        category=data.get("category"),
        image_url=resolve_image_url(image, base_url),
        images=[resolve_image_url(i, base_url) for i in split_list(data.get("images"), ",")],
        before_after_image=resolve_image_url(data.get("before_after_image"), base_url),
        benefits=split_list(data.get("benefits"), "\n"),
        ingredients=split_list(data.get("ingredients"), ","),
        direction=data.get("direction"),
        options=[product_option_from_api(o, base_url) for o in options if isinstance(o, Mapping)],
        is_featured=to_bool(data.get("is_featured")),
        sku=data.get("sku"),
    )


def category_from_api(data: Mapping[str, Any], base_url: str) -> Category:
    return Category(
        id=str(data.get("id", "")),
        name=str(data.get("name", "")),
        description=data.get("description"),
        image_url=resolve_image_url(first_present(data, "image_path", "imagePath"), base_url),
        sort_order=to_int(data.get("sort_order")),
        is_active=to_bool(data.get("is_active"), default=True),
    )


def banner_from_api(data: Mapping[str, Any], base_url: str) -> Banner:
    return Banner(
        id=str(data.get("id", "")),
        image_url=resolve_image_url(first_present(data, "image_path", "imagePath"), base_url),
        title=data.get("title"),
        link=data.get("link"),
        sort_order=to_int(data.get("sort_order")),
        is_active=to_bool(data.get("is_active"), default=True),
    )


def concern_from_api(data: Mapping[str, Any], base_url: str) -> Concern:
    return Concern(
        id=str(data.get("id", "")),
        title=str(data.get("title", "")),
        image_url=resolve_image_url(first_present(data, "image_path", "imagePath"), base_url),
        sort_order=to_int(data.get("sort_order")),
        is_active=to_bool(data.get("is_active"), default=True),
    )


def review_from_api(data: Mapping[str, Any], base_url: str) -> Review:
    product: Dict[str, Any] = data.get("Product") or {}
    return Review(
        id=str(data.get("id", "")),
        rating=to_int(data.get("rating")),
        comment=str(data.get("comment") or ""),
        user_name=str(first_present(data, "user_name", "userName", default="Anonymous")),
        created_at=parse_timestamp(first_present(data, "createdAt", "created_at")),
        product_name=to_str(product.get("name")),
        product_image_url=resolve_image_url(product.get("image_path"), base_url),
    )


@dataclass
class UploadedImage:
    url: str
    file_name: str


def uploaded_image_from_api(data: Mapping[str, Any]) -> UploadedImage:
    return UploadedImage(
        url=str(data.get("url") or ""),
        file_name=str(first_present(data, "fileName", "file_name", default="")),
    )
