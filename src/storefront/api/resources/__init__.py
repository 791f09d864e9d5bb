"""
Typed wrappers over the storefront API, one class per resource.
"""

from .account import ContactResource, UsersResource, WishlistResource
from .auth import AuthResource
from .catalog import (
    BannersResource,
    CategoriesResource,
    ConcernsResource,
    ProductsResource,
    ReviewsResource,
    UploadsResource,
)
from .orders import DashboardResource, OrdersResource, PaymentResource
from .site import PagesResource, SettingsResource

__all__ = [
    "AuthResource",
    "ProductsResource",
    "UploadsResource",
    "CategoriesResource",
    "BannersResource",
    "ConcernsResource",
    "ReviewsResource",
    "OrdersResource",
    "DashboardResource",
    "PaymentResource",
    "UsersResource",
    "WishlistResource",
    "ContactResource",
    "SettingsResource",
    "PagesResource",
]
