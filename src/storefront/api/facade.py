"""
One object for the whole API.

    shop = Storefront.from_config(config_manager.load_config())
    shop.auth.login("a@b.c", "secret")
    orders = shop.orders.mine()
"""

from typing import Optional

import requests

from storefront.auth.credentials import CredentialStore

from .client import ApiClient
from .resources import (
    AuthResource,
    BannersResource,
    CategoriesResource,
    ConcernsResource,
    ContactResource,
    DashboardResource,
    OrdersResource,
    PagesResource,
    PaymentResource,
    ProductsResource,
    ReviewsResource,
    SettingsResource,
    UploadsResource,
    UsersResource,
    WishlistResource,
)


class Storefront:
    """Every resource wrapper bound to a single ApiClient."""

    def __init__(self, client: ApiClient):
        self.client = client
        self.auth = AuthResource(client)
        self.products = ProductsResource(client)
        self.uploads = UploadsResource(client)
        self.categories = CategoriesResource(client)
        self.banners = BannersResource(client)
        self.concerns = ConcernsResource(client)
        self.reviews = ReviewsResource(client)
        self.orders = OrdersResource(client)
        self.users = UsersResource(client)
        self.wishlist = WishlistResource(client)
        self.contact = ContactResource(client)
        self.dashboard = DashboardResource(client)
        self.payment = PaymentResource(client)
        self.settings = SettingsResource(client)
        self.pages = PagesResource(client)

    @classmethod
    def from_config(cls, config, store: Optional[CredentialStore] = None,
                    session: Optional[requests.Session] = None) -> "Storefront":
        return cls(ApiClient.from_config(config, store=store, session=session))

    def close(self) -> None:
        self.client.close()

    def __enter__(self) -> "Storefront":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
