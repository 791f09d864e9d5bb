"""
Canonical storefront data models.

Every response crosses into the library through exactly one ``*_from_api``
function, which accepts the loosest shape the API is known to send.
"""

from .account import (
    Address,
    AuthResponse,
    ContactMessage,
    UserProfile,
    WishlistItem,
    address_from_api,
    auth_response_from_api,
    contact_message_from_api,
    user_from_api,
    wishlist_item_from_api,
)
from .catalog import (
    Banner,
    Category,
    Concern,
    Product,
    ProductOption,
    Review,
    banner_from_api,
    category_from_api,
    concern_from_api,
    product_from_api,
    product_option_from_api,
    UploadedImage,
    review_from_api,
    uploaded_image_from_api,
)
from .common import resolve_image_url
from .orders import (
    TRACKING_KEYS,
    DashboardStats,
    Order,
    OrderItem,
    PaymentOrder,
    PaymentVerification,
    SalesChart,
    SalesChartPoint,
    TopProduct,
    dashboard_stats_from_api,
    order_from_api,
    order_item_from_api,
    payment_order_from_api,
    payment_verification_from_api,
    sales_chart_from_api,
    tracking_step,
)
from .site import PageContent, SocialLinks, page_from_api, social_links_from_api

__all__ = [
    "Address", "AuthResponse", "ContactMessage", "UserProfile", "WishlistItem",
    "address_from_api", "auth_response_from_api", "contact_message_from_api",
    "user_from_api", "wishlist_item_from_api",
    "Banner", "Category", "Concern", "Product", "ProductOption", "Review",
    "banner_from_api", "category_from_api", "concern_from_api",
    "product_from_api", "product_option_from_api", "review_from_api",
    "UploadedImage", "uploaded_image_from_api",
    "resolve_image_url",
    "TRACKING_KEYS", "DashboardStats", "Order", "OrderItem", "PaymentOrder",
    "PaymentVerification", "SalesChart", "SalesChartPoint", "TopProduct",
    "dashboard_stats_from_api", "order_from_api", "order_item_from_api",
    "payment_order_from_api", "payment_verification_from_api",
    "sales_chart_from_api", "tracking_step",
    "PageContent", "SocialLinks", "page_from_api", "social_links_from_api",
]
