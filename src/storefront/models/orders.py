"""
Orders, tracking, dashboard statistics and payment gateway results.

Order payloads are the loosest on the wire: the storefront, admin and
tracking endpoints each embed a different mix of key names. ``order_from_api``
folds all of them into one ``Order``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Mapping, Optional

from storefront.constants import TRACKING_STEPS

from .account import Address, address_from_api
from .catalog import Product, product_from_api
from .common import first_present, parse_timestamp, to_decimal, to_int, to_str

TRACKING_KEYS = tuple(key for key, _ in TRACKING_STEPS)


def tracking_step(status: Optional[str]) -> int:
    """Index of ``status`` in the tracking timeline; unknown maps to 0."""
    key = (status or "").strip().lower()
    try:
        return TRACKING_KEYS.index(key)
    except ValueError:
        return 0


@dataclass
class OrderItem:
    product_id: Optional[str]
    name: Optional[str]
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    variant_label: Optional[str] = None
    product: Optional[Product] = None
    id: Optional[str] = None


@dataclass
class Order:
    id: str
    total_amount: Decimal
    delivery_status: str = "pending"
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    created_at: Optional[datetime] = None
    items: List[OrderItem] = field(default_factory=list)
    shipping_address: Optional[Address] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    razorpay_order_id: Optional[str] = None

    @property
    def tracking_step(self) -> int:
        return tracking_step(self.delivery_status)

    @property
    def status_label(self) -> str:
        return self.delivery_status.replace("_", " ")


@dataclass
class TopProduct:
    name: str
    price: Decimal
    total_sold: int


@dataclass
class DashboardStats:
    total_orders: int
    total_products: int
    total_users: int
    total_sales: Decimal
    recent_orders: List[Order] = field(default_factory=list)
    top_products: List[TopProduct] = field(default_factory=list)


@dataclass
class SalesChartPoint:
    label: str
    orders: int
    revenue: Decimal
    date: Optional[str] = None
    month: Optional[str] = None


@dataclass
class SalesChart:
    daily: List[SalesChartPoint] = field(default_factory=list)
    monthly: List[SalesChartPoint] = field(default_factory=list)


@dataclass
class PaymentOrder:
    """Gateway order created before checkout; ``amount`` is in minor units."""

    id: str
    amount: int
    currency: str


@dataclass
class PaymentVerification:
    status: str
    message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status.lower() in ("ok", "success", "verified")


def order_item_from_api(data: Mapping[str, Any], base_url: str) -> OrderItem:
    product_data = data.get("Product") if isinstance(data.get("Product"), Mapping) else None
    quantity = to_int(data.get("quantity"))
    unit_price = to_decimal(first_present(data, "unit_price", "price"))
    subtotal = first_present(data, "subtotal")
    return OrderItem(
        id=to_str(data.get("id")),
        product_id=to_str(data.get("product_id")),
        name=(product_data or {}).get("name") or data.get("product_name"),
        quantity=quantity,
        unit_price=unit_price,
        subtotal=to_decimal(subtotal) if subtotal is not None else unit_price * quantity,
        variant_label=data.get("variant_label"),
        product=product_from_api(product_data, base_url) if product_data else None,
    )


def _shipping_address(data: Mapping[str, Any]) -> Optional[Address]:
    raw = first_present(data, "shipping_address", "ShippingAddress", "shippingAddress")
    if raw is None:
        addresses = data.get("UserAddresses") or []
        raw = addresses[0] if addresses else None
    return address_from_api(raw) if isinstance(raw, Mapping) else None


def order_from_api(data: Mapping[str, Any], base_url: str) -> Order:
    """Canonical Order from any known order wire shape."""
    user = data.get("User") if isinstance(data.get("User"), Mapping) else {}
    address = _shipping_address(data)
    raw_items = first_present(data, "OrderItems", "items", default=[])
    status = first_present(data, "delivery_status", "status", default="pending")
    return Order(
        id=str(data.get("id", "")),
        total_amount=to_decimal(data.get("total_amount")),
        delivery_status=str(status).lower(),
        payment_status=data.get("payment_status"),
        payment_method=data.get("payment_method"),
        created_at=parse_timestamp(first_present(data, "createdAt", "created_at")),
        items=[order_item_from_api(item, base_url) for item in raw_items if isinstance(item, Mapping)],
        shipping_address=address,
        customer_name=user.get("name") or data.get("user_name") or (address.name if address else None),
        customer_email=user.get("email") or data.get("email") or (address.email if address else None),
        customer_phone=to_str(user.get("phone") or (address.phone if address else None)),
        razorpay_order_id=data.get("razorpay_order_id"),
    )


def dashboard_stats_from_api(data: Mapping[str, Any], base_url: str) -> DashboardStats:
    return DashboardStats(
        total_orders=to_int(data.get("totalOrders")),
        total_products=to_int(data.get("totalProducts")),
        total_users=to_int(data.get("totalUsers")),
        total_sales=to_decimal(data.get("totalSales")),
        recent_orders=[order_from_api(o, base_url) for o in data.get("recentOrders") or []],
        top_products=[
            TopProduct(
                name=str(p.get("name") or ""),
                price=to_decimal(p.get("price")),
                total_sold=to_int(p.get("total_sold")),
            )
            for p in data.get("topProducts") or []
        ],
    )


def _chart_point(data: Mapping[str, Any]) -> SalesChartPoint:
    return SalesChartPoint(
        label=str(first_present(data, "label", "date", "month", default="")),
        orders=to_int(data.get("orders")),
        revenue=to_decimal(data.get("revenue")),
        date=data.get("date"),
        month=data.get("month"),
    )


def sales_chart_from_api(data: Optional[Mapping[str, Any]]) -> SalesChart:
    data = data or {}
    return SalesChart(
        daily=[_chart_point(p) for p in data.get("daily") or []],
        monthly=[_chart_point(p) for p in data.get("monthly") or []],
    )


def payment_order_from_api(data: Mapping[str, Any]) -> PaymentOrder:
    return PaymentOrder(
        id=str(data.get("id", "")),
        amount=to_int(data.get("amount")),
        currency=str(data.get("currency") or "INR"),
    )


def payment_verification_from_api(data: Mapping[str, Any]) -> PaymentVerification:
    return PaymentVerification(
        status=str(data.get("status") or ""),
        message=data.get("message"),
    )
