"""
Orders, dashboard statistics and payment gateway endpoints.
"""

from dataclasses import asdict, is_dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from storefront.models import (
    DashboardStats,
    Order,
    PaymentOrder,
    PaymentVerification,
    SalesChart,
    dashboard_stats_from_api,
    order_from_api,
    payment_order_from_api,
    payment_verification_from_api,
    sales_chart_from_api,
)

from .base import Resource, segment, with_query, without_none

Amount = Union[Decimal, float, int]


class OrdersResource(Resource):
    PATH = "/api/orders"

    def create(self, items: Iterable[Mapping[str, Any]], total_amount: Amount,
               shipping_address: Optional[Mapping[str, Any]] = None,
               razorpay_order_id: Optional[str] = None,
               razorpay_payment_id: Optional[str] = None) -> Optional[Order]:
        """Place an order.

        Args:
            items: ``{product_id, quantity, price}`` mappings
            total_amount: Order total
            shipping_address: Address snapshot stored with the order
            razorpay_order_id: Gateway order id from ``payment.create_order``
            razorpay_payment_id: Gateway payment id after checkout
        """
        body = without_none({
            "items": [dict(item) for item in items],
            "total_amount": total_amount,
            "shipping_address": _plain(shipping_address),
            "razorpay_order_id": razorpay_order_id,
            "razorpay_payment_id": razorpay_payment_id,
        })
        return self._one(self.client.post(self.PATH, body), self._order)

    def mine(self) -> List[Order]:
        return self._many(self.client.get(self.PATH), self._order)

    def get(self, order_id: str) -> Optional[Order]:
        return self._one(self.client.get(f"{self.PATH}/{segment(order_id)}"), self._order)

    def track(self, order_id: str, email: str) -> Optional[Order]:
        """Public lookup by order id and the email used at checkout."""
        path = with_query(f"{self.PATH}/track", {"orderId": order_id, "email": email})
        return self._one(self.client.get(path), self._order)

    def list_all(self) -> List[Order]:
        return self._many(self.client.get(f"{self.PATH}/all"), self._order)

    def update_status(self, order_id: str, payment_status: Optional[str] = None,
                      delivery_status: Optional[str] = None) -> Optional[Order]:
        body = without_none({"payment_status": payment_status,
                             "delivery_status": delivery_status})
        payload = self.client.put(f"{self.PATH}/{segment(order_id)}/status", body)
        return self._one(payload, self._order)

    def _order(self, data: Mapping[str, Any]) -> Order:
        return order_from_api(data, self.base_url)


class DashboardResource(Resource):
    PATH = "/api/dashboard"

    def stats(self) -> DashboardStats:
        return dashboard_stats_from_api(self.client.get(f"{self.PATH}/stats") or {}, self.base_url)

    def sales_chart(self) -> SalesChart:
        return sales_chart_from_api(self.client.get(f"{self.PATH}/sales-chart"))


class PaymentResource(Resource):
    PATH = "/api/payment"

    def create_order(self, amount: Amount) -> Optional[PaymentOrder]:
        payload = self.client.post(f"{self.PATH}/create-order", {"amount": amount})
        return self._one(payload, payment_order_from_api)

    def verify(self, order_id: str, payment_id: str,
               signature: str) -> Optional[PaymentVerification]:
        body = {
            "razorpay_order_id": order_id,
            "razorpay_payment_id": payment_id,
            "razorpay_signature": signature,
        }
        payload = self.client.post(f"{self.PATH}/verify", body)
        return self._one(payload, payment_verification_from_api)


def _plain(value: Any) -> Optional[Dict[str, Any]]:
    if value is None:
        return None
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    return dict(value)
