"""Order listing, details, status updates and public tracking."""

from typing import List, Optional

import click
from rich.console import Console
from rich.table import Table

from ...constants import TRACKING_STEPS
from ...exceptions import ApiRequestError, MissingArgumentError
from ...models import Order

console = Console()


@click.group()
def orders() -> None:
    """Customer and admin order commands."""


@orders.command(name="list")
@click.option("--all", "all_orders", is_flag=True, help="All orders (admin)")
@click.option("--status", help="Only orders with this delivery status")
@click.pass_obj
def list_orders(obj, all_orders: bool, status: Optional[str]) -> None:
    """List your orders, or every order with --all."""
    resource = obj.shop.orders
    found = resource.list_all() if all_orders else resource.mine()
    if status:
        found = [o for o in found if o.delivery_status == status.lower()]
    show_orders(found, "All Orders" if all_orders else "My Orders")


@orders.command()
@click.argument("order_id")
@click.pass_obj
def show(obj, order_id: str) -> None:
    """Show one order with its items."""
    order = obj.shop.orders.get(order_id)
    if order is None:
        raise ApiRequestError(f"Order {order_id} returned no data", method="GET",
                              path=f"/api/orders/{order_id}")
    show_order(order)


@orders.command(name="status")
@click.argument("order_id")
@click.option("--delivery", help="New delivery status")
@click.option("--payment", help="New payment status")
@click.pass_obj
def update_status(obj, order_id: str, delivery: Optional[str], payment: Optional[str]) -> None:
    """Update an order's delivery or payment status (admin)."""
    if not delivery and not payment:
        raise MissingArgumentError("--delivery or --payment", "orders status")
    order = obj.shop.orders.update_status(order_id, payment_status=payment,
                                          delivery_status=delivery)
    if order is None:
        console.print(f"[green]✓ Order {order_id} updated[/green]")
    else:
        console.print(f"[green]✓ Order {order.id} is now {order.status_label}[/green]")


@click.command()
@click.argument("order_id")
@click.argument("email")
@click.pass_obj
def track(obj, order_id: str, email: str) -> None:
    """Track ORDER_ID placed with EMAIL."""
    order = obj.shop.orders.track(order_id, email)
    if order is None:
        raise ApiRequestError(f"No tracking data for order {order_id}", method="GET",
                              path="/api/orders/track")
    show_tracking(order)


def show_orders(found: List[Order], title: str) -> None:
    table = Table(title=title)
    table.add_column("Order", style="cyan")
    table.add_column("Date")
    table.add_column("Customer")
    table.add_column("Status", style="green")
    table.add_column("Total", justify="right")
    for order in found:
        table.add_row(
            order.id,
            order.created_at.date().isoformat() if order.created_at else "-",
            order.customer_name or "-",
            order.status_label,
            f"{order.total_amount:.2f}",
        )
    console.print(table)
    if not found:
        console.print("[dim]No orders[/dim]")


def show_order(order: Order) -> None:
    console.print(f"[bold]Order {order.id}[/bold] - {order.status_label}"
                  f" (payment: {order.payment_status or '-'})")
    if order.customer_name or order.customer_email:
        console.print(f"Customer: {order.customer_name or '-'} ({order.customer_email or '-'})")
    if order.shipping_address:
        for line in order.shipping_address.lines():
            console.print(f"  {line}")

    table = Table()
    table.add_column("Product")
    table.add_column("Qty", justify="right")
    table.add_column("Price", justify="right")
    table.add_column("Subtotal", justify="right")
    for item in order.items:
        table.add_row(item.name or "-", str(item.quantity),
                      f"{item.unit_price:.2f}", f"{item.subtotal:.2f}")
    console.print(table)
    console.print(f"[bold]Grand total: {order.total_amount:.2f}[/bold]")


def show_tracking(order: Order) -> None:
    current = order.tracking_step
    console.print(f"[bold]Order {order.id}[/bold]")
    for index, (_, label) in enumerate(TRACKING_STEPS):
        if index < current:
            console.print(f"  [green]✓ {label}[/green]")
        elif index == current:
            console.print(f"  [bold yellow]● {label}[/bold yellow]")
        else:
            console.print(f"  [dim]○ {label}[/dim]")
