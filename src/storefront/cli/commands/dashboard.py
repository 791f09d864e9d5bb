"""Admin dashboard statistics."""

from concurrent.futures import ThreadPoolExecutor

import click
from rich.console import Console
from rich.table import Table

console = Console()


@click.command()
@click.option("--chart", type=click.Choice(["daily", "monthly"]), help="Include sales chart data")
@click.pass_obj
def stats(obj, chart) -> None:
    """Show dashboard totals and recent orders (admin)."""
    dashboard = obj.shop.dashboard
    # Both calls may hit an expired token together; they share one refresh.
    with ThreadPoolExecutor(max_workers=2) as pool:
        stats_future = pool.submit(dashboard.stats)
        chart_future = pool.submit(dashboard.sales_chart) if chart else None
        summary = stats_future.result()
        sales = chart_future.result() if chart_future else None

    table = Table(title="Dashboard")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")
    table.add_row("Total orders", str(summary.total_orders))
    table.add_row("Total products", str(summary.total_products))
    table.add_row("Total users", str(summary.total_users))
    table.add_row("Total sales", f"{summary.total_sales:,.2f}")
    console.print(table)

    if summary.recent_orders:
        recent = Table(title="Recent Orders")
        recent.add_column("Order", style="cyan")
        recent.add_column("Customer")
        recent.add_column("Status")
        recent.add_column("Total", justify="right")
        for order in summary.recent_orders:
            recent.add_row(order.id, order.customer_name or "-",
                           order.status_label, f"{order.total_amount:.2f}")
        console.print(recent)

    if sales is not None:
        points = sales.daily[-14:] if chart == "daily" else sales.monthly
        series = Table(title=f"Sales ({chart})")
        series.add_column("Period")
        series.add_column("Orders", justify="right")
        series.add_column("Revenue", justify="right")
        for point in points:
            series.add_row(point.label, str(point.orders), f"{point.revenue:,.2f}")
        console.print(series)
