# sales_dashboard/analytics/summary.py
from __future__ import annotations

from typing import Sequence

from sales_dashboard.analytics.formatting import format_currency, format_number
from sales_dashboard.analytics.types import DailyAggregate, ProductAggregate, ProductLike


def weekly_summary(
    daily: Sequence[DailyAggregate],
    products: Sequence[ProductAggregate],
    currency: str = "IDR",
) -> str:
    total = sum(d.total for d in daily)
    quantity = sum(d.quantity for d in daily)
    avg_daily = total / len(daily) if daily else 0.0

    top = products[0] if products else None
    slow = products[-1] if products else None

    lines = [
        "This week's summary:",
        f"- Total sales: {format_currency(total, currency)}",
        f"- Units sold: {format_number(quantity)}",
        f"- Daily average: {format_currency(avg_daily, currency)}",
        f"- Best seller: {top.product_name if top else '-'} ({top.total_quantity if top else 0} units)",
        f"- Needs attention: {slow.product_name if slow else '-'} ({slow.total_quantity if slow else 0} units)",
    ]
    return "\n".join(lines)


def business_context(
    business_name: str,
    daily: Sequence[DailyAggregate],
    aggregates: Sequence[ProductAggregate],
    products: Sequence[ProductLike],
    window_days: int = 30,
    currency: str = "IDR",
) -> str:
    """Plain-text snapshot of the business handed to the chat assistant."""
    total = sum(d.total for d in daily)
    top = ", ".join(a.product_name for a in aggregates[:5]) or "no data yet"
    low = ", ".join(p.name for p in products if p.stock <= p.min_stock) or "none"

    return "\n".join(
        [
            f'Business data for "{business_name or "My Store"}":',
            f"- Total sales ({window_days} days): {format_currency(total, currency)}",
            f"- Daily average: {format_currency(total / window_days, currency)}",
            f"- Number of products: {len(products)}",
            f"- Best sellers: {top}",
            f"- Low stock products: {low}",
        ]
    )
