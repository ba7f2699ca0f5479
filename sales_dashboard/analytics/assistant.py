# sales_dashboard/analytics/assistant.py
from __future__ import annotations

from typing import Sequence

from sales_dashboard.analytics.formatting import format_currency
from sales_dashboard.analytics.query import SALES_WORDS, _has
from sales_dashboard.analytics.types import DailyAggregate, ProductAggregate, ProductLike

RESTOCK_WORDS = ("restock", "stok", "stock")
PROMO_WORDS = ("promo", "diskon", "discount")
BUNDLE_WORDS = ("bundling", "bundle", "paket")
PROFIT_WORDS = ("keuntungan", "profit", "margin")

HELP_ANSWER = """Thanks for your question!

I can help with:
- Sales analysis and trends
- Restock recommendations
- Promotion ideas
- Product bundling
- Ways to improve profit

Ask something specific about your business and I will answer from your data."""

PROFIT_ANSWER = """Ways to improve profit:

1. Margins
   - Review selling prices regularly
   - Negotiate supplier prices
2. Operations
   - Cut slow-moving products
   - Keep stock levels lean
3. Sales
   - Push high-margin products
   - Upsell and cross-sell
4. Data
   - Track the most profitable products
   - Review products that lose money"""


def local_answer(
    message: str,
    daily: Sequence[DailyAggregate],
    aggregates: Sequence[ProductAggregate],
    products: Sequence[ProductLike],
    window_days: int = 30,
    currency: str = "IDR",
) -> str:
    """Rule-based reply used when no chat model is available; the first matching topic wins."""
    q = message.lower()

    if _has(q, SALES_WORDS):
        total = sum(d.total for d in daily)
        return "\n".join(
            [
                "Sales analysis:",
                "",
                f"Total sales over the last {window_days} days: {format_currency(total, currency)}",
                f"Daily average: {format_currency(total / window_days, currency)}",
                "",
                "Recommendations:",
                "1. Promote the best sellers to lift volume",
                "2. Bundle products to raise the transaction value",
                "3. Review the products that sell poorly",
            ]
        )

    if _has(q, RESTOCK_WORDS):
        low = [p for p in products if p.stock <= p.min_stock]
        if not low:
            return "All products have enough stock. Keep monitoring regularly!"
        return "\n".join(
            ["Restock recommendation:", "", "Low stock products:"]
            + [f"- {p.name}: {p.stock} units" for p in low]
            + [
                "",
                "Tips:",
                "1. Restock the best sellers with low stock first",
                "2. Order enough for 2-4 weeks",
                "3. Account for supplier lead time",
            ]
        )

    if _has(q, PROMO_WORDS):
        top = aggregates[0].product_name if aggregates else "your best seller"
        return "\n".join(
            [
                "Promotion ideas for this week:",
                "",
                f"1. Bundle deal: pair {top} with a complementary product",
                "2. Flash sale: 10-15% off overstocked products",
                "3. Loyalty reward: a bonus item above a purchase threshold",
                "4. Value pack: a special price for bulk purchases",
            ]
        )

    if _has(q, BUNDLE_WORDS):
        first = aggregates[0].product_name if len(aggregates) > 0 else "Product A"
        second = aggregates[1].product_name if len(aggregates) > 1 else "Product B"
        return "\n".join(
            [
                "Bundling recommendation:",
                "",
                f'Bundle 1: "{first} + {second}"',
                "- 10% off the combined price",
                "- Aimed at customers who already buy one of them",
                "",
                'Bundle 2: "Complete pack"',
                "- 3-4 popular products together",
                "- 15-20% off the unit prices",
            ]
        )

    if _has(q, PROFIT_WORDS):
        return PROFIT_ANSWER

    return HELP_ANSWER
