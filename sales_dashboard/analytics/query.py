# sales_dashboard/analytics/query.py
from __future__ import annotations

from typing import Sequence

from sales_dashboard.analytics.formatting import format_currency
from sales_dashboard.analytics.types import (
    DailyAggregate,
    ParsedQuery,
    ProductAggregate,
    ProductLike,
    QueryType,
)

# Indonesian and English keywords
SALES_WORDS = ("penjualan", "sales")
TODAY_WORDS = ("hari ini", "today")
WEEK_WORDS = ("minggu", "week")
MONTH_WORDS = ("bulan", "month")
PRODUCT_WORDS = ("produk", "product")
TOP_WORDS = ("laris", "terbaik", "top", "best")
STOCK_WORDS = ("stok", "stock")
FORECAST_WORDS = ("prediksi", "forecast", "predict")


def _has(text: str, words) -> bool:
    return any(w in text for w in words)


def parse_natural_query(text: str) -> ParsedQuery:
    q = text.lower()

    if _has(q, SALES_WORDS):
        if _has(q, TODAY_WORDS):
            return ParsedQuery(QueryType.daily_sales, {"period": "today"})
        if _has(q, WEEK_WORDS):
            return ParsedQuery(QueryType.weekly_sales, {"period": "week"})
        if _has(q, MONTH_WORDS):
            return ParsedQuery(QueryType.monthly_sales, {"period": "month"})
    if _has(q, PRODUCT_WORDS) and _has(q, TOP_WORDS):
        return ParsedQuery(QueryType.top_products)
    if _has(q, STOCK_WORDS):
        return ParsedQuery(QueryType.stock_status)
    if _has(q, FORECAST_WORDS):
        return ParsedQuery(QueryType.prediction)
    return ParsedQuery(QueryType.general)


def answer_query(
    parsed: ParsedQuery,
    daily: Sequence[DailyAggregate],
    aggregates: Sequence[ProductAggregate],
    products: Sequence[ProductLike],
    currency: str = "IDR",
) -> str:
    """Canned text answer for a routed query."""
    def fmt(value: float) -> str:
        return format_currency(value, currency)

    if parsed.type == QueryType.daily_sales:
        last = daily[-1] if daily else None
        return "\n".join([
            "Sales today:",
            f"- Total: {fmt(last.total if last else 0)}",
            f"- Units sold: {last.quantity if last else 0}",
            f"- Transactions: {last.transaction_count if last else 0}",
        ])

    if parsed.type in (QueryType.weekly_sales, QueryType.monthly_sales):
        weekly = parsed.type == QueryType.weekly_sales
        days = 7 if weekly else 30
        window = list(daily)[-7:] if weekly else list(daily)
        total = sum(d.total for d in window)
        return "\n".join([
            f"Sales this {'week' if weekly else 'month'}:",
            f"- Total: {fmt(total)}",
            f"- Daily average: {fmt(total / days)}",
            f"- Units sold: {sum(d.quantity for d in window)}",
        ])

    if parsed.type == QueryType.top_products:
        if not aggregates:
            return "No sales recorded yet."
        rows = [
            f"{i}. {a.product_name}: {a.total_quantity} units ({fmt(a.total_revenue)})"
            for i, a in enumerate(aggregates[:5], start=1)
        ]
        return "Top 5 products:\n" + "\n".join(rows)

    if parsed.type == QueryType.stock_status:
        low = [p for p in products if p.stock <= p.min_stock]
        lines = [
            "Stock status:",
            f"- Products: {len(products)}",
            f"- Low stock: {len(low)} products",
        ]
        if low:
            lines.append("")
            lines.append("Low stock products:")
            lines += [f"- {p.name}: {p.stock} {getattr(p, 'unit', '') or ''}".rstrip() for p in low]
        return "\n".join(lines)

    if parsed.type == QueryType.prediction:
        avg = sum(d.total for d in daily) / len(daily) if daily else 0.0
        return "\n".join([
            "Sales forecast:",
            f"- Daily: {fmt(avg)}",
            f"- Weekly: {fmt(avg * 7)}",
            f"- Monthly: {fmt(avg * 30)}",
        ])

    return "\n".join([
        "I can answer questions about:",
        "- Sales today / this week / this month",
        "- Best-selling products",
        "- Stock status",
        "- Sales forecast",
        "",
        'Try: "How are sales this week?"',
    ])
