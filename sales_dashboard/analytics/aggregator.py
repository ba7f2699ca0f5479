# sales_dashboard/analytics/aggregator.py
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable, List, Optional, Tuple

import pandas as pd

from sales_dashboard.analytics.types import DailyAggregate, ProductAggregate, SaleLike


def date_window(days: int, today: Optional[date] = None) -> Tuple[date, date]:
    """Current reporting window: [today - days, today]."""
    if today is None:
        today = date.today()
    return today - timedelta(days=days), today


def previous_window(start: date, days: int) -> Tuple[date, date]:
    """Window of the same length ending the day before `start`."""
    return start - timedelta(days=days), start - timedelta(days=1)


def filter_sales_by_date_range(sales: Iterable[SaleLike], start: date, end: date) -> list:
    return [s for s in sales if start <= s.date <= end]


def _to_frame(sales: Iterable[SaleLike]) -> pd.DataFrame:
    records = [
        {
            "date": s.date,
            "product_id": s.product_id,
            "product_name": s.product_name,
            "quantity": s.quantity,
            "total": s.total,
        }
        for s in sales
    ]
    return pd.DataFrame.from_records(records)


def daily_aggregates(sales: Iterable[SaleLike]) -> List[DailyAggregate]:
    """
    Rollup per calendar day, ascending by date.
    Returns [] for an empty input.
    """
    df = _to_frame(sales)
    if df.empty:
        return []

    grouped = df.groupby("date", sort=True).agg(
        total=("total", "sum"),
        quantity=("quantity", "sum"),
        transactions=("total", "count"),
    )
    return [
        DailyAggregate(
            date=day,
            total=float(row["total"]),
            quantity=int(row["quantity"]),
            transaction_count=int(row["transactions"]),
        )
        for day, row in grouped.iterrows()
    ]


def product_aggregates(sales: Iterable[SaleLike], window_days: int) -> List[ProductAggregate]:
    """
    Rollup per product, descending by revenue.

    average_daily_quantity divides by `window_days` (the nominal reporting
    period), not by the number of days that actually had sales.
    """
    if window_days <= 0:
        raise ValueError(f"window_days must be positive, got {window_days}")

    df = _to_frame(sales)
    if df.empty:
        return []

    grouped = df.groupby("product_id", sort=False).agg(
        product_name=("product_name", "first"),
        total_quantity=("quantity", "sum"),
        total_revenue=("total", "sum"),
    )
    # stable sort: ties keep first-seen order
    grouped = grouped.sort_values("total_revenue", ascending=False, kind="stable")

    return [
        ProductAggregate(
            product_id=str(product_id),
            product_name=str(row["product_name"]),
            total_quantity=int(row["total_quantity"]),
            total_revenue=float(row["total_revenue"]),
            average_daily_quantity=int(row["total_quantity"]) / window_days,
        )
        for product_id, row in grouped.iterrows()
    ]
