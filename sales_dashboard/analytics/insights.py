# sales_dashboard/analytics/insights.py
from __future__ import annotations

import logging
from typing import List, Sequence

import pandas as pd

from sales_dashboard.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from sales_dashboard.analytics.formatting import format_currency, format_date
from sales_dashboard.analytics.types import DailyAggregate, Insight, InsightKind, ProductAggregate

log = logging.getLogger("analytics.insights")


def percent_change(current: float, previous: float) -> float:
    """
    (current - previous) / previous * 100.
    With previous == 0 the result is 100 when current > 0, otherwise 0.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def detect_anomalies(
    daily: Sequence[DailyAggregate],
    sigma: float = 2.0,
    currency: str = "IDR",
) -> List[Insight]:
    """One insight per day whose total is further than `sigma` population stddevs from the mean."""
    totals = pd.Series([d.total for d in daily], dtype=float)
    mean = float(totals.mean())
    std = float(totals.std(ddof=0))

    anomalies: List[Insight] = []
    for day in daily:
        if abs(day.total - mean) > sigma * std:
            is_high = day.total > mean
            anomalies.append(
                Insight(
                    kind=InsightKind.anomaly,
                    title="Unusual sales (high)" if is_high else "Unusual sales (low)",
                    description=(
                        f"Sales on {format_date(day.date)} were "
                        f"{'unusually high' if is_high else 'unusually low'} "
                        f"({format_currency(day.total, currency)}) compared to the average."
                    ),
                    value=day.total,
                    date=day.date,
                )
            )
    return anomalies


def generate_insights(
    daily: Sequence[DailyAggregate],
    products: Sequence[ProductAggregate],
    previous_daily: Sequence[DailyAggregate],
    config: AnalyticsConfig = DEFAULT_CONFIG,
    currency: str = "IDR",
) -> List[Insight]:
    insights: List[Insight] = []

    # 1) period over period
    current_total = sum(d.total for d in daily)
    previous_total = sum(d.total for d in previous_daily)
    change = percent_change(current_total, previous_total)

    if change > 0:
        insights.append(
            Insight(
                kind=InsightKind.increase,
                title="Sales are up",
                description=f"Sales rose {change:.1f}% compared to the previous period.",
                percentage=change,
            )
        )
    elif change < 0:
        insights.append(
            Insight(
                kind=InsightKind.decrease,
                title="Sales are down",
                description=f"Sales fell {abs(change):.1f}% compared to the previous period.",
                percentage=change,
            )
        )

    # 2) best seller
    if products:
        top = products[0]
        insights.append(
            Insight(
                kind=InsightKind.info,
                title="Best-selling product",
                description=f"{top.product_name} is the best seller with {top.total_quantity} units sold.",
                value=top.total_quantity,
            )
        )

    # 3) "stable" product: median rank by revenue
    if len(products) > 1:
        stable = products[len(products) // 2]
        insights.append(
            Insight(
                kind=InsightKind.stable,
                title="Most stable product",
                description=f"{stable.product_name} has steady sales.",
            )
        )

    # 4) anomalies
    if len(daily) >= config.anomaly_min_days:
        insights.extend(detect_anomalies(daily, sigma=config.anomaly_sigma, currency=currency))

    # 5) slow mover
    if products:
        slowest = products[-1]
        if slowest.total_quantity < config.slow_mover_quantity:
            insights.append(
                Insight(
                    kind=InsightKind.decrease,
                    title="Slow-moving product",
                    description=(
                        f"{slowest.product_name} sold only {slowest.total_quantity} units. "
                        f"Consider a promotion or a bundle."
                    ),
                    value=slowest.total_quantity,
                )
            )

    log.debug("generated %d insights from %d days", len(insights), len(daily))
    return insights
