# sales_dashboard/analytics/notifications.py
from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Sequence

from sales_dashboard.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from sales_dashboard.analytics.types import (
    Notification,
    NotificationKind,
    Priority,
    ProductLike,
    SaleLike,
)


def stock_level_ratio(stock: float, normalizer: int = 50) -> float:
    """stock / (stock + normalizer); 0 for empty or negative stock."""
    if stock <= 0:
        return 0.0
    return stock / (stock + normalizer)


def _stock_notifications(products: Sequence[ProductLike], config: AnalyticsConfig) -> List[Notification]:
    result = []
    for p in products:
        if p.stock <= 0:
            result.append(
                Notification(
                    id=f"out-of-stock-{p.id}",
                    kind=NotificationKind.stock_alert,
                    priority=Priority.high,
                    title="Out of stock",
                    message=f"{p.name} is out of stock.",
                    product_id=p.id,
                )
            )
        elif stock_level_ratio(p.stock, config.low_stock_normalizer) <= config.low_stock_ratio:
            result.append(
                Notification(
                    id=f"low-stock-{p.id}",
                    kind=NotificationKind.stock_alert,
                    priority=Priority.medium,
                    title="Low stock",
                    message=f"{p.name} has only {p.stock} units left.",
                    product_id=p.id,
                )
            )
    return result


def _sales_notifications(
    sales: Sequence[SaleLike],
    today: date,
    config: AnalyticsConfig,
) -> List[Notification]:
    since = today - timedelta(days=config.recent_sales_days)
    recent = [s for s in sales if since <= s.date <= today]

    if not recent:
        return [
            Notification(
                id="no-sales",
                kind=NotificationKind.sales_alert,
                priority=Priority.medium,
                title="No recent sales",
                message=f"No sales were recorded in the last {config.recent_sales_days} days.",
            )
        ]
    if len(recent) < config.low_sales_transactions:
        return [
            Notification(
                id="low-sales",
                kind=NotificationKind.sales_alert,
                priority=Priority.low,
                title="Low sales",
                message=(
                    f"Only {len(recent)} transactions in the last {config.recent_sales_days} days."
                ),
            )
        ]
    return []


def generate_notifications(
    products: Sequence[ProductLike],
    sales: Sequence[SaleLike],
    today: Optional[date] = None,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> List[Notification]:
    if today is None:
        today = date.today()

    if not products:
        return [
            Notification(
                id="setup-add-product",
                kind=NotificationKind.system,
                priority=Priority.low,
                title="Add your first product",
                message="Start by adding the products you sell to get stock alerts and insights.",
            )
        ]

    notifications = _stock_notifications(products, config)

    if not sales:
        notifications.append(
            Notification(
                id="setup-record-sale",
                kind=NotificationKind.system,
                priority=Priority.low,
                title="Record your first sale",
                message="Record sales to unlock trends, predictions and recommendations.",
            )
        )
        return notifications

    notifications += _sales_notifications(sales, today, config)
    return notifications
