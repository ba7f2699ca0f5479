# sales_dashboard/analytics/stock.py
from __future__ import annotations

import math
from typing import List, Optional, Sequence

from sales_dashboard.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from sales_dashboard.analytics.types import ProductAggregate, ProductLike, StockStatus, StockStatusKind


def classify_stock_status(
    stock: float,
    min_stock: float,
    critical_ratio: float = 0.5,
    overstock_ratio: float = 5.0,
) -> StockStatusKind:
    # first match wins
    if stock <= min_stock * critical_ratio:
        return StockStatusKind.critical
    if stock <= min_stock:
        return StockStatusKind.low
    if stock > min_stock * overstock_ratio:
        return StockStatusKind.overstock
    return StockStatusKind.normal


def days_until_empty(stock: float, velocity: float, sentinel: int = 999) -> int:
    if velocity > 0:
        return math.floor(stock / velocity)
    return sentinel


def recommended_restock(stock: float, velocity: float, horizon_days: int = 30) -> int:
    return max(0, math.ceil(velocity * horizon_days - stock))


def profit_margin_pct(price: float, cost_price: float) -> Optional[float]:
    """None when the selling price is 0 (margin undefined)."""
    if price == 0:
        return None
    return (price - cost_price) / price * 100


def analyze_stock(
    products: Sequence[ProductLike],
    aggregates: Sequence[ProductAggregate],
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> List[StockStatus]:
    """Per-product stock outlook, most urgent (fewest days left) first."""
    velocity_by_product = {a.product_id: a.average_daily_quantity for a in aggregates}

    result: List[StockStatus] = []
    for product in products:
        velocity = velocity_by_product.get(product.id, 0.0) or 0.0
        result.append(
            StockStatus(
                product_id=product.id,
                product_name=product.name,
                current_stock=product.stock,
                average_daily_velocity=velocity,
                days_until_empty=days_until_empty(product.stock, velocity, config.no_sales_days_sentinel),
                status=classify_stock_status(
                    product.stock,
                    product.min_stock,
                    config.critical_stock_ratio,
                    config.overstock_ratio,
                ),
                recommended_restock_qty=recommended_restock(
                    product.stock, velocity, config.restock_horizon_days
                ),
                profit_margin_pct=profit_margin_pct(product.price, product.cost_price),
            )
        )

    result.sort(key=lambda s: s.days_until_empty)
    return result
