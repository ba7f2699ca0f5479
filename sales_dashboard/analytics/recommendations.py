# sales_dashboard/analytics/recommendations.py
from __future__ import annotations

import math
from typing import Dict, List, Sequence

from sales_dashboard.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from sales_dashboard.analytics.types import (
    Prediction,
    Priority,
    ProductAggregate,
    ProductLike,
    ProductPrediction,
    Recommendation,
    RecommendationKind,
    StockStatus,
    Trend,
)


def _finite(predictions: Sequence[ProductPrediction]) -> List[ProductPrediction]:
    return [p for p in predictions if math.isfinite(p.predicted_quantity)]


def _restock(
    ranked: Sequence[ProductPrediction],
    products: Dict[str, ProductLike],
    statuses: Dict[str, StockStatus],
    config: AnalyticsConfig,
) -> List[Recommendation]:
    result = []
    for pp in ranked[: config.restock_candidates]:
        product = products.get(pp.product_id)
        if product is None:
            continue
        if product.stock > product.min_stock or pp.confidence_pct < config.restock_min_confidence:
            continue

        status = statuses.get(pp.product_id)
        suggested = status.recommended_restock_qty if status else 0
        qty = max(suggested, int(pp.predicted_quantity))
        result.append(
            Recommendation(
                kind=RecommendationKind.restock,
                priority=Priority.high,
                title=f"Restock {product.name}",
                description=(
                    f"{product.name} is one of the products expected to sell the most, "
                    f"but only {product.stock} units are left (minimum {product.min_stock})."
                ),
                action_items=[
                    f"Order at least {qty} units of {product.name}",
                    f"Check supplier lead time for {product.name}",
                    f"Raise the minimum stock of {product.name} if it keeps running low",
                ],
                expected_impact="Avoids lost sales on a top-selling product",
                product_names=[product.name],
            )
        )
    return result


def _promotion(
    ranked: Sequence[ProductPrediction],
    revenue: Dict[str, float],
) -> List[Recommendation]:
    slow = [p for p in reversed(ranked) if revenue.get(p.product_id, 0) > 0][:2]
    if not slow:
        return []
    names = [p.product_name for p in slow]
    return [
        Recommendation(
            kind=RecommendationKind.promotion,
            priority=Priority.medium,
            title="Promote slower products",
            description=f"{' and '.join(names)} are expected to sell the least in the next period.",
            action_items=[f"Run a limited-time discount on {name}" for name in names]
            + ["Feature these products near the checkout"],
            expected_impact="Moves slow inventory and frees up working capital",
            product_names=names,
        )
    ]


def _bundling(ranked: Sequence[ProductPrediction]) -> List[Recommendation]:
    top = list(ranked[:3])
    if len(top) < 2:
        return []
    names = [p.product_name for p in top]
    return [
        Recommendation(
            kind=RecommendationKind.bundling,
            priority=Priority.low,
            title="Bundle best sellers",
            description=f"Offer {', '.join(names)} together as a package.",
            action_items=[
                f"Create a bundle of {' + '.join(names)}",
                "Price the bundle slightly below the sum of its items",
            ],
            expected_impact="Raises the average transaction value",
            product_names=names,
        )
    ]


def _price_adjustment(
    prediction: Prediction,
    products: Sequence[ProductLike],
    config: AnalyticsConfig,
) -> List[Recommendation]:
    if prediction.trend != Trend.up or not prediction.trend_pct > config.price_adjust_trend_pct:
        return []
    targets = [
        p for p in products
        if p.cost_price > 0 and p.price / p.cost_price > config.price_adjust_margin_ratio
    ]
    if not targets:
        return []
    names = [p.name for p in targets]
    return [
        Recommendation(
            kind=RecommendationKind.price_adjustment,
            priority=Priority.medium,
            title="Review prices",
            description=(
                f"Demand is growing {prediction.trend_pct:.1f}%. "
                f"Products with healthy margins can absorb a small price increase."
            ),
            action_items=[f"Test a 5% price increase on {name}" for name in names],
            expected_impact="Higher margin while demand is strong",
            product_names=names,
        )
    ]


def _expansion(prediction: Prediction, config: AnalyticsConfig) -> List[Recommendation]:
    if prediction.trend != Trend.up:
        return []
    if not prediction.trend_pct > config.expansion_trend_pct:
        return []
    if prediction.confidence_pct < config.expansion_min_confidence:
        return []
    return [
        Recommendation(
            kind=RecommendationKind.expansion,
            priority=Priority.low,
            title="Consider expanding",
            description=(
                f"Sales are trending up {prediction.trend_pct:.1f}% with "
                f"{prediction.confidence_pct:.0f}% confidence."
            ),
            action_items=[
                "Add new products in your best-performing category",
                "Extend opening hours or sales channels",
            ],
            expected_impact="Captures growing demand",
        )
    ]


def generate_recommendations(
    prediction: Prediction,
    products: Sequence[ProductLike],
    aggregates: Sequence[ProductAggregate],
    stock: Sequence[StockStatus],
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> List[Recommendation]:
    """Rule-based recommendations, in the order restock, promotion, bundling, price, expansion."""
    ranked = sorted(
        _finite(prediction.product_predictions),
        key=lambda p: p.predicted_quantity,
        reverse=True,
    )
    by_id = {p.id: p for p in products}
    revenue = {a.product_id: a.total_revenue for a in aggregates}
    statuses = {s.product_id: s for s in stock}

    recommendations: List[Recommendation] = []
    recommendations += _restock(ranked, by_id, statuses, config)
    recommendations += _promotion(ranked, revenue)
    recommendations += _bundling(ranked)
    recommendations += _price_adjustment(prediction, products, config)
    recommendations += _expansion(prediction, config)
    return recommendations
