# sales_dashboard/analytics/forecaster.py
from __future__ import annotations

import math
from typing import Dict, Sequence, Tuple

import pandas as pd

from sales_dashboard.analytics.config import DEFAULT_CONFIG, AnalyticsConfig
from sales_dashboard.analytics.insights import percent_change
from sales_dashboard.analytics.types import (
    DailyAggregate,
    Period,
    Prediction,
    ProductAggregate,
    ProductPrediction,
    Trend,
)

HORIZON_MULTIPLIERS: Dict[Period, int] = {
    Period.daily: 1,
    Period.weekly: 7,
    Period.monthly: 30,
}

# (low, high) confidence bands in percent
CONFIDENCE_BANDS: Dict[Period, Tuple[float, float]] = {
    Period.daily: (75.0, 85.0),
    Period.weekly: (70.0, 80.0),
    Period.monthly: (60.0, 75.0),
}
PRODUCT_CONFIDENCE_BAND: Tuple[float, float] = (65.0, 80.0)


def _mean(values: Sequence[float]) -> float:
    # empty -> NaN, propagated on purpose
    if not values:
        return math.nan
    return sum(values) / len(values)


def round_half_up(value: float) -> float:
    if not math.isfinite(value):
        return value
    return math.floor(value + 0.5)


def stability_score(totals: Sequence[float]) -> float:
    """
    1 / (1 + coefficient of variation) of the daily totals, in (0, 1].
    0 when there is nothing to measure.
    """
    if not totals:
        return 0.0
    series = pd.Series(list(totals), dtype=float)
    mean = float(series.mean())
    if mean <= 0:
        return 0.0
    cv = float(series.std(ddof=0)) / mean
    return 1.0 / (1.0 + cv)


def confidence_in_band(stability: float, band: Tuple[float, float]) -> float:
    low, high = band
    return round(low + (high - low) * stability, 1)


def classify_trend(trend_pct: float, band_pct: float = 5.0) -> Trend:
    if trend_pct > band_pct:
        return Trend.up
    if trend_pct < -band_pct:
        return Trend.down
    return Trend.stable


def generate_prediction(
    daily: Sequence[DailyAggregate],
    products: Sequence[ProductAggregate],
    period: Period,
    config: AnalyticsConfig = DEFAULT_CONFIG,
) -> Prediction:
    """
    Naive moving-average forecast.

    Last `forecast_window_days` days are split into the first
    `forecast_half_days` and the rest; the week-over-week change of the
    average daily total is projected over the horizon (1/7/30 days).
    With no history (or nothing after the first half) the averages are NaN
    and so are predicted_value / trend_pct.
    """
    period = Period(period)
    horizon = HORIZON_MULTIPLIERS[period]

    recent = [d.total for d in list(daily)[-config.forecast_window_days:]]
    avg_daily = _mean(recent)
    first_avg = _mean(recent[: config.forecast_half_days])
    second_avg = _mean(recent[config.forecast_half_days:])

    trend_pct = percent_change(second_avg, first_avg)
    trend = classify_trend(trend_pct, config.trend_band_pct)
    growth = 1 + trend_pct / 100

    stability = stability_score(recent)

    product_predictions = [
        ProductPrediction(
            product_id=p.product_id,
            product_name=p.product_name,
            predicted_quantity=round_half_up(p.average_daily_quantity * horizon * growth),
            confidence_pct=confidence_in_band(stability, PRODUCT_CONFIDENCE_BAND),
        )
        for p in list(products)[: config.top_product_predictions]
    ]

    return Prediction(
        period=period,
        predicted_value=avg_daily * horizon * growth,
        confidence_pct=confidence_in_band(stability, CONFIDENCE_BANDS[period]),
        trend=trend,
        trend_pct=trend_pct,
        product_predictions=product_predictions,
    )
