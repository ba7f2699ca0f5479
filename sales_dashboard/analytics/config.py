# sales_dashboard/analytics/config.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class AnalyticsConfig:
    # ---- aggregation / forecast windows ----
    default_window_days: int = 30
    forecast_window_days: int = 14
    forecast_half_days: int = 7
    top_product_predictions: int = 5

    # ---- insights ----
    anomaly_min_days: int = 8
    anomaly_sigma: float = 2.0
    slow_mover_quantity: int = 10

    # ---- trend bands (percent) ----
    trend_band_pct: float = 5.0

    # ---- stock ----
    restock_horizon_days: int = 30
    no_sales_days_sentinel: int = 999
    critical_stock_ratio: float = 0.5
    overstock_ratio: float = 5.0

    # ---- notifications ----
    low_stock_normalizer: int = 50
    low_stock_ratio: float = 0.2
    recent_sales_days: int = 7
    low_sales_transactions: int = 5

    # ---- recommendations ----
    restock_candidates: int = 3
    restock_min_confidence: float = 70.0
    price_adjust_trend_pct: float = 15.0
    price_adjust_margin_ratio: float = 1.5
    expansion_trend_pct: float = 20.0
    expansion_min_confidence: float = 75.0


DEFAULT_CONFIG = AnalyticsConfig()


def load_analytics_config(settings) -> AnalyticsConfig:
    """Builds thresholds from ANALYTICS_* settings, falling back to the defaults.

    Every threshold must have a matching setting; a missing one raises AttributeError.
    """
    overrides = {}
    for name in AnalyticsConfig.__dataclass_fields__:
        value = getattr(settings, f"ANALYTICS_{name.upper()}")
        if value is not None:
            overrides[name] = value
    return AnalyticsConfig(**overrides)
