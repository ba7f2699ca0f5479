from __future__ import annotations

import datetime as dt
import math
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from sales_dashboard.analytics.types import (
    InsightKind,
    NotificationKind,
    Period,
    Priority,
    QueryType,
    RecommendationKind,
    StockStatusKind,
    Trend,
)


def _finite_or_none(value):
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


# NaN / inf from the pipeline are rendered as null
FiniteFloat = Annotated[Optional[float], BeforeValidator(_finite_or_none)]


class _FromAttrs(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class DailyAggregateRead(_FromAttrs):
    date: dt.date
    total: float
    quantity: int
    transaction_count: int


class ProductAggregateRead(_FromAttrs):
    product_id: str
    product_name: str
    total_quantity: int
    total_revenue: float
    average_daily_quantity: float


class InsightRead(_FromAttrs):
    kind: InsightKind
    title: str
    description: str
    value: FiniteFloat = None
    percentage: FiniteFloat = None
    date: Optional[dt.date] = None


class StockStatusRead(_FromAttrs):
    product_id: str
    product_name: str
    current_stock: int
    average_daily_velocity: float
    days_until_empty: int
    status: StockStatusKind
    recommended_restock_qty: int
    profit_margin_pct: FiniteFloat = Field(None, description="null when price is 0")


class ProductPredictionRead(_FromAttrs):
    product_id: str
    product_name: str
    predicted_quantity: FiniteFloat = None
    confidence_pct: float


class PredictionRead(_FromAttrs):
    period: Period
    predicted_value: FiniteFloat = Field(None, description="null when there is not enough history")
    confidence_pct: float
    trend: Trend
    trend_pct: FiniteFloat = None
    product_predictions: list[ProductPredictionRead] = []


class RecommendationRead(_FromAttrs):
    kind: RecommendationKind
    priority: Priority
    title: str
    description: str
    action_items: list[str]
    expected_impact: str
    product_names: list[str]


class NotificationRead(_FromAttrs):
    id: str
    kind: NotificationKind
    priority: Priority
    title: str
    message: str
    product_id: Optional[str] = None


class PeriodRead(BaseModel):
    days: int
    start_date: dt.date
    end_date: dt.date


class LowStockProduct(_FromAttrs):
    id: str
    name: str
    stock: int
    min_stock: int
    unit: str


class AnalyticsSummary(BaseModel):
    total_revenue: float
    total_quantity: int
    total_transactions: int
    average_transaction_value: float
    # change against the window of the same length right before this one
    revenue_change_pct: float = 0.0
    quantity_change_pct: float = 0.0
    transactions_change_pct: float = 0.0
    average_transaction_value_change_pct: float = 0.0
    product_sales: list[ProductAggregateRead]
    low_stock_products: list[LowStockProduct]
    period: PeriodRead


class WeeklySummaryRead(BaseModel):
    summary: str


class QueryRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=500)


class QueryAnswer(BaseModel):
    type: QueryType
    params: dict
    answer: str
