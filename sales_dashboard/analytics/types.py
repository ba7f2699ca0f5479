# sales_dashboard/analytics/types.py
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Protocol


class InsightKind(str, Enum):
    increase = "increase"
    decrease = "decrease"
    stable = "stable"
    anomaly = "anomaly"
    info = "info"


class StockStatusKind(str, Enum):
    critical = "critical"
    low = "low"
    normal = "normal"
    overstock = "overstock"


class Trend(str, Enum):
    up = "up"
    down = "down"
    stable = "stable"


class Period(str, Enum):
    daily = "daily"
    weekly = "weekly"
    monthly = "monthly"


class Priority(str, Enum):
    high = "high"
    medium = "medium"
    low = "low"


class RecommendationKind(str, Enum):
    restock = "restock"
    promotion = "promotion"
    bundling = "bundling"
    price_adjustment = "price_adjustment"
    expansion = "expansion"


class NotificationKind(str, Enum):
    stock_alert = "stock-alert"
    sales_alert = "sales-alert"
    system = "system"


class QueryType(str, Enum):
    daily_sales = "daily_sales"
    weekly_sales = "weekly_sales"
    monthly_sales = "monthly_sales"
    top_products = "top_products"
    stock_status = "stock_status"
    prediction = "prediction"
    general = "general"


# Anything with these attributes can be fed into the pipeline:
# ORM rows, pydantic models or plain dataclasses.
class SaleLike(Protocol):
    date: date
    product_id: str
    product_name: str
    quantity: int
    total: float


class ProductLike(Protocol):
    id: str
    name: str
    price: float
    cost_price: float
    stock: int
    min_stock: int


@dataclass
class DailyAggregate:
    date: date
    total: float
    quantity: int
    transaction_count: int


@dataclass
class ProductAggregate:
    product_id: str
    product_name: str
    total_quantity: int
    total_revenue: float
    average_daily_quantity: float


@dataclass
class Insight:
    kind: InsightKind
    title: str
    description: str
    value: Optional[float] = None
    percentage: Optional[float] = None
    date: Optional[date] = None


@dataclass
class StockStatus:
    product_id: str
    product_name: str
    current_stock: int
    average_daily_velocity: float
    days_until_empty: int
    status: StockStatusKind
    recommended_restock_qty: int
    profit_margin_pct: Optional[float]


@dataclass
class ProductPrediction:
    product_id: str
    product_name: str
    predicted_quantity: float
    confidence_pct: float


@dataclass
class Prediction:
    period: Period
    predicted_value: float
    confidence_pct: float
    trend: Trend
    trend_pct: float
    product_predictions: List[ProductPrediction] = field(default_factory=list)


@dataclass
class Recommendation:
    kind: RecommendationKind
    priority: Priority
    title: str
    description: str
    action_items: List[str] = field(default_factory=list)
    expected_impact: str = ""
    product_names: List[str] = field(default_factory=list)


@dataclass
class Notification:
    id: str
    kind: NotificationKind
    priority: Priority
    title: str
    message: str
    product_id: Optional[str] = None


@dataclass
class ParsedQuery:
    type: QueryType
    params: dict = field(default_factory=dict)
