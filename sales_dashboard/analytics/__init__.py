from sales_dashboard.analytics.aggregator import (
    daily_aggregates,
    date_window,
    filter_sales_by_date_range,
    previous_window,
    product_aggregates,
)
from sales_dashboard.analytics.assistant import local_answer
from sales_dashboard.analytics.config import AnalyticsConfig, DEFAULT_CONFIG, load_analytics_config
from sales_dashboard.analytics.forecaster import generate_prediction
from sales_dashboard.analytics.insights import generate_insights, percent_change
from sales_dashboard.analytics.notifications import generate_notifications
from sales_dashboard.analytics.query import answer_query, parse_natural_query
from sales_dashboard.analytics.recommendations import generate_recommendations
from sales_dashboard.analytics.stock import analyze_stock, classify_stock_status
from sales_dashboard.analytics.summary import business_context, weekly_summary

__all__ = [
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    "analyze_stock",
    "answer_query",
    "business_context",
    "classify_stock_status",
    "daily_aggregates",
    "date_window",
    "filter_sales_by_date_range",
    "generate_insights",
    "generate_notifications",
    "generate_prediction",
    "generate_recommendations",
    "load_analytics_config",
    "local_answer",
    "parse_natural_query",
    "percent_change",
    "previous_window",
    "product_aggregates",
    "weekly_summary",
]
