# sales_dashboard/analytics/formatting.py
from __future__ import annotations

import math
from datetime import date


def format_number(value: float) -> str:
    """Thousands grouped with dots: 1500000 -> '1.500.000'."""
    if value is None or not math.isfinite(value):
        return "-"
    return f"{value:,.0f}".replace(",", ".")


def format_currency(value: float, currency: str = "IDR") -> str:
    if value is None or not math.isfinite(value):
        return "-"
    if currency.upper() == "IDR":
        return f"Rp {format_number(value)}"
    return f"{currency.upper()} {value:,.0f}"


def format_date(value: date) -> str:
    """'2024-01-05' -> '5 Jan 2024'."""
    return f"{value.day} {value.strftime('%b %Y')}"
