"""Text summaries, query routing and number formatting."""

from datetime import date

import pytest

from sales_dashboard.analytics.aggregator import daily_aggregates, product_aggregates
from sales_dashboard.analytics.formatting import format_currency, format_date, format_number
from sales_dashboard.analytics.query import answer_query, parse_natural_query
from sales_dashboard.analytics.summary import business_context, weekly_summary
from sales_dashboard.analytics.types import ParsedQuery, QueryType
from conftest import ProductRow, SaleRow


def _sales():
    return [
        SaleRow(date(2024, 1, 1), "p1", "Coffee", 10, 150000.0),
        SaleRow(date(2024, 1, 2), "p2", "Tea", 2, 20000.0),
    ]


class TestParseQuery:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Berapa penjualan hari ini?", QueryType.daily_sales),
            ("How are sales this week?", QueryType.weekly_sales),
            ("penjualan bulan ini", QueryType.monthly_sales),
            ("produk paling laris", QueryType.top_products),
            ("What is my top product?", QueryType.top_products),
            ("cek stok", QueryType.stock_status),
            ("Forecast for next week", QueryType.prediction),
            ("hello", QueryType.general),
        ],
    )
    def test_routing(self, text, expected):
        assert parse_natural_query(text).type == expected

    def test_sales_without_period_falls_through(self):
        assert parse_natural_query("sales stock").type == QueryType.stock_status


class TestAnswers:
    def test_top_products(self):
        aggs = product_aggregates(_sales(), 30)
        text = answer_query(ParsedQuery(QueryType.top_products), [], aggs, [])
        assert text.startswith("Top 5 products:")
        assert "1. Coffee: 10 units (Rp 150.000)" in text

    def test_top_products_without_data(self):
        assert answer_query(ParsedQuery(QueryType.top_products), [], [], []) == "No sales recorded yet."

    def test_stock_lists_low_products(self):
        products = [ProductRow("p1", "Coffee", stock=2, min_stock=5), ProductRow("p2", "Tea")]
        text = answer_query(ParsedQuery(QueryType.stock_status), [], [], products)
        assert "- Low stock: 1 products" in text
        assert "- Coffee: 2 pcs" in text

    def test_prediction_without_data_is_zero(self):
        text = answer_query(ParsedQuery(QueryType.prediction), [], [], [])
        assert "- Daily: Rp 0" in text

    def test_daily_uses_last_day(self):
        daily = daily_aggregates(_sales())
        text = answer_query(ParsedQuery(QueryType.daily_sales), daily, [], [])
        assert "- Total: Rp 20.000" in text


class TestSummaries:
    def test_weekly_summary(self):
        sales = _sales()
        text = weekly_summary(daily_aggregates(sales), product_aggregates(sales, 7))
        lines = text.splitlines()
        assert lines[0] == "This week's summary:"
        assert "- Total sales: Rp 170.000" in lines
        assert "- Daily average: Rp 85.000" in lines
        assert "- Best seller: Coffee (10 units)" in lines
        assert "- Needs attention: Tea (2 units)" in lines

    def test_weekly_summary_empty(self):
        text = weekly_summary([], [])
        assert "- Daily average: Rp 0" in text
        assert "- Best seller: - (0 units)" in text

    def test_business_context(self):
        sales = _sales()
        products = [ProductRow("p1", "Coffee", stock=1, min_stock=5), ProductRow("p2", "Tea")]
        text = business_context("Warung Kopi", daily_aggregates(sales), product_aggregates(sales, 30), products)
        assert 'Business data for "Warung Kopi":' in text
        assert "- Best sellers: Coffee, Tea" in text
        assert "- Low stock products: Coffee" in text


class TestFormatting:
    def test_number(self):
        assert format_number(1500000) == "1.500.000"
        assert format_number(float("nan")) == "-"

    def test_currency(self):
        assert format_currency(1500000) == "Rp 1.500.000"
        assert format_currency(1500, "usd") == "USD 1,500"

    def test_date(self):
        assert format_date(date(2024, 1, 5)) == "5 Jan 2024"
