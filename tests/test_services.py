"""Use-case services driven against the in-memory repositories."""

import asyncio
from datetime import date, timedelta
from unittest import mock

import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, OperationalError

from sales_dashboard.analytics.types import InsightKind, Period, QueryType
from sales_dashboard.schemas.product import ProductCreate, ProductEdit
from sales_dashboard.schemas.sale import SaleBulkCreate, SaleCreate, SaleEdit
from sales_dashboard.schemas.settings import BusinessSettingsUpdate
from sales_dashboard.service.activity_service import ActivityService
from sales_dashboard.service.analytics_service import AnalyticsService
from sales_dashboard.service.errors import integrity_to_http
from sales_dashboard.service.product_service import ProductService
from sales_dashboard.service.sale_service import SaleService
from sales_dashboard.service.settings_service import SettingsService
from conftest import OTHER_OWNER, OWNER

TODAY = date(2024, 3, 15)


def run(coro):
    return asyncio.run(coro)


def _product(service, name="Coffee", **kw):
    data = {"name": name, "price": 10000, "cost_price": 6000, "stock": 20, "min_stock": 5}
    data.update(kw)
    return run(service.create_product(OWNER, ProductCreate(**data)))


@pytest.fixture
def product_service(product_repo, activity_repo):
    return ProductService(product_repo, activity_repo)


@pytest.fixture
def sale_service(sale_repo, product_repo, activity_repo):
    return SaleService(sale_repo, product_repo, activity_repo)


@pytest.fixture
def analytics_service(sale_repo, product_repo, settings_repo):
    return AnalyticsService(sale_repo, product_repo, settings_repo, clock=lambda: TODAY)


class TestProductService:
    def test_create_logs_activity(self, product_service, activity_repo):
        product = _product(product_service)
        assert product.owner_id == OWNER
        assert product.id
        assert [e.action for e in activity_repo.rows] == ["ADD_PRODUCT"]

    def test_duplicate_name_conflict(self, product_service):
        _product(product_service)
        with pytest.raises(HTTPException) as exc:
            _product(product_service)
        assert exc.value.status_code == 409

    def test_same_name_for_another_owner(self, product_service):
        _product(product_service)
        other = run(product_service.create_product(OTHER_OWNER, ProductCreate(name="Coffee")))
        assert other.owner_id == OTHER_OWNER

    def test_get_is_owner_scoped(self, product_service):
        product = _product(product_service)
        with pytest.raises(HTTPException) as exc:
            run(product_service.get_product(OTHER_OWNER, product.id))
        assert exc.value.status_code == 404

    def test_edit(self, product_service):
        product = _product(product_service)
        edited = run(product_service.edit_product(OWNER, product.id, ProductEdit(price=12000)))
        assert edited.price == 12000
        assert edited.name == "Coffee"

    def test_edit_rename_to_existing(self, product_service):
        _product(product_service, "Tea")
        coffee = _product(product_service)
        with pytest.raises(HTTPException) as exc:
            run(product_service.edit_product(OWNER, coffee.id, ProductEdit(name="Tea")))
        assert exc.value.status_code == 409

    def test_edit_missing(self, product_service):
        with pytest.raises(HTTPException) as exc:
            run(product_service.edit_product(OWNER, "nope", ProductEdit(price=1)))
        assert exc.value.status_code == 404

    def test_delete(self, product_service, activity_repo):
        product = _product(product_service)
        run(product_service.delete_product(OWNER, product.id))
        assert run(product_service.list_products(OWNER)).total == 0
        assert activity_repo.rows[-1].action == "DELETE_PRODUCT"

    def test_list_filters(self, product_service):
        _product(product_service, "Iced Coffee", category="Beverages")
        _product(product_service, "Cake", category="Snacks")
        listing = run(product_service.list_products(OWNER, name_query="coffee"))
        assert [p.name for p in listing.products] == ["Iced Coffee"]
        assert listing.total == 2


class TestSaleService:
    def test_record_sale_decrements_stock(self, product_service, sale_service, product_repo):
        product = _product(product_service, stock=3)
        sale = run(sale_service.record_sale(OWNER, SaleCreate(date=TODAY, product_id=product.id, quantity=5)))

        assert sale.total == 50000
        assert sale.unit_price == 10000
        assert sale.product_name == "Coffee"
        # oversell is allowed
        assert product_repo.rows[product.id].stock == -2

    def test_explicit_unit_price(self, product_service, sale_service):
        product = _product(product_service)
        sale = run(
            sale_service.record_sale(OWNER, SaleCreate(date=TODAY, product_id=product.id, quantity=2, unit_price=9000))
        )
        assert sale.total == 18000

    def test_unknown_product(self, sale_service):
        with pytest.raises(HTTPException) as exc:
            run(sale_service.record_sale(OWNER, SaleCreate(date=TODAY, product_id="nope", quantity=1)))
        assert exc.value.status_code == 404

    def test_edit_recomputes_total(self, product_service, sale_service, product_repo):
        product = _product(product_service)
        sale = run(sale_service.record_sale(OWNER, SaleCreate(date=TODAY, product_id=product.id, quantity=2)))
        stock_after_sale = product_repo.rows[product.id].stock

        edited = run(sale_service.edit_sale(OWNER, sale.id, SaleEdit(quantity=4)))
        assert edited.total == 40000
        edited = run(sale_service.edit_sale(OWNER, sale.id, SaleEdit(unit_price=5000)))
        assert edited.total == 20000
        # editing does not touch stock
        assert product_repo.rows[product.id].stock == stock_after_sale

    def test_edit_switches_product_name(self, product_service, sale_service):
        coffee = _product(product_service)
        tea = _product(product_service, "Tea")
        sale = run(sale_service.record_sale(OWNER, SaleCreate(date=TODAY, product_id=coffee.id, quantity=1)))
        edited = run(sale_service.edit_sale(OWNER, sale.id, SaleEdit(product_id=tea.id)))
        assert edited.product_name == "Tea"

    def test_bulk_import_keeps_stock(self, product_service, sale_service, activity_repo, product_repo):
        product = _product(product_service, stock=10)
        payload = SaleBulkCreate(
            sales=[SaleCreate(date=TODAY - timedelta(days=i), product_id=product.id, quantity=1) for i in range(3)]
        )
        sales = run(sale_service.record_bulk(OWNER, payload))
        assert len(sales) == 3
        assert activity_repo.rows[-1].action == "IMPORT_SALES"
        assert product_repo.rows[product.id].stock == 10

    def test_imported_history_does_not_deplete_stock(self, product_service, sale_service, product_repo):
        product = _product(product_service, stock=20)
        payload = SaleBulkCreate(sales=[SaleCreate(date=date(2023, 6, 1), product_id=product.id, quantity=15)])
        run(sale_service.record_bulk(OWNER, payload))
        assert product_repo.rows[product.id].stock == 20

    def test_failed_stock_update_keeps_nothing(self, product_service, sale_service, sale_repo, product_repo):
        product = _product(product_service, stock=20)
        failing = mock.AsyncMock(side_effect=OperationalError("UPDATE products", {}, Exception("db down")))

        with mock.patch.object(sale_repo, "_take_from_stock", failing):
            with pytest.raises(OperationalError):
                run(sale_service.record_sale(OWNER, SaleCreate(date=TODAY, product_id=product.id, quantity=2)))

        assert sale_repo.rows == {}
        assert product_repo.rows[product.id].stock == 20

    def test_list_with_daily_rollup(self, product_service, sale_service, sale_repo):
        product = _product(product_service)
        sale_repo.add(OWNER, TODAY, product, 2)
        sale_repo.add(OWNER, TODAY, product, 1)
        sale_repo.add(OWNER, TODAY - timedelta(days=60), product, 1)

        listing = run(sale_service.list_sales(OWNER, days=30, today=TODAY))
        assert listing.total == 2
        assert len(listing.daily_sales) == 1
        assert listing.daily_sales[0].transaction_count == 2
        assert listing.daily_sales[0].total == 30000

    def test_delete_missing(self, sale_service):
        with pytest.raises(HTTPException) as exc:
            run(sale_service.delete_sale(OWNER, "nope"))
        assert exc.value.status_code == 404


class TestSettingsService:
    def test_defaults_when_missing(self, settings_repo, activity_repo):
        service = SettingsService(settings_repo, activity_repo)
        current = run(service.get_settings(OWNER))
        assert current.business_name == "My Store"
        assert current.currency == "IDR"
        assert current.categories

    def test_update_merges_and_logs(self, settings_repo, activity_repo):
        service = SettingsService(settings_repo, activity_repo)
        run(service.update_settings(OWNER, BusinessSettingsUpdate(business_name="Warung Kopi")))
        updated = run(service.update_settings(OWNER, BusinessSettingsUpdate(currency="USD")))

        assert updated.business_name == "Warung Kopi"
        assert updated.currency == "USD"
        assert [e.action for e in activity_repo.rows] == ["UPDATE_SETTINGS", "UPDATE_SETTINGS"]
        assert len(settings_repo.rows) == 1

    def test_empty_update_rejected(self, settings_repo, activity_repo):
        service = SettingsService(settings_repo, activity_repo)
        with pytest.raises(HTTPException) as exc:
            run(service.update_settings(OWNER, BusinessSettingsUpdate()))
        assert exc.value.status_code == 400


class TestActivityService:
    def test_newest_first(self, activity_repo):
        run(activity_repo.add(OWNER, "ADD_PRODUCT", "first"))
        run(activity_repo.add(OWNER, "ADD_PRODUCT", "second"))
        entries = run(ActivityService(activity_repo).latest(OWNER))
        assert [e.details for e in entries] == ["second", "first"]


class TestAnalyticsService:
    def _seed(self, product_service, sale_repo, totals_per_day):
        product = _product(product_service, stock=4, min_stock=5)
        for offset, quantity in enumerate(reversed(totals_per_day)):
            sale_repo.add(OWNER, TODAY - timedelta(days=offset), product, quantity)
        return product

    def test_summary(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [1, 2, 3])
        summary = run(analytics_service.summary(OWNER, 30))
        assert summary.total_revenue == 60000
        assert summary.total_quantity == 6
        assert summary.total_transactions == 3
        assert summary.average_transaction_value == 20000
        assert [p.name for p in summary.low_stock_products] == ["Coffee"]
        assert summary.period.end_date == TODAY
        assert summary.period.start_date == TODAY - timedelta(days=30)

    def test_summary_changes_against_previous_window(self, product_service, sale_repo, analytics_service):
        product = _product(product_service)
        sale_repo.add(OWNER, TODAY, product, 2)
        sale_repo.add(OWNER, TODAY - timedelta(days=1), product, 2)
        sale_repo.add(OWNER, TODAY - timedelta(days=10), product, 1)
        # outside both windows
        sale_repo.add(OWNER, TODAY - timedelta(days=40), product, 9)

        summary = run(analytics_service.summary(OWNER, 7))
        assert summary.total_revenue == 40000
        assert summary.revenue_change_pct == pytest.approx(300.0)
        assert summary.quantity_change_pct == pytest.approx(300.0)
        assert summary.transactions_change_pct == pytest.approx(100.0)
        assert summary.average_transaction_value_change_pct == pytest.approx(100.0)

    def test_summary_without_previous_sales(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [1])
        summary = run(analytics_service.summary(OWNER, 30))
        assert summary.revenue_change_pct == 100.0
        assert summary.average_transaction_value_change_pct == 100.0

    def test_summary_of_empty_store(self, analytics_service):
        summary = run(analytics_service.summary(OWNER, 30))
        assert summary.revenue_change_pct == 0.0
        assert summary.average_transaction_value == 0.0

    def test_insights_compare_previous_window(self, product_service, sale_repo, analytics_service):
        product = self._seed(product_service, sale_repo, [2])
        sale_repo.add(OWNER, TODAY - timedelta(days=10), product, 4)
        insights = run(analytics_service.insights(OWNER, 7))
        assert insights[0].kind == InsightKind.decrease
        assert insights[0].percentage == pytest.approx(-50.0)

    def test_weekly_summary_ranks_products_over_the_full_window(
        self, product_service, sale_repo, analytics_service
    ):
        coffee = _product(product_service)
        tea = _product(product_service, "Tea")
        sale_repo.add(OWNER, TODAY - timedelta(days=20), coffee, 20)
        for offset in range(8):
            sale_repo.add(OWNER, TODAY - timedelta(days=offset), tea, 1)

        text = run(analytics_service.weekly_summary(OWNER)).summary
        assert "Units sold: 7" in text
        assert "Best seller: Coffee (20 units)" in text
        assert "Needs attention: Tea (8 units)" in text

    def test_prediction_without_history_renders_null(self, analytics_service):
        prediction = run(analytics_service.prediction(OWNER, Period.weekly))
        assert prediction.predicted_value is None
        assert prediction.trend_pct is None
        assert prediction.trend == "stable"

    def test_prediction_flat(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [1] * 14)
        prediction = run(analytics_service.prediction(OWNER, Period.daily))
        assert prediction.predicted_value == pytest.approx(10000)

    def test_recommendations_and_stock(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [3] * 14)
        stock = run(analytics_service.stock(OWNER))
        assert stock[0].status == "low"
        recs = run(analytics_service.recommendations(OWNER, Period.weekly))
        assert recs[0].kind == "restock"

    def test_notifications(self, product_service, analytics_service):
        _product(product_service, stock=0)
        notes = run(analytics_service.notifications(OWNER))
        assert [n.id for n in notes][-1] == "setup-record-sale"
        assert notes[0].id.startswith("out-of-stock-")

    def test_query(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [1, 2])
        answer = run(analytics_service.query(OWNER, "produk terlaris"))
        assert answer.type == QueryType.top_products
        assert "Coffee" in answer.answer

    def test_weekly_summary(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [1, 1])
        summary = run(analytics_service.weekly_summary(OWNER))
        assert summary.summary.startswith("This week's summary:")

    def test_load_data_newest_sales_first(self, product_service, sale_repo, analytics_service):
        self._seed(product_service, sale_repo, [1, 2])
        data = run(analytics_service.load_data(OWNER))
        assert [p.name for p in data.products] == ["Coffee"]
        assert data.sales[0].date == TODAY
        assert data.settings.business_name == "My Store"

    def test_load_data_store_failure_is_empty(self, sale_repo, product_repo, settings_repo):
        product_repo.get_all = mock.AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))
        service = AnalyticsService(sale_repo, product_repo, settings_repo)
        data = run(service.load_data(OWNER))
        assert data.products == []
        assert data.sales == []


class TestIntegrityMapping:
    @pytest.mark.parametrize("code, status", [("23505", 409), ("23502", 400), ("23503", 422), (None, 500)])
    def test_sqlstate(self, code, status):
        orig = mock.Mock(pgcode=code, sqlstate=None, diag=None)
        err = IntegrityError("INSERT", {}, orig)
        assert integrity_to_http(err, "dup").status_code == status
