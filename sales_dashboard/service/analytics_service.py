# sales_dashboard/service/analytics_service.py
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, List, Optional

from sqlalchemy.exc import SQLAlchemyError

from sales_dashboard.analytics import (
    AnalyticsConfig,
    DEFAULT_CONFIG,
    analyze_stock,
    answer_query,
    business_context,
    daily_aggregates,
    date_window,
    generate_insights,
    generate_notifications,
    generate_prediction,
    generate_recommendations,
    local_answer,
    parse_natural_query,
    percent_change,
    previous_window,
    product_aggregates,
    weekly_summary,
)
from sales_dashboard.analytics.types import DailyAggregate, Period, ProductAggregate
from sales_dashboard.models.product import Product
from sales_dashboard.models.sale import Sale
from sales_dashboard.repositories.product_repo import ProductRepository
from sales_dashboard.repositories.sale_repo import SaleRepository
from sales_dashboard.repositories.settings_repo import SettingsRepository
from sales_dashboard.schemas.analytics import (
    AnalyticsSummary,
    DailyAggregateRead,
    InsightRead,
    LowStockProduct,
    NotificationRead,
    PeriodRead,
    PredictionRead,
    ProductAggregateRead,
    QueryAnswer,
    RecommendationRead,
    StockStatusRead,
    WeeklySummaryRead,
)
from sales_dashboard.schemas.data import DataLoadResponse
from sales_dashboard.schemas.product import ProductRead
from sales_dashboard.schemas.sale import SaleRead
from sales_dashboard.schemas.settings import BusinessSettingsRead
from sales_dashboard.service.settings_service import default_settings

log = logging.getLogger("service.analytics")

WEEK_DAYS = 7


@dataclass
class Snapshot:
    """Everything the pipeline needs for one owner and one window."""
    start: date
    end: date
    days: int
    products: List[Product]
    sales: List[Sale]
    daily: List[DailyAggregate]
    aggregates: List[ProductAggregate]
    settings: BusinessSettingsRead


@dataclass
class Totals:
    revenue: float
    quantity: int
    transactions: int

    @property
    def average(self) -> float:
        return self.revenue / self.transactions if self.transactions else 0.0


def _totals(sales) -> Totals:
    return Totals(
        revenue=sum(s.total for s in sales),
        quantity=sum(s.quantity for s in sales),
        transactions=len(sales),
    )


class AnalyticsService:
    def __init__(
        self,
        sale_repo: SaleRepository,
        product_repo: ProductRepository,
        settings_repo: SettingsRepository,
        config: AnalyticsConfig = DEFAULT_CONFIG,
        clock: Callable[[], date] = date.today,
    ):
        self.sale_repo = sale_repo
        self.product_repo = product_repo
        self.settings_repo = settings_repo
        self.config = config
        self.clock = clock

    async def _settings(self, owner_id: str) -> BusinessSettingsRead:
        row = await self.settings_repo.get(owner_id)
        return BusinessSettingsRead.model_validate(row) if row is not None else default_settings()

    async def snapshot(self, owner_id: str, days: Optional[int] = None) -> Snapshot:
        days = days or self.config.default_window_days
        start, end = date_window(days, self.clock())
        products = await self.product_repo.get_all(owner_id)
        sales = await self.sale_repo.get_all(owner_id, start=start, end=end)
        return Snapshot(
            start=start,
            end=end,
            days=days,
            products=products,
            sales=sales,
            daily=daily_aggregates(sales),
            aggregates=product_aggregates(sales, days),
            settings=await self._settings(owner_id),
        )

    # === dashboard ===
    async def summary(self, owner_id: str, days: Optional[int] = None) -> AnalyticsSummary:
        snap = await self.snapshot(owner_id, days)
        prev_start, prev_end = previous_window(snap.start, snap.days)
        previous = _totals(await self.sale_repo.get_all(owner_id, start=prev_start, end=prev_end))
        current = _totals(snap.sales)

        return AnalyticsSummary(
            total_revenue=current.revenue,
            total_quantity=current.quantity,
            total_transactions=current.transactions,
            average_transaction_value=current.average,
            revenue_change_pct=percent_change(current.revenue, previous.revenue),
            quantity_change_pct=percent_change(current.quantity, previous.quantity),
            transactions_change_pct=percent_change(current.transactions, previous.transactions),
            average_transaction_value_change_pct=percent_change(current.average, previous.average),
            product_sales=[ProductAggregateRead.model_validate(a) for a in snap.aggregates],
            low_stock_products=[
                LowStockProduct.model_validate(p) for p in snap.products if p.stock <= p.min_stock
            ],
            period=PeriodRead(days=snap.days, start_date=snap.start, end_date=snap.end),
        )

    async def daily(self, owner_id: str, days: Optional[int] = None) -> List[DailyAggregateRead]:
        snap = await self.snapshot(owner_id, days)
        return [DailyAggregateRead.model_validate(d) for d in snap.daily]

    async def product_sales(self, owner_id: str, days: Optional[int] = None) -> List[ProductAggregateRead]:
        snap = await self.snapshot(owner_id, days)
        return [ProductAggregateRead.model_validate(a) for a in snap.aggregates]

    async def insights(self, owner_id: str, days: Optional[int] = None) -> List[InsightRead]:
        snap = await self.snapshot(owner_id, days)
        prev_start, prev_end = previous_window(snap.start, snap.days)
        previous_sales = await self.sale_repo.get_all(owner_id, start=prev_start, end=prev_end)

        insights = generate_insights(
            snap.daily,
            snap.aggregates,
            daily_aggregates(previous_sales),
            self.config,
            snap.settings.currency,
        )
        log.info("owner %s: %d insights over %d days", owner_id, len(insights), snap.days)
        return [InsightRead.model_validate(i) for i in insights]

    async def stock(self, owner_id: str, days: Optional[int] = None) -> List[StockStatusRead]:
        snap = await self.snapshot(owner_id, days)
        statuses = analyze_stock(snap.products, snap.aggregates, self.config)
        return [StockStatusRead.model_validate(s) for s in statuses]

    async def weekly_summary(self, owner_id: str) -> WeeklySummaryRead:
        # totals come from the last 7 days with sales, product ranking from the full window
        snap = await self.snapshot(owner_id)
        text = weekly_summary(snap.daily[-WEEK_DAYS:], snap.aggregates, snap.settings.currency)
        return WeeklySummaryRead(summary=text)

    # === forecasting ===
    async def prediction(
        self, owner_id: str, period: Period = Period.weekly, days: Optional[int] = None
    ) -> PredictionRead:
        snap = await self.snapshot(owner_id, days)
        prediction = generate_prediction(snap.daily, snap.aggregates, period, self.config)
        return PredictionRead.model_validate(prediction)

    async def recommendations(
        self, owner_id: str, period: Period = Period.weekly, days: Optional[int] = None
    ) -> List[RecommendationRead]:
        snap = await self.snapshot(owner_id, days)
        prediction = generate_prediction(snap.daily, snap.aggregates, period, self.config)
        statuses = analyze_stock(snap.products, snap.aggregates, self.config)
        recs = generate_recommendations(prediction, snap.products, snap.aggregates, statuses, self.config)
        return [RecommendationRead.model_validate(r) for r in recs]

    async def notifications(self, owner_id: str) -> List[NotificationRead]:
        products = await self.product_repo.get_all(owner_id)
        sales = await self.sale_repo.get_all(owner_id)
        notes = generate_notifications(products, sales, self.clock(), self.config)
        return [NotificationRead.model_validate(n) for n in notes]

    # === text ===
    async def query(self, owner_id: str, text: str) -> QueryAnswer:
        parsed = parse_natural_query(text)
        snap = await self.snapshot(owner_id)
        answer = answer_query(parsed, snap.daily, snap.aggregates, snap.products, snap.settings.currency)
        return QueryAnswer(type=parsed.type, params=parsed.params, answer=answer)

    async def local_answer(self, owner_id: str, message: str) -> str:
        snap = await self.snapshot(owner_id)
        return local_answer(
            message, snap.daily, snap.aggregates, snap.products, snap.days, snap.settings.currency
        )

    async def business_context(self, owner_id: str) -> str:
        snap = await self.snapshot(owner_id)
        return business_context(
            snap.settings.business_name,
            snap.daily,
            snap.aggregates,
            snap.products,
            snap.days,
            snap.settings.currency,
        )

    # === bootstrap ===
    async def load_data(self, owner_id: str) -> DataLoadResponse:
        """All owner data for the first page load; an unreachable store yields an empty payload."""
        try:
            products = await self.product_repo.get_all(owner_id)
            sales = await self.sale_repo.get_all(owner_id, newest_first=True)
            settings = await self._settings(owner_id)
        except SQLAlchemyError as e:
            log.warning("data load for owner %s failed, returning empty data: %s", owner_id, e)
            return DataLoadResponse(products=[], sales=[], settings=default_settings())

        return DataLoadResponse(
            products=[ProductRead.model_validate(p) for p in products],
            sales=[SaleRead.model_validate(s) for s in sales],
            settings=settings,
        )
