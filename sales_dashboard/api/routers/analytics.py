from typing import Optional
from fastapi import APIRouter, Depends, Query
from sales_dashboard.analytics.types import Period
from sales_dashboard.schemas.analytics import (
    AnalyticsSummary,
    DailyAggregateRead,
    InsightRead,
    NotificationRead,
    PredictionRead,
    ProductAggregateRead,
    QueryAnswer,
    QueryRequest,
    RecommendationRead,
    StockStatusRead,
    WeeklySummaryRead,
)
from sales_dashboard.service.analytics_service import AnalyticsService
from sales_dashboard.api.deps import get_owner_id, get_analytics_service

router = APIRouter(prefix="/analytics", tags=["analytics"])

DaysQuery = Query(None, ge=1, le=3650, description="Window length, defaults to 30 days")


@router.get("/summary", response_model=AnalyticsSummary, summary="Totals over the window")
async def get_summary(
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.summary(owner_id, days)


@router.get("/daily", response_model=list[DailyAggregateRead], summary="Per-day rollup")
async def get_daily(
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.daily(owner_id, days)


@router.get("/products", response_model=list[ProductAggregateRead], summary="Per-product rollup")
async def get_product_sales(
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.product_sales(owner_id, days)


@router.get("/insights", response_model=list[InsightRead], summary="Generated insights")
async def get_insights(
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.insights(owner_id, days)


@router.get("/stock", response_model=list[StockStatusRead], summary="Stock outlook, most urgent first")
async def get_stock(
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.stock(owner_id, days)


@router.get("/weekly-summary", response_model=WeeklySummaryRead, summary="Text summary of the last 7 sales days")
async def get_weekly_summary(
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.weekly_summary(owner_id)


@router.get("/prediction", response_model=PredictionRead, summary="Sales forecast")
async def get_prediction(
    period: Period = Period.weekly,
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.prediction(owner_id, period, days)


@router.get("/recommendations", response_model=list[RecommendationRead], summary="Rule-based recommendations")
async def get_recommendations(
    period: Period = Period.weekly,
    days: Optional[int] = DaysQuery,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.recommendations(owner_id, period, days)


@router.get("/notifications", response_model=list[NotificationRead], summary="Stock and sales alerts")
async def get_notifications(
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.notifications(owner_id)


@router.post("/query", response_model=QueryAnswer, summary="Answer a natural-language question")
async def post_query(
    payload: QueryRequest,
    owner_id: str = Depends(get_owner_id),
    service: AnalyticsService = Depends(get_analytics_service),
):
    return await service.query(owner_id, payload.query)
