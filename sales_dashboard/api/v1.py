from fastapi import APIRouter
from sales_dashboard.api.routers import products
from sales_dashboard.api.routers import sales
from sales_dashboard.api.routers import settings
from sales_dashboard.api.routers import activity
from sales_dashboard.api.routers import data
from sales_dashboard.api.routers import analytics
from sales_dashboard.api.routers import chat
from sales_dashboard.api.routers import email

api_router = APIRouter()
api_router.include_router(products.router)
api_router.include_router(sales.router)
api_router.include_router(settings.router)
api_router.include_router(activity.router)
api_router.include_router(data.router)
api_router.include_router(analytics.router)
api_router.include_router(chat.router)
api_router.include_router(email.router)
