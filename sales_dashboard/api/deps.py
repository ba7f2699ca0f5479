import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

# Repositories
from sales_dashboard.repositories.product_repo import ProductRepository
from sales_dashboard.repositories.sale_repo import SaleRepository
from sales_dashboard.repositories.settings_repo import SettingsRepository
from sales_dashboard.repositories.activity_repo import ActivityRepository
from sales_dashboard.repositories.chat_repo import ChatRepository

# Services
from sales_dashboard.service.product_service import ProductService
from sales_dashboard.service.sale_service import SaleService
from sales_dashboard.service.settings_service import SettingsService
from sales_dashboard.service.activity_service import ActivityService
from sales_dashboard.service.analytics_service import AnalyticsService
from sales_dashboard.service.chat_service import ChatService
from sales_dashboard.service.email_service import EmailService
from sales_dashboard.service.conversation_service import ConversationService

from sales_dashboard.analytics import AnalyticsConfig, load_analytics_config
from sales_dashboard.core.config import settings

# DB
from sales_dashboard.db.session import get_session

logger = logging.getLogger(__name__)


async def get_owner_id(x_owner_id: Optional[str] = Header(None, alias="X-Owner-Id")) -> str:
    """Owner of the data in this request; every query is scoped by it."""
    if not x_owner_id or not x_owner_id.strip():
        logger.warning("Request without X-Owner-Id header")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing X-Owner-Id header",
        )
    return x_owner_id.strip()


def get_analytics_config() -> AnalyticsConfig:
    return load_analytics_config(settings)

#Repositories
def get_product_repo(db: AsyncSession = Depends(get_session)) -> ProductRepository:
    return ProductRepository(db)

def get_sale_repo(db: AsyncSession = Depends(get_session)) -> SaleRepository:
    return SaleRepository(db)

def get_settings_repo(db: AsyncSession = Depends(get_session)) -> SettingsRepository:
    return SettingsRepository(db)

def get_activity_repo(db: AsyncSession = Depends(get_session)) -> ActivityRepository:
    return ActivityRepository(db)

def get_chat_repo(db: AsyncSession = Depends(get_session)) -> ChatRepository:
    return ChatRepository(db)

#Services
def get_product_service(
    repo: ProductRepository = Depends(get_product_repo),
    activity_repo: ActivityRepository = Depends(get_activity_repo),
) -> ProductService:
    return ProductService(repo, activity_repo)

def get_sale_service(
    repo: SaleRepository = Depends(get_sale_repo),
    product_repo: ProductRepository = Depends(get_product_repo),
    activity_repo: ActivityRepository = Depends(get_activity_repo),
) -> SaleService:
    return SaleService(repo, product_repo, activity_repo)

def get_settings_service(
    repo: SettingsRepository = Depends(get_settings_repo),
    activity_repo: ActivityRepository = Depends(get_activity_repo),
) -> SettingsService:
    return SettingsService(repo, activity_repo)

def get_activity_service(repo: ActivityRepository = Depends(get_activity_repo)) -> ActivityService:
    return ActivityService(repo)

def get_analytics_service(
    sale_repo: SaleRepository = Depends(get_sale_repo),
    product_repo: ProductRepository = Depends(get_product_repo),
    settings_repo: SettingsRepository = Depends(get_settings_repo),
    config: AnalyticsConfig = Depends(get_analytics_config),
) -> AnalyticsService:
    return AnalyticsService(sale_repo, product_repo, settings_repo, config)

def get_chat_service() -> ChatService:
    return ChatService(settings)

def get_conversation_service(
    repo: ChatRepository = Depends(get_chat_repo),
    chat: ChatService = Depends(get_chat_service),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> ConversationService:
    return ConversationService(repo, chat, analytics)

def get_email_service() -> EmailService:
    return EmailService(settings)
