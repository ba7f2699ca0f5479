from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError

from sales_dashboard.schemas.settings import BusinessSettingsRead, BusinessSettingsUpdate
from sales_dashboard.repositories.settings_repo import SettingsRepository
from sales_dashboard.repositories.activity_repo import ActivityRepository
from sales_dashboard.models.enums import ActivityAction
from sales_dashboard.service.errors import integrity_to_http

DEFAULT_BUSINESS_NAME = "My Store"


def default_settings() -> BusinessSettingsRead:
    return BusinessSettingsRead(business_name=DEFAULT_BUSINESS_NAME)


class SettingsService:
    def __init__(self, repo: SettingsRepository, activity_repo: ActivityRepository):
        self.repo = repo
        self.activity_repo = activity_repo

    async def get_settings(self, owner_id: str) -> BusinessSettingsRead:
        row = await self.repo.get(owner_id)
        if row is None:
            return default_settings()
        return BusinessSettingsRead.model_validate(row)

    async def update_settings(self, owner_id: str, data: BusinessSettingsUpdate) -> BusinessSettingsRead:
        current = await self.get_settings(owner_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise HTTPException(status_code=400, detail="Nothing to update")

        merged = current.model_copy(update=changes)
        try:
            row = await self.repo.upsert(owner_id, merged.model_dump(mode="json"))
        except IntegrityError as e:
            raise integrity_to_http(e, "Settings for this owner already exist")

        await self.activity_repo.add(
            owner_id,
            ActivityAction.update_settings.value,
            "Updated " + ", ".join(sorted(changes)),
        )
        return BusinessSettingsRead.model_validate(row)
