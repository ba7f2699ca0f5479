from sales_dashboard.schemas.activity import ActivityLogRead
from sales_dashboard.repositories.activity_repo import ActivityRepository


class ActivityService:
    def __init__(self, repo: ActivityRepository):
        self.repo = repo

    async def latest(self, owner_id: str, limit: int = 100) -> list[ActivityLogRead]:
        entries = await self.repo.latest(owner_id, limit=limit)
        return [ActivityLogRead.model_validate(e) for e in entries]
