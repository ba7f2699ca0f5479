from typing import Optional
from uuid import uuid4
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete, func

from sales_dashboard.models.chat_message import ChatMessage
from sales_dashboard.models.enums import ChatRole


class ChatRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, owner_id: str, session_id: str, role: str, content: str) -> ChatMessage:
        message = ChatMessage(
            id=str(uuid4()),
            owner_id=owner_id,
            session_id=session_id,
            role=role,
            content=content,
        )
        self.session.add(message)
        await self.session.commit()
        await self.session.refresh(message)
        return message

    async def history(
        self, owner_id: str, session_id: Optional[str] = None, limit: int = 100
    ) -> list[ChatMessage]:
        """The last `limit` messages, oldest first."""
        stmt = select(ChatMessage).where(ChatMessage.owner_id == owner_id)
        if session_id:
            stmt = stmt.where(ChatMessage.session_id == session_id)
        stmt = stmt.order_by(ChatMessage.created_at.desc()).limit(limit)
        result = await self.session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def sessions(self, owner_id: str) -> list[dict]:
        """Per-session stats, most recently active first, titled by the first question."""
        last_at = func.max(ChatMessage.created_at)
        stats = await self.session.execute(
            select(
                ChatMessage.session_id,
                func.count().label("message_count"),
                func.min(ChatMessage.created_at).label("started_at"),
                last_at.label("last_message_at"),
            )
            .where(ChatMessage.owner_id == owner_id)
            .group_by(ChatMessage.session_id)
            .order_by(last_at.desc())
        )

        questions = await self.session.execute(
            select(ChatMessage.session_id, ChatMessage.content)
            .where(ChatMessage.owner_id == owner_id, ChatMessage.role == ChatRole.user.value)
            .order_by(ChatMessage.created_at)
        )
        titles: dict[str, str] = {}
        for session_id, content in questions.all():
            titles.setdefault(session_id, content)

        return [
            {
                "session_id": row.session_id,
                "title": titles.get(row.session_id, ""),
                "message_count": row.message_count,
                "started_at": row.started_at,
                "last_message_at": row.last_message_at,
            }
            for row in stats.all()
        ]

    async def clear(self, owner_id: str, session_id: Optional[str] = None) -> int:
        stmt = delete(ChatMessage).where(ChatMessage.owner_id == owner_id)
        if session_id:
            stmt = stmt.where(ChatMessage.session_id == session_id)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0
