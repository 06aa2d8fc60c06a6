"""Notification repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.notifications.domain.entities import (
    Notification,
    NotificationAudience,
)
from event_booking_ms.shared.infrastructure.database.models import NotificationModel


class NotificationRepository:
    """Persistence for in-app notifications."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, notification: Notification) -> Notification:
        model = NotificationModel.from_domain(notification)
        self._session.add(model)
        await self._session.flush()
        return model.to_domain()

    async def list_for_user(
        self, user_id: UUID, limit: int = 20, offset: int = 0
    ) -> tuple[list[Notification], int]:
        """Newest-first page of a user's notifications and the total count."""
        return await self._list(NotificationModel.user_id == user_id, limit, offset)

    async def list_for_admins(
        self, limit: int = 20, offset: int = 0
    ) -> tuple[list[Notification], int]:
        return await self._list(
            NotificationModel.audience == NotificationAudience.ADMINS.value, limit, offset
        )

    async def _list(self, condition, limit: int, offset: int) -> tuple[list[Notification], int]:
        total = (
            await self._session.execute(
                select(func.count()).select_from(NotificationModel).where(condition)
            )
        ).scalar_one()
        result = await self._session.execute(
            select(NotificationModel)
            .where(condition)
            .order_by(NotificationModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [m.to_domain() for m in result.scalars().all()], total

    async def unread_count(self, user_id: UUID) -> int:
        result = await self._session.execute(
            select(func.count())
            .select_from(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .where(NotificationModel.is_read.is_(False))
        )
        return result.scalar_one()

    async def mark_read(self, notification_id: UUID, user_id: UUID) -> Optional[Notification]:
        result = await self._session.execute(
            update(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .where(NotificationModel.user_id == user_id)
            .values(is_read=True)
        )
        if result.rowcount == 0:
            return None

        model = (
            await self._session.execute(
                select(NotificationModel)
                .where(NotificationModel.id == notification_id)
                .execution_options(populate_existing=True)
            )
        ).scalar_one()
        return model.to_domain()

    async def mark_all_read(self, user_id: UUID) -> int:
        result = await self._session.execute(
            update(NotificationModel)
            .where(NotificationModel.user_id == user_id)
            .where(NotificationModel.is_read.is_(False))
            .values(is_read=True)
        )
        return result.rowcount

    async def delete(self, notification_id: UUID, user_id: UUID) -> bool:
        result = await self._session.execute(
            delete(NotificationModel)
            .where(NotificationModel.id == notification_id)
            .where(NotificationModel.user_id == user_id)
        )
        return result.rowcount > 0
