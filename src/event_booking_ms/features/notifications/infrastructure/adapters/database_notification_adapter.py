"""Notification adapter that stores notifications for in-app delivery."""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_booking_ms.features.notifications.application.ports import NotificationPort
from event_booking_ms.features.notifications.domain.entities import Notification
from event_booking_ms.features.notifications.infrastructure.repository import (
    NotificationRepository,
)
from event_booking_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


class DatabaseNotificationAdapter(NotificationPort):
    """
    Persists each notification in its own short transaction.

    Runs outside the transaction of the operation that produced it, so a
    failure here never touches booking or payment state.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def notify(
        self,
        recipient: UUID | str,
        kind: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        notification = Notification.for_recipient(recipient, kind, message, data)

        async with self._session_factory() as session:
            async with session.begin():
                await NotificationRepository(session).create(notification)

        logger.info(
            "Notification %s (%s) stored for %s",
            notification.id,
            kind,
            notification.user_id or notification.audience.value,
        )
