"""Notification DTOs."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field

from event_booking_ms.features.notifications.domain.entities import (
    Notification,
    NotificationAudience,
)


class NotificationResponse(BaseModel):
    id: UUID
    audience: NotificationAudience
    user_id: UUID | None = None
    kind: str
    message: str
    data: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.id,
            audience=notification.audience,
            user_id=notification.user_id,
            kind=notification.kind,
            message=notification.message,
            data=notification.data,
            is_read=notification.is_read,
            created_at=notification.created_at,
        )


class UnreadCountResponse(BaseModel):
    count: int


class MarkAllReadResponse(BaseModel):
    updated: int
