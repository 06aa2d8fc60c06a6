"""Notification domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from event_booking_ms.shared.domain.clock import utcnow

ADMINS = "admins"


class NotificationAudience(str, Enum):
    USER = "user"
    ADMINS = "admins"


@dataclass
class Notification:
    """An in-app notification for one user or for the admin team."""

    id: UUID
    audience: NotificationAudience
    kind: str
    message: str
    user_id: UUID | None = None
    data: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime = field(default_factory=utcnow)

    @classmethod
    def for_recipient(
        cls,
        recipient: UUID | str,
        kind: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> "Notification":
        """Build a notification for a user id or for ``"admins"``."""
        if recipient == ADMINS:
            audience, user_id = NotificationAudience.ADMINS, None
        else:
            audience = NotificationAudience.USER
            user_id = recipient if isinstance(recipient, UUID) else UUID(str(recipient))

        return cls(
            id=uuid4(),
            audience=audience,
            kind=kind,
            message=message,
            user_id=user_id,
            data=data or {},
        )
