"""Notification dispatcher port (interface)."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID


class NotificationPort(ABC):
    """
    Delivers in-app notifications to a user or to the admin team.

    Implementations:
    - DatabaseNotificationAdapter
    """

    @abstractmethod
    async def notify(
        self,
        recipient: UUID | str,
        kind: str,
        message: str,
        data: dict[str, Any] | None = None,
    ) -> None:
        """
        Deliver one notification.

        ``recipient`` is a user id or ``"admins"``. Delivery is attempted
        once; callers treat failures as non-fatal.
        """
        pass
