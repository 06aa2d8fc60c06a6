"""Append-only audit trail."""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.shared.infrastructure.database.models import AuditLogModel


@dataclass(frozen=True)
class AuditContext:
    """Who triggered an operation, and from where."""

    user_id: UUID | None = None
    ip: str | None = None
    user_agent: str | None = None


SYSTEM_CONTEXT = AuditContext()


class AuditLogger:
    """
    Records audit entries inside the caller's transaction.

    An entry is only stored if the operation it describes commits.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def record(
        self,
        action: str,
        resource_type: str,
        resource_id: Any = None,
        context: AuditContext = SYSTEM_CONTEXT,
        data: dict[str, Any] | None = None,
    ) -> None:
        self._session.add(
            AuditLogModel(
                user_id=context.user_id,
                action=action,
                resource_type=resource_type,
                resource_id=str(resource_id) if resource_id is not None else None,
                ip=context.ip,
                user_agent=(context.user_agent or "")[:255] or None,
                data=data or {},
            )
        )
        await self._session.flush()

    async def entries_for(self, resource_id: Any) -> list[AuditLogModel]:
        """Audit entries for one resource, oldest first."""
        result = await self._session.execute(
            select(AuditLogModel)
            .where(AuditLogModel.resource_id == str(resource_id))
            .order_by(AuditLogModel.created_at)
        )
        return list(result.scalars().all())
