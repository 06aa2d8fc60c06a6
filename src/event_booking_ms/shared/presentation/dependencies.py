"""Request-scoped dependencies shared by the feature routers."""

import hmac
from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from event_booking_ms.features.notifications.application.side_effects import (
    SideEffectDispatcher,
)
from event_booking_ms.features.notifications.infrastructure.adapters import (
    DatabaseNotificationAdapter,
)
from event_booking_ms.features.notifications.infrastructure.provider_factory import (
    get_email_sender,
)
from event_booking_ms.shared.core.settings import Settings, get_settings
from event_booking_ms.shared.domain.exceptions import AccessDeniedError
from event_booking_ms.shared.infrastructure.audit import AuditContext
from event_booking_ms.shared.infrastructure.database import get_session_factory


@dataclass(frozen=True)
class Actor:
    """The caller of a request, as far as this service can tell."""

    user_id: UUID | None = None
    is_admin: bool = False

    def can_access(self, owner_id: UUID | None) -> bool:
        """Admins see everything; a guest booking is reachable by its id alone."""
        if self.is_admin or owner_id is None:
            return True
        return self.user_id == owner_id


def _is_valid_admin_key(provided: str | None, settings: Settings) -> bool:
    if not provided or not settings.admin_api_key:
        return False
    return hmac.compare_digest(provided.encode(), settings.admin_api_key.encode())


async def get_actor(
    settings: Annotated[Settings, Depends(get_settings)],
    user_id: Annotated[UUID | None, Header(alias="X-User-Id")] = None,
    admin_key: Annotated[str | None, Header(alias="X-Admin-Key")] = None,
) -> Actor:
    """Identify the caller from the identity headers set by the gateway."""
    return Actor(user_id=user_id, is_admin=_is_valid_admin_key(admin_key, settings))


async def require_user(actor: Annotated[Actor, Depends(get_actor)]) -> Actor:
    """Caller must be a known user."""
    if actor.user_id is None:
        raise AccessDeniedError("A user identity is required")
    return actor


async def require_admin(actor: Annotated[Actor, Depends(get_actor)]) -> Actor:
    """Caller must hold the admin key."""
    if not actor.is_admin:
        raise AccessDeniedError("Admin access required")
    return actor


async def get_audit_context(
    request: Request, actor: Annotated[Actor, Depends(get_actor)]
) -> AuditContext:
    """Who and where a mutating request came from."""
    return AuditContext(
        user_id=actor.user_id,
        ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


async def get_side_effect_dispatcher(
    session_factory: Annotated[
        async_sessionmaker[AsyncSession], Depends(get_session_factory)
    ],
) -> SideEffectDispatcher:
    """Dispatcher wired to the configured notifier and email sender."""
    return SideEffectDispatcher(
        DatabaseNotificationAdapter(session_factory), get_email_sender()
    )


CurrentActor = Annotated[Actor, Depends(get_actor)]
AdminActor = Annotated[Actor, Depends(require_admin)]
UserActor = Annotated[Actor, Depends(require_user)]
RequestAuditContext = Annotated[AuditContext, Depends(get_audit_context)]
Dispatcher = Annotated[SideEffectDispatcher, Depends(get_side_effect_dispatcher)]


@dataclass(frozen=True)
class Pagination:
    page: int = 1
    limit: int = 10

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


async def get_pagination(
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> Pagination:
    return Pagination(page=page, limit=limit)


PageParams = Annotated[Pagination, Depends(get_pagination)]
