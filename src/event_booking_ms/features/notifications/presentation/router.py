"""Notification API router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.notifications.infrastructure.repository import (
    NotificationRepository,
)
from event_booking_ms.features.notifications.presentation.dto import (
    MarkAllReadResponse,
    NotificationResponse,
    UnreadCountResponse,
)
from event_booking_ms.shared.domain.exceptions import NotificationNotFoundError
from event_booking_ms.shared.infrastructure.database import get_db_session
from event_booking_ms.shared.presentation.api_response import APIResponse, Page
from event_booking_ms.shared.presentation.dependencies import (
    AdminActor,
    PageParams,
    UserActor,
)

router = APIRouter()


async def get_notification_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> NotificationRepository:
    """Dependency for getting the notification repository."""
    return NotificationRepository(session)


Repository = Annotated[NotificationRepository, Depends(get_notification_repository)]


@router.get(
    "",
    response_model=APIResponse[Page[NotificationResponse]],
    summary="List my notifications",
)
async def list_notifications(
    actor: UserActor, pagination: PageParams, repo: Repository
) -> APIResponse[Page[NotificationResponse]]:
    notifications, total = await repo.list_for_user(
        actor.user_id, limit=pagination.limit, offset=pagination.offset
    )
    return APIResponse.ok(
        data=Page.build(
            [NotificationResponse.from_entity(n) for n in notifications],
            total,
            pagination.page,
            pagination.limit,
        )
    )


@router.get(
    "/unread-count",
    response_model=APIResponse[UnreadCountResponse],
    summary="Count my unread notifications",
)
async def unread_count(actor: UserActor, repo: Repository) -> APIResponse[UnreadCountResponse]:
    return APIResponse.ok(data=UnreadCountResponse(count=await repo.unread_count(actor.user_id)))


@router.get(
    "/admin",
    response_model=APIResponse[Page[NotificationResponse]],
    summary="Admin notification feed",
)
async def list_admin_notifications(
    _: AdminActor, pagination: PageParams, repo: Repository
) -> APIResponse[Page[NotificationResponse]]:
    notifications, total = await repo.list_for_admins(
        limit=pagination.limit, offset=pagination.offset
    )
    return APIResponse.ok(
        data=Page.build(
            [NotificationResponse.from_entity(n) for n in notifications],
            total,
            pagination.page,
            pagination.limit,
        )
    )


@router.patch(
    "/read-all",
    response_model=APIResponse[MarkAllReadResponse],
    summary="Mark all my notifications as read",
)
async def mark_all_read(actor: UserActor, repo: Repository) -> APIResponse[MarkAllReadResponse]:
    updated = await repo.mark_all_read(actor.user_id)
    return APIResponse.ok(
        data=MarkAllReadResponse(updated=updated),
        message="All notifications marked as read",
    )


@router.patch(
    "/{notification_id}/read",
    response_model=APIResponse[NotificationResponse],
    summary="Mark a notification as read",
)
async def mark_read(
    notification_id: UUID, actor: UserActor, repo: Repository
) -> APIResponse[NotificationResponse]:
    notification = await repo.mark_read(notification_id, actor.user_id)
    if notification is None:
        raise NotificationNotFoundError(notification_id)
    return APIResponse.ok(data=NotificationResponse.from_entity(notification))


@router.delete(
    "/{notification_id}",
    response_model=APIResponse[None],
    summary="Delete a notification",
)
async def delete_notification(
    notification_id: UUID, actor: UserActor, repo: Repository
) -> APIResponse[None]:
    if not await repo.delete(notification_id, actor.user_id):
        raise NotificationNotFoundError(notification_id)
    return APIResponse.ok(message="Notification deleted")
