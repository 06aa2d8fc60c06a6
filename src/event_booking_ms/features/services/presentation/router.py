"""Service catalog API router."""

from dataclasses import replace
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.services.domain.entities import Service
from event_booking_ms.features.services.infrastructure.repository import (
    ServiceRepository,
)
from event_booking_ms.features.services.presentation.dto import (
    ServiceCreateRequest,
    ServiceResponse,
    ServiceUpdateRequest,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.domain.exceptions import ServiceNotFoundError
from event_booking_ms.shared.infrastructure.audit import AuditLogger
from event_booking_ms.shared.infrastructure.database import get_db_session
from event_booking_ms.shared.presentation.api_response import APIResponse
from event_booking_ms.shared.presentation.dependencies import (
    AdminActor,
    RequestAuditContext,
)

logger = get_logger(__name__)

router = APIRouter()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


@router.get(
    "",
    response_model=APIResponse[list[ServiceResponse]],
    summary="List active services",
)
async def list_services(
    session: DbSession, category: str | None = None
) -> APIResponse[list[ServiceResponse]]:
    services = await ServiceRepository(session).list(category=category)
    return APIResponse.ok(data=[ServiceResponse.from_entity(s) for s in services])


@router.get(
    "/{service_id}",
    response_model=APIResponse[ServiceResponse],
    summary="Get service by ID",
)
async def get_service(service_id: UUID, session: DbSession) -> APIResponse[ServiceResponse]:
    service = await ServiceRepository(session).get_active(service_id)
    if service is None:
        raise ServiceNotFoundError(service_id)
    return APIResponse.ok(data=ServiceResponse.from_entity(service))


@router.post(
    "",
    response_model=APIResponse[ServiceResponse],
    status_code=201,
    summary="Create a service (admin)",
)
async def create_service(
    request: ServiceCreateRequest,
    _: AdminActor,
    audit_context: RequestAuditContext,
    session: DbSession,
) -> APIResponse[ServiceResponse]:
    async with session.begin():
        service = await ServiceRepository(session).create(
            Service.create(
                name=request.name,
                price=request.price,
                category=request.category,
                description=request.description,
                status=request.status,
            )
        )
        await AuditLogger(session).record(
            "create_service",
            "service",
            service.id,
            audit_context,
            {"name": service.name, "price": service.price},
        )

    logger.info("Service %s created (%s)", service.id, service.name)
    return APIResponse.ok(
        data=ServiceResponse.from_entity(service), message="Service created successfully"
    )


@router.patch(
    "/{service_id}",
    response_model=APIResponse[ServiceResponse],
    summary="Update a service (admin)",
)
async def update_service(
    service_id: UUID,
    request: ServiceUpdateRequest,
    _: AdminActor,
    audit_context: RequestAuditContext,
    session: DbSession,
) -> APIResponse[ServiceResponse]:
    """Change catalog data; existing bookings keep their snapshot."""
    changes = request.model_dump(exclude_unset=True, exclude_none=True)

    async with session.begin():
        repo = ServiceRepository(session)
        service = await repo.get_by_id(service_id)
        if service is None:
            raise ServiceNotFoundError(service_id)

        updated = await repo.update(replace(service, **changes))
        await AuditLogger(session).record(
            "update_service",
            "service",
            service_id,
            audit_context,
            {k: v.value if hasattr(v, "value") else v for k, v in changes.items()},
        )

    return APIResponse.ok(
        data=ServiceResponse.from_entity(updated), message="Service updated successfully"
    )
