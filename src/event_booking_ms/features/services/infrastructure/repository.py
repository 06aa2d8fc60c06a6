"""Service catalog repository."""

from typing import Optional
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.services.domain.entities import Service, ServiceStatus
from event_booking_ms.shared.domain.clock import utcnow
from event_booking_ms.shared.infrastructure.database.models import ServiceModel


class ServiceRepository:
    """Read and write catalog entries."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, service: Service) -> Service:
        model = ServiceModel.from_domain(service)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return model.to_domain()

    async def get_by_id(self, service_id: UUID) -> Optional[Service]:
        result = await self._session.execute(
            select(ServiceModel)
            .where(ServiceModel.id == service_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def get_active(self, service_id: UUID) -> Optional[Service]:
        """Get a service only if it can currently be booked."""
        service = await self.get_by_id(service_id)
        return service if service and service.is_active else None

    async def list(
        self, category: Optional[str] = None, active_only: bool = True
    ) -> list[Service]:
        query = select(ServiceModel).order_by(ServiceModel.name)
        if active_only:
            query = query.where(ServiceModel.status == ServiceStatus.ACTIVE.value)
        if category:
            query = query.where(ServiceModel.category == category)

        result = await self._session.execute(query)
        return [m.to_domain() for m in result.scalars().all()]

    async def update(self, service: Service) -> Optional[Service]:
        await self._session.execute(
            update(ServiceModel)
            .where(ServiceModel.id == service.id)
            .values(
                name=service.name,
                description=service.description,
                price=service.price,
                category=service.category,
                status=service.status.value,
                updated_at=utcnow(),
            )
        )
        await self._session.flush()
        return await self.get_by_id(service.id)
