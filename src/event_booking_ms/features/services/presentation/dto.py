"""Service catalog DTOs."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from event_booking_ms.features.services.domain.entities import Service, ServiceStatus


class ServiceCreateRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=100)
    description: str | None = Field(None, max_length=1000)
    price: int = Field(..., ge=0, description="Base price in ETB")
    category: str = Field(..., min_length=2, max_length=50)
    status: ServiceStatus = ServiceStatus.ACTIVE


class ServiceUpdateRequest(BaseModel):
    """Partial update; omitted fields keep their value."""

    name: str | None = Field(None, min_length=2, max_length=100)
    description: str | None = Field(None, max_length=1000)
    price: int | None = Field(None, ge=0)
    category: str | None = Field(None, min_length=2, max_length=50)
    status: ServiceStatus | None = None


class ServiceResponse(BaseModel):
    id: UUID
    name: str
    description: str | None = None
    price: int
    category: str
    status: ServiceStatus
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, service: Service) -> "ServiceResponse":
        return cls(
            id=service.id,
            name=service.name,
            description=service.description,
            price=service.price,
            category=service.category,
            status=service.status,
            created_at=service.created_at,
            updated_at=service.updated_at,
        )
