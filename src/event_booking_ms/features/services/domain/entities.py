"""Service catalog domain entity."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from event_booking_ms.shared.domain.clock import utcnow


class ServiceStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


@dataclass
class Service:
    """Catalog entry a booking can be priced from."""

    id: UUID
    name: str
    price: int
    category: str
    status: ServiceStatus = ServiceStatus.ACTIVE
    description: str | None = None

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def create(
        cls,
        name: str,
        price: int,
        category: str,
        description: str | None = None,
        status: ServiceStatus = ServiceStatus.ACTIVE,
    ) -> "Service":
        return cls(
            id=uuid4(),
            name=name,
            price=price,
            category=category,
            description=description,
            status=status,
        )

    @property
    def is_active(self) -> bool:
        return self.status == ServiceStatus.ACTIVE

    def snapshot(self) -> dict[str, Any]:
        """Catalog data captured on a booking at creation time."""
        return {
            "id": str(self.id),
            "name": self.name,
            "price": self.price,
            "category": self.category,
        }
