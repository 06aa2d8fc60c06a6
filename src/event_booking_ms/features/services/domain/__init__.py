"""Service catalog domain."""

from event_booking_ms.features.services.domain.entities import Service, ServiceStatus

__all__ = ["Service", "ServiceStatus"]
