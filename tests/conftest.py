"""Pytest configuration and fixtures for Event Booking Service tests.

This module provides reusable fixtures for testing:
- A throwaway SQLite database per test (aiosqlite)
- Recording fakes for the notifier, email sender and QR generator
- Sample data (services, bookings)
- An HTTP client bound to the app with its dependencies overridden
"""

from typing import AsyncIterator
from uuid import UUID, uuid4

import httpx
import pytest

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import EventType
from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.notifications.application.side_effects import (
    SideEffectDispatcher,
)
from event_booking_ms.features.notifications.infrastructure.adapters import (
    DatabaseNotificationAdapter,
)
from event_booking_ms.features.services.domain.entities import Service, ServiceStatus
from event_booking_ms.features.services.infrastructure.repository import (
    ServiceRepository,
)
from event_booking_ms.shared.core.settings import Settings
from event_booking_ms.shared.infrastructure.database import (
    build_engine,
    build_session_factory,
    create_schema,
)
from fakes import FakeEmailSender, FakeNotifier, FakeQRCodeGenerator, future_date

ADMIN_KEY = "test-admin-key"


# === Database Fixtures ===


@pytest.fixture
async def engine(tmp_path):
    """Fresh SQLite database with the full schema."""
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


# === Collaborator Fixtures ===


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
def email_sender() -> FakeEmailSender:
    return FakeEmailSender()


@pytest.fixture
def qr_generator() -> FakeQRCodeGenerator:
    return FakeQRCodeGenerator()


# === Sample Data ===


@pytest.fixture
def make_service(session_factory):
    """Insert a catalog service."""

    async def _make(
        price: int = 30000,
        status: ServiceStatus = ServiceStatus.ACTIVE,
        category: str = "venue",
    ) -> Service:
        async with session_factory() as session:
            async with session.begin():
                return await ServiceRepository(session).create(
                    Service.create(
                        name="Grand Hall", price=price, category=category, status=status
                    )
                )

    return _make


@pytest.fixture
def make_booking(session_factory):
    """Insert a pending, unpaid booking."""

    async def _make(
        user_id: UUID | None = None,
        guest_count: int = 100,
        price_calculated: int = 40000,
        event_type: EventType = EventType.WEDDING,
    ) -> Booking:
        async with session_factory() as session:
            async with session.begin():
                return await BookingRepository(session).create(
                    Booking.create(
                        customer_name="Abebe Kebede",
                        customer_email="abebe@example.com",
                        customer_phone="0911223344",
                        event_type=event_type,
                        event_date=future_date(),
                        event_time="14:30",
                        guest_count=guest_count,
                        price_calculated=price_calculated,
                        user_id=user_id,
                    )
                )

    return _make


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


# === HTTP Fixtures ===


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        _env_file=None,
        admin_api_key=ADMIN_KEY,
        webhook_providers=["telebirr"],
        enforce_payment_on_confirm=False,
        email_provider="console",
    )


@pytest.fixture
def app(session_factory, test_settings, qr_generator, email_sender):
    """The FastAPI app wired to the test database and fakes."""
    from event_booking_ms.app import create_app
    from event_booking_ms.features.payments.infrastructure.provider_factory import (
        get_qr_code_generator,
    )
    from event_booking_ms.shared.core.settings import get_settings
    from event_booking_ms.shared.infrastructure.database import (
        get_db_session,
        get_session_factory,
    )
    from event_booking_ms.shared.presentation.dependencies import (
        get_side_effect_dispatcher,
    )

    async def override_db_session() -> AsyncIterator:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def override_session_factory():
        return session_factory

    application = create_app()
    application.dependency_overrides[get_db_session] = override_db_session
    application.dependency_overrides[get_session_factory] = override_session_factory
    application.dependency_overrides[get_settings] = lambda: test_settings
    application.dependency_overrides[get_qr_code_generator] = lambda: qr_generator
    application.dependency_overrides[get_side_effect_dispatcher] = (
        lambda: SideEffectDispatcher(
            DatabaseNotificationAdapter(session_factory), email_sender
        )
    )
    return application


@pytest.fixture
async def client(app) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"X-Admin-Key": ADMIN_KEY}
