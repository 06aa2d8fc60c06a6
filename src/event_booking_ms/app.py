"""FastAPI Application for the Event Booking Service."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from event_booking_ms.features.bookings.presentation.router import (
    router as bookings_router,
)
from event_booking_ms.features.notifications.presentation.router import (
    router as notifications_router,
)
from event_booking_ms.features.payments.presentation.router import (
    router as payments_router,
)
from event_booking_ms.features.services.presentation.router import (
    router as services_router,
)
from event_booking_ms.features.webhooks.presentation.router import (
    router as webhooks_router,
)
from event_booking_ms.shared.core.logging import configure_logging, get_logger
from event_booking_ms.shared.core.settings import get_settings
from event_booking_ms.shared.infrastructure.database import close_db, init_db
from event_booking_ms.shared.presentation import (
    CorrelationIdMiddleware,
    register_exception_handlers,
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan events."""
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Event Booking Service starting on %s:%s", settings.host, settings.port)
    logger.info(
        "Environment: %s, email provider: %s",
        settings.environment,
        settings.email_provider,
    )

    await init_db()

    yield

    await close_db()
    logger.info("Event Booking Service shutting down")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Event Booking Service",
        description="Bookings, price calculation and simulated payments for event planning",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(CorrelationIdMiddleware)

    register_exception_handlers(app)

    app.include_router(services_router, prefix="/api/services", tags=["Services"])
    app.include_router(bookings_router, prefix="/api/bookings", tags=["Bookings"])
    app.include_router(payments_router, prefix="/api/payments", tags=["Payments"])
    app.include_router(webhooks_router, prefix="/api/webhooks", tags=["Webhooks"])
    app.include_router(
        notifications_router, prefix="/api/notifications", tags=["Notifications"]
    )

    @app.get("/", tags=["Health"])
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {"service": "Event Booking Service", "status": "running"}

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "event-booking-ms",
            "environment": settings.environment,
        }

    return app


app = create_app()
