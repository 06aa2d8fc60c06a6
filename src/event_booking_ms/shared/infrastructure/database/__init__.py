"""Database infrastructure module."""

from event_booking_ms.shared.infrastructure.database.connection import (
    Base,
    build_engine,
    build_session_factory,
    close_db,
    create_schema,
    get_db_session,
    get_session_factory,
    init_db,
)

__all__ = [
    "Base",
    "build_engine",
    "build_session_factory",
    "close_db",
    "create_schema",
    "get_db_session",
    "get_session_factory",
    "init_db",
]
