"""Shared presentation module."""

from event_booking_ms.shared.presentation.api_response import APIResponse, Page
from event_booking_ms.shared.presentation.exception_handlers import (
    register_exception_handlers,
)
from event_booking_ms.shared.presentation.middleware import CorrelationIdMiddleware

__all__ = ["APIResponse", "CorrelationIdMiddleware", "Page", "register_exception_handlers"]
