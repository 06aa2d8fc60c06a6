"""Exception handlers for the FastAPI application."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.domain.exceptions import (
    AccessDeniedError,
    ConflictError,
    EventBookingError,
    NotFoundError,
    ValidationFailedError,
)
from event_booking_ms.shared.presentation.api_response import APIResponse

logger = get_logger(__name__)


def _error_response(status_code: int, message: str, errors: list | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse.error(message, errors).model_dump(mode="json"),
    )


def _field_name(loc: tuple) -> str:
    # Drop the "body" / "query" / "path" prefix FastAPI puts first
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers."""

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return _error_response(404, str(exc))

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
        return _error_response(409, str(exc))

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(
        request: Request, exc: ValidationFailedError
    ) -> JSONResponse:
        return _error_response(422, str(exc), exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = [
            {"field": _field_name(tuple(err.get("loc", ()))), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        return _error_response(422, "Validation failed", errors)

    @app.exception_handler(AccessDeniedError)
    async def access_denied_handler(
        request: Request, exc: AccessDeniedError
    ) -> JSONResponse:
        return _error_response(403, str(exc))

    @app.exception_handler(EventBookingError)
    async def domain_error_handler(
        request: Request, exc: EventBookingError
    ) -> JSONResponse:
        return _error_response(400, str(exc))

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(500, "Internal server error")
