"""Webhook API router - Handles payment callbacks from providers."""

import json
from typing import Annotated, Any

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.payments.application.ports import QRCodeGeneratorPort
from event_booking_ms.features.payments.application.use_cases import (
    HandlePaymentWebhookUseCase,
)
from event_booking_ms.features.payments.infrastructure.provider_factory import (
    get_qr_code_generator,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.core.settings import Settings, get_settings
from event_booking_ms.shared.infrastructure.database import get_db_session
from event_booking_ms.shared.presentation.api_response import APIResponse
from event_booking_ms.shared.presentation.dependencies import (
    Dispatcher,
    RequestAuditContext,
)

logger = get_logger(__name__)

router = APIRouter()


async def read_json_body(request: Request) -> Any:
    """Request body as JSON, or None if it is not valid JSON."""
    raw = await request.body()
    try:
        return json.loads(raw) if raw else None
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


@router.post(
    "/payments",
    response_model=APIResponse[None],
    summary="Payment provider webhook",
    description="""
    Receive a payment status callback from a provider.

    - Body: `{provider, transactionId, status, amount}`
    - A `success` status with the exact payment amount completes the payment
    - Anything else from a recognised provider fails it
    - Unknown providers, unknown transactions and replays change nothing
    - Always acknowledged with 200, including when storage fails
    """,
)
async def payment_webhook(
    request: Request,
    audit_context: RequestAuditContext,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    settings: Annotated[Settings, Depends(get_settings)],
    qr_generator: Annotated[QRCodeGeneratorPort, Depends(get_qr_code_generator)],
    dispatcher: Dispatcher,
    background_tasks: BackgroundTasks,
) -> APIResponse[None]:
    """Handle a payment provider webhook."""
    body = await read_json_body(request)

    try:
        outcome = await HandlePaymentWebhookUseCase(
            session, qr_generator, settings.webhook_providers
        ).execute(body, audit_context)
    except SQLAlchemyError:
        logger.exception("Payment webhook could not be stored")
        return APIResponse.ok(message="Webhook processed")

    if outcome.side_effects:
        background_tasks.add_task(dispatcher.dispatch, outcome.side_effects)

    logger.info("Payment webhook handled (processed=%s)", outcome.processed)
    return APIResponse.ok(message="Webhook processed")
