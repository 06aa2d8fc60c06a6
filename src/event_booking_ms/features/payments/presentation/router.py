"""Payment API router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.payments.application.ports import QRCodeGeneratorPort
from event_booking_ms.features.payments.application.use_cases import (
    ProcessPaymentUseCase,
)
from event_booking_ms.features.payments.domain.enums import PaymentMethod, PaymentStatus
from event_booking_ms.features.payments.domain.instructions import (
    get_payment_instructions,
)
from event_booking_ms.features.payments.infrastructure.provider_factory import (
    get_qr_code_generator,
)
from event_booking_ms.features.payments.infrastructure.repository import (
    PaymentRepository,
)
from event_booking_ms.features.payments.presentation.dto import (
    PaymentInstructionsResponse,
    PaymentProcessRequest,
    PaymentProcessResponse,
    PaymentResponse,
)
from event_booking_ms.shared.domain.exceptions import (
    AccessDeniedError,
    PaymentNotFoundError,
)
from event_booking_ms.shared.infrastructure.database import get_db_session
from event_booking_ms.shared.presentation.api_response import APIResponse, Page
from event_booking_ms.shared.presentation.dependencies import (
    AdminActor,
    CurrentActor,
    Dispatcher,
    PageParams,
    RequestAuditContext,
    UserActor,
)

router = APIRouter()


async def get_payment_repository(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> PaymentRepository:
    """Dependency for getting the payment repository."""
    return PaymentRepository(session)


@router.get(
    "/mine",
    response_model=APIResponse[Page[PaymentResponse]],
    summary="List my payments",
)
async def list_my_payments(
    actor: UserActor,
    pagination: PageParams,
    repo: Annotated[PaymentRepository, Depends(get_payment_repository)],
) -> APIResponse[Page[PaymentResponse]]:
    """Payments for bookings owned by the caller, newest first."""
    payments, total = await repo.list(
        limit=pagination.limit, offset=pagination.offset, user_id=actor.user_id
    )
    return APIResponse.ok(
        data=Page.build(
            [PaymentResponse.from_entity(p) for p in payments],
            total,
            pagination.page,
            pagination.limit,
        )
    )


@router.get(
    "/instructions/{payment_method}",
    response_model=APIResponse[PaymentInstructionsResponse],
    summary="Payment instructions for a method",
)
async def payment_instructions(
    payment_method: str,
    amount: Annotated[int, Query(ge=0)],
    phone_number: Annotated[str | None, Query(alias="phoneNumber")] = None,
) -> APIResponse[PaymentInstructionsResponse]:
    """Step-by-step instructions; unknown methods get a generic template."""
    instructions = get_payment_instructions(payment_method, amount, phone_number)
    return APIResponse.ok(data=PaymentInstructionsResponse.from_instructions(instructions))


@router.get(
    "",
    response_model=APIResponse[Page[PaymentResponse]],
    summary="List payments (admin)",
)
async def list_payments(
    _: AdminActor,
    pagination: PageParams,
    repo: Annotated[PaymentRepository, Depends(get_payment_repository)],
    status: PaymentStatus | None = None,
    payment_method: Annotated[PaymentMethod | None, Query(alias="paymentMethod")] = None,
) -> APIResponse[Page[PaymentResponse]]:
    """List all payments with optional status and method filters."""
    payments, total = await repo.list(
        limit=pagination.limit,
        offset=pagination.offset,
        status=status,
        payment_method=payment_method,
    )
    return APIResponse.ok(
        data=Page.build(
            [PaymentResponse.from_entity(p) for p in payments],
            total,
            pagination.page,
            pagination.limit,
        )
    )


@router.get(
    "/{payment_id}",
    response_model=APIResponse[PaymentResponse],
    summary="Get payment by ID",
    description="Retrieve payment details by ID. Owner of the booking or admin.",
)
async def get_payment(
    payment_id: UUID,
    actor: CurrentActor,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> APIResponse[PaymentResponse]:
    """Get a payment by ID."""
    payment = await PaymentRepository(session).get_by_id(payment_id)
    if not payment:
        raise PaymentNotFoundError(payment_id)

    booking = await BookingRepository(session).get_by_id(payment.booking_id)
    if booking is None or not actor.can_access(booking.user_id):
        raise AccessDeniedError("You cannot view this payment")

    return APIResponse.ok(data=PaymentResponse.from_entity(payment))


@router.post(
    "/{payment_id}/process",
    response_model=APIResponse[PaymentProcessResponse],
    summary="Settle a pending payment (admin)",
    description="""
    Complete or fail a pending payment.

    - Success confirms the booking and attaches a receipt QR code
    - Failure marks the booking's payment as failed
    - A payment that is no longer pending is rejected with 409
    """,
)
async def process_payment(
    payment_id: UUID,
    request: PaymentProcessRequest,
    _: AdminActor,
    audit_context: RequestAuditContext,
    session: Annotated[AsyncSession, Depends(get_db_session)],
    qr_generator: Annotated[QRCodeGeneratorPort, Depends(get_qr_code_generator)],
    dispatcher: Dispatcher,
    background_tasks: BackgroundTasks,
) -> APIResponse[PaymentProcessResponse]:
    """Process a payment."""
    result = await ProcessPaymentUseCase(session, qr_generator).execute(
        payment_id,
        simulate_success=request.simulate_success,
        audit_context=audit_context,
    )
    background_tasks.add_task(dispatcher.dispatch, result.side_effects)

    return APIResponse.ok(
        data=PaymentProcessResponse(
            payment=PaymentResponse.from_entity(result.payment),
            booking_id=result.booking.id,
            booking_status=result.booking.status,
            booking_payment_status=result.booking.payment_status,
        ),
        message=(
            "Payment processed successfully"
            if request.simulate_success
            else "Payment failed"
        ),
    )
