"""Booking API router."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, BackgroundTasks, Depends, Query
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.application.use_cases import (
    CalculatePriceUseCase,
    CreateBookingRequest,
    CreateBookingUseCase,
    UpdateBookingStatusUseCase,
)
from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
)
from event_booking_ms.features.bookings.infrastructure.repository import (
    BookingRepository,
)
from event_booking_ms.features.bookings.presentation.dto import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatusUpdateRequest,
    PriceQuoteRequest,
    PriceQuoteResponse,
)
from event_booking_ms.features.payments.application.use_cases import (
    CreatePaymentRequest,
    CreatePaymentUseCase,
)
from event_booking_ms.features.payments.domain.instructions import (
    get_payment_instructions,
)
from event_booking_ms.features.payments.infrastructure.adapters import (
    SegnoQRCodeAdapter,
)
from event_booking_ms.features.payments.infrastructure.provider_factory import (
    get_qr_code_generator,
)
from event_booking_ms.features.payments.presentation.dto import (
    PaymentCreateRequest,
    PaymentInstructionsResponse,
    PaymentResponse,
    ProceedPaymentResponse,
)
from event_booking_ms.shared.core.settings import Settings, get_settings
from event_booking_ms.shared.domain.exceptions import (
    AccessDeniedError,
    BookingNotFoundError,
    NotFoundError,
)
from event_booking_ms.shared.infrastructure.database import get_db_session
from event_booking_ms.shared.presentation.api_response import APIResponse, Page
from event_booking_ms.shared.presentation.dependencies import (
    Actor,
    AdminActor,
    CurrentActor,
    Dispatcher,
    PageParams,
    RequestAuditContext,
    UserActor,
)

router = APIRouter()

DbSession = Annotated[AsyncSession, Depends(get_db_session)]


async def load_accessible_booking(
    session: AsyncSession, booking_id: UUID, actor: Actor
) -> Booking:
    """
    Fetch a booking the caller may see.

    Runs in its own short transaction so a use case can open the next one
    on the same session.
    """
    async with session.begin():
        booking = await BookingRepository(session).get_by_id(booking_id)

    if booking is None:
        raise BookingNotFoundError(booking_id)
    if not actor.can_access(booking.user_id):
        raise AccessDeniedError("You cannot access this booking")
    return booking


@router.post(
    "/calculate-price",
    response_model=APIResponse[PriceQuoteResponse],
    summary="Quote a booking price",
)
async def calculate_price(
    request: PriceQuoteRequest, session: DbSession
) -> APIResponse[PriceQuoteResponse]:
    """Price from the chosen service, or the event type, scaled by guest count."""
    priced = await CalculatePriceUseCase(session).execute(
        request.event_type.value, request.guest_count, request.service_id
    )
    return APIResponse.ok(data=PriceQuoteResponse.from_quote(priced))


@router.post(
    "",
    response_model=APIResponse[BookingResponse],
    status_code=201,
    summary="Create a booking",
    description="""
    Create a booking for an event.

    - The price is calculated by the server from the service or event type
    - The booking starts as `pending` / `unpaid`
    - Admins are notified and a confirmation e-mail is sent after commit
    """,
)
async def create_booking(
    request: BookingCreateRequest,
    actor: CurrentActor,
    audit_context: RequestAuditContext,
    session: DbSession,
    dispatcher: Dispatcher,
    background_tasks: BackgroundTasks,
) -> APIResponse[BookingResponse]:
    """Create a booking."""
    result = await CreateBookingUseCase(session).execute(
        CreateBookingRequest(
            customer_name=request.customer_name,
            customer_email=str(request.customer_email),
            customer_phone=request.customer_phone,
            event_type=request.event_type,
            event_date=request.event_date,
            event_time=request.event_time,
            guest_count=request.guest_count,
            service_id=request.service_id,
            message=request.message,
            user_id=actor.user_id,
            audit_context=audit_context,
        )
    )
    background_tasks.add_task(dispatcher.dispatch, result.side_effects)

    return APIResponse.ok(
        data=BookingResponse.from_entity(result.booking),
        message="Booking created successfully",
    )


@router.get(
    "/mine",
    response_model=APIResponse[Page[BookingResponse]],
    summary="List my bookings",
)
async def list_my_bookings(
    actor: UserActor,
    pagination: PageParams,
    session: DbSession,
    status: BookingStatus | None = None,
) -> APIResponse[Page[BookingResponse]]:
    bookings, total = await BookingRepository(session).list(
        limit=pagination.limit,
        offset=pagination.offset,
        status=status,
        user_id=actor.user_id,
    )
    return APIResponse.ok(
        data=Page.build(
            [BookingResponse.from_entity(b) for b in bookings],
            total,
            pagination.page,
            pagination.limit,
        )
    )


@router.get(
    "",
    response_model=APIResponse[Page[BookingResponse]],
    summary="List bookings (admin)",
)
async def list_bookings(
    _: AdminActor,
    pagination: PageParams,
    session: DbSession,
    status: BookingStatus | None = None,
    payment_status: Annotated[
        BookingPaymentStatus | None, Query(alias="paymentStatus")
    ] = None,
    search: Annotated[str | None, Query(max_length=100)] = None,
) -> APIResponse[Page[BookingResponse]]:
    """All bookings, filtered by status, payment status and a free-text search."""
    bookings, total = await BookingRepository(session).list(
        limit=pagination.limit,
        offset=pagination.offset,
        status=status,
        payment_status=payment_status,
        search=search.strip() if search else None,
    )
    return APIResponse.ok(
        data=Page.build(
            [BookingResponse.from_entity(b) for b in bookings],
            total,
            pagination.page,
            pagination.limit,
        )
    )


@router.get(
    "/{booking_id}",
    response_model=APIResponse[BookingResponse],
    summary="Get booking by ID",
)
async def get_booking(
    booking_id: UUID, actor: CurrentActor, session: DbSession
) -> APIResponse[BookingResponse]:
    booking = await load_accessible_booking(session, booking_id, actor)
    return APIResponse.ok(data=BookingResponse.from_entity(booking))


@router.patch(
    "/{booking_id}/status",
    response_model=APIResponse[BookingResponse],
    summary="Update booking status (admin)",
)
async def update_booking_status(
    booking_id: UUID,
    request: BookingStatusUpdateRequest,
    _: AdminActor,
    audit_context: RequestAuditContext,
    session: DbSession,
    settings: Annotated[Settings, Depends(get_settings)],
    dispatcher: Dispatcher,
    background_tasks: BackgroundTasks,
) -> APIResponse[BookingResponse]:
    """Overwrite a booking's lifecycle status."""
    result = await UpdateBookingStatusUseCase(
        session, enforce_payment_on_confirm=settings.enforce_payment_on_confirm
    ).execute(booking_id, request.status, audit_context)
    background_tasks.add_task(dispatcher.dispatch, result.side_effects)

    return APIResponse.ok(
        data=BookingResponse.from_entity(result.booking),
        message=f"Booking status updated to {result.booking.status.value}",
    )


@router.post(
    "/{booking_id}/payment",
    response_model=APIResponse[ProceedPaymentResponse],
    status_code=201,
    summary="Proceed to payment",
    description="""
    Start paying for an unpaid booking.

    - Creates a pending payment with a fresh transaction id
    - Returns the instructions for the chosen payment method
    - A booking that is already processing, paid or failed is rejected with 409
    """,
)
async def proceed_to_payment(
    booking_id: UUID,
    request: PaymentCreateRequest,
    actor: CurrentActor,
    audit_context: RequestAuditContext,
    session: DbSession,
    dispatcher: Dispatcher,
    background_tasks: BackgroundTasks,
) -> APIResponse[ProceedPaymentResponse]:
    await load_accessible_booking(session, booking_id, actor)

    result = await CreatePaymentUseCase(session).execute(
        CreatePaymentRequest(
            booking_id=booking_id,
            payment_method=request.payment_method,
            phone_number=request.phone_number,
            audit_context=audit_context,
        )
    )
    background_tasks.add_task(dispatcher.dispatch, result.side_effects)

    instructions = get_payment_instructions(
        result.payment.payment_method.value,
        result.payment.amount,
        result.payment.phone_number,
    )
    return APIResponse.ok(
        data=ProceedPaymentResponse(
            payment=PaymentResponse.from_entity(result.payment),
            instructions=PaymentInstructionsResponse.from_instructions(instructions),
        ),
        message="Payment initiated",
    )


@router.get(
    "/{booking_id}/qr-code",
    response_class=FileResponse,
    summary="Download the receipt QR code",
)
async def get_booking_qr_code(
    booking_id: UUID,
    actor: CurrentActor,
    session: DbSession,
    qr_generator: Annotated[SegnoQRCodeAdapter, Depends(get_qr_code_generator)],
) -> FileResponse:
    """PNG receipt, available once the booking's payment has completed."""
    booking = await load_accessible_booking(session, booking_id, actor)

    path = None
    if booking.is_paid() and booking.qr_code_url:
        path = qr_generator.resolve(booking.qr_code_url)
    if path is None:
        raise NotFoundError(booking_id, "QR code not available for this booking")

    return FileResponse(path, media_type="image/png", filename=path.name)
