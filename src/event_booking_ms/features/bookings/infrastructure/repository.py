"""Booking repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
)
from event_booking_ms.shared.domain.clock import utcnow
from event_booking_ms.shared.infrastructure.database.models import BookingModel


class BookingRepository:
    """
    Booking repository using async SQLAlchemy.

    Never commits: the calling use case owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, booking: Booking) -> Booking:
        """Insert a new booking and return it as stored."""
        model = BookingModel.from_domain(booking)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return model.to_domain()

    async def get_by_id(
        self, booking_id: UUID, for_update: bool = False
    ) -> Optional[Booking]:
        """
        Get a booking by its ID.

        Args:
            booking_id: UUID of the booking
            for_update: Lock the row until the transaction ends

        Returns:
            Booking if found, None otherwise
        """
        query = (
            select(BookingModel)
            .where(BookingModel.id == booking_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        result = await self._session.execute(query)
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def claim_payment(self, booking_id: UUID) -> bool:
        """
        Move ``payment_status`` from unpaid to processing.

        Returns:
            True if the booking was unpaid and is now processing
        """
        result = await self._session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking_id)
            .where(BookingModel.payment_status == BookingPaymentStatus.UNPAID.value)
            .values(
                payment_status=BookingPaymentStatus.PROCESSING.value,
                updated_at=utcnow(),
            )
        )
        return result.rowcount == 1

    async def save_payment_result(self, booking: Booking) -> None:
        """Persist the fields a payment outcome touches."""
        await self._session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking.id)
            .values(
                status=booking.status.value,
                payment_status=booking.payment_status.value,
                qr_code_url=booking.qr_code_url,
                transaction_id=booking.transaction_id,
                updated_at=utcnow(),
            )
        )

    async def update_status(
        self, booking_id: UUID, status: BookingStatus
    ) -> Optional[Booking]:
        """Overwrite the lifecycle status of a booking."""
        await self._session.execute(
            update(BookingModel)
            .where(BookingModel.id == booking_id)
            .values(status=status.value, updated_at=utcnow())
        )
        await self._session.flush()
        return await self.get_by_id(booking_id)

    async def list(
        self,
        limit: int = 20,
        offset: int = 0,
        status: Optional[BookingStatus] = None,
        payment_status: Optional[BookingPaymentStatus] = None,
        user_id: Optional[UUID] = None,
        search: Optional[str] = None,
    ) -> tuple[list[Booking], int]:
        """
        List bookings with optional filtering.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
            status: Optional lifecycle status filter
            payment_status: Optional payment status filter
            user_id: Only bookings owned by this user
            search: Case-insensitive match on customer name, e-mail or phone

        Returns:
            Page of bookings and the total number of matches
        """
        conditions = []
        if status:
            conditions.append(BookingModel.status == status.value)
        if payment_status:
            conditions.append(BookingModel.payment_status == payment_status.value)
        if user_id:
            conditions.append(BookingModel.user_id == user_id)
        if search:
            pattern = f"%{search.lower()}%"
            conditions.append(
                or_(
                    func.lower(BookingModel.customer_name).like(pattern),
                    func.lower(BookingModel.customer_email).like(pattern),
                    BookingModel.customer_phone.like(f"%{search}%"),
                )
            )

        count_query = select(func.count()).select_from(BookingModel).where(*conditions)
        total = (await self._session.execute(count_query)).scalar_one()

        result = await self._session.execute(
            select(BookingModel)
            .where(*conditions)
            .order_by(BookingModel.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return [m.to_domain() for m in result.scalars().all()], total
