"""Payment repository for database operations."""

from typing import Optional
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import PaymentMethod, PaymentStatus
from event_booking_ms.shared.domain.clock import utcnow
from event_booking_ms.shared.infrastructure.database.models import (
    BookingModel,
    PaymentModel,
)


class PaymentRepository:
    """
    Payment repository using async SQLAlchemy.

    Never commits: the calling use case owns the transaction.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Insert a new payment.

        Args:
            payment: Payment domain entity to persist

        Returns:
            The persisted payment entity
        """
        model = PaymentModel.from_domain(payment)
        self._session.add(model)
        await self._session.flush()
        await self._session.refresh(model)
        return model.to_domain()

    async def get_by_id(
        self, payment_id: UUID, for_update: bool = False
    ) -> Optional[Payment]:
        """
        Get a payment by its ID.

        Args:
            payment_id: UUID of the payment
            for_update: Lock the row until the transaction ends

        Returns:
            Payment if found, None otherwise
        """
        query = (
            select(PaymentModel)
            .where(PaymentModel.id == payment_id)
            .execution_options(populate_existing=True)
        )
        if for_update:
            query = query.with_for_update()

        result = await self._session.execute(query)
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def get_by_transaction_id(self, transaction_id: str) -> Optional[Payment]:
        """Get a payment by the transaction reference given to the payer."""
        result = await self._session.execute(
            select(PaymentModel).where(PaymentModel.transaction_id == transaction_id)
        )
        model = result.scalar_one_or_none()
        return model.to_domain() if model else None

    async def get_by_booking_id(self, booking_id: UUID) -> list[Payment]:
        """Get all payment attempts for a booking, newest first."""
        result = await self._session.execute(
            select(PaymentModel)
            .where(PaymentModel.booking_id == booking_id)
            .order_by(PaymentModel.created_at.desc())
        )
        return [m.to_domain() for m in result.scalars().all()]

    async def transition_status(
        self,
        payment_id: UUID,
        expected: PaymentStatus,
        new_status: PaymentStatus,
        qr_code_url: str | None = None,
    ) -> bool:
        """
        Move a payment from ``expected`` to ``new_status``.

        The status check is part of the UPDATE itself, so of two concurrent
        callers only one sees an affected row.

        Returns:
            True if the payment was in ``expected`` status and got updated
        """
        values: dict = {"status": new_status.value, "updated_at": utcnow()}
        if qr_code_url:
            values["qr_code_url"] = qr_code_url

        result = await self._session.execute(
            update(PaymentModel)
            .where(PaymentModel.id == payment_id)
            .where(PaymentModel.status == expected.value)
            .values(**values)
        )
        return result.rowcount == 1

    async def list(
        self,
        limit: int = 20,
        offset: int = 0,
        status: Optional[PaymentStatus] = None,
        payment_method: Optional[PaymentMethod] = None,
        user_id: Optional[UUID] = None,
    ) -> tuple[list[Payment], int]:
        """
        List payments with optional filtering.

        Args:
            limit: Maximum number of results
            offset: Number of results to skip
            status: Optional status filter
            payment_method: Optional method filter
            user_id: Only payments for bookings owned by this user

        Returns:
            Page of payments and the total number of matches
        """
        conditions = []
        if status:
            conditions.append(PaymentModel.status == status.value)
        if payment_method:
            conditions.append(PaymentModel.payment_method == payment_method.value)

        query = select(PaymentModel)
        count_query = select(func.count()).select_from(PaymentModel)
        if user_id:
            query = query.join(BookingModel, BookingModel.id == PaymentModel.booking_id)
            count_query = count_query.join(
                BookingModel, BookingModel.id == PaymentModel.booking_id
            )
            conditions.append(BookingModel.user_id == user_id)

        if conditions:
            query = query.where(*conditions)
            count_query = count_query.where(*conditions)

        total = (await self._session.execute(count_query)).scalar_one()
        result = await self._session.execute(
            query.order_by(PaymentModel.created_at.desc()).limit(limit).offset(offset)
        )
        return [m.to_domain() for m in result.scalars().all()], total
