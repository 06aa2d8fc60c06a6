"""Unit tests for the booking, payment and notification entities."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import (
    BookingPaymentStatus,
    BookingStatus,
    EventType,
)
from event_booking_ms.features.notifications.domain.entities import (
    ADMINS,
    Notification,
    NotificationAudience,
)
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import (
    Currency,
    PaymentMethod,
    PaymentStatus,
)


def _booking() -> Booking:
    return Booking.create(
        customer_name="Sara Tesfaye",
        customer_email="sara@example.com",
        customer_phone="0911000000",
        event_type=EventType.BIRTHDAY,
        event_date=datetime(2030, 1, 1).date(),
        event_time="18:00",
        guest_count=40,
        price_calculated=10000,
    )


class TestPayment:
    """Tests for the Payment entity."""

    def test_create_starts_pending_with_transaction_id(self) -> None:
        payment = Payment.create(uuid4(), 60000, PaymentMethod.TELEBIRR, "0911223344")

        assert payment.status == PaymentStatus.PENDING
        assert payment.currency == Currency.ETB
        assert payment.transaction_id
        assert payment.transaction_id == payment.transaction_id.upper()
        assert payment.is_pending()

    def test_transaction_ids_are_unique(self) -> None:
        ids = {Payment.create(uuid4(), 1, PaymentMethod.CBE).transaction_id for _ in range(50)}
        assert len(ids) == 50

    def test_rejects_negative_amount(self) -> None:
        with pytest.raises(ValueError):
            Payment.create(uuid4(), -5, PaymentMethod.CBE)

    def test_mark_completed_keeps_existing_qr_when_none_given(self) -> None:
        payment = Payment.create(uuid4(), 100, PaymentMethod.CBE)
        payment.qr_code_url = "/uploads/qrcodes/old.png"

        payment.mark_completed(None)

        assert payment.status == PaymentStatus.COMPLETED
        assert payment.qr_code_url == "/uploads/qrcodes/old.png"

    def test_qr_payload_fields(self) -> None:
        payment = Payment.create(uuid4(), 60000, PaymentMethod.TELEBIRR, "0911223344")
        on = datetime(2030, 5, 17, 10, 0, tzinfo=timezone.utc)

        assert payment.qr_payload(on) == {
            "amount": 60000,
            "paymentMethod": "telebirr",
            "phoneNumber": "0911223344",
            "transactionId": payment.transaction_id,
            "date": "2030-05-17",
        }


class TestBooking:
    """Tests for the Booking entity."""

    def test_create_is_pending_and_unpaid(self) -> None:
        booking = _booking()

        assert booking.status == BookingStatus.PENDING
        assert booking.payment_status == BookingPaymentStatus.UNPAID
        assert booking.can_start_payment()

    def test_mark_paid_confirms(self) -> None:
        booking = _booking()

        booking.mark_paid("TX1", "/uploads/qrcodes/a.png")

        assert booking.is_paid()
        assert booking.status == BookingStatus.CONFIRMED
        assert booking.transaction_id == "TX1"
        assert booking.qr_code_url == "/uploads/qrcodes/a.png"

    def test_payment_failure_leaves_lifecycle_status(self) -> None:
        booking = _booking()

        booking.mark_payment_failed()

        assert booking.payment_status == BookingPaymentStatus.FAILED
        assert booking.status == BookingStatus.PENDING
        assert not booking.can_start_payment()


class TestNotification:
    """Tests for Notification.for_recipient."""

    def test_for_user(self) -> None:
        user_id = uuid4()
        notification = Notification.for_recipient(user_id, "payment_completed", "Done")

        assert notification.audience == NotificationAudience.USER
        assert notification.user_id == user_id
        assert notification.is_read is False

    def test_for_admins(self) -> None:
        notification = Notification.for_recipient(ADMINS, "booking_created", "New")

        assert notification.audience == NotificationAudience.ADMINS
        assert notification.user_id is None
