"""Unit tests for side-effect intents and the dispatcher."""

import logging
from datetime import date
from uuid import uuid4

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.bookings.domain.enums import EventType
from event_booking_ms.features.notifications.application.email_templates import (
    BOOKING_CONFIRMATION_SUBJECT,
    PAYMENT_RECEIPT_SUBJECT,
    booking_confirmation_html,
)
from event_booking_ms.features.notifications.application.side_effects import (
    NotifyAdmins,
    NotifyUser,
    SendBookingConfirmation,
    SendPaymentReceipt,
    SideEffectDispatcher,
    notify_booking_owner,
)
from event_booking_ms.features.notifications.domain.entities import ADMINS
from event_booking_ms.features.payments.domain.entities import Payment
from event_booking_ms.features.payments.domain.enums import PaymentMethod
from fakes import FakeEmailSender, FakeNotifier


def _booking(user_id=None, name: str = "Abebe Kebede") -> Booking:
    return Booking.create(
        customer_name=name,
        customer_email="abebe@example.com",
        customer_phone="0911223344",
        event_type=EventType.WEDDING,
        event_date=date(2030, 6, 15),
        event_time="14:30",
        guest_count=150,
        price_calculated=60000,
        user_id=user_id,
    )


class TestNotifyBookingOwner:
    def test_owner_is_notified(self) -> None:
        user_id = uuid4()
        effects = notify_booking_owner(_booking(user_id), "booking_confirmed", "Hi", {})

        assert effects == [NotifyUser(user_id, "booking_confirmed", "Hi", {})]

    def test_guest_booking_has_no_one_to_notify(self) -> None:
        assert notify_booking_owner(_booking(), "booking_confirmed", "Hi", {}) == []


class TestSideEffectDispatcher:
    """Tests for SideEffectDispatcher.dispatch."""

    async def test_routes_each_intent(self) -> None:
        notifier, email = FakeNotifier(), FakeEmailSender()
        user_id = uuid4()
        booking = _booking(user_id)
        payment = Payment.create(booking.id, 60000, PaymentMethod.TELEBIRR)

        await SideEffectDispatcher(notifier, email).dispatch(
            [
                NotifyUser(user_id, "payment_completed", "Paid"),
                NotifyAdmins("payment_created", "New payment"),
                SendPaymentReceipt(payment=payment, booking=booking),
                SendBookingConfirmation(booking=booking),
            ]
        )

        assert [n["recipient"] for n in notifier.sent] == [user_id, ADMINS]
        assert [m["subject"] for m in email.sent] == [
            PAYMENT_RECEIPT_SUBJECT,
            BOOKING_CONFIRMATION_SUBJECT,
        ]
        assert all(m["to"] == "abebe@example.com" for m in email.sent)

    async def test_failure_is_logged_and_does_not_stop_the_rest(self, caplog) -> None:
        """A failing notifier must not prevent the email from going out."""
        notifier, email = FakeNotifier(fail=True), FakeEmailSender()
        booking = _booking()

        with caplog.at_level(logging.ERROR):
            await SideEffectDispatcher(notifier, email).dispatch(
                [
                    NotifyAdmins("booking_created", "New booking"),
                    SendBookingConfirmation(booking=booking),
                ]
            )

        assert len(email.sent) == 1
        assert "NotifyAdmins" in caplog.text


class TestEmailTemplates:
    def test_values_are_html_escaped(self) -> None:
        html = booking_confirmation_html(_booking(name="<script>x</script>"))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
