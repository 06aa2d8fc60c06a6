"""HTML bodies for transactional emails."""

from datetime import datetime
from html import escape

from event_booking_ms.features.bookings.domain.entities import Booking
from event_booking_ms.features.payments.domain.entities import Payment

PAYMENT_RECEIPT_SUBJECT = "Payment Receipt - Event Booking Platform"
BOOKING_CONFIRMATION_SUBJECT = "Booking Confirmation - Event Booking Platform"

_LAYOUT = """<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background-color: #4F46E5; color: white; padding: 20px; text-align: center; }}
    .content {{ background-color: #f9f9f9; padding: 30px; }}
    .details {{ background-color: white; padding: 20px; border-radius: 4px; border: 1px solid #ddd; }}
    .footer {{ text-align: center; margin-top: 20px; color: #666; font-size: 14px; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>{title}</h1></div>
    <div class="content">
{body}
    </div>
    <div class="footer">
      <p>&copy; {year} Event Booking Platform. All rights reserved.</p>
    </div>
  </div>
</body>
</html>
"""


def _render(title: str, body: str) -> str:
    return _LAYOUT.format(title=escape(title), body=body, year=datetime.now().year)


def _detail(label: str, value: object) -> str:
    return f"        <p><strong>{escape(label)}:</strong> {escape(str(value))}</p>"


def payment_receipt_html(payment: Payment, booking: Booking) -> str:
    """Receipt sent once a payment completes."""
    lines = [
        "      <h2>Thank you for your payment!</h2>",
        "      <p>Your payment has been processed successfully. Here is your receipt:</p>",
        '      <div class="details">',
        f"        <h3>Payment #{escape(str(payment.id))}</h3>",
        _detail("Booking Reference", booking.id),
        _detail("Event", f"{booking.event_type.value.title()} on {booking.event_date.isoformat()} at {booking.event_time}"),
        _detail("Payment Date", payment.updated_at.date().isoformat()),
        _detail("Payment Method", payment.payment_method.value),
        _detail("Transaction ID", payment.transaction_id or "-"),
        _detail("Amount Paid", f"{payment.amount} {payment.currency.value}"),
        _detail("Status", payment.status.value),
        "      </div>",
        "      <p>This receipt confirms your payment for the above booking.</p>",
    ]
    return _render("Payment Receipt", "\n".join(lines))


def booking_confirmation_html(booking: Booking) -> str:
    """Acknowledgement sent when a booking request is received."""
    lines = [
        f"      <h2>Hello {escape(booking.customer_name)},</h2>",
        "      <p>We have received your booking request. Here are the details:</p>",
        '      <div class="details">',
        _detail("Booking Reference", booking.id),
        _detail("Event Type", booking.event_type.value.title()),
        _detail("Date", booking.event_date.isoformat()),
        _detail("Time", booking.event_time),
        _detail("Guests", booking.guest_count),
        _detail("Price", f"{booking.price_calculated} ETB"),
        _detail("Status", booking.status.value),
        "      </div>",
        "      <p>Proceed to payment to confirm your booking.</p>",
    ]
    return _render("Booking Received", "\n".join(lines))
