"""Per-method payment instructions shown to the payer."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PaymentInstructions:
    title: str
    steps: list[str] = field(default_factory=list)
    note: str = ""


def get_payment_instructions(
    payment_method: str, amount: int, phone_number: str | None = None
) -> PaymentInstructions:
    """Return the instruction template for a payment method.

    Unknown methods get a generic fallback. Pure lookup, no state change.
    """
    recipient_step = (
        f"Enter phone number: {phone_number}" if phone_number else "Enter recipient number"
    )

    match payment_method:
        case "telebirr":
            return PaymentInstructions(
                title="Telebirr Payment Instructions",
                steps=[
                    "Open your Telebirr app",
                    'Go to "Send Money"',
                    f"Enter amount: {amount} ETB",
                    recipient_step,
                    'Add note: "Event Booking Payment"',
                    "Confirm and complete payment",
                ],
                note="Payment will be verified automatically within 2-3 minutes.",
            )
        case "cbe":
            return PaymentInstructions(
                title="CBE Birr Payment Instructions",
                steps=[
                    "Dial *847# on your phone",
                    'Select "Send Money"',
                    f"Enter amount: {amount} ETB",
                    recipient_step,
                    "Confirm transaction with your PIN",
                ],
                note="Keep the transaction reference for verification.",
            )
        case "abisiniya":
            return PaymentInstructions(
                title="Abyssinia Bank Payment Instructions",
                steps=[
                    "Visit Abyssinia Bank branch or use internet banking",
                    "Make deposit to account: 1234567890",
                    f"Amount: {amount} ETB",
                    "Use your phone number as reference",
                ],
                note="Email the deposit slip to payments@eventbooking.com",
            )
        case "commercial":
            return PaymentInstructions(
                title="Commercial Bank Payment Instructions",
                steps=[
                    "Visit Commercial Bank branch or use internet banking",
                    "Make deposit to account: 0987654321",
                    f"Amount: {amount} ETB",
                    "Use your phone number as reference",
                ],
                note="Email the deposit slip to payments@eventbooking.com",
            )
        case _:
            return PaymentInstructions(
                title="Payment Instructions",
                steps=["Contact support for payment instructions"],
                note="Payment method not recognized",
            )
