"""Booking price calculation.

The same function prices quotes and new bookings, so a quote and the booking
created from it agree as long as the guest count does not change.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

GUESTS_PER_PRICE_STEP = 50
DEFAULT_BASE_PRICE = 12000

EVENT_TYPE_BASE_PRICES: dict[str, int] = {
    "wedding": 20000,
    "birthday": 10000,
    "corporate": 15000,
    "other": 12000,
}


@dataclass(frozen=True)
class PriceQuote:
    """Result of a price calculation, in whole ETB."""

    base_price: int
    guest_count: int
    guest_factor: Decimal
    total_price: int


def base_price_for_event_type(event_type: str) -> int:
    """Default base price for an event type, used when no service is chosen."""
    return EVENT_TYPE_BASE_PRICES.get(event_type, DEFAULT_BASE_PRICE)


def guest_factor(guest_count: int) -> Decimal:
    """Linear multiplier: one step per 50 guests, never below 1."""
    return max(Decimal(1), Decimal(guest_count) / Decimal(GUESTS_PER_PRICE_STEP))


def calculate_price(base_price: int, guest_count: int) -> PriceQuote:
    """Scale a base price by the guest factor.

    Exact decimal arithmetic, rounded half up to a whole amount.
    """
    if guest_count < 1:
        raise ValueError("guest_count must be at least 1")
    if base_price < 0:
        raise ValueError("base_price must not be negative")

    factor = guest_factor(guest_count)
    total = (Decimal(base_price) * factor).quantize(Decimal(1), rounding=ROUND_HALF_UP)

    return PriceQuote(
        base_price=base_price,
        guest_count=guest_count,
        guest_factor=factor,
        total_price=int(total),
    )
