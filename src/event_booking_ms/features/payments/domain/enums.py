"""Payment domain enums."""

from enum import Enum


class PaymentStatus(str, Enum):
    """Status of a single payment attempt."""

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, Enum):
    """Supported local payment methods."""

    TELEBIRR = "telebirr"
    CBE = "cbe"
    ABISINIYA = "abisiniya"
    COMMERCIAL = "commercial"


class Currency(str, Enum):
    """Supported currencies."""

    ETB = "ETB"
