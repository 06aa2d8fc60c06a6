"""Payment use case - Handle a provider webhook."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from event_booking_ms.features.notifications.application.side_effects import SideEffect
from event_booking_ms.features.payments.application.ports import QRCodeGeneratorPort
from event_booking_ms.features.payments.application.use_cases.process_payment import (
    ProcessPaymentUseCase,
)
from event_booking_ms.features.payments.infrastructure.repository import (
    PaymentRepository,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.domain.exceptions import ConflictError, NotFoundError
from event_booking_ms.shared.infrastructure.audit import (
    SYSTEM_CONTEXT,
    AuditContext,
    AuditLogger,
)

logger = get_logger(__name__)


@dataclass
class WebhookPayload:
    """The fields of a provider callback that settle a payment."""

    provider: str
    transaction_id: str
    status: Optional[str]
    amount: Optional[Decimal]

    @classmethod
    def parse(cls, body: Any) -> Optional["WebhookPayload"]:
        """Read a raw webhook body, or None when it cannot identify a payment."""
        if not isinstance(body, dict):
            return None

        provider = body.get("provider")
        transaction_id = body.get("transactionId")
        if not isinstance(provider, str) or not isinstance(transaction_id, str):
            return None

        status = body.get("status")
        return cls(
            provider=provider,
            transaction_id=transaction_id,
            status=status if isinstance(status, str) else None,
            amount=_parse_amount(body.get("amount")),
        )

    def settles(self, expected_amount: int) -> bool:
        """True when the provider reports success for exactly the expected amount."""
        return (
            self.status == "success"
            and self.amount is not None
            and self.amount == Decimal(expected_amount)
        )

    def audit_data(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "transactionId": self.transaction_id,
            "status": self.status,
            "amount": str(self.amount) if self.amount is not None else None,
        }


def _parse_amount(value: Any) -> Optional[Decimal]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        amount = Decimal(str(value))
    except InvalidOperation:
        return None
    return amount if amount.is_finite() else None


@dataclass
class WebhookOutcome:
    """What a webhook call changed."""

    processed: bool
    side_effects: list[SideEffect] = field(default_factory=list)


class HandlePaymentWebhookUseCase:
    """
    Use case for provider callbacks.

    A callback from a recognised provider that names a known transaction
    settles the payment through the regular processing path. Anything else
    is logged and ignored. Every call leaves an audit entry.
    """

    def __init__(
        self,
        session: AsyncSession,
        qr_code_generator: QRCodeGeneratorPort,
        recognized_providers: Iterable[str],
    ) -> None:
        self._session = session
        self._qr_code_generator = qr_code_generator
        self._providers = frozenset(recognized_providers)
        self._payments = PaymentRepository(session)
        self._audit = AuditLogger(session)

    async def execute(
        self, body: Any, audit_context: AuditContext = SYSTEM_CONTEXT
    ) -> WebhookOutcome:
        payload = WebhookPayload.parse(body)
        outcome = WebhookOutcome(processed=False)
        payment = None

        if payload is None:
            logger.warning("Ignoring malformed payment webhook")
        elif payload.provider not in self._providers:
            logger.info("Ignoring webhook from unrecognised provider %r", payload.provider)
        else:
            async with self._session.begin():
                payment = await self._payments.get_by_transaction_id(payload.transaction_id)

            if payment is None:
                logger.info("Webhook for unknown transaction %s", payload.transaction_id)
            else:
                outcome = await self._settle(payment.id, payload, payment.amount, audit_context)

        async with self._session.begin():
            data = payload.audit_data() if payload else {"malformed": True}
            data["processed"] = outcome.processed
            await self._audit.record(
                "payment_webhook",
                "payment",
                payment.id if payment else None,
                audit_context,
                data,
            )

        return outcome

    async def _settle(
        self, payment_id, payload: WebhookPayload, expected_amount: int, audit_context: AuditContext
    ) -> WebhookOutcome:
        success = payload.settles(expected_amount)
        if payload.status == "success" and not success:
            logger.warning(
                "Webhook amount %s does not match payment %s (%s), treating as failed",
                payload.amount,
                payment_id,
                expected_amount,
            )

        try:
            result = await ProcessPaymentUseCase(self._session, self._qr_code_generator).execute(
                payment_id, simulate_success=success, audit_context=audit_context
            )
        except (ConflictError, NotFoundError) as e:
            logger.info("Webhook for payment %s left it unchanged: %s", payment_id, e)
            return WebhookOutcome(processed=False)

        return WebhookOutcome(processed=True, side_effects=result.side_effects)
