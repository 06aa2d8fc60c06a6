"""Unit tests for parsing provider webhook bodies."""

from decimal import Decimal

import pytest

from event_booking_ms.features.payments.application.use_cases import WebhookPayload


class TestWebhookPayloadParse:
    def test_parses_complete_body(self) -> None:
        payload = WebhookPayload.parse(
            {
                "provider": "telebirr",
                "transactionId": "ABC123",
                "status": "success",
                "amount": 60000,
            }
        )

        assert payload is not None
        assert payload.provider == "telebirr"
        assert payload.transaction_id == "ABC123"
        assert payload.amount == Decimal(60000)

    @pytest.mark.parametrize(
        "body",
        [
            None,
            [],
            "text",
            {"provider": "telebirr"},
            {"transactionId": "ABC123"},
            {"provider": 1, "transactionId": "ABC123"},
        ],
    )
    def test_bodies_without_provider_or_transaction_are_rejected(self, body) -> None:
        assert WebhookPayload.parse(body) is None

    @pytest.mark.parametrize("amount", ["abc", None, True, "NaN", {"v": 1}])
    def test_unusable_amount_is_none(self, amount) -> None:
        payload = WebhookPayload.parse(
            {"provider": "telebirr", "transactionId": "T", "amount": amount}
        )
        assert payload is not None
        assert payload.amount is None


class TestWebhookPayloadSettles:
    def _payload(self, status, amount) -> WebhookPayload:
        return WebhookPayload.parse(
            {"provider": "telebirr", "transactionId": "T", "status": status, "amount": amount}
        )

    def test_success_with_exact_amount(self) -> None:
        assert self._payload("success", 60000).settles(60000)
        assert self._payload("success", "60000.00").settles(60000)

    def test_amount_mismatch_does_not_settle(self) -> None:
        assert not self._payload("success", 59999).settles(60000)

    def test_non_success_status_does_not_settle(self) -> None:
        assert not self._payload("failed", 60000).settles(60000)
