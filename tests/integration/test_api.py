"""HTTP tests for the API routes.

Requests go through the real app over ASGI, with the database and the
collaborators swapped for test doubles.
"""

from uuid import uuid4

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from event_booking_ms.features.notifications.application.side_effects import (
    SideEffectDispatcher,
)
from event_booking_ms.features.payments.application.use_cases import (
    HandlePaymentWebhookUseCase,
)
from event_booking_ms.features.payments.infrastructure.adapters import (
    SegnoQRCodeAdapter,
)
from event_booking_ms.features.payments.infrastructure.provider_factory import (
    get_qr_code_generator,
)
from event_booking_ms.shared.infrastructure.database import get_db_session
from event_booking_ms.shared.presentation.dependencies import get_side_effect_dispatcher
from fakes import FakeNotifier, future_date


def _booking_body(**overrides) -> dict:
    body = {
        "customerName": "Abebe Kebede",
        "customerEmail": "abebe@example.com",
        "customerPhone": "0911223344",
        "eventType": "wedding",
        "eventDate": future_date().isoformat(),
        "eventTime": "14:30",
        "guestCount": 150,
    }
    body.update(overrides)
    return body


async def _create_booking(client, user_id=None, **overrides) -> dict:
    headers = {"X-User-Id": str(user_id)} if user_id else {}
    response = await client.post("/api/bookings", json=_booking_body(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


async def _proceed(client, booking_id, user_id=None, method="telebirr") -> httpx.Response:
    headers = {"X-User-Id": str(user_id)} if user_id else {}
    return await client.post(
        f"/api/bookings/{booking_id}/payment",
        json={"paymentMethod": method, "phoneNumber": "0911223344"},
        headers=headers,
    )


class TestHealth:
    async def test_health(self, client) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_correlation_id_is_echoed(self, client) -> None:
        response = await client.get("/health", headers={"X-Correlation-ID": "abc-123"})

        assert response.headers["X-Correlation-ID"] == "abc-123"


class TestBookingRoutes:
    """Tests for /api/bookings."""

    async def test_calculate_price(self, client) -> None:
        response = await client.post(
            "/api/bookings/calculate-price", json={"eventType": "wedding", "guestCount": 150}
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_price"] == 60000
        assert data["guest_factor"] == 3
        assert data["currency"] == "ETB"

    async def test_create_booking_notifies_and_emails(
        self, client, admin_headers, email_sender
    ) -> None:
        booking = await _create_booking(client)

        assert booking["price_calculated"] == 60000
        assert booking["status"] == "pending"
        assert booking["payment_status"] == "unpaid"
        assert [m["to"] for m in email_sender.sent] == ["abebe@example.com"]

        feed = await client.get("/api/notifications/admin", headers=admin_headers)
        assert [n["kind"] for n in feed.json()["data"]["items"]] == ["booking_created"]

    async def test_failing_notifier_does_not_undo_booking(
        self, app, client, admin_headers, email_sender
    ) -> None:
        app.dependency_overrides[get_side_effect_dispatcher] = lambda: SideEffectDispatcher(
            FakeNotifier(fail=True), email_sender
        )

        booking = await _create_booking(client)

        stored = await client.get(f"/api/bookings/{booking['id']}", headers=admin_headers)
        assert stored.status_code == 200
        assert len(email_sender.sent) == 1

    async def test_client_supplied_price_is_ignored(self, client) -> None:
        booking = await _create_booking(client, priceCalculated=1, guestCount=50)

        assert booking["price_calculated"] == 20000

    async def test_validation_errors_are_listed_by_field(self, client) -> None:
        response = await client.post(
            "/api/bookings",
            json=_booking_body(customerName="A", guestCount=0, eventTime="25:00"),
        )

        assert response.status_code == 422
        body = response.json()
        assert body["success"] is False
        fields = {e["field"] for e in body["errors"]}
        assert {"customerName", "guestCount", "eventTime"} <= fields

    async def test_past_event_date_is_rejected(self, client) -> None:
        response = await client.post(
            "/api/bookings", json=_booking_body(eventDate="2000-01-01")
        )

        assert response.status_code == 422

    async def test_unknown_booking_is_404(self, client) -> None:
        response = await client.get(f"/api/bookings/{uuid4()}")

        assert response.status_code == 404
        assert response.json()["success"] is False

    async def test_other_users_booking_is_403(self, client) -> None:
        owner = uuid4()
        booking = await _create_booking(client, user_id=owner)

        response = await client.get(
            f"/api/bookings/{booking['id']}", headers={"X-User-Id": str(uuid4())}
        )

        assert response.status_code == 403

    async def test_my_bookings(self, client) -> None:
        owner = uuid4()
        await _create_booking(client, user_id=owner)
        await _create_booking(client, user_id=uuid4())

        response = await client.get("/api/bookings/mine", headers={"X-User-Id": str(owner)})

        page = response.json()["data"]
        assert page["total"] == 1
        assert page["total_pages"] == 1

    async def test_admin_list_requires_admin_key(self, client) -> None:
        response = await client.get("/api/bookings", headers={"X-Admin-Key": "wrong"})

        assert response.status_code == 403

    async def test_admin_list_search(self, client, admin_headers) -> None:
        await _create_booking(client, customerName="Hana Girma")
        await _create_booking(client)

        response = await client.get(
            "/api/bookings", params={"search": "hana"}, headers=admin_headers
        )

        items = response.json()["data"]["items"]
        assert [b["customer_name"] for b in items] == ["Hana Girma"]

    async def test_admin_status_update(self, client, admin_headers) -> None:
        owner = uuid4()
        booking = await _create_booking(client, user_id=owner)

        response = await client.patch(
            f"/api/bookings/{booking['id']}/status",
            json={"status": "confirmed"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["status"] == "confirmed"
        inbox = await client.get("/api/notifications", headers={"X-User-Id": str(owner)})
        assert [n["kind"] for n in inbox.json()["data"]["items"]] == ["booking_confirmed"]

    async def test_invalid_status_is_422(self, client, admin_headers) -> None:
        booking = await _create_booking(client)

        response = await client.patch(
            f"/api/bookings/{booking['id']}/status",
            json={"status": "archived"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "status"

    async def test_enforced_confirmation_is_409(
        self, client, admin_headers, test_settings
    ) -> None:
        test_settings.enforce_payment_on_confirm = True
        booking = await _create_booking(client)

        response = await client.patch(
            f"/api/bookings/{booking['id']}/status",
            json={"status": "confirmed"},
            headers=admin_headers,
        )

        assert response.status_code == 409


class TestPaymentFlow:
    """End-to-end payment flow over HTTP."""

    async def test_proceed_returns_payment_and_instructions(self, client) -> None:
        owner = uuid4()
        booking = await _create_booking(client, user_id=owner)

        response = await _proceed(client, booking["id"], owner)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["payment"]["status"] == "pending"
        assert data["payment"]["amount"] == 60000
        assert data["instructions"]["title"] == "Telebirr Payment Instructions"

    async def test_second_proceed_is_409(self, client) -> None:
        booking = await _create_booking(client)
        await _proceed(client, booking["id"])

        response = await _proceed(client, booking["id"], method="cbe")

        assert response.status_code == 409
        assert response.json()["success"] is False

    async def test_process_requires_admin(self, client) -> None:
        booking = await _create_booking(client)
        payment = (await _proceed(client, booking["id"])).json()["data"]["payment"]

        response = await client.post(
            f"/api/payments/{payment['id']}/process", json={"simulateSuccess": True}
        )

        assert response.status_code == 403

    async def test_process_success_then_conflict(self, client, admin_headers) -> None:
        owner = uuid4()
        booking = await _create_booking(client, user_id=owner)
        payment = (await _proceed(client, booking["id"], owner)).json()["data"]["payment"]

        first = await client.post(
            f"/api/payments/{payment['id']}/process",
            json={"simulateSuccess": True},
            headers=admin_headers,
        )
        second = await client.post(
            f"/api/payments/{payment['id']}/process",
            json={"simulateSuccess": False},
            headers=admin_headers,
        )

        assert first.status_code == 200
        assert first.json()["data"]["booking_payment_status"] == "paid"
        assert first.json()["data"]["booking_status"] == "confirmed"
        assert second.status_code == 409

        stored = await client.get(
            f"/api/payments/{payment['id']}", headers={"X-User-Id": str(owner)}
        )
        assert stored.json()["data"]["status"] == "completed"

        kinds = [
            n["kind"]
            for n in (
                await client.get("/api/notifications", headers={"X-User-Id": str(owner)})
            ).json()["data"]["items"]
        ]
        assert kinds == ["payment_completed"]

    async def test_my_payments(self, client) -> None:
        owner = uuid4()
        booking = await _create_booking(client, user_id=owner)
        await _proceed(client, booking["id"], owner)

        response = await client.get("/api/payments/mine", headers={"X-User-Id": str(owner)})

        assert response.json()["data"]["total"] == 1

    async def test_instructions_fallback(self, client) -> None:
        response = await client.get("/api/payments/instructions/paypal", params={"amount": 10})

        assert response.json()["data"]["title"] == "Payment Instructions"

    async def test_qr_code_served_after_payment(
        self, app, client, admin_headers, tmp_path
    ) -> None:
        adapter = SegnoQRCodeAdapter(tmp_path, "/uploads/qrcodes")
        app.dependency_overrides[get_qr_code_generator] = lambda: adapter
        booking = await _create_booking(client)
        payment = (await _proceed(client, booking["id"])).json()["data"]["payment"]
        await client.post(
            f"/api/payments/{payment['id']}/process",
            json={"simulateSuccess": True},
            headers=admin_headers,
        )

        response = await client.get(f"/api/bookings/{booking['id']}/qr-code")

        assert response.status_code == 200
        assert response.headers["content-type"] == "image/png"
        assert response.content.startswith(b"\x89PNG")

    async def test_qr_code_not_available_before_payment(self, client) -> None:
        booking = await _create_booking(client)

        response = await client.get(f"/api/bookings/{booking['id']}/qr-code")

        assert response.status_code == 404


class TestWebhookRoute:
    """Tests for /api/webhooks/payments."""

    @pytest.mark.parametrize(
        "content",
        [b"not json", b"[]", b'{"provider": "mpesa", "transactionId": "X"}'],
    )
    async def test_always_acknowledged(self, client, content: bytes) -> None:
        response = await client.post(
            "/api/webhooks/payments",
            content=content,
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Webhook processed",
            "data": None,
            "errors": None,
        }

    async def test_settles_payment(self, client, admin_headers) -> None:
        booking = await _create_booking(client)
        payment = (await _proceed(client, booking["id"])).json()["data"]["payment"]

        response = await client.post(
            "/api/webhooks/payments",
            json={
                "provider": "telebirr",
                "transactionId": payment["transaction_id"],
                "status": "success",
                "amount": payment["amount"],
            },
        )

        assert response.status_code == 200
        stored = await client.get(f"/api/bookings/{booking['id']}")
        assert stored.json()["data"]["payment_status"] == "paid"

    async def test_storage_failure_is_still_acknowledged(self, client, monkeypatch) -> None:
        async def unavailable(self, body, audit_context):
            raise OperationalError("UPDATE payments", {}, Exception("database is locked"))

        monkeypatch.setattr(HandlePaymentWebhookUseCase, "execute", unavailable)

        response = await client.post(
            "/api/webhooks/payments",
            json={"provider": "telebirr", "transactionId": "ABC", "status": "success"},
        )

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert response.json()["message"] == "Webhook processed"


class TestServiceRoutes:
    """Tests for /api/services."""

    async def test_create_and_list(self, client, admin_headers) -> None:
        created = await client.post(
            "/api/services",
            json={"name": "Garden Venue", "price": 25000, "category": "venue"},
            headers=admin_headers,
        )
        assert created.status_code == 201

        listed = await client.get("/api/services", params={"category": "venue"})
        assert [s["name"] for s in listed.json()["data"]] == ["Garden Venue"]

    async def test_deactivated_service_is_hidden(self, client, admin_headers) -> None:
        service = (
            await client.post(
                "/api/services",
                json={"name": "Garden Venue", "price": 25000, "category": "venue"},
                headers=admin_headers,
            )
        ).json()["data"]

        await client.patch(
            f"/api/services/{service['id']}", json={"status": "inactive"}, headers=admin_headers
        )

        assert (await client.get(f"/api/services/{service['id']}")).status_code == 404
        quote = await client.post(
            "/api/bookings/calculate-price",
            json={"eventType": "wedding", "guestCount": 50, "serviceId": service["id"]},
        )
        assert quote.status_code == 404

    async def test_create_requires_admin(self, client) -> None:
        response = await client.post(
            "/api/services", json={"name": "Garden Venue", "price": 1, "category": "venue"}
        )

        assert response.status_code == 403


class TestNotificationRoutes:
    """Tests for /api/notifications."""

    async def _inbox(self, client, admin_headers, owner) -> list[dict]:
        booking = await _create_booking(client, user_id=owner)
        await client.patch(
            f"/api/bookings/{booking['id']}/status",
            json={"status": "cancelled"},
            headers=admin_headers,
        )
        response = await client.get("/api/notifications", headers={"X-User-Id": str(owner)})
        return response.json()["data"]["items"]

    async def test_unread_count_and_mark_read(self, client, admin_headers) -> None:
        owner = uuid4()
        headers = {"X-User-Id": str(owner)}
        items = await self._inbox(client, admin_headers, owner)

        count = await client.get("/api/notifications/unread-count", headers=headers)
        assert count.json()["data"]["count"] == 1

        marked = await client.patch(
            f"/api/notifications/{items[0]['id']}/read", headers=headers
        )
        assert marked.json()["data"]["is_read"] is True

        count = await client.get("/api/notifications/unread-count", headers=headers)
        assert count.json()["data"]["count"] == 0

    async def test_read_all_and_delete(self, client, admin_headers) -> None:
        owner = uuid4()
        headers = {"X-User-Id": str(owner)}
        items = await self._inbox(client, admin_headers, owner)

        read_all = await client.patch("/api/notifications/read-all", headers=headers)
        assert read_all.json()["data"]["updated"] == 1

        deleted = await client.delete(f"/api/notifications/{items[0]['id']}", headers=headers)
        assert deleted.status_code == 200
        again = await client.delete(f"/api/notifications/{items[0]['id']}", headers=headers)
        assert again.status_code == 404

    async def test_other_users_notification_is_404(self, client, admin_headers) -> None:
        items = await self._inbox(client, admin_headers, uuid4())

        response = await client.patch(
            f"/api/notifications/{items[0]['id']}/read",
            headers={"X-User-Id": str(uuid4())},
        )

        assert response.status_code == 404

    async def test_requires_user_identity(self, client) -> None:
        response = await client.get("/api/notifications")

        assert response.status_code == 403


class TestInternalErrors:
    async def test_details_are_not_leaked(self, app) -> None:
        async def broken_session():
            raise RuntimeError("connection refused to db.internal:5432")
            yield  # pragma: no cover

        app.dependency_overrides[get_db_session] = broken_session
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/api/services")

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "message": "Internal server error",
            "data": None,
            "errors": None,
        }
