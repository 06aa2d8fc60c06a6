"""Recording fakes for the collaborator ports, plus sample-data helpers."""

import asyncio
from datetime import date, timedelta
from typing import Any

from event_booking_ms.features.notifications.application.ports import (
    EmailResult,
    EmailSenderPort,
    NotificationPort,
)
from event_booking_ms.features.payments.application.ports import (
    QRCodeGeneratorPort,
    QRCodeResult,
)


class FakeNotifier(NotificationPort):
    """Records notifications; optionally fails every call."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.sent: list[dict[str, Any]] = []

    async def notify(self, recipient, kind, message, data=None) -> None:
        if self.fail:
            raise RuntimeError("notifier unavailable")
        self.sent.append(
            {"recipient": recipient, "kind": kind, "message": message, "data": data or {}}
        )


class FakeEmailSender(EmailSenderPort):
    """Records emails and reports success."""

    def __init__(self) -> None:
        self.sent: list[dict[str, str]] = []

    @property
    def provider_name(self) -> str:
        return "fake"

    async def send(self, to: str, subject: str, html: str) -> EmailResult:
        self.sent.append({"to": to, "subject": subject, "html": html})
        return EmailResult(success=True, message_id=f"fake-{len(self.sent)}")


class FakeQRCodeGenerator(QRCodeGeneratorPort):
    """Records payloads. ``mode`` is "ok", "fail" or "raise".

    ``delay`` keeps a caller waiting inside its transaction, which lets a
    competing call overtake it.
    """

    def __init__(self, mode: str = "ok", delay: float = 0.0) -> None:
        self.mode = mode
        self.delay = delay
        self.calls: list[tuple[dict[str, Any], str]] = []

    async def generate(self, payload: dict[str, Any], file_name: str) -> QRCodeResult:
        self.calls.append((payload, file_name))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.mode == "raise":
            raise OSError("disk full")
        if self.mode == "fail":
            return QRCodeResult(success=False, error="encoder error")
        return QRCodeResult(success=True, url=f"/uploads/qrcodes/{file_name}")


def future_date(days: int = 30) -> date:
    return date.today() + timedelta(days=days)
