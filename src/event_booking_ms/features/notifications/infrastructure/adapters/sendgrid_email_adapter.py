"""SendGrid Email Adapter."""

import re

import httpx

from event_booking_ms.features.notifications.application.ports import (
    EmailResult,
    EmailSenderPort,
)
from event_booking_ms.shared.core.logging import get_logger
from event_booking_ms.shared.core.settings import Settings, get_settings

logger = get_logger(__name__)

_TAG = re.compile(r"<[^>]+>")
_STYLE = re.compile(r"<style.*?</style>", re.DOTALL | re.IGNORECASE)
_SPACES = re.compile(r"\s+")


def html_to_text(html: str) -> str:
    """Plain-text alternative part for an HTML body."""
    text = _TAG.sub(" ", _STYLE.sub("", html))
    return _SPACES.sub(" ", text).strip()


class SendGridEmailAdapter(EmailSenderPort):
    """
    Sends email through the SendGrid v3 Mail Send API.

    The API answers 202 Accepted with the message id in ``X-Message-Id``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        settings: Settings | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    def _build_payload(self, to: str, subject: str, html: str) -> dict:
        return {
            "personalizations": [{"to": [{"email": to}], "subject": subject}],
            "from": {
                "email": self._settings.email_from_address,
                "name": self._settings.email_from_name,
            },
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": html_to_text(html)},
                {"type": "text/html", "value": html},
            ],
        }

    async def send(self, to: str, subject: str, html: str) -> EmailResult:
        if not self._settings.sendgrid_api_key:
            return EmailResult(success=False, error="SendGrid API key is not configured")

        url = f"{self._settings.sendgrid_base_url.rstrip('/')}/mail/send"
        headers = {
            "Authorization": f"Bearer {self._settings.sendgrid_api_key}",
            "Content-Type": "application/json",
        }
        payload = self._build_payload(to, subject, html)

        try:
            if self._client is not None:
                response = await self._client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self._settings.email_timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except httpx.TimeoutException:
            return EmailResult(success=False, error="SendGrid request timed out")
        except httpx.RequestError as e:
            return EmailResult(success=False, error=f"SendGrid request failed: {e}")

        if response.status_code < 300:
            return EmailResult(
                success=True, message_id=response.headers.get("X-Message-Id")
            )

        logger.warning("SendGrid returned %s: %s", response.status_code, response.text[:200])
        return EmailResult(
            success=False, error=f"SendGrid returned status {response.status_code}"
        )
