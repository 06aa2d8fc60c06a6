"""Email sender port (interface) - Adapter Pattern."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class EmailResult:
    """Result from an email send attempt."""

    success: bool
    message_id: str | None = None
    error: str | None = None


class EmailSenderPort(ABC):
    """
    Abstract interface for email delivery.

    Implementations:
    - ConsoleEmailAdapter (for development)
    - SendGridEmailAdapter
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get the provider name."""
        pass

    @abstractmethod
    async def send(self, to: str, subject: str, html: str) -> EmailResult:
        """
        Send one HTML email.

        Errors are reported in the result, not raised.
        """
        pass
