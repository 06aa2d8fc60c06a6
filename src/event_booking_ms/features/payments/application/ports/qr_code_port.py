"""QR code generator port (interface)."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass
class QRCodeResult:
    """Result from generating a QR artifact."""

    success: bool
    url: str | None = None
    error: str | None = None


class QRCodeGeneratorPort(ABC):
    """
    Renders receipt payloads as QR artifacts.

    Implementations:
    - SegnoQRCodeAdapter
    """

    @abstractmethod
    async def generate(self, payload: dict[str, Any], file_name: str) -> QRCodeResult:
        """
        Encode ``payload`` and store it under ``file_name``.

        The same payload always yields the same artifact. Failures are
        reported in the result, not raised.
        """
        pass
