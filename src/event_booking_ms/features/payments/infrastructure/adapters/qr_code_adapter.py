"""QR code adapter backed by segno."""

import asyncio
import json
from pathlib import Path
from typing import Any

import segno

from event_booking_ms.features.payments.application.ports import (
    QRCodeGeneratorPort,
    QRCodeResult,
)
from event_booking_ms.shared.core.logging import get_logger

logger = get_logger(__name__)


def encode_payload(payload: dict[str, Any]) -> str:
    """Canonical JSON text, so equal payloads encode identically."""
    return json.dumps(payload, sort_keys=True, separators=(",", ":"), default=str)


class SegnoQRCodeAdapter(QRCodeGeneratorPort):
    """
    Writes receipt QR codes as PNG files.

    Files land in ``output_dir`` and are served under ``url_prefix``.
    """

    def __init__(self, output_dir: str | Path, url_prefix: str) -> None:
        self._output_dir = Path(output_dir)
        self._url_prefix = url_prefix.rstrip("/")

    def _write(self, content: str, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        qr = segno.make(content, error="m")
        qr.save(str(path), kind="png", scale=8, border=4)

    async def generate(self, payload: dict[str, Any], file_name: str) -> QRCodeResult:
        path = self._output_dir / file_name
        try:
            await asyncio.to_thread(self._write, encode_payload(payload), path)
        except (OSError, ValueError) as e:
            logger.error("QR code generation failed for %s: %s", file_name, e)
            return QRCodeResult(success=False, error=str(e))

        return QRCodeResult(success=True, url=f"{self._url_prefix}/{file_name}")

    def resolve(self, url: str) -> Path | None:
        """Map a public QR URL back to its file, if it is one of ours."""
        prefix = f"{self._url_prefix}/"
        if not url.startswith(prefix):
            return None
        name = Path(url[len(prefix):]).name
        path = self._output_dir / name
        return path if path.is_file() else None
