"""Unit tests for the segno QR code adapter."""

import json

from event_booking_ms.features.payments.infrastructure.adapters import (
    SegnoQRCodeAdapter,
)
from event_booking_ms.features.payments.infrastructure.adapters.qr_code_adapter import (
    encode_payload,
)


class TestSegnoQRCodeAdapter:
    async def test_writes_png_and_returns_public_url(self, tmp_path) -> None:
        adapter = SegnoQRCodeAdapter(tmp_path / "qr", "/uploads/qrcodes/")

        result = await adapter.generate({"amount": 100}, "payment_1.png")

        assert result.success
        assert result.url == "/uploads/qrcodes/payment_1.png"
        written = tmp_path / "qr" / "payment_1.png"
        assert written.read_bytes().startswith(b"\x89PNG")

    async def test_resolve_maps_url_back_to_file(self, tmp_path) -> None:
        adapter = SegnoQRCodeAdapter(tmp_path, "/uploads/qrcodes")
        result = await adapter.generate({"amount": 100}, "payment_2.png")

        assert adapter.resolve(result.url) == tmp_path / "payment_2.png"

    def test_resolve_rejects_foreign_or_missing_files(self, tmp_path) -> None:
        adapter = SegnoQRCodeAdapter(tmp_path, "/uploads/qrcodes")

        assert adapter.resolve("/elsewhere/payment.png") is None
        assert adapter.resolve("/uploads/qrcodes/missing.png") is None
        assert adapter.resolve("/uploads/qrcodes/../../etc/passwd") is None

    async def test_unwritable_directory_is_reported(self, tmp_path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")
        adapter = SegnoQRCodeAdapter(blocker, "/uploads/qrcodes")

        result = await adapter.generate({"amount": 1}, "payment_3.png")

        assert not result.success
        assert result.error


def test_encode_payload_is_canonical() -> None:
    a = encode_payload({"b": 1, "a": 2})
    b = encode_payload({"a": 2, "b": 1})

    assert a == b
    assert json.loads(a) == {"a": 2, "b": 1}
