import asyncio
from decimal import Decimal

import pytest

from pixcharge.errors import InvalidAmountError, InvalidKeyError
from pixcharge.pix import decode_payload, verify_checksum
from pixcharge.services.static_pix_service import StaticPixService
from tests.conftest import broken_renderer, fake_renderer


class TestStaticPixService:
    def setup_method(self):
        self.service = StaticPixService(renderer=fake_renderer)

    def test_create_static_pix(self, sample_request):
        result = asyncio.run(self.service.create_static_pix(sample_request()))

        assert result.success is True
        assert result.message == "Static Pix QR code generated successfully!"
        assert result.details.payment_key == "test@example.com"
        assert result.details.amount == Decimal("10.50")
        assert result.details.amount_formatted == "R$ 10,50"
        assert result.details.recipient == "Joao Silva"
        assert result.details.city == "Sao Paulo"
        assert result.details.description == "Test payment"
        assert result.payload_text.startswith("00020101")
        assert verify_checksum(result.payload_text)
        assert result.qr_image == "data:image/png;base64,RkFLRQ=="

    def test_without_description(self, sample_request):
        request = sample_request(payment_key="+5511999999999", description=None)
        result = asyncio.run(self.service.create_static_pix(request))
        assert result.details.description == ""
        assert "62" not in decode_payload(result.payload_text)

    def test_cpf_key_in_payload(self, sample_request):
        result = asyncio.run(self.service.create_static_pix(sample_request(payment_key="12345678901")))
        assert "12345678901" in result.payload_text

    def test_large_amount_formatting(self, sample_request):
        result = asyncio.run(self.service.create_static_pix(sample_request(amount=Decimal("2850.5"))))
        assert result.details.amount_formatted == "R$ 2.850,50"

    def test_render_failure_is_not_fatal(self, sample_request):
        service = StaticPixService(renderer=broken_renderer)
        result = asyncio.run(service.create_static_pix(sample_request()))
        assert result.success is True
        assert result.qr_image is None
        assert "QR image unavailable" in result.message
        assert verify_checksum(result.payload_text)

    def test_invalid_key_propagates(self, sample_request):
        with pytest.raises(InvalidKeyError):
            asyncio.run(self.service.create_static_pix(sample_request(payment_key="bad-key")))

    def test_invalid_amount_propagates(self, sample_request):
        with pytest.raises(InvalidAmountError):
            asyncio.run(self.service.create_static_pix(sample_request(amount=Decimal("-5"))))
