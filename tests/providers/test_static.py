import asyncio
from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from pydantic import ValidationError

from pixcharge.constants import SP_TZ
from pixcharge.errors import ProviderError
from pixcharge.pix import verify_checksum
from pixcharge.providers.static import StaticPixProvider
from tests.conftest import broken_renderer, fake_renderer


class TestStaticPixProvider:
    def test_create_charge(self, sample_request):
        provider = StaticPixProvider(renderer=fake_renderer)
        result = asyncio.run(provider.create_charge(sample_request()))

        assert result.provider_name == "static-pix"
        assert result.transaction_id.startswith("static-")
        assert result.amount == Decimal("10.50")
        assert result.recipient_name == "João Silva"
        assert result.description == "Test payment"
        assert result.qr_image == "data:image/png;base64,RkFLRQ=="
        assert result.payload_text.startswith("000201")
        assert verify_checksum(result.payload_text)

    def test_expiration(self, sample_request):
        provider = StaticPixProvider(expiration_days=7, renderer=fake_renderer)
        before = datetime.now(SP_TZ)
        result = asyncio.run(provider.create_charge(sample_request()))
        assert before + timedelta(days=7) <= result.expires_at <= datetime.now(SP_TZ) + timedelta(days=7)

    def test_missing_description(self, sample_request):
        provider = StaticPixProvider(renderer=fake_renderer)
        result = asyncio.run(provider.create_charge(sample_request(description=None)))
        assert result.description == ""

    def test_render_failure_keeps_payload(self, sample_request):
        provider = StaticPixProvider(renderer=broken_renderer)
        result = asyncio.run(provider.create_charge(sample_request()))
        assert result.qr_image is None
        assert verify_checksum(result.payload_text)

    def test_invalid_key_becomes_provider_error(self, sample_request):
        provider = StaticPixProvider(renderer=fake_renderer)
        with pytest.raises(ProviderError, match="Invalid Pix key format") as exc_info:
            asyncio.run(provider.create_charge(sample_request(payment_key="bad-key")))
        assert exc_info.value.provider == "static-pix"

    def test_result_is_immutable(self, sample_request):
        provider = StaticPixProvider(renderer=fake_renderer)
        result = asyncio.run(provider.create_charge(sample_request()))
        with pytest.raises(ValidationError):
            result.amount = Decimal("1.00")
