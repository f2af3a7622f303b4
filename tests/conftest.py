"""Root conftest: request factories and stub providers shared across tests."""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

import pytest

from pixcharge.constants import SP_TZ
from pixcharge.errors import ProviderError, RenderError
from pixcharge.models.charge import ChargeRequest, ChargeResult
from pixcharge.providers.base import PixProvider


def _sample_request(**overrides) -> ChargeRequest:
    defaults = dict(
        payment_key="test@example.com",
        amount=Decimal("10.50"),
        recipient_name="João Silva",
        recipient_city="São Paulo",
        description="Test payment",
    )
    defaults.update(overrides)
    return ChargeRequest(**defaults)


def _sample_result(**overrides) -> ChargeResult:
    defaults = dict(
        transaction_id="TX123",
        amount=Decimal("10.50"),
        recipient_name="João Silva",
        description="Test payment",
        payload_text="00020101021226...6304ABCD",
        qr_image="data:image/png;base64,AAAA",
        expires_at=datetime(2025, 4, 10, 12, 0, tzinfo=SP_TZ),
        provider_name="stub",
    )
    defaults.update(overrides)
    return ChargeResult(**defaults)


class FailingProvider(PixProvider):
    def __init__(self, name: str = "failing", message: str = "boom") -> None:
        super().__init__()
        self.name = name
        self.message = message
        self.calls = 0

    async def create_charge(self, request: ChargeRequest) -> ChargeResult:
        self.calls += 1
        raise ProviderError(self.name, self.message)


class SucceedingProvider(PixProvider):
    def __init__(self, name: str = "succeeding") -> None:
        super().__init__()
        self.name = name
        self.calls = 0

    async def create_charge(self, request: ChargeRequest) -> ChargeResult:
        self.calls += 1
        return _sample_result(
            transaction_id=f"{self.name}-tx",
            provider_name=self.name,
            expires_at=datetime.now(SP_TZ) + timedelta(hours=1),
        )


async def fake_renderer(payload: str) -> str:
    return "data:image/png;base64,RkFLRQ=="


async def broken_renderer(payload: str) -> str:
    raise RenderError("Failed to generate QR code: printer on fire")


@pytest.fixture()
def sample_request():
    return _sample_request


@pytest.fixture()
def sample_result():
    return _sample_result
