from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict


class ChargeRequest(BaseModel):
    payment_key: str
    amount: Decimal  # reais, two decimal places expected
    recipient_name: str
    recipient_city: str
    description: str | None = None


class ChargeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_id: str
    amount: Decimal
    recipient_name: str
    description: str
    payload_text: str
    qr_image: str | None = None  # PNG data URL
    expires_at: datetime
    provider_name: str


class PaymentDetails(BaseModel):
    model_config = ConfigDict(frozen=True)

    payment_key: str
    amount: Decimal
    amount_formatted: str
    recipient: str
    city: str
    description: str = ""


class StaticPixResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = True
    message: str
    details: PaymentDetails
    payload_text: str
    qr_image: str | None = None


class HealthStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    server: str = "healthy"
    version: str
    mode: str
    environment: str
    providers: list[str]
