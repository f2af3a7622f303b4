from __future__ import annotations

import logging
from datetime import datetime, timedelta

from pixcharge.constants import SP_TZ
from pixcharge.errors import PixError, ProviderError
from pixcharge.models.charge import ChargeRequest, ChargeResult
from pixcharge.pix import build_payload, validate_amount
from pixcharge.providers.base import PixProvider, Renderer

logger = logging.getLogger(__name__)


class StaticPixProvider(PixProvider):
    """Builds the BR Code locally. No network, no credentials."""

    name = "static-pix"

    def __init__(self, expiration_days: int = 30, renderer: Renderer | None = None) -> None:
        super().__init__(renderer)
        self.expiration_days = expiration_days

    async def create_charge(self, request: ChargeRequest) -> ChargeResult:
        try:
            payload = build_payload(request)
        except PixError as exc:
            raise ProviderError(self.name, str(exc)) from exc

        qr_image = await self.render(payload)
        now = datetime.now(SP_TZ)
        txid = f"static-{int(now.timestamp() * 1000)}"
        logger.info("Static Pix charge %s built (%d chars)", txid, len(payload))

        return ChargeResult(
            transaction_id=txid,
            amount=validate_amount(request.amount),
            recipient_name=request.recipient_name,
            description=request.description or "",
            payload_text=payload,
            qr_image=qr_image,
            expires_at=now + timedelta(days=self.expiration_days),
            provider_name=self.name,
        )
