from __future__ import annotations

import logging

from pixcharge.errors import RenderError
from pixcharge.models import format_brl
from pixcharge.models.charge import ChargeRequest, PaymentDetails, StaticPixResult
from pixcharge.pix import build_payload, prepare_fields, validate_amount
from pixcharge.providers.base import Renderer
from pixcharge.render import render_qrcode

logger = logging.getLogger(__name__)


class StaticPixService:
    """Static Pix QR codes straight from the codec; works with any key, no credentials."""

    def __init__(self, renderer: Renderer | None = None) -> None:
        self.renderer = renderer or render_qrcode

    async def create_static_pix(self, request: ChargeRequest) -> StaticPixResult:
        payload = build_payload(request)
        fields = prepare_fields(request)
        amount = validate_amount(request.amount)

        try:
            qr_image = await self.renderer(payload)
            message = "Static Pix QR code generated successfully!"
        except RenderError as exc:
            logger.warning("Static Pix payload built but QR rendering failed: %s", exc)
            qr_image = None
            message = "Static Pix code generated; QR image unavailable."

        return StaticPixResult(
            message=message,
            details=PaymentDetails(
                payment_key=request.payment_key,
                amount=amount,
                amount_formatted=format_brl(amount),
                recipient=fields.recipient_name,
                city=fields.recipient_city,
                description=fields.description or "",
            ),
            payload_text=payload,
            qr_image=qr_image,
        )
