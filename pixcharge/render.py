"""Render a BR Code payload as a QR image (PNG bytes or a data URL)."""

from __future__ import annotations

import asyncio
import base64
import logging
from io import BytesIO

import qrcode
from qrcode.image.pil import PilImage

from pixcharge.errors import RenderError
from pixcharge.settings import settings

logger = logging.getLogger(__name__)


def render_qrcode_png(payload: str, *, box_size: int = 10, border: int = 2) -> bytes:
    """Generate a QR code for ``payload`` as PNG bytes."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size,
        border=border,
    )
    qr.add_data(payload)
    qr.make(fit=True)

    img: PilImage = qr.make_image(fill_color="black", back_color="white")

    buf = BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def render_data_url(payload: str) -> str:
    png = render_qrcode_png(payload, box_size=settings.qr_box_size, border=settings.qr_border)
    return "data:image/png;base64," + base64.b64encode(png).decode("ascii")


async def render_qrcode(payload: str) -> str:
    """Render ``payload`` off the event loop and return a PNG data URL.

    Raises:
        RenderError: the image could not be produced.
    """
    try:
        return await asyncio.to_thread(render_data_url, payload)
    except Exception as exc:
        logger.debug("QR rendering failed for payload of %d chars", len(payload), exc_info=True)
        raise RenderError(f"Failed to generate QR code: {exc}") from exc
