from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable

from pixcharge.errors import RenderError
from pixcharge.models.charge import ChargeRequest, ChargeResult
from pixcharge.render import render_qrcode

logger = logging.getLogger(__name__)

Renderer = Callable[[str], Awaitable[str]]


class PixProvider(ABC):
    name: str

    def __init__(self, renderer: Renderer | None = None) -> None:
        self.renderer = renderer or render_qrcode

    @abstractmethod
    async def create_charge(self, request: ChargeRequest) -> ChargeResult:
        """Create a charge and return its payload. Raises ProviderError on failure."""
        ...

    async def render(self, payload: str) -> str | None:
        """Render the QR image; a failure leaves the charge without an image."""
        try:
            return await self.renderer(payload)
        except RenderError as exc:
            logger.warning("%s: %s", self.name, exc)
            return None

    async def aclose(self) -> None:
        """Release network resources. Providers without any keep this no-op."""
