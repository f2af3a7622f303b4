from __future__ import annotations

import logging
from collections.abc import Sequence

from pixcharge.errors import AllProvidersFailedError, ProviderError, ProviderFailure
from pixcharge.models.charge import ChargeRequest, ChargeResult
from pixcharge.providers.base import PixProvider

logger = logging.getLogger(__name__)


class PixChargeService:
    """Tries each provider in order and returns the first successful charge."""

    def __init__(self, providers: Sequence[PixProvider]) -> None:
        if not providers:
            raise ValueError("PixChargeService needs at least one provider")
        self.providers = list(providers)

    @property
    def provider_names(self) -> list[str]:
        return [provider.name for provider in self.providers]

    async def create_charge(self, request: ChargeRequest) -> ChargeResult:
        failures: list[ProviderFailure] = []
        for provider in self.providers:
            logger.info("Creating Pix charge with provider=%s", provider.name)
            try:
                result = await provider.create_charge(request)
            except ProviderError as exc:
                logger.warning("Provider %s failed: %s", provider.name, exc.message)
                failures.append(ProviderFailure(provider=provider.name, message=exc.message))
                continue
            logger.info("Pix charge %s created by %s", result.transaction_id, provider.name)
            return result

        logger.error("All %d Pix providers failed", len(failures))
        raise AllProvidersFailedError(failures)

    async def aclose(self) -> None:
        for provider in self.providers:
            await provider.aclose()
