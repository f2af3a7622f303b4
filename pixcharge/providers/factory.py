import logging

from pixcharge.providers.base import PixProvider
from pixcharge.settings import settings

logger = logging.getLogger(__name__)


def get_provider(name: str) -> PixProvider:
    if name == "static":
        from pixcharge.providers.static import StaticPixProvider

        logger.info("Using Pix provider: static")
        return StaticPixProvider(expiration_days=settings.static_expiration_days)

    if name == "efi":
        from pixcharge.providers.efi import EfiProvider

        settings.efi_configured()
        logger.info("Using Pix provider: efi environment=%s", settings.environment)
        return EfiProvider(
            client_id=settings.efi_client_id,
            client_secret=settings.efi_client_secret,
            sandbox=settings.efi_sandbox,
            pix_key=settings.efi_pix_key,
            certificate_path=settings.efi_certificate_path,
            timeout=settings.efi_timeout,
            charge_expiration=settings.efi_charge_expiration,
        )

    raise ValueError(f"Unsupported Pix provider: {name}")


def get_providers() -> list[PixProvider]:
    """Build the configured providers, in fallback order."""
    names = settings.provider_names
    if not names:
        raise ValueError("No Pix providers configured")
    return [get_provider(name) for name in names]
