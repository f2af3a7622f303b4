"""Typed failures raised by the codec, the providers and the orchestrator."""

from __future__ import annotations

from dataclasses import dataclass


class PixError(Exception):
    """Base class for every Pix charge failure."""


class InvalidKeyError(PixError):
    def __init__(self, key: str) -> None:
        super().__init__("Invalid Pix key format")
        self.key = key


class InvalidAmountError(PixError):
    def __init__(self, amount: object) -> None:
        super().__init__("Amount must be between 0.01 and 999,999.99")
        self.amount = amount


class InvalidFieldError(PixError):
    """A payload field is empty, malformed, or too long for a 2-digit length."""


class RenderError(PixError):
    """QR image generation failed. The payload itself is still valid."""


class ProviderError(PixError):
    def __init__(self, provider: str, message: str) -> None:
        super().__init__(f"{provider} provider error: {message}")
        self.provider = provider
        self.message = message


@dataclass(frozen=True)
class ProviderFailure:
    provider: str
    message: str


class AllProvidersFailedError(PixError):
    def __init__(self, failures: list[ProviderFailure]) -> None:
        self.failures = failures
        last = failures[-1].message if failures else "no providers configured"
        super().__init__(f"All Pix providers failed. Last error: {last}")
        self.last_message = last
