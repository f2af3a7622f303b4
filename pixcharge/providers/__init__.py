"""Charge-creation backends tried in order by the orchestrator."""

from .base import PixProvider
from .efi import EfiProvider, TokenState
from .static import StaticPixProvider

__all__ = [
    "PixProvider",
    "EfiProvider",
    "StaticPixProvider",
    "TokenState",
]
