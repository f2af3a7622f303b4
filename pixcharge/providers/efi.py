"""Efí (formerly Gerencianet) Pix API provider.

Registers an immediate charge (``cob``) and embeds the provider-issued
``pixCopiaECola`` payload verbatim; the local codec is not involved.
"""

from __future__ import annotations

import asyncio
import logging
import secrets
import string
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

import httpx
from pydantic import ValidationError

from pixcharge.constants import SP_TZ
from pixcharge.errors import PixError, ProviderError
from pixcharge.models.charge import ChargeRequest, ChargeResult
from pixcharge.pix import validate_amount
from pixcharge.providers.base import PixProvider, Renderer

logger = logging.getLogger(__name__)

PRODUCTION_URL = "https://pix.api.efipay.com.br"
SANDBOX_URL = "https://pix-h.api.efipay.com.br"

TXID_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
TXID_LENGTH = 32

# Fraction of the declared token lifetime we trust
TOKEN_SAFETY_MARGIN = 0.9

DEFAULT_DESCRIPTION = "Pix payment"


def generate_txid() -> str:
    """32-character alphanumeric transaction id."""
    return "".join(secrets.choice(TXID_ALPHABET) for _ in range(TXID_LENGTH))


class TokenState(str, Enum):
    ABSENT = "absent"
    VALID = "valid"
    EXPIRED = "expired"


@dataclass(frozen=True)
class AccessToken:
    value: str
    expires_at: float  # on the provider's clock


class EfiProvider(PixProvider):
    name = "Efí (Gerencianet)"

    def __init__(
        self,
        *,
        client_id: str,
        client_secret: str,
        sandbox: bool = False,
        pix_key: str = "",
        certificate_path: str = "",
        timeout: float = 30.0,
        charge_expiration: int = 3600,
        renderer: Renderer | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(renderer)
        self.client_id = client_id
        self.client_secret = client_secret
        self.pix_key = pix_key
        self.charge_expiration = charge_expiration
        self.clock = clock

        client_kwargs: dict[str, Any] = {
            "base_url": SANDBOX_URL if sandbox else PRODUCTION_URL,
            "timeout": timeout,
            "headers": {"Content-Type": "application/json"},
        }
        if certificate_path:
            client_kwargs["cert"] = certificate_path
        if transport is not None:
            client_kwargs["transport"] = transport

        self.client = httpx.AsyncClient(**client_kwargs)
        self._token: AccessToken | None = None
        self._refresh_lock = asyncio.Lock()

    @property
    def token_state(self) -> TokenState:
        if self._token is None:
            return TokenState.ABSENT
        if self.clock() < self._token.expires_at:
            return TokenState.VALID
        return TokenState.EXPIRED

    async def get_access_token(self) -> str:
        """Return the cached bearer token, exchanging credentials when absent or expired.

        Concurrent callers share a single exchange.
        """
        if self.token_state is TokenState.VALID:
            return self._token.value

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            if self.token_state is TokenState.VALID:
                return self._token.value
            self._token = await self._exchange_credentials()
            return self._token.value

    async def _exchange_credentials(self) -> AccessToken:
        logger.info("Requesting Efí access token (state=%s)", self.token_state.value)
        try:
            response = await self.client.post(
                "/oauth/token",
                json={"grant_type": "client_credentials"},
                auth=(self.client_id, self.client_secret),
            )
            response.raise_for_status()
            data = response.json()
            token = data["access_token"]
            expires_in = float(data["expires_in"])
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as exc:
            raise ProviderError(self.name, f"Failed to get Efí access token: {_error_message(exc)}") from exc

        return AccessToken(value=token, expires_at=self.clock() + expires_in * TOKEN_SAFETY_MARGIN)

    async def create_charge(self, request: ChargeRequest) -> ChargeResult:
        try:
            amount = validate_amount(request.amount)
        except PixError as exc:
            raise ProviderError(self.name, str(exc)) from exc

        token = await self.get_access_token()
        txid = generate_txid()

        description = request.description or DEFAULT_DESCRIPTION
        body = {
            "calendario": {"expiracao": self.charge_expiration},
            "devedor": {"nome": request.recipient_name},
            "valor": {"original": f"{amount:.2f}"},
            "chave": self.pix_key or request.payment_key,
            "solicitacaoPagador": description,
        }

        logger.info("Registering Efí charge txid=%s amount=%s", txid, body["valor"]["original"])
        try:
            response = await self.client.put(
                f"/v2/cob/{txid}",
                json=body,
                headers={"Authorization": f"Bearer {token}"},
            )
            response.raise_for_status()
            data = response.json()
            payload = data["pixCopiaECola"]
            charged = Decimal(data["valor"]["original"])
            txid = data.get("txid") or txid
            if not isinstance(payload, str) or not payload:
                raise ValueError(f"Unexpected response: pixCopiaECola is {payload!r}")
            if not isinstance(txid, str):
                raise ValueError(f"Unexpected response: txid is {txid!r}")
            if not charged.is_finite() or charged <= 0:
                raise ValueError(f"Unexpected response: valor.original is {charged}")
        except (httpx.HTTPError, ValueError, KeyError, TypeError, InvalidOperation) as exc:
            raise ProviderError(self.name, _error_message(exc)) from exc

        qr_image = await self.render(payload)

        try:
            return ChargeResult(
                transaction_id=txid,
                amount=charged,
                recipient_name=request.recipient_name,
                description=description,
                payload_text=payload,
                qr_image=qr_image,
                expires_at=datetime.now(SP_TZ) + timedelta(seconds=self.charge_expiration),
                provider_name=self.name,
            )
        except ValidationError as exc:
            raise ProviderError(self.name, f"Unexpected response: {exc.error_count()} invalid field(s)") from exc

    async def aclose(self) -> None:
        await self.client.aclose()


def _error_message(exc: Exception) -> str:
    """Pull the most useful message out of an Efí error response."""
    if isinstance(exc, httpx.HTTPStatusError):
        try:
            data = exc.response.json()
        except ValueError:
            return exc.response.text or str(exc)
        if isinstance(data, dict):
            for key in ("error_description", "mensagem", "message"):
                if data.get(key):
                    return str(data[key])
        return str(data)
    if isinstance(exc, KeyError):
        return f"Unexpected response: missing {exc}"
    return str(exc) or type(exc).__name__
