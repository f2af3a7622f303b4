"""Tool catalogue and dispatch shared by the stdio and HTTP transports.

Every failure comes back as an error ``ToolResult``; transports only decide
how to frame it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from pixcharge.constants import SERVER_VERSION
from pixcharge.errors import PixError
from pixcharge.models import format_brl
from pixcharge.models.charge import ChargeRequest, ChargeResult, HealthStatus, StaticPixResult
from pixcharge.services.charge_service import PixChargeService
from pixcharge.services.static_pix_service import StaticPixService
from pixcharge.settings import settings

logger = logging.getLogger(__name__)

_CHARGE_PROPERTIES: dict[str, Any] = {
    "paymentKey": {
        "type": "string",
        "description": "Pix key: email, +55 phone, CPF, CNPJ or random key",
    },
    "amount": {
        "type": "number",
        "description": "Payment amount in BRL (Brazilian Reais)",
        "minimum": 0.01,
        "maximum": 999999.99,
    },
    "recipientName": {
        "type": "string",
        "description": "Name of the payment recipient",
        "minLength": 1,
        "maxLength": 100,
    },
    "recipientCity": {
        "type": "string",
        "description": "City of the payment recipient",
        "minLength": 1,
        "maxLength": 100,
    },
    "description": {
        "type": "string",
        "description": "Optional payment description",
        "maxLength": 200,
    },
}

TOOLS: list[dict[str, Any]] = [
    {
        "name": "createPixCharge",
        "description": "Create a new Pix payment charge with QR code",
        "inputSchema": {
            "type": "object",
            "properties": _CHARGE_PROPERTIES,
            "required": ["paymentKey", "amount", "recipientName", "recipientCity"],
        },
    },
    {
        "name": "createStaticPix",
        "description": "Generate a static Pix QR code for any Pix key, no API credentials needed",
        "inputSchema": {
            "type": "object",
            "properties": _CHARGE_PROPERTIES,
            "required": ["paymentKey", "amount", "recipientName", "recipientCity"],
        },
    },
    {
        "name": "healthCheck",
        "description": "Check the health status of the Pix server and providers",
        "inputSchema": {"type": "object", "properties": {}, "required": []},
    },
]


class ChargeArguments(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    payment_key: str = Field(alias="paymentKey", min_length=1)
    amount: Decimal = Field(gt=0, le=Decimal("999999.99"))
    recipient_name: str = Field(alias="recipientName", min_length=1, max_length=100)
    recipient_city: str = Field(alias="recipientCity", min_length=1, max_length=100)
    description: str | None = Field(default=None, max_length=200)

    def to_request(self) -> ChargeRequest:
        return ChargeRequest(
            payment_key=self.payment_key,
            amount=self.amount,
            recipient_name=self.recipient_name,
            recipient_city=self.recipient_city,
            description=self.description,
        )


@dataclass
class ToolResult:
    content: list[dict[str, str]] = field(default_factory=list)
    is_error: bool = False

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> ToolResult:
        return cls(content=[{"type": "text", "text": text}], is_error=is_error)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"content": self.content}
        if self.is_error:
            data["isError"] = True
        return data


def format_charge(result: ChargeResult) -> str:
    qr = f"![QR Code]({result.qr_image})" if result.qr_image else "QR Code generation failed"
    return (
        "Pix charge created successfully!\n\n"
        "**Payment Details:**\n"
        f"- Amount: {format_brl(result.amount)}\n"
        f"- Recipient: {result.recipient_name}\n"
        f"- Description: {result.description}\n"
        f"- Transaction ID: {result.transaction_id}\n"
        f"- Expires: {result.expires_at.strftime('%d/%m/%Y %H:%M:%S')}\n"
        f"- Provider: {result.provider_name}\n\n"
        "**Pix Code (copy and paste):**\n"
        f"`{result.payload_text}`\n\n"
        "**QR Code:**\n"
        f"{qr}\n\n"
        "The payer can scan the QR code or copy the Pix code to complete the payment."
    )


def format_static(result: StaticPixResult) -> str:
    details = result.details
    qr = f"![QR Code]({result.qr_image})" if result.qr_image else "QR Code generation failed"
    return (
        f"{result.message}\n\n"
        "**Payment Details:**\n"
        f"- Pix Key: {details.payment_key}\n"
        f"- Amount: {details.amount_formatted}\n"
        f"- Recipient: {details.recipient}\n"
        f"- City: {details.city}\n"
        f"- Description: {details.description or '-'}\n\n"
        "**Pix Code (copy and paste):**\n"
        f"`{result.payload_text}`\n\n"
        "**QR Code:**\n"
        f"{qr}"
    )


def format_health(status: HealthStatus) -> str:
    return (
        "**Pix Server Health Check**\n\n"
        f"**Status:** {status.server}\n"
        f"**Version:** {status.version}\n"
        f"**Mode:** {status.mode}\n"
        f"**Environment:** {status.environment}\n"
        f"**Providers:** {', '.join(status.providers)}"
    )


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        parts.append(f"{location}: {error['msg']}")
    return "Invalid arguments: " + "; ".join(parts)


class ToolDispatcher:
    def __init__(
        self,
        charge_service: PixChargeService,
        static_service: StaticPixService,
        mode: str = "stdio",
        environment: str = "production",
    ) -> None:
        self.charge_service = charge_service
        self.static_service = static_service
        self.mode = mode
        self.environment = environment

    def list_tools(self) -> list[dict[str, Any]]:
        return TOOLS

    def health(self) -> HealthStatus:
        return HealthStatus(
            version=SERVER_VERSION,
            mode=self.mode,
            environment=self.environment,
            providers=self.charge_service.provider_names,
        )

    async def aclose(self) -> None:
        await self.charge_service.aclose()

    async def call(self, name: str, arguments: dict[str, Any] | None = None) -> ToolResult:
        arguments = arguments or {}
        logger.info("Tool call: %s", name)
        try:
            if name == "createPixCharge":
                args = ChargeArguments.model_validate(arguments)
                result = await self.charge_service.create_charge(args.to_request())
                return ToolResult.text(format_charge(result))

            if name == "createStaticPix":
                args = ChargeArguments.model_validate(arguments)
                static = await self.static_service.create_static_pix(args.to_request())
                return ToolResult.text(format_static(static))

            if name == "healthCheck":
                return ToolResult.text(format_health(self.health()))
        except ValidationError as exc:
            logger.warning("Tool %s rejected arguments: %s", name, exc.error_count())
            return ToolResult.text(f"Error: {_validation_message(exc)}", is_error=True)
        except PixError as exc:
            logger.warning("Tool %s failed: %s", name, exc)
            return ToolResult.text(f"Error: {exc}", is_error=True)

        logger.warning("Unknown tool requested: %s", name)
        return ToolResult.text(f"Error: Unknown tool: {name}", is_error=True)


def get_dispatcher(mode: str | None = None) -> ToolDispatcher:
    from pixcharge.providers.factory import get_providers

    return ToolDispatcher(
        PixChargeService(get_providers()),
        StaticPixService(),
        mode=mode or settings.server_mode,
        environment=settings.environment,
    )
