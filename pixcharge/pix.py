"""PIX BR Code payload codec following the BCB EMV QR Code specification.

Builds the payload string of a static PIX QR code (fields in the order
scanners expect, CRC16 trailer last) and decodes such strings back into
their TLV fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from pixcharge.constants import (
    COUNTRY_CODE,
    CRC_LENGTH,
    CURRENCY_BRL,
    MAX_AMOUNT_CENTS,
    MAX_CITY_LENGTH,
    MAX_DESCRIPTION_LENGTH,
    MAX_NAME_LENGTH,
    MERCHANT_CATEGORY_CODE,
    PAYLOAD_FORMAT_INDICATOR,
    PIX_GUI,
    STATIC_INITIATION,
    SUBTAG_GUI,
    SUBTAG_PIX_KEY,
    SUBTAG_REFERENCE_LABEL,
    TAG_ADDITIONAL_DATA,
    TAG_AMOUNT,
    TAG_COUNTRY,
    TAG_CRC,
    TAG_CURRENCY,
    TAG_MERCHANT_ACCOUNT,
    TAG_MERCHANT_CATEGORY,
    TAG_MERCHANT_CITY,
    TAG_MERCHANT_NAME,
    TAG_PAYLOAD_FORMAT,
    TAG_POINT_OF_INITIATION,
)
from pixcharge.crc import checksum
from pixcharge.errors import InvalidAmountError, InvalidFieldError, InvalidKeyError
from pixcharge.keys import is_valid_key
from pixcharge.models import to_decimal
from pixcharge.models.charge import ChargeRequest
from pixcharge.models.payload import PayloadField
from pixcharge.normalize import normalize, truncate

# Tags whose value is itself a TLV template
TEMPLATE_TAGS = frozenset({TAG_MERCHANT_ACCOUNT, TAG_ADDITIONAL_DATA})

MAX_AMOUNT = Decimal(MAX_AMOUNT_CENTS) / 100


@dataclass(frozen=True)
class PreparedFields:
    """Free-text fields after normalization and truncation, as embedded in the payload."""

    recipient_name: str
    recipient_city: str
    description: str | None


def tlv(tag: str, value: str) -> str:
    """Build a TLV (Tag-Length-Value) field."""
    return PayloadField(tag=tag, value=value).serialize()


def validate_amount(amount: Decimal | float | int | str) -> Decimal:
    """Return the amount rounded to centavos, or raise if it is outside (0, 999999.99]."""
    try:
        value = to_decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise InvalidAmountError(amount) from exc
    if not value.is_finite() or value <= 0 or value > MAX_AMOUNT:
        raise InvalidAmountError(amount)
    return value


def prepare_fields(request: ChargeRequest) -> PreparedFields:
    name = truncate(normalize(request.recipient_name), MAX_NAME_LENGTH)
    city = truncate(normalize(request.recipient_city), MAX_CITY_LENGTH)
    if not name:
        raise InvalidFieldError("Recipient name is empty after normalization")
    if not city:
        raise InvalidFieldError("Recipient city is empty after normalization")

    description = None
    if request.description:
        description = truncate(normalize(request.description), MAX_DESCRIPTION_LENGTH) or None

    return PreparedFields(recipient_name=name, recipient_city=city, description=description)


def build_payload(request: ChargeRequest) -> str:
    """Generate a PIX BR Code payload string.

    Raises:
        InvalidKeyError: the payment key is not an email, phone, CPF, CNPJ or random key.
        InvalidAmountError: the amount is not within (0, 999999.99].
        InvalidFieldError: name or city is empty once normalized.

    Returns:
        The complete BR Code payload string with CRC16.
    """
    if not is_valid_key(request.payment_key):
        raise InvalidKeyError(request.payment_key)
    amount = validate_amount(request.amount)
    fields = prepare_fields(request)

    # Merchant Account Information: the key goes in verbatim
    mai = tlv(SUBTAG_GUI, PIX_GUI) + tlv(SUBTAG_PIX_KEY, request.payment_key)

    payload = (
        tlv(TAG_PAYLOAD_FORMAT, PAYLOAD_FORMAT_INDICATOR)
        + tlv(TAG_POINT_OF_INITIATION, STATIC_INITIATION)
        + tlv(TAG_MERCHANT_ACCOUNT, mai)
        + tlv(TAG_MERCHANT_CATEGORY, MERCHANT_CATEGORY_CODE)
        + tlv(TAG_CURRENCY, CURRENCY_BRL)
        + tlv(TAG_AMOUNT, f"{amount:.2f}")
        + tlv(TAG_COUNTRY, COUNTRY_CODE)
        + tlv(TAG_MERCHANT_NAME, fields.recipient_name)
        + tlv(TAG_MERCHANT_CITY, fields.recipient_city)
    )

    # Additional Data is omitted entirely, never sent empty
    if fields.description:
        payload += tlv(TAG_ADDITIONAL_DATA, tlv(SUBTAG_REFERENCE_LABEL, fields.description))

    # CRC16 covers everything up to and including "6304"
    payload += TAG_CRC + CRC_LENGTH
    return payload + checksum(payload)


def parse_fields(text: str) -> list[PayloadField]:
    """Split a TLV string into its fields. Lengths count UTF-8 bytes."""
    data = text.encode("utf-8")
    fields: list[PayloadField] = []
    pos = 0
    while pos < len(data):
        header = data[pos : pos + 4]
        if len(header) < 4 or not header.isdigit():
            raise InvalidFieldError(f"Malformed TLV header at byte {pos}")
        tag = header[:2].decode("ascii")
        length = int(header[2:])
        start = pos + 4
        end = start + length
        if end > len(data):
            raise InvalidFieldError(f"Field {tag} declares {length} bytes but the payload ends first")
        try:
            value = data[start:end].decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidFieldError(f"Field {tag} splits a multi-byte character") from exc
        fields.append(PayloadField(tag=tag, value=value))
        pos = end
    return fields


def decode_payload(text: str) -> dict[str, str | dict[str, str]]:
    """Decode a payload into ``{tag: value}``; templates decode to nested dicts."""
    decoded: dict[str, str | dict[str, str]] = {}
    for field in parse_fields(text):
        if field.tag in TEMPLATE_TAGS:
            decoded[field.tag] = {child.tag: child.value for child in parse_fields(field.value)}
        else:
            decoded[field.tag] = field.value
    return decoded


def verify_checksum(text: str) -> bool:
    """Check that ``text`` ends with a CRC trailer matching its content."""
    trailer = TAG_CRC + CRC_LENGTH
    if len(text) < 8 or text[-8:-4] != trailer:
        return False
    return checksum(text[:-4]) == text[-4:]
