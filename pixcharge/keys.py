"""Pix key (chave) classification."""

from __future__ import annotations

import re
from enum import Enum

from pixcharge.constants import MAX_KEY_LENGTH

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_PHONE = re.compile(r"^\+55\d{10,11}$")
_CPF = re.compile(r"^\d{11}$")
_CNPJ = re.compile(r"^\d{14}$")
_RANDOM = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$", re.IGNORECASE)


class KeyType(str, Enum):
    EMAIL = "email"
    PHONE = "phone"
    CPF = "cpf"
    CNPJ = "cnpj"
    RANDOM = "random"


def classify_key(key: str) -> KeyType | None:
    """Return the kind of Pix key, or None when the key is not acceptable.

    The first applicable rule decides: anything that looks like an email is
    judged only as an email, anything starting with ``+55`` only as a phone.
    """
    if len(key.encode("utf-8")) > MAX_KEY_LENGTH:
        return None

    if "@" in key and "." in key:
        return KeyType.EMAIL if _EMAIL.fullmatch(key) else None

    if key.startswith("+55"):
        return KeyType.PHONE if _PHONE.fullmatch(key) else None

    if _CPF.fullmatch(key):
        return KeyType.CPF

    if _CNPJ.fullmatch(key):
        return KeyType.CNPJ

    if _RANDOM.fullmatch(key):
        return KeyType.RANDOM

    return None


def is_valid_key(key: str) -> bool:
    return classify_key(key) is not None
