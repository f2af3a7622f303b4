"""Text clean-up for the free-text BR Code fields (name, city, description).

Since the 2020 revision of the BR Code manual spaces are allowed in free-text
fields, but scanners still expect plain ASCII. Accents are stripped, and any
symbol other than hyphen, period and comma is dropped.
"""

from __future__ import annotations

import re
import unicodedata

_DISALLOWED = re.compile(r"[^A-Za-z0-9_\s\-.,]")
_WHITESPACE = re.compile(r"\s+")


def strip_accents(text: str) -> str:
    nfd = unicodedata.normalize("NFD", text)
    return "".join(c for c in nfd if not unicodedata.combining(c))


def normalize(text: str) -> str:
    """Return ``text`` reduced to the ASCII-safe subset accepted in payload fields.

    >>> normalize("Café & açúcar - R$ 15,50")
    'Cafe acucar - R 15,50'
    """
    cleaned = _DISALLOWED.sub("", strip_accents(text))
    return _WHITESPACE.sub(" ", cleaned).strip()


def truncate(text: str, limit: int) -> str:
    """Cut ``text`` to at most ``limit`` UTF-8 bytes without splitting a character."""
    encoded = text.encode("utf-8")
    if len(encoded) <= limit:
        return text
    return encoded[:limit].decode("utf-8", errors="ignore")
