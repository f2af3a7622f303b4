from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from pixcharge.constants import MAX_FIELD_LENGTH
from pixcharge.errors import InvalidFieldError


class PayloadField(BaseModel):
    """A single TLV field. Nested templates carry their serialized children as ``value``."""

    model_config = ConfigDict(frozen=True)

    tag: str
    value: str

    @property
    def length(self) -> str:
        size = len(self.value.encode("utf-8"))
        if size > MAX_FIELD_LENGTH:
            raise InvalidFieldError(f"Field {self.tag} is {size} bytes long; the limit is {MAX_FIELD_LENGTH}")
        return f"{size:02d}"

    def serialize(self) -> str:
        return f"{self.tag}{self.length}{self.value}"
