from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import ValidationError

# 12-byte ObjectId rendered as hex
_TOKEN_RE = re.compile(r"^[0-9a-f]{24}$")


@dataclass(slots=True, frozen=True)
class Identifier:
    """Validated document key (ObjectId hex token)."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not _TOKEN_RE.match(self.value):
            raise ValidationError(f"invalid identifier: {self.value!r}")

    def __str__(self) -> str:
        return self.value


def parse_identifier(raw: object, field: str = "id") -> Identifier:
    """Guard for every externally supplied id before it addresses storage."""
    if isinstance(raw, Identifier):
        return raw
    if not isinstance(raw, str):
        raise ValidationError(f"{field} must be a string")
    token = raw.strip().lower()
    if not _TOKEN_RE.match(token):
        raise ValidationError(f"{field} is not a valid id: {raw!r}")
    return Identifier(token)
