"""Recognized parameter signatures.

Classification is exact equality between a parameter's canonical type text
and the keys of this table.
"""

from enum import Enum
from typing import Any


class Role(Enum):
    """What a recognized parameter is for."""

    CONTEXT = "context"
    REQUEST = "request"


SIGNATURES: dict[str, Role] = {
    "context.Context": Role.CONTEXT,
    "*http.Request": Role.REQUEST,
}


def build_table(config: dict[str, Any] | None = None) -> dict[str, Role]:
    """Signature table extended with the runtime config's type texts."""
    table = dict(SIGNATURES)
    if not config:
        return table

    for role in Role:
        for type_text in config.get("signatures", {}).get(role.value, []):
            table[type_text] = role
    return table


def classify(type_text: str, table: dict[str, Role] = SIGNATURES) -> Role | None:
    """Role of a parameter type, or None when it is not recognized."""
    return table.get(type_text)
