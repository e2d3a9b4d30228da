"""Primary key descriptions for DynamoDB tables and secondary indexes."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

__all__ = [
    "KeyType",
    "ParseKeyTypeError",
    "Key",
    "parse_key_type",
    "typed_key",
    "typed_key_for_schema",
]


class KeyType(str, enum.Enum):
    """Data types a DynamoDB primary key may have."""

    S = "S"
    N = "N"
    B = "B"

    def __str__(self) -> str:
        return self.value


class ParseKeyTypeError(ValueError):
    """Raised when a string is not a valid primary key type."""

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Not a valid DynamoDB primary key type: {text}")


def parse_key_type(text: str) -> KeyType:
    """Parse "S", "N" or "B" into a KeyType."""
    try:
        return KeyType(text)
    except ValueError:
        raise ParseKeyTypeError(text) from None


@dataclass(frozen=True)
class Key:
    """A named primary key attribute with its data type."""

    name: str
    kind: KeyType

    def display(self) -> str:
        """Return "<name> (<type>)", e.g. "myPk (S)"."""
        return f"{self.name} ({self.kind})"


def typed_key(pk_or_sk: str, desc: Mapping[str, Any]) -> Optional[Key]:
    """Return the HASH or RANGE key of a base table description, if any."""
    return typed_key_for_schema(
        pk_or_sk, desc["KeySchema"], desc["AttributeDefinitions"]
    )


def typed_key_for_schema(
    pk_or_sk: str,
    key_schema: Sequence[Mapping[str, Any]],
    attribute_definitions: Sequence[Mapping[str, Any]],
) -> Optional[Key]:
    """Return the HASH or RANGE key of a key schema, typed from the attribute definitions."""
    target = next((e for e in key_schema if e["KeyType"] == pk_or_sk), None)
    if target is None:
        return None
    name = target["AttributeName"]
    definition = next(
        (d for d in attribute_definitions if d["AttributeName"] == name), None
    )
    if definition is None:
        raise LookupError(f"primary key '{name}' should be in AttributeDefinitions.")
    return Key(name, parse_key_type(definition["AttributeType"]))