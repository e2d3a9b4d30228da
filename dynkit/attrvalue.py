"""DynamoDB attribute values and their construction from plain JSON data."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

__all__ = [
    "AttrType",
    "AttributeValue",
    "scalar_attrval",
    "set_attrval",
    "from_json",
]

_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class AttrType(str, enum.Enum):
    """DynamoDB attribute data type descriptors."""

    S = "S"
    N = "N"
    B = "B"
    BOOL = "BOOL"
    NULL = "NULL"
    SS = "SS"
    NS = "NS"
    BS = "BS"
    M = "M"
    L = "L"

    def __str__(self) -> str:
        return self.value


def _check_value(kind: AttrType, value: Any) -> None:
    if kind in (AttrType.S, AttrType.N):
        ok = isinstance(value, str)
    elif kind is AttrType.B:
        ok = isinstance(value, (bytes, bytearray))
    elif kind is AttrType.BOOL:
        ok = isinstance(value, bool)
    elif kind is AttrType.NULL:
        ok = value is True
    elif kind in (AttrType.SS, AttrType.NS):
        ok = isinstance(value, list) and all(isinstance(v, str) for v in value)
    elif kind is AttrType.BS:
        ok = isinstance(value, list) and all(
            isinstance(v, (bytes, bytearray)) for v in value
        )
    elif kind is AttrType.M:
        ok = isinstance(value, dict) and all(
            isinstance(k, str) and isinstance(v, AttributeValue)
            for k, v in value.items()
        )
    else:
        ok = isinstance(value, list) and all(
            isinstance(v, AttributeValue) for v in value
        )
    if not ok:
        raise TypeError(f"invalid value for DynamoDB type {kind}: {value!r}")


@dataclass(frozen=True, eq=True)
class AttributeValue:
    """A typed DynamoDB attribute value.

    Numbers are kept as strings, as DynamoDB transmits them.
    Maps hold AttributeValue entries; lists hold AttributeValue elements.
    """

    type: AttrType
    value: Any

    __hash__ = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", AttrType(self.type))
        _check_value(self.type, self.value)


def scalar_attrval(key_type: str, value: str) -> AttributeValue:
    """Build an S or N attribute value from a key type and its text."""
    kind = str(key_type)
    if kind == "S":
        return AttributeValue(AttrType.S, str(value))
    if kind == "N":
        return AttributeValue(AttrType.N, str(value))
    raise ValueError(f"Unknown DynamoDB Data Type: {kind}")


def set_attrval(set_type: str, values: Iterable[Any]) -> AttributeValue:
    """Build an SS or NS attribute value from JSON strings or integers."""
    kind = str(set_type)
    items = list(values)
    if kind == "SS":
        for v in items:
            if not isinstance(v, str):
                raise ValueError(f"String set element is not a string: {v!r}")
        return AttributeValue(AttrType.SS, list(items))
    if kind == "NS":
        numbers = []
        for v in items:
            if (
                isinstance(v, bool)
                or not isinstance(v, int)
                or not _I64_MIN <= v <= _I64_MAX
            ):
                raise ValueError(
                    f"Number set element is not a 64-bit integer: {v!r}"
                )
            numbers.append(str(v))
        return AttributeValue(AttrType.NS, numbers)
    raise ValueError(f"Unknown DynamoDB Data Type: {kind}")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _number_text(value: Any) -> str:
    return str(value) if isinstance(value, int) else repr(value)


def from_json(value: Any, enable_set_inference: bool = False) -> AttributeValue:
    """Convert a plain JSON value into an AttributeValue.

    With set inference, arrays made only of strings become SS and arrays
    made only of numbers become NS; any other array becomes L.
    """
    if isinstance(value, str):
        return AttributeValue(AttrType.S, value)
    if isinstance(value, bool):
        return AttributeValue(AttrType.BOOL, value)
    if _is_number(value):
        return AttributeValue(AttrType.N, _number_text(value))
    if value is None:
        return AttributeValue(AttrType.NULL, True)
    if isinstance(value, Mapping):
        return AttributeValue(
            AttrType.M,
            {str(k): from_json(v, enable_set_inference) for k, v in value.items()},
        )
    if isinstance(value, (list, tuple)):
        if enable_set_inference and all(isinstance(v, str) for v in value):
            return set_attrval("SS", value)
        if enable_set_inference and all(_is_number(v) for v in value):
            return set_attrval("NS", value)
        return AttributeValue(
            AttrType.L, [from_json(v, enable_set_inference) for v in value]
        )
    raise TypeError(f"not a JSON value: {value!r}")