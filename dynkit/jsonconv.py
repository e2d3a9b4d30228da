"""Conversions from DynamoDB attribute values to plain JSON and display text."""

from __future__ import annotations

import base64
import json
import math
import re
from typing import Any, Iterable, Mapping, Optional, Union

from dynkit.attrvalue import AttributeValue, AttrType

__all__ = [
    "str_to_json_num",
    "to_json",
    "item_to_json",
    "items_to_json",
    "strip_attrval",
    "strip_item",
    "strip_items",
    "attrval_type",
    "cell_text",
]

UNSUPPORTED_JSON = "<<<JSON output doesn't support this type attributes>>>"

_U64_MAX = 2**64 - 1
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")
_FLOAT_RE = re.compile(
    r"[+-]?(?:inf|infinity|nan|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?)",
    re.IGNORECASE,
)

_TYPE_NAMES = {
    AttrType.S: "String",
    AttrType.N: "Number",
    AttrType.B: "Binary",
    AttrType.BOOL: "Boolian",
    AttrType.NULL: "Null",
    AttrType.SS: "Set (String)",
    AttrType.NS: "Set (Number)",
    AttrType.BS: "Set (Binary)",
    AttrType.M: "Map",
    AttrType.L: "List",
}

Item = Mapping[str, AttributeValue]


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def str_to_json_num(text: str) -> Union[int, float, None]:
    """Parse the text of a DynamoDB number into a JSON number.

    Non-negative integers that fit in 64 bits stay integers; anything else
    that reads as a floating-point number becomes a float. Non-finite
    floats have no JSON form and become None.
    """
    if _UNSIGNED_RE.fullmatch(text):
        number = int(text)
        if number <= _U64_MAX:
            return number
    if _FLOAT_RE.fullmatch(text):
        number = float(text)
        return number if math.isfinite(number) else None
    raise ValueError(f"Failed to parse DynamoDB 'N' typed value: {text!r}")


def to_json(attrval: AttributeValue) -> Any:
    """Convert an attribute value into plain JSON data."""
    kind, value = attrval.type, attrval.value
    if kind in (AttrType.S, AttrType.BOOL):
        return value
    if kind is AttrType.N:
        return str_to_json_num(value)
    if kind is AttrType.NULL:
        return None
    if kind is AttrType.SS:
        return list(value)
    if kind is AttrType.NS:
        return [str_to_json_num(v) for v in value]
    if kind in (AttrType.B, AttrType.BS):
        return UNSUPPORTED_JSON
    if kind is AttrType.M:
        return {k: to_json(v) for k, v in value.items()}
    return [to_json(v) for v in value]


def item_to_json(item: Item) -> dict[str, Any]:
    """Convert an item into a plain JSON object."""
    return {name: to_json(value) for name, value in item.items()}


def items_to_json(items: Iterable[Item]) -> list[dict[str, Any]]:
    """Convert items into a list of plain JSON objects."""
    return [item_to_json(item) for item in items]


def _b64(data: bytes) -> str:
    return base64.b64encode(bytes(data)).decode("ascii")


def strip_attrval(attrval: AttributeValue) -> dict[str, Any]:
    """Convert an attribute value into DynamoDB JSON, e.g. {"S": "abc"}."""
    kind, value = attrval.type, attrval.value
    if kind is AttrType.NULL:
        payload: Any = True
    elif kind in (AttrType.SS, AttrType.NS):
        payload = list(value)
    elif kind is AttrType.B:
        payload = _b64(value)
    elif kind is AttrType.BS:
        payload = [_b64(v) for v in value]
    elif kind is AttrType.M:
        payload = {k: strip_attrval(v) for k, v in value.items()}
    elif kind is AttrType.L:
        payload = [strip_attrval(v) for v in value]
    else:
        payload = value
    return {kind.value: payload}


def strip_item(item: Item) -> dict[str, dict[str, Any]]:
    """Convert an item into DynamoDB JSON."""
    return {name: strip_attrval(value) for name, value in item.items()}


def strip_items(items: Iterable[Item]) -> list[dict[str, dict[str, Any]]]:
    """Convert items into a list of DynamoDB JSON objects."""
    return [strip_item(item) for item in items]


def attrval_type(attrval: AttributeValue) -> Optional[str]:
    """Return the human-readable name of an attribute value's data type."""
    return _TYPE_NAMES.get(attrval.type)


def cell_text(attrval: Optional[AttributeValue]) -> str:
    """Render an attribute value for a single-line table cell.

    Binary values, binary sets, lists and maps are not shown.
    """
    if attrval is None:
        return ""
    kind, value = attrval.type, attrval.value
    if kind in (AttrType.S, AttrType.N):
        return value
    if kind is AttrType.BOOL:
        return "true" if value else "false"
    if kind is AttrType.SS:
        return _compact(list(value))
    if kind is AttrType.NS:
        return _compact([str_to_json_num(v) for v in value])
    if kind is AttrType.NULL:
        return "null"
    return "(snip)"