"""Text renderings of DynamoDB items: aligned tables and comma separated lines."""

from __future__ import annotations

import json
import unicodedata
from typing import Any, Iterable, Mapping, Optional, Sequence

from dynkit.attrvalue import AttributeValue
from dynkit.expressions import TableSchema
from dynkit.jsonconv import cell_text, item_to_json, to_json

__all__ = [
    "render_items_table",
    "item_to_csv_line",
    "items_to_csv_lines",
]

_MIN_WIDTH = 2
_PADDING = 2
_ATTRIBUTES_THRESHOLD = 50

Item = Mapping[str, AttributeValue]


def _compact(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _display_width(text: str) -> int:
    width = 0
    for char in text:
        if unicodedata.combining(char):
            continue
        width += 2 if unicodedata.east_asian_width(char) in ("W", "F") else 1
    return width


def _column_widths(lines: Sequence[Sequence[str]]) -> list[list[int]]:
    """Width of every tab-terminated cell, shared across contiguous lines of a column."""
    widths: list[list[int]] = [[] for _ in lines]
    for start, cells in enumerate(lines):
        for col in range(len(widths[start]), len(cells) - 1):
            width = _MIN_WIDTH
            run = 0
            for other in lines[start:]:
                if col + 1 >= len(other):
                    break
                width = max(width, _display_width(other[col]))
                run += 1
            for assigned in widths[start : start + run]:
                assigned.append(width)
    return widths


def _align(text: str) -> str:
    """Align tab separated cells into space padded columns."""
    lines = [line.split("\t") for line in text.split("\n")]
    widths = _column_widths(lines)
    rendered = []
    for cells, line_widths in zip(lines, widths):
        padded = "".join(
            cell + " " * (width - _display_width(cell) + _PADDING)
            for cell, width in zip(cells, line_widths)
        )
        rendered.append(padded + cells[-1])
    return "\n".join(rendered)


def _attributes_cell(rest: Item) -> str:
    full = _compact(item_to_json(rest))
    if len(full) > _ATTRIBUTES_THRESHOLD:
        return full[:_ATTRIBUTES_THRESHOLD] + "..."
    return full


def render_items_table(
    items: Iterable[Item],
    schema: TableSchema,
    selected_attributes: Optional[str] = None,
    keys_only: bool = False,
) -> str:
    """Render items as an aligned table, primary key(s) first.

    Without selected attributes the remaining attributes of each item are
    shown as one compact JSON cell, cut to 50 characters.
    """
    items = list(items)
    if not items:
        return f"No item to show in the table '{schema.name}'\n"

    header = [schema.pk.name]
    if schema.sk is not None:
        header.append(schema.sk.name)
    if not keys_only:
        if selected_attributes is not None:
            header.extend(selected_attributes.split(","))
        else:
            header.append("attributes")

    rows = []
    for item in items:
        rest = dict(item)
        row = [cell_text(rest.pop(schema.pk.name, None))]
        if schema.sk is not None:
            row.append(cell_text(rest.pop(schema.sk.name, None)))
        if rest:
            if selected_attributes is not None:
                row.extend(
                    cell_text(rest.get(attr.strip()))
                    for attr in selected_attributes.split(",")
                )
            elif not keys_only:
                row.append(_attributes_cell(rest))
        rows.append("\t".join(row))

    return _align("\t".join(header) + "\n" + "\n".join(rows) + "\n")


def _required(item: Item, name: str, what: str) -> AttributeValue:
    try:
        return item[name]
    except KeyError:
        raise LookupError(f"{what} '{name}' not found in the item.") from None


def item_to_csv_line(
    item: Item,
    schema: TableSchema,
    attributes_to_append: Optional[Sequence[str]] = None,
    keys_only: bool = False,
) -> str:
    """Convert an item into one comma separated line of JSON values, keys first."""
    values = [to_json(_required(item, schema.pk.name, "Partition key"))]
    if schema.sk is not None:
        values.append(to_json(_required(item, schema.sk.name, "Sort key")))
    if not keys_only and attributes_to_append is not None:
        values.extend(
            to_json(_required(item, attr, "Specified attribute"))
            for attr in attributes_to_append
        )
    return ",".join(_compact(v) for v in values)


def items_to_csv_lines(
    items: Iterable[Item],
    schema: TableSchema,
    attributes_to_append: Optional[Sequence[str]] = None,
    keys_only: bool = False,
) -> str:
    """Convert items into comma separated lines, one line per item."""
    return "\n".join(
        item_to_csv_line(item, schema, attributes_to_append, keys_only)
        for item in items
    )