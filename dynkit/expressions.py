"""Key targets and placeholder expressions for Scan, Query and UpdateItem requests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from dynkit.attrvalue import AttributeValue, scalar_attrval
from dynkit.key import Key

__all__ = [
    "TableSchema",
    "SecondaryIndex",
    "ScanParams",
    "QueryParams",
    "QueryParamsError",
    "NoSuchIndexError",
    "MissingSortKeyError",
    "KeyMismatchError",
    "identify_target",
    "generate_scan_expressions",
    "generate_query_expressions",
    "atomic_counter_expression",
]

PK_NAME_PLACEHOLDER = "#DYNEIN_PKNAME"
SK_NAME_PLACEHOLDER = "#DYNEIN_SKNAME"
PK_VALUE_PLACEHOLDER = ":DYNEIN_PKVAL"
ATTR_NAME_PLACEHOLDER = "#DYNEIN_ATTRNAME"
PARTITION_KEY_CONDITION = f"{PK_NAME_PLACEHOLDER} = {PK_VALUE_PLACEHOLDER}"


@dataclass(frozen=True)
class SecondaryIndex:
    """Key schema of a global or local secondary index."""

    name: str
    pk: Key
    sk: Optional[Key] = None


@dataclass(frozen=True)
class TableSchema:
    """Key schema of a table together with its secondary indexes."""

    name: str
    pk: Key
    sk: Optional[Key] = None
    indexes: Optional[Sequence[SecondaryIndex]] = None


@dataclass
class ScanParams:
    """ProjectionExpression and ExpressionAttributeNames for a Scan request."""

    expression: Optional[str] = None
    names: Optional[dict[str, str]] = None


@dataclass
class QueryParams:
    """KeyConditionExpression and its placeholders for a Query request.

    ``sort_key`` is the sort key of the queried table or index, if it has one.
    """

    expression: str
    names: Optional[dict[str, str]]
    values: dict[str, AttributeValue]
    sort_key: Optional[Key] = field(default=None)


class QueryParamsError(ValueError):
    """Base class for errors building Query parameters."""


class NoSuchIndexError(QueryParamsError):
    """Raised when the requested index does not exist on the table."""

    def __init__(self, index: str, table: str) -> None:
        self.index = index
        self.table = table
        super().__init__(
            f"No index named '{index}' found on the target table '{table}'. "
            "Please describe the table to see indexes the table has."
        )


class MissingSortKeyError(QueryParamsError):
    """Raised when a sort key condition is given for a table or index without one."""

    def __init__(self) -> None:
        super().__init__(
            "You've passed --sort-key (-s) option, "
            "however the target table (or index) doesn't have sort key. "
            "Please describe the table to see key schema."
        )


class KeyMismatchError(ValueError):
    """Raised when a sort key value is given for a table with a partition key only."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(
            "Partition and Sort keys are given to identify an item, "
            f"but table '{table}' uses Partition key only."
        )


def identify_target(
    schema: TableSchema, pval: str, sval: Optional[str] = None
) -> dict[str, AttributeValue]:
    """Build the primary key map that identifies a single item."""
    target = {schema.pk.name: scalar_attrval(schema.pk.kind, pval)}
    if sval is not None:
        if schema.sk is None:
            raise KeyMismatchError(schema.name)
        target[schema.sk.name] = scalar_attrval(schema.sk.kind, sval)
    return target


def generate_scan_expressions(
    schema: TableSchema, attributes: Optional[str] = None, keys_only: bool = False
) -> ScanParams:
    """Build the projection for a Scan.

    Without keys_only and attributes the Scan returns whole items. Otherwise
    the primary key(s) are always projected, followed by the comma separated
    attributes unless keys_only is set.
    """
    if not keys_only and attributes is None:
        return ScanParams()

    names = {PK_NAME_PLACEHOLDER: schema.pk.name}
    projected = [PK_NAME_PLACEHOLDER]
    if schema.sk is not None:
        projected.append(SK_NAME_PLACEHOLDER)
        names[SK_NAME_PLACEHOLDER] = schema.sk.name

    if not keys_only and attributes is not None:
        key_names = {schema.pk.name}
        if schema.sk is not None:
            key_names.add(schema.sk.name)
        extra = (a.strip() for a in attributes.split(","))
        for position, attr in enumerate(a for a in extra if a not in key_names):
            placeholder = f"{ATTR_NAME_PLACEHOLDER}{position}"
            projected.append(placeholder)
            names[placeholder] = attr

    return ScanParams(expression=",".join(projected), names=names)


def generate_query_expressions(
    schema: TableSchema, pval: str, index: Optional[str] = None
) -> QueryParams:
    """Build the partition key condition for a Query on a table or one of its indexes."""
    if index is None:
        pk, sk = schema.pk, schema.sk
    else:
        found = next(
            (idx for idx in schema.indexes or () if idx.name == index), None
        )
        if found is None:
            raise NoSuchIndexError(index, schema.name)
        pk, sk = found.pk, found.sk

    return QueryParams(
        expression=PARTITION_KEY_CONDITION,
        names={PK_NAME_PLACEHOLDER: pk.name},
        values={PK_VALUE_PLACEHOLDER: scalar_attrval(pk.kind, pval)},
        sort_key=sk,
    )


def atomic_counter_expression(target_attr: str) -> str:
    """Return the SET expression that increments an attribute by one."""
    return f"{target_attr} = {target_attr} + 1"