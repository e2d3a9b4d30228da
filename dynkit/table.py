"""Table description rendering and key definition helpers."""

from __future__ import annotations

import enum
from datetime import datetime, timezone
from typing import Any, Mapping, Optional, Sequence

import yaml

from dynkit.key import typed_key, typed_key_for_schema

__all__ = [
    "Mode",
    "KeyDefinitionError",
    "describe_table",
    "format_table_description",
    "generate_essential_key_definitions",
    "extract_mode",
    "epoch_to_rfc3339",
]

_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class _Dumper(yaml.SafeDumper):
    """Safe dumper that leaves timestamp-like strings unquoted."""


_Dumper.yaml_implicit_resolvers = {
    first: [(tag, rx) for tag, rx in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeDumper.yaml_implicit_resolvers.items()
}


class Mode(enum.Enum):
    """Capacity mode of a table."""

    PROVISIONED = "Provisioned"
    ON_DEMAND = "OnDemand"

    def billing_mode(self) -> str:
        """Return the DynamoDB BillingMode value for this mode."""
        return "PROVISIONED" if self is Mode.PROVISIONED else "PAY_PER_REQUEST"


class KeyDefinitionError(ValueError):
    """Raised when a --keys value is malformed."""


def extract_mode(billing_mode_summary: Optional[Mapping[str, Any]]) -> Mode:
    """Map a BillingModeSummary to Provisioned or OnDemand."""
    if billing_mode_summary is None:
        return Mode.PROVISIONED
    if billing_mode_summary["BillingMode"] == "PAY_PER_REQUEST":
        return Mode.ON_DEMAND
    return Mode.PROVISIONED


def epoch_to_rfc3339(epoch: float) -> str:
    """Format whole seconds since the epoch as an RFC 3339 UTC timestamp."""
    return datetime.fromtimestamp(int(epoch), tz=timezone.utc).isoformat()


def _epoch_seconds(value: Any) -> float:
    if isinstance(value, datetime):
        return value.timestamp()
    return float(value)


def _capacity(mode: Mode, throughput: Optional[Mapping[str, Any]]) -> Optional[dict]:
    if mode is Mode.ON_DEMAND:
        return None
    if throughput is None:
        raise ValueError("provisioned description has no ProvisionedThroughput")
    return {
        "wcu": int(throughput["WriteCapacityUnits"]),
        "rcu": int(throughput["ReadCapacityUnits"]),
    }


def _schema(pk, sk) -> dict:
    if pk is None:
        raise ValueError("key schema has no partition key")
    return {"pk": pk.display(), "sk": sk.display() if sk else None}


def _secondary_indexes(
    mode: Mode,
    attr_defs: Sequence[Mapping[str, Any]],
    indexes: Optional[Sequence[Mapping[str, Any]]],
    has_own_capacity: bool,
) -> Optional[list]:
    if indexes is None:
        return None
    result = []
    for idx in indexes:
        ks = idx["KeySchema"]
        result.append(
            {
                "name": idx["IndexName"],
                "schema": _schema(
                    typed_key_for_schema("HASH", ks, attr_defs),
                    typed_key_for_schema("RANGE", ks, attr_defs),
                ),
                "capacity": (
                    _capacity(mode, idx.get("ProvisionedThroughput"))
                    if has_own_capacity
                    else None
                ),
            }
        )
    return result


def _stream(desc: Mapping[str, Any]) -> Optional[str]:
    arn = desc.get("LatestStreamArn")
    if arn is None:
        return None
    return f"{arn} ({desc['StreamSpecification']['StreamViewType']})"


def format_table_description(region: str, desc: Mapping[str, Any]) -> str:
    """Render a DescribeTable result as readable YAML."""
    mode = extract_mode(desc.get("BillingModeSummary"))
    attr_defs = desc["AttributeDefinitions"]
    document = {
        "name": desc["TableName"],
        "region": region,
        "status": desc["TableStatus"],
        "schema": _schema(typed_key("HASH", desc), typed_key("RANGE", desc)),
        "mode": mode.value,
        "capacity": _capacity(mode, desc.get("ProvisionedThroughput")),
        "gsi": _secondary_indexes(
            mode, attr_defs, desc.get("GlobalSecondaryIndexes"), True
        ),
        "lsi": _secondary_indexes(
            mode, attr_defs, desc.get("LocalSecondaryIndexes"), False
        ),
        "stream": _stream(desc),
        "count": int(desc["ItemCount"]),
        "size_bytes": int(desc["TableSizeBytes"]),
        "created_at": epoch_to_rfc3339(_epoch_seconds(desc["CreationDateTime"])),
    }
    return yaml.dump(
        document,
        Dumper=_Dumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
    )


def describe_table(region: str, desc: Mapping[str, Any]) -> None:
    """Print a table description as YAML."""
    print(format_table_description(region, desc))


def generate_essential_key_definitions(
    given_keys: Sequence[str],
) -> tuple[list[dict], list[dict]]:
    """Build KeySchema and AttributeDefinitions from "name[,type]" strings.

    The first key is the partition key, any later one a sort key; a missing
    type defaults to S.
    """
    key_schema: list[dict] = []
    attribute_definitions: list[dict] = []
    for position, key_str in enumerate(given_keys):
        parts = key_str.split(",")
        if len(parts) >= 3:
            raise KeyDefinitionError(
                f"Invalid format for --keys option: '{key_str}'. "
                "Valid format is '--keys myPk,S mySk,N'"
            )
        name = parts[0]
        key_schema.append(
            {"AttributeName": name, "KeyType": "HASH" if position == 0 else "RANGE"}
        )
        attribute_definitions.append(
            {
                "AttributeName": name,
                "AttributeType": parts[1].upper() if len(parts) == 2 else "S",
            }
        )
    return key_schema, attribute_definitions