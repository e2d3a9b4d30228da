"""DynamoDB attribute values, key schemas, table descriptions, expressions and item rendering."""

__version__ = "0.1.0"

__all__ = ["attrvalue", "expressions", "jsonconv", "key", "render", "table"]