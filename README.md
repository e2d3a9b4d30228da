# dynkit

Helpers for working with DynamoDB data from Python: typed attribute values,
primary key schemas, YAML table descriptions, placeholder expressions for
Scan and Query requests, and plain-text rendering of items.

All functions work on plain Python data: table descriptions are the
dictionaries DescribeTable returns, items are mappings of attribute names to
`AttributeValue` objects.

## Install

```
pip install dynkit
```

The `test` extra installs pytest for running the test suite.

## Modules

### `dynkit.key`

- `KeyType`: the key data types `S`, `N` and `B`.
- `parse_key_type(text)`: parses `"S"`, `"N"` or `"B"`; anything else raises
  `ParseKeyTypeError`.
- `Key(name, kind)`: a typed key; `Key.display()` returns e.g. `"myPk (S)"`.
- `typed_key(pk_or_sk, desc)` and `typed_key_for_schema(pk_or_sk,
  key_schema, attribute_definitions)`: find the `"HASH"` or `"RANGE"` key of
  a table description or key schema, or `None` if there is none.

### `dynkit.table`

- `Mode`: `Mode.PROVISIONED` (`"Provisioned"`) or `Mode.ON_DEMAND`
  (`"OnDemand"`); `Mode.billing_mode()` gives `"PROVISIONED"` or
  `"PAY_PER_REQUEST"`.
- `extract_mode(billing_mode_summary)`: a missing summary means provisioned.
- `epoch_to_rfc3339(epoch)`: whole seconds to an RFC 3339 UTC timestamp.
- `format_table_description(region, desc)`: a DescribeTable result as YAML
  with the fields `name`, `region`, `status`, `schema`, `mode`, `capacity`,
  `gsi`, `lsi`, `stream`, `count`, `size_bytes` and `created_at`;
  `describe_table(region, desc)` prints it.
- `generate_essential_key_definitions(given_keys)`: turns strings such as
  `["myPk,S", "mySk,N"]` into `KeySchema` and `AttributeDefinitions` lists.
  The first key is the partition key, a missing type means `S`, and a string
  with more than one comma raises `KeyDefinitionError`.

### `dynkit.attrvalue`

- `AttrType` and `AttributeValue(type, value)`: a typed value, checked on
  construction. Numbers are kept as strings.
- `scalar_attrval(key_type, value)`: an `S` or `N` value.
- `set_attrval(set_type, values)`: an `SS` set from strings or an `NS` set
  from 64-bit integers.
- `from_json(value, enable_set_inference)`: converts plain JSON data. With
  set inference, lists of only strings become `SS` and lists of only numbers
  become `NS`; other lists become `L`.

### `dynkit.jsonconv`

- `to_json`, `item_to_json`, `items_to_json`: back to plain JSON data.
  Binary values are replaced by a placeholder string.
- `strip_attrval`, `strip_item`, `strip_items`: to DynamoDB JSON such as
  `{"S": "abc"}`, with binary data in base64.
- `str_to_json_num(text)`: the text of a DynamoDB number as `int` or `float`.
- `attrval_type(attrval)`: a readable type name such as `"Set (String)"`.
- `cell_text(attrval)`: short single-line text for a table cell; binary
  values, lists and maps are shown as `(snip)`.

### `dynkit.expressions`

- `TableSchema(name, pk, sk, indexes)` and `SecondaryIndex(name, pk, sk)`.
- `identify_target(schema, pval, sval)`: the key map for one item; a sort
  key value for a table without a sort key raises `KeyMismatchError`.
- `generate_scan_expressions(schema, attributes, keys_only)`: a `ScanParams`
  with the ProjectionExpression and ExpressionAttributeNames.
- `generate_query_expressions(schema, pval, index)`: a `QueryParams` with
  the partition key condition, its placeholders and the sort key of the
  table or index. An unknown index raises `NoSuchIndexError`.
- `MissingSortKeyError`: the error for a sort key condition on a table or
  index without a sort key; like `NoSuchIndexError` it derives from
  `QueryParamsError`.
- `atomic_counter_expression(target_attr)`: `"<attr> = <attr> + 1"`.

### `dynkit.render`

- `render_items_table(items, schema, selected_attributes, keys_only)`:
  returns the items as space-aligned columns, keys first; without selected
  attributes the other attributes form one JSON cell cut to 50 characters.
- `item_to_csv_line` and `items_to_csv_lines`: comma separated JSON values,
  keys first, then the requested attributes.

## Example

```python
from dynkit.attrvalue import from_json
from dynkit.jsonconv import strip_attrval, to_json

value = from_json(["+44 1234567", "+44 2345678"], True)
strip_attrval(value)   # {"SS": ["+44 1234567", "+44 2345678"]}
to_json(value)         # ["+44 1234567", "+44 2345678"]
```

```python
from dynkit.expressions import TableSchema, generate_query_expressions
from dynkit.key import Key, KeyType

schema = TableSchema("Music", Key("Artist", KeyType.S), Key("SongTitle", KeyType.S))
params = generate_query_expressions(schema, "Acme")
params.expression   # "#DYNEIN_PKNAME = :DYNEIN_PKVAL"
params.names        # {"#DYNEIN_PKNAME": "Artist"}
```

## What it does not do

- It does not talk to DynamoDB: there is no client, no credentials handling
  and no request sending. It builds and renders the data that such requests
  carry and return.
- It has no command-line program.
- It does not parse sort key conditions (`between`, `begins_with`, `<` and
  the like) or SET/REMOVE update expressions; `QueryParams.sort_key` tells a
  caller which key such a condition would apply to.