import pytest

from dynkit.key import (
    Key,
    KeyType,
    ParseKeyTypeError,
    parse_key_type,
    typed_key,
    typed_key_for_schema,
)


def _desc(with_sk=True):
    key_schema = [{"AttributeName": "pk", "KeyType": "HASH"}]
    attrs = [{"AttributeName": "pk", "AttributeType": "S"}]
    if with_sk:
        key_schema.append({"AttributeName": "sk", "KeyType": "RANGE"})
        attrs.append({"AttributeName": "sk", "AttributeType": "N"})
    return {"KeySchema": key_schema, "AttributeDefinitions": attrs}


@pytest.mark.parametrize("text", ["S", "N", "B"])
def test_parse_key_type_round_trip(text):
    kind = parse_key_type(text)
    assert kind is KeyType(text)
    assert str(kind) == text


def test_parse_key_type_rejects_unknown():
    with pytest.raises(ParseKeyTypeError) as exc:
        parse_key_type("SS")
    assert str(exc.value) == "Not a valid DynamoDB primary key type: SS"


def test_parse_key_type_error_is_value_error():
    with pytest.raises(ValueError):
        parse_key_type("s")


def test_key_display():
    assert Key("myPk", KeyType.S).display() == "myPk (S)"


def test_typed_key_hash_and_range():
    desc = _desc()
    assert typed_key("HASH", desc) == Key("pk", KeyType.S)
    assert typed_key("RANGE", desc) == Key("sk", KeyType.N)


def test_typed_key_without_sort_key():
    assert typed_key("RANGE", _desc(with_sk=False)) is None


def test_typed_key_for_schema_index():
    ks = [
        {"AttributeName": "gsi", "KeyType": "HASH"},
        {"AttributeName": "pk", "KeyType": "RANGE"},
    ]
    attrs = [
        {"AttributeName": "pk", "AttributeType": "S"},
        {"AttributeName": "gsi", "AttributeType": "B"},
    ]
    assert typed_key_for_schema("HASH", ks, attrs).display() == "gsi (B)"
    assert typed_key_for_schema("RANGE", ks, attrs).display() == "pk (S)"


def test_typed_key_for_schema_missing_definition():
    ks = [{"AttributeName": "pk", "KeyType": "HASH"}]
    with pytest.raises(LookupError):
        typed_key_for_schema("HASH", ks, [])


def test_typed_key_for_schema_invalid_type():
    ks = [{"AttributeName": "pk", "KeyType": "HASH"}]
    attrs = [{"AttributeName": "pk", "AttributeType": "X"}]
    with pytest.raises(ParseKeyTypeError):
        typed_key_for_schema("HASH", ks, attrs)