import json

import pytest

from dynkit.attrvalue import (
    AttributeValue,
    AttrType,
    from_json,
    scalar_attrval,
    set_attrval,
)
from dynkit.key import KeyType


def S(v):
    return AttributeValue(AttrType.S, v)


def N(v):
    return AttributeValue(AttrType.N, v)


STRING_LIST = json.loads('["+44 1234567", "+44 2345678"]')
NUMBER_LIST = json.loads("[12345, 67890]")
MIX_LIST = json.loads('["text", 1234]')


def test_string_list_without_inference_is_list():
    assert from_json(STRING_LIST, False) == AttributeValue(
        AttrType.L, [S("+44 1234567"), S("+44 2345678")]
    )


def test_string_list_with_inference_is_string_set():
    assert from_json(STRING_LIST, True) == AttributeValue(
        AttrType.SS, ["+44 1234567", "+44 2345678"]
    )


def test_number_list_without_inference_is_list():
    assert from_json(NUMBER_LIST, False) == AttributeValue(
        AttrType.L, [N("12345"), N("67890")]
    )


def test_number_list_with_inference_is_number_set():
    assert from_json(NUMBER_LIST, True) == AttributeValue(
        AttrType.NS, ["12345", "67890"]
    )


@pytest.mark.parametrize("flag", [True, False])
def test_mixed_list_is_always_list(flag):
    assert from_json(MIX_LIST, flag) == AttributeValue(
        AttrType.L, [S("text"), N("1234")]
    )


def test_scalars():
    assert from_json("abc") == S("abc")
    assert from_json(12) == N("12")
    assert from_json(1.5) == N("1.5")
    assert from_json(True) == AttributeValue(AttrType.BOOL, True)
    assert from_json(None) == AttributeValue(AttrType.NULL, True)


def test_nested_map():
    data = json.loads('{"a": {"b": [1, "x"]}, "c": false}')
    assert from_json(data) == AttributeValue(
        AttrType.M,
        {
            "a": AttributeValue(
                AttrType.M, {"b": AttributeValue(AttrType.L, [N("1"), S("x")])}
            ),
            "c": AttributeValue(AttrType.BOOL, False),
        },
    )


def test_inference_applies_inside_maps():
    assert from_json({"tags": ["a", "b"]}, True) == AttributeValue(
        AttrType.M, {"tags": AttributeValue(AttrType.SS, ["a", "b"])}
    )


def test_empty_list_with_inference_is_empty_string_set():
    assert from_json([], True) == AttributeValue(AttrType.SS, [])


def test_bool_list_is_not_number_set():
    assert from_json([True, False], True).type is AttrType.L


def test_float_list_with_inference_raises():
    with pytest.raises(ValueError):
        from_json([1.5, 2.5], True)


def test_scalar_attrval_string_and_number():
    assert scalar_attrval("S", "abc") == S("abc")
    assert scalar_attrval("N", "42") == N("42")
    assert scalar_attrval(KeyType.N, "7") == N("7")


def test_scalar_attrval_unknown_type():
    with pytest.raises(ValueError, match="Unknown DynamoDB Data Type: B"):
        scalar_attrval("B", "x")


def test_set_attrval_number_set():
    assert set_attrval("NS", [1, -2]) == AttributeValue(AttrType.NS, ["1", "-2"])


def test_set_attrval_rejects_bad_elements():
    with pytest.raises(ValueError):
        set_attrval("SS", ["a", 1])
    with pytest.raises(ValueError):
        set_attrval("NS", [2**63])


def test_set_attrval_unknown_type():
    with pytest.raises(ValueError, match="Unknown DynamoDB Data Type: BS"):
        set_attrval("BS", [])


def test_attribute_value_rejects_wrong_payload():
    with pytest.raises(TypeError):
        AttributeValue(AttrType.N, 5)
    with pytest.raises(TypeError):
        AttributeValue(AttrType.L, ["raw"])


def test_attribute_value_accepts_type_name():
    assert AttributeValue("S", "x").type is AttrType.S


def test_from_json_rejects_non_json():
    with pytest.raises(TypeError):
        from_json(object())