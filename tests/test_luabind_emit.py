import pytest

from luabind.luabind_convert import to_json
from luabind.luabind_datatypes import Table
from luabind.luabind_emit import JsonEmitter, from_json
from luabind.luabind_errors import IntegerRangeError, NestingDepthError, UnsupportedValueTypeError


@pytest.mark.parametrize("value", [None, True, False, 0, 42, -(2 ** 63), 2 ** 63 - 1, 2.5, "", "héllo"])
def test_scalars_map_directly(value):
    out = from_json(value)
    assert out == value
    assert type(out) is type(value)


def test_string_with_nul_is_kept_whole():
    assert from_json("a\0b") == "a\0b"


def test_array_becomes_one_based_table():
    t = from_json(["a", "b", "c"])
    assert isinstance(t, Table)
    assert t.border() == 3
    assert [t[1], t[2], t[3]] == ["a", "b", "c"]
    assert t[0] is None


def test_tuple_is_an_array():
    t = from_json(("x",))
    assert t[1] == "x"


def test_object_becomes_string_keyed_table_in_json_order():
    t = from_json({"b": 1, "a": 2, "1": 3})
    assert list(t.keys()) == ["b", "a", "1"]
    assert t["1"] == 3
    assert t[1] is None


def test_null_in_array_leaves_hole():
    t = from_json([1, None, 3])
    assert t.count() == 2
    assert t[2] is None
    assert t[3] == 3
    # the hole turns the table into an object on the way back
    assert to_json(t) == {"1": 1, "3": 3}


def test_null_object_member_is_absent():
    t = from_json({"a": None, "b": 1})
    assert list(t.keys()) == ["b"]


def test_nested_structures():
    t = from_json({"rows": [{"x": 1}, {"x": 2}], "meta": {"ok": True}})
    assert t["rows"][2]["x"] == 2
    assert t["meta"]["ok"] is True


def test_empty_array_and_object_are_empty_tables():
    assert from_json([]).count() == 0
    assert from_json({}).count() == 0


@pytest.mark.parametrize(
    "value",
    [
        ["a", 1, 2.5, True, [1, 2], {"k": "v"}],
        {"name": "x", "items": [1, 2, 3], "nested": {"deep": [{"a": 1}]}},
    ],
)
def test_round_trip_through_host_values(value):
    assert to_json(from_json(value)) == value

# --- Integer range ---

def test_unsigned_above_signed_range_fails():
    with pytest.raises(IntegerRangeError, match="unsigned integer 9223372036854775808"):
        from_json(2 ** 63)
    with pytest.raises(IntegerRangeError, match="unsigned"):
        from_json({"n": 2 ** 64 - 1})


def test_integer_beyond_json_range_fails():
    with pytest.raises(IntegerRangeError, match="outside the JSON number range"):
        from_json(2 ** 64)
    with pytest.raises(IntegerRangeError):
        from_json(-(2 ** 63) - 1)

# --- Values outside the JSON model ---

@pytest.mark.parametrize("value", [{1, 2}, object(), b"bytes"])
def test_non_json_values_rejected(value):
    with pytest.raises(UnsupportedValueTypeError, match="unsupported JSON value"):
        from_json({"payload": [value]})


def test_non_string_object_key_rejected():
    with pytest.raises(UnsupportedValueTypeError, match=r"key must be a string.*at \$\.outer"):
        from_json({"outer": {1: "x"}})


def test_depth_limit():
    value = [[[[]]]]
    assert JsonEmitter(max_depth=4).emit(value)[1][1][1].count() == 0
    with pytest.raises(NestingDepthError):
        JsonEmitter(max_depth=3).emit(value)


def test_host_sequence_round_trip():
    inner = Table({"k": "v"})
    original = Table.from_sequence(["a", 2, 3.5, False, inner])
    back = from_json(to_json(original))
    assert isinstance(back, Table)
    assert back.count() == original.count() == 5
    assert list(back.keys()) == [1, 2, 3, 4, 5]
    for i in range(1, 5):
        assert back[i] == original[i]
        assert type(back[i]) is type(original[i])
    assert back[5] is not inner
    assert list(back[5].items()) == [("k", "v")]
