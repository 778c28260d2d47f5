import pytest

from luabind.luabind_datatypes import HostFunction, Table
from luabind.luabind_printer import Printer, short_repr


@pytest.fixture
def p():
    return Printer()


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (1.5, "1.5"),
        (float("inf"), "1/0"),
        ('say "hi"\n', '"say \\"hi\\"\\n"'),
        (HostFunction(print, "print"), "<function print>"),
        (object(), "<userdata object>"),
    ],
)
def test_scalars(p, value, expected):
    assert p.pformat(value) == expected


def test_empty_table(p):
    assert p.pformat(Table()) == "{}"


def test_sequence_then_keyed_entries(p):
    t = Table.from_sequence([1, "two"])
    t["x"] = True
    t[5] = "five"
    t["not a name"] = 0
    assert p.pformat(t) == '{1, "two", x = true, [5] = "five", ["not a name"] = 0}'


def test_nested_tables(p):
    t = Table({"inner": Table.from_sequence([Table()])})
    assert p.pformat(t) == "{inner = {{}}}"


def test_cycle_is_marked(p):
    t = Table({"a": 1})
    t["self"] = t
    assert p.pformat(t) == "{a = 1, self = <cycle>}"


def test_shared_reference_printed_twice(p):
    shared = Table.from_sequence([1])
    assert p.pformat(Table({"x": shared, "y": shared})) == "{x = {1}, y = {1}}"


def test_table_repr_uses_printer():
    assert repr(Table({"k": "v"})) == '{k = "v"}'


def test_short_repr_truncates():
    t = Table.from_sequence(list(range(1, 20)))
    assert short_repr(t) == "{1, 2, 3, 4, ...}"
    assert short_repr("x" * 100).endswith("...")
    assert len(short_repr("x" * 100)) == 60
