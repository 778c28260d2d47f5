"""
Host value -> JSON value conversion.

Tables become JSON arrays only when the host length operator reports n > 0
and keys 1..n are all present; every other table becomes a JSON object
keyed by the string form of its keys.
"""

from typing import Any, List, Optional, Set

from luabind import luabind_config
from luabind.luabind_datatypes import INT64_MAX, INT64_MIN, Table, host_type_name
from luabind.luabind_errors import (
    CyclicValueError,
    IntegerRangeError,
    KeyTypeError,
    NestingDepthError,
    UnsupportedValueTypeError,
)
from luabind.luabind_printer import short_repr


class ValueConverter:
    """Converts one host value graph into a fresh JSON value.

    The input is only read. Any failure raises before a result exists, so
    callers never see a partially converted value.
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = luabind_config.max_depth(max_depth)

    def convert(self, value: Any) -> Any:
        try:
            return self._convert(value, [], set())
        except RecursionError:
            raise NestingDepthError("tables nested deeper than the interpreter allows") from None

    def _convert(self, value: Any, path: List[Any], active: Set[int]) -> Any:
        match value:
            case None:
                return None
            case bool():
                return value
            case int():
                if not INT64_MIN <= value <= INT64_MAX:
                    raise IntegerRangeError(f"integer {value} is outside the host integer range", path)
                return value
            case float() | str():
                return value
            case Table():
                return self._convert_table(value, path, active)
            case _:
                raise UnsupportedValueTypeError(
                    f"unsupported {host_type_name(value)} value {short_repr(value)}", path
                )

    def _convert_table(self, table: Table, path: List[Any], active: Set[int]) -> Any:
        if id(table) in active:
            raise CyclicValueError("table contains itself", path)
        if len(path) >= self.max_depth:
            raise NestingDepthError(f"tables nested deeper than {self.max_depth} levels", path)
        active.add(id(table))
        try:
            length = table.border()
            if length > 0 and self._is_sequence(table, length):
                return self._convert_array(table, length, path, active)
            return self._convert_object(table, path, active)
        finally:
            active.discard(id(table))

    @staticmethod
    def _is_sequence(table: Table, length: int) -> bool:
        # The reported length may span holes; trust it only once 1..n check out.
        for i in range(1, length + 1):
            if table[i] is None:
                return False
        return True

    def _convert_array(self, table: Table, length: int, path: List[Any], active: Set[int]) -> list:
        out = []
        for i in range(1, length + 1):
            path.append(i - 1)
            out.append(self._convert(table[i], path, active))
            path.pop()
        return out

    def _convert_object(self, table: Table, path: List[Any], active: Set[int]) -> dict:
        out = {}
        for key, value in table.items():
            name = self._coerce_key(key, path)
            path.append(name)
            # Colliding keys (1 and "1") resolve to the one visited last
            out[name] = self._convert(value, path, active)
            path.pop()
        return out

    @staticmethod
    def _coerce_key(key: Any, path: List[Any]) -> str:
        match key:
            case str():
                return key
            case bool():
                pass
            case int():
                return str(key)
        raise KeyTypeError(
            f"invalid table key type: {host_type_name(key)} key {short_repr(key)}", path
        )


def to_json(value: Any, *, max_depth: Optional[int] = None) -> Any:
    """Convert a host value to its JSON value."""
    return ValueConverter(max_depth=max_depth).convert(value)


__all__ = ["ValueConverter", "to_json"]
