"""
JSON value -> host value conversion.
"""

from typing import Any, List, Optional

from luabind import luabind_config
from luabind.luabind_datatypes import INT64_MAX, INT64_MIN, UINT64_MAX, Table
from luabind.luabind_errors import IntegerRangeError, NestingDepthError, UnsupportedValueTypeError
from luabind.luabind_printer import short_repr


class JsonEmitter:
    """Builds fresh host values from a JSON value.

    Arrays become tables keyed 1..n (a JSON null leaves a hole, as assigning
    nil does in the host); objects become tables with string keys, written in
    the object's order.
    """

    def __init__(self, max_depth: Optional[int] = None):
        self.max_depth = luabind_config.max_depth(max_depth)

    def emit(self, value: Any) -> Any:
        try:
            return self._emit(value, [])
        except RecursionError:
            raise NestingDepthError("JSON nested deeper than the interpreter allows") from None

    def _emit(self, value: Any, path: List[Any]) -> Any:
        match value:
            case None:
                return None
            case bool():
                return value
            case int():
                return self._emit_int(value, path)
            case float() | str():
                return value
            case list() | tuple():
                self._check_depth(path)
                table = Table()
                for i, item in enumerate(value):
                    path.append(i)
                    table[i + 1] = self._emit(item, path)
                    path.pop()
                return table
            case dict():
                self._check_depth(path)
                table = Table()
                for key, item in value.items():
                    if not isinstance(key, str):
                        raise UnsupportedValueTypeError(
                            f"JSON object key must be a string, got {type(key).__name__} {key!r}", path
                        )
                    path.append(key)
                    table[key] = self._emit(item, path)
                    path.pop()
                return table
            case _:
                raise UnsupportedValueTypeError(
                    f"unsupported JSON value of type {type(value).__name__}: {short_repr(value)}", path
                )

    @staticmethod
    def _emit_int(value: int, path: List[Any]) -> int:
        if INT64_MIN <= value <= INT64_MAX:
            return value
        if INT64_MAX < value <= UINT64_MAX:
            raise IntegerRangeError(f"unsigned integer {value} does not fit a host integer", path)
        raise IntegerRangeError(f"integer {value} is outside the JSON number range", path)

    def _check_depth(self, path: List[Any]):
        if len(path) >= self.max_depth:
            raise NestingDepthError(f"JSON nested deeper than {self.max_depth} levels", path)


def from_json(value: Any, *, max_depth: Optional[int] = None) -> Any:
    """Convert a JSON value to a host value."""
    return JsonEmitter(max_depth=max_depth).emit(value)


__all__ = ["JsonEmitter", "from_json"]
