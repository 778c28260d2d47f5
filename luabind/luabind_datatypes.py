"""
Defines the host-side value model the bridge marshals.

The host runtime is Lua-like: its values are nil, booleans, integers,
floats, strings and tables. In Python these are `None`, `bool`, `int`,
`float`, `str` and `Table`. Host functions are represented by
`HostFunction`; they can live inside tables but have no JSON form.
"""

import math
from typing import Any, Callable, Dict, Iterable, Iterator, Optional, Tuple

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1
UINT64_MAX = 2 ** 64 - 1


class HostFunction:
    """A callable host value, the equivalent of a native function in a table."""
    def __init__(self, fn: Callable[..., Any], name: Optional[str] = None):
        self.fn = fn
        self.name = name or getattr(fn, "__name__", None) or "<function>"

    def __call__(self, *args):
        return self.fn(*args)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


def _slot(key: Any) -> Tuple[Tuple[str, Any], Any]:
    """Map a host key to its storage slot and its normalized form.

    Integral float keys collapse onto the matching integer key, and booleans
    never collide with 0/1.
    """
    match key:
        case None:
            raise TypeError("table index is nil")
        case bool():
            return ("boolean", key), key
        case int():
            return ("number", key), key
        case float():
            if math.isnan(key):
                raise ValueError("table index is NaN")
            if key.is_integer():
                key = int(key)
            return ("number", key), key
        case str():
            return ("string", key), key
        case _:
            return ("object", key), key


class Table:
    """A host table: one aggregate usable as both a sequence and a map.

    Reads of missing keys return None, writing None removes the key, and
    iteration follows insertion order. Tables hash and compare by identity,
    and are always truthy.
    """

    def __init__(self, entries: Optional[Any] = None):
        self._entries: Dict[Tuple[str, Any], Tuple[Any, Any]] = {}
        if entries is not None:
            pairs = entries.items() if hasattr(entries, "items") else entries
            for key, value in pairs:
                self[key] = value

    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> "Table":
        """Build a table with keys 1..n. None values leave holes."""
        table = cls()
        for i, value in enumerate(values, start=1):
            table[i] = value
        return table

    def __getitem__(self, key: Any) -> Any:
        try:
            slot, _ = _slot(key)
        except (TypeError, ValueError):
            return None
        entry = self._entries.get(slot)
        return entry[1] if entry is not None else None

    def __setitem__(self, key: Any, value: Any):
        slot, key = _slot(key)
        if value is None:
            self._entries.pop(slot, None)
        else:
            self._entries[slot] = (key, value)

    def __delitem__(self, key: Any):
        self[key] = None

    def __contains__(self, key: Any) -> bool:
        return self[key] is not None

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def keys(self) -> Iterator[Any]:
        return (k for k, _ in self._entries.values())

    def values(self) -> Iterator[Any]:
        return (v for _, v in self._entries.values())

    def items(self) -> Iterator[Tuple[Any, Any]]:
        return iter(list(self._entries.values()))

    def count(self) -> int:
        """Number of entries, of any key kind."""
        return len(self._entries)

    def border(self) -> int:
        """The host's length operator.

        Every positive integer key is kept in the array part, so the length is
        the largest such key. A table with holes therefore reports a length
        that spans them; callers that need a proper sequence must check keys
        1..n themselves.
        """
        n = 0
        for kind, key in self._entries:
            if kind == "number" and isinstance(key, int) and key > n:
                n = key
        return n

    def __len__(self) -> int:
        return self.border()

    def __bool__(self) -> bool:
        return True

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        from luabind.luabind_printer import Printer
        return Printer().pformat(self)


def host_type_name(value: Any) -> str:
    """The host-level type name of a value, as the runtime's `type()` reports it."""
    match value:
        case None:
            return "nil"
        case bool():
            return "boolean"
        case int() | float():
            return "number"
        case str():
            return "string"
        case Table():
            return "table"
        case HostFunction():
            return "function"
        case _:
            return "userdata"


__all__ = [
    "INT64_MIN",
    "INT64_MAX",
    "UINT64_MAX",
    "HostFunction",
    "Table",
    "host_type_name",
]
