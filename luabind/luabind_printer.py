"""
A pretty-printer for host values, in table-constructor syntax.
"""
import math

from luabind.luabind_datatypes import HostFunction, Table


class Printer:
    """Formats host values into readable constructor strings like `{1, 2, x = "y"}`."""

    def __init__(self, max_items=None):
        self._max_items = max_items
        self._handlers = self._create_handlers()

    def pformat(self, obj):
        """Public entry point to format an object."""
        return self._pformat(obj, set())

    def _pformat(self, obj, active):
        handler = self._handlers.get(type(obj))
        if handler is None:
            if isinstance(obj, Table):
                handler = self._pformat_table
            else:
                # Opaque host handles have no literal form
                return f"<userdata {type(obj).__name__}>"
        return handler(obj, active)

    def _create_handlers(self):
        return {
            str: self._pformat_str,
            int: self._pformat_int,
            float: self._pformat_float,
            bool: self._pformat_bool,
            type(None): self._pformat_nil,
            HostFunction: self._pformat_function,
            Table: self._pformat_table,
        }

    def _pformat_str(self, obj, active):
        escaped = obj.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\0", "\\0")
        return f'"{escaped}"'

    def _pformat_int(self, obj, active):
        return str(obj)

    def _pformat_float(self, obj, active):
        if math.isnan(obj):
            return "0/0"
        if math.isinf(obj):
            return "1/0" if obj > 0 else "-1/0"
        return repr(obj)

    def _pformat_bool(self, obj, active):
        return 'true' if obj else 'false'

    def _pformat_nil(self, obj, active):
        return 'nil'

    def _pformat_function(self, obj, active):
        return repr(obj)

    def _pformat_table(self, obj, active):
        if id(obj) in active:
            return "<cycle>"
        if obj.count() == 0:
            return "{}"
        active.add(id(obj))
        try:
            parts = []
            # Positional run first, then everything else keyed
            n = 0
            while obj[n + 1] is not None:
                n += 1
                parts.append(self._pformat(obj[n], active))
            for key, value in obj.items():
                if isinstance(key, int) and not isinstance(key, bool) and 1 <= key <= n:
                    continue
                parts.append(f"{self._pformat_key(key, active)} = {self._pformat(value, active)}")
        finally:
            active.discard(id(obj))
        if self._max_items is not None and len(parts) > self._max_items:
            parts = parts[:self._max_items] + ["..."]
        return "{" + ", ".join(parts) + "}"

    def _pformat_key(self, key, active):
        if isinstance(key, str) and key.isidentifier():
            return key
        return f"[{self._pformat(key, active)}]"


def short_repr(value, max_items=4, max_len=60):
    """One-line rendering of a value, truncated for error messages."""
    text = Printer(max_items=max_items).pformat(value)
    if len(text) > max_len:
        text = text[:max_len - 3] + "..."
    return text


__all__ = ["Printer", "short_repr"]
