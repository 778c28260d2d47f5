"""
Error types for the luabind bridge.

Everything below `LuabindError` is internal: the entry point catches these
once and re-raises a single `CallError` whose message starts with the
error's `kind`. Only `CallError` (and `EngineLoadError`, raised while a
module is being opened) ever reach host code.
"""

from typing import Any, Sequence


def format_path(path: Sequence[Any]) -> str:
    """Render a conversion path as `$`, `$.steps[2]`, `$["odd key"]`."""
    out = ["$"]
    for seg in path:
        if isinstance(seg, int) and not isinstance(seg, bool):
            out.append(f"[{seg}]")
        elif isinstance(seg, str) and seg.isidentifier():
            out.append(f".{seg}")
        else:
            out.append(f"[{str(seg)!r}]")
    return "".join(out)


class LuabindError(Exception):
    """Base class for every failure raised inside the bridge."""
    kind = "LuabindError"


class ArgumentCountError(LuabindError):
    kind = "ArgumentCountError"

    def __init__(self, got: int):
        super().__init__(f"execute() expects 1 or 2 arguments, got {got}")
        self.got = got


class ArgumentTypeError(LuabindError):
    kind = "ArgumentTypeError"

    def __init__(self, param: str, expected: str, got: str):
        super().__init__(f"execute() argument ({param}) must be {expected}, got {got}")
        self.param = param


class ConversionError(LuabindError):
    """A value could not be marshalled. `path` locates it inside the argument."""
    kind = "ConversionError"

    def __init__(self, message: str, path: Sequence[Any] = ()):
        self.path = tuple(path)
        self.detail = message
        super().__init__(f"{message} at {format_path(self.path)}")


class KeyTypeError(ConversionError):
    kind = "KeyTypeError"


class UnsupportedValueTypeError(ConversionError):
    kind = "UnsupportedValueTypeError"


class CyclicValueError(ConversionError):
    kind = "CyclicValueError"


class NestingDepthError(ConversionError):
    kind = "NestingDepthError"


class IntegerRangeError(ConversionError):
    kind = "IntegerRangeError"


class EngineExecutionError(LuabindError):
    kind = "EngineExecutionError"

    def __init__(self, message: str):
        super().__init__(f"Computo execution error: {message}")
        self.engine_message = message


class EngineLoadError(LuabindError):
    kind = "EngineLoadError"


class CallError(RuntimeError):
    """The uniform call-level error surfaced to the host.

    Carries only a formatted message; the kind of the original failure is the
    prefix of that message.
    """

    @classmethod
    def from_error(cls, err: LuabindError) -> "CallError":
        return cls(f"{err.kind}: {err}")


__all__ = [
    "format_path",
    "LuabindError",
    "ArgumentCountError",
    "ArgumentTypeError",
    "ConversionError",
    "KeyTypeError",
    "UnsupportedValueTypeError",
    "CyclicValueError",
    "NestingDepthError",
    "IntegerRangeError",
    "EngineExecutionError",
    "EngineLoadError",
    "CallError",
]
