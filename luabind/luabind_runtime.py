"""
The `execute` entry point and the module table that exposes it.

    module = open_module(engine)
    result = module["execute"](script_table, inputs_table)

`engine` is any callable `engine(script, inputs) -> result` working on JSON
values; `inputs` is a list of input documents.
"""

import importlib
import logging
from typing import Any, Callable, List, Optional

from luabind import luabind_config
from luabind.luabind_convert import ValueConverter
from luabind.luabind_datatypes import HostFunction, Table, host_type_name
from luabind.luabind_emit import JsonEmitter
from luabind.luabind_errors import (
    ArgumentCountError,
    ArgumentTypeError,
    CallError,
    EngineExecutionError,
    EngineLoadError,
    LuabindError,
)

logger = logging.getLogger(__name__)

Engine = Callable[[Any, List[Any]], Any]


class Executor:
    """Validates call arguments, marshals them, runs the engine, marshals the result."""

    def __init__(self, engine: Engine, *, max_depth: Optional[int] = None):
        if not callable(engine):
            raise TypeError(f"engine must be callable, not {type(engine).__name__}")
        self.engine = engine
        self.max_depth = max_depth

    def execute(self, *args) -> Any:
        """execute(script) or execute(script, inputs).

        Raises CallError, and only CallError, on any failure.
        """
        try:
            return self._execute(args)
        except LuabindError as e:
            logger.debug("execute() failed with %s: %s", e.kind, e)
            raise CallError.from_error(e) from None

    def _execute(self, args) -> Any:
        if not 1 <= len(args) <= 2:
            raise ArgumentCountError(len(args))

        script_arg = args[0]
        if not isinstance(script_arg, Table):
            raise ArgumentTypeError("script", "a table", host_type_name(script_arg))

        # A converter per call: max_depth is re-read from the environment each time
        converter = ValueConverter(max_depth=self.max_depth)
        script = converter.convert(script_arg)
        inputs = self._convert_inputs(converter, args[1] if len(args) == 2 else None)
        logger.debug("execute(): script=%s, %d input document(s)", type(script).__name__, len(inputs))

        try:
            result = self.engine(script, inputs)
        except Exception as e:
            logger.debug("engine raised", exc_info=True)
            raise EngineExecutionError(str(e)) from e

        return JsonEmitter(max_depth=self.max_depth).emit(result)

    @staticmethod
    def _convert_inputs(converter: ValueConverter, inputs_arg: Any) -> List[Any]:
        if inputs_arg is None:
            return []
        if not isinstance(inputs_arg, Table):
            raise ArgumentTypeError("inputs", "a table or nil", host_type_name(inputs_arg))
        converted = converter.convert(inputs_arg)
        if isinstance(converted, list):
            return converted
        return [converted]


def load_engine(spec: str) -> Engine:
    """Resolve a `package.module:attribute` string to an engine callable."""
    module_name, sep, attr = spec.partition(":")
    if not sep or not module_name or not attr:
        raise EngineLoadError(f"engine must be given as 'module:attribute', got {spec!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise EngineLoadError(f"cannot import engine module {module_name!r}: {e}") from e
    target: Any = module
    for part in attr.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise EngineLoadError(f"engine {spec!r} not found: no attribute {part!r}") from None
    if not callable(target):
        raise EngineLoadError(f"engine {spec!r} is not callable")
    return target


def open_module(engine: Optional[Engine] = None, *, max_depth: Optional[int] = None) -> Table:
    """Build the module table: a single `execute` function bound to `engine`.

    Without an explicit engine, LUABIND_ENGINE names one.
    """
    if engine is None:
        spec = luabind_config.engine_spec()
        if spec is None:
            raise EngineLoadError("no engine given and LUABIND_ENGINE is not set")
        engine = load_engine(spec)
        logger.info("luabind: using engine %s", spec)
    executor = Executor(engine, max_depth=max_depth)
    module = Table()
    module["execute"] = HostFunction(executor.execute, "execute")
    return module


__all__ = ["Engine", "Executor", "load_engine", "open_module"]
