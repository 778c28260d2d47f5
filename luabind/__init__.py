from luabind.luabind_datatypes import HostFunction, Table
from luabind.luabind_convert import ValueConverter, to_json
from luabind.luabind_emit import JsonEmitter, from_json
from luabind.luabind_errors import CallError, EngineLoadError
from luabind.luabind_runtime import Executor, load_engine, open_module
from luabind.luabind_serialize import deserialize, load_table, serialize

__all__ = [
    "Table",
    "HostFunction",
    "ValueConverter",
    "JsonEmitter",
    "to_json",
    "from_json",
    "Executor",
    "open_module",
    "load_engine",
    "CallError",
    "EngineLoadError",
    "deserialize",
    "serialize",
    "load_table",
]
