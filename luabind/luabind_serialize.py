from __future__ import annotations

import base64
import collections.abc
import datetime
import json
from typing import Any, Optional

import yaml

from luabind.luabind_emit import from_json
from luabind.luabind_errors import LuabindError


# --------------------------
# Helpers
# --------------------------

def _norm_text(data: bytes | bytearray | str, *, encoding: Optional[str] = None) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode(encoding or 'utf-8')
    return data


def _json_key(key: Any) -> str:
    # Plain YAML scalars spelled the way YAML writes them
    if key is None:
        return 'null'
    if isinstance(key, bool):
        return 'true' if key else 'false'
    if isinstance(key, (datetime.date, datetime.datetime)):
        return key.isoformat()
    return str(key)


def _to_builtin(obj: Any) -> Any:
    # Fold YAML-only types (non-string keys, timestamps, sets, binary) into the JSON model
    if isinstance(obj, list):
        return [_to_builtin(x) for x in obj]
    if isinstance(obj, collections.abc.Mapping):
        return {_json_key(k): _to_builtin(v) for k, v in obj.items()}
    if isinstance(obj, (set, frozenset)):
        return [_to_builtin(x) for x in obj]
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    if isinstance(obj, (bytes, bytearray)):
        return base64.b64encode(bytes(obj)).decode('ascii')
    return obj


def detect_format(data_hint: Optional[str] = None, *, filename: Optional[str] = None) -> str:
    """
    Returns 'json' or 'yaml'.
    Uses the file extension first; falls back to sniffing the data.
    """
    if filename:
        name = filename.lower()
        if name.endswith('.json'):
            return 'json'
        if name.endswith(('.yaml', '.yml')):
            return 'yaml'
    if data_hint is not None:
        s = data_hint.lstrip()
        if s.startswith('{') or s.startswith('['):
            return 'json'
    # YAML is a superset of JSON, so it is the safe default
    return 'yaml'


# --------------------------
# Public API
# --------------------------

def deserialize(data: bytes | bytearray | str,
                *,
                fmt: Optional[str] = None,
                filename: Optional[str] = None,
                encoding: Optional[str] = None) -> Any:
    """
    Parse a JSON or YAML document into a JSON value.
    Raises ValueError when the text does not parse as the chosen format.
    """
    text = _norm_text(data, encoding=encoding)
    f = (fmt or detect_format(text, filename=filename)).lower()
    if f == 'json':
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"invalid JSON document: {e}") from e
    if f == 'yaml':
        try:
            return _to_builtin(yaml.safe_load(text))
        except yaml.YAMLError as e:
            raise ValueError(f"invalid YAML document: {e}") from e
    raise ValueError(f"Unsupported document format: {fmt!r}")


def serialize(value: Any,
              *,
              fmt: str = 'json',
              pretty: bool = True) -> str:
    """
    Dump a JSON value as text.
    - fmt: 'json' | 'yaml'
    """
    f = (fmt or '').lower()
    if f == 'json':
        return json.dumps(value, ensure_ascii=False, indent=2 if pretty else None)
    if f == 'yaml':
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unsupported serialization format: {fmt!r}")


def load_table(data: bytes | bytearray | str,
               *,
               fmt: Optional[str] = None,
               filename: Optional[str] = None) -> Any:
    """
    Parse a document straight into host values, ready to pass to `execute`.
    Array documents become 1-based tables, mappings become string-keyed tables.
    Raises ValueError when the document does not parse or has no host form.
    """
    value = deserialize(data, fmt=fmt, filename=filename)
    try:
        return from_json(value)
    except LuabindError as e:
        raise ValueError(f"document cannot be loaded as host values: {e}") from e


__all__ = [
    "deserialize",
    "serialize",
    "detect_format",
    "load_table",
]
