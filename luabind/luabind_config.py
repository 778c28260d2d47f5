"""
Environment-driven settings, read at call time.
"""
import os
from typing import Optional

DEFAULT_MAX_DEPTH = 200


def max_depth(override: Optional[int] = None) -> int:
    """Nesting limit for both conversion directions.

    An explicit override wins; otherwise LUABIND_MAX_DEPTH, falling back to the
    default when unset or not a positive integer.
    """
    if override is not None:
        return override
    raw = os.environ.get("LUABIND_MAX_DEPTH")
    try:
        value = int(raw) if raw is not None else DEFAULT_MAX_DEPTH
    except ValueError:
        return DEFAULT_MAX_DEPTH
    return value if value > 0 else DEFAULT_MAX_DEPTH


def engine_spec() -> Optional[str]:
    """The `module:attribute` location of the default engine, if configured."""
    raw = (os.environ.get("LUABIND_ENGINE") or "").strip()
    return raw or None


__all__ = ["DEFAULT_MAX_DEPTH", "max_depth", "engine_spec"]
