from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

_MISSING = object()


def get_nested_field(value: Any, dotted: str) -> Any:
    """Walk ``a.b.0.c`` through objects and array indexes; ``None`` if absent."""

    found = _lookup(value, dotted)
    return None if found is _MISSING else found


def _lookup(value: Any, dotted: str) -> Any:
    current = value
    for part in dotted.split("."):
        if isinstance(current, dict):
            if part not in current:
                return _MISSING
            current = current[part]
        elif isinstance(current, list) and part.isdigit():
            index = int(part)
            if index >= len(current):
                return _MISSING
            current = current[index]
        else:
            return _MISSING
    return current


def extract_fields(value: Any, fields: Optional[Sequence[str]]) -> Any:
    """Keep only ``fields`` from an object, element-wise for arrays.

    Dotted names are flattened into the result with ``_`` separators, so
    ``user.name`` becomes ``user_name``. Scalars pass through untouched.
    """

    if not fields:
        return value
    if isinstance(value, list):
        return [extract_fields(item, fields) for item in value]
    if not isinstance(value, dict):
        return value

    projected: Dict[str, Any] = {}
    for name in fields:
        if "." in name:
            found = _lookup(value, name)
            if found is not _MISSING:
                projected[name.replace(".", "_")] = found
        elif name in value:
            projected[name] = value[name]
    return projected


__all__ = ["extract_fields", "get_nested_field"]
