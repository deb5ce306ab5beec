"""
Helpers for reading loosely-shaped provider payloads
"""
from typing import Any, Iterable, Mapping, Optional


def dig(payload: Any, path: str) -> Any:
    """Follow a dotted path through nested mappings, None if any step is missing"""
    current = payload
    for key in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def first_present(payload: Any, paths: Iterable[str]) -> Any:
    """Return the first truthy value among the candidate paths"""
    for path in paths:
        value = dig(payload, path)
        if value:
            return value
    return None


def first_mapping(payload: Any, keys: Iterable[str]) -> Optional[Mapping]:
    """Return the first non-empty nested mapping stored under one of keys"""
    for key in keys:
        value = dig(payload, key)
        if isinstance(value, Mapping) and value:
            return value
    return None


def as_text(value: Any) -> Optional[str]:
    if value is None or value == "":
        return None
    return str(value)
