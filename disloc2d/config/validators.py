"""Shared config validation helpers."""

from __future__ import annotations

from typing import Any, Mapping


def as_mapping(value: Any, context: str) -> dict[str, Any]:
    """Require mapping value."""
    if not isinstance(value, dict):
        raise ValueError(f"{context} must be a mapping.")
    return value


def opt_mapping(value: Any, context: str) -> dict[str, Any]:
    """Return mapping or empty mapping for None."""
    if value is None:
        return {}
    return as_mapping(value, context)


def required(mapping: Mapping[str, Any], key: str, context: str) -> Any:
    """Require mapping key existence."""
    if not isinstance(mapping, Mapping):
        raise ValueError(f"{context} must be a mapping.")
    if key not in mapping:
        raise ValueError(f"Missing required key '{key}' in {context}.")
    return mapping[key]


def to_float(value: Any, key: str, context: str) -> float:
    """Convert value to float with contextual error message."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{context}.{key} must be a number, got {value!r}.") from exc


def to_int(value: Any, key: str, context: str) -> int:
    """Convert integral value to int with contextual error message."""
    if isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    try:
        as_float = float(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.") from exc
    if not as_float.is_integer():
        raise ValueError(f"{context}.{key} must be an integer, got {value!r}.")
    return int(as_float)


def to_bool(value: Any, key: str, context: str) -> bool:
    """Require a YAML boolean."""
    if not isinstance(value, bool):
        raise ValueError(f"{context}.{key} must be true or false, got {value!r}.")
    return value
