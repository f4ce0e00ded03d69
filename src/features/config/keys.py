"""Dotted-key access over decoded configuration mappings."""

from collections.abc import Mapping


KEY_SEPARATOR = "."


def list_keys(data: Mapping[str, object], prefix: str = "") -> list[str]:
    """List every leaf key in dot notation, sorted.

    Tables are descended into; arrays and scalars are leaves. An empty table
    is reported as a leaf so it is not silently hidden.

    Args:
        data: Decoded configuration mapping.
        prefix: Key prefix for nested calls.

    Returns:
        Sorted list of dotted keys.
    """
    keys: list[str] = []
    for key, value in data.items():
        full_key = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else key
        if isinstance(value, Mapping) and value:
            keys.extend(list_keys(value, full_key))
        else:
            keys.append(full_key)
    return sorted(keys)


def get_value(data: Mapping[str, object], dotted_key: str) -> object | None:
    """Look up a value by dotted key, e.g. ``project.name``.

    Args:
        data: Decoded configuration mapping.
        dotted_key: Keys separated by dots.

    Returns:
        The value, or None if any segment is missing.
    """
    current: object = data
    for part in dotted_key.split(KEY_SEPARATOR):
        if not isinstance(current, Mapping) or part not in current:
            return None
        current = current[part]
    return current
