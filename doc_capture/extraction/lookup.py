from collections.abc import Mapping


def dig(node: object, *path: object) -> object:
    """Follow ``path`` through nested mappings; None when any step is missing."""
    current = node
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def first_present(node: object, *paths: tuple[object, ...]) -> object:
    """Return the first non-empty value found along any of ``paths``."""
    for path in paths:
        value = dig(node, *path)
        if value:
            return value
    return None


def first_int(node: object, *paths: tuple[object, ...]) -> int | None:
    for path in paths:
        value = dig(node, *path)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
    return None
