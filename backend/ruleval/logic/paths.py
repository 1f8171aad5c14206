"""
Path Resolver.

Resolves dot-separated property paths such as ``"skills.programming"`` against
nested values, with an optional fallback data mapping.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from .kinds import UNDEFINED, ValueKind, classify


def _step(current: Any, part: str) -> Any:
    kind = classify(current)

    if kind in (ValueKind.PLAIN_OBJECT, ValueKind.MAP):
        if part in current:
            return current[part]
        return UNDEFINED

    if kind is ValueKind.ARRAY:
        if part.isdecimal() and part.isascii() and int(part) < len(current):
            return current[int(part)]
        # "skills.programming.python" addresses the element "python"
        if part in current:
            return part
        return UNDEFINED

    if kind is ValueKind.OBJECT and not part.startswith("_"):
        return getattr(current, part, UNDEFINED)

    return UNDEFINED


def resolve_path(value: Any, path: str) -> Any:
    """
    Resolve a dot-separated path against a value.

    Mappings are indexed by key, lists and tuples by integer index and plain
    objects by public attribute. A non-index segment applied to a list
    resolves to the element equal to it, so ``"languages.fr"`` finds ``"fr"``
    in ``{"languages": ["en", "fr"]}``. Any miss yields UNDEFINED.

    Args:
        value: The value to walk.
        path: Dot-separated path. An empty path returns the value itself.

    Returns:
        The nested value, or UNDEFINED.
    """
    if not isinstance(path, str):
        return UNDEFINED
    if not path:
        return value

    current = value
    for part in path.split("."):
        current = _step(current, part)
        if current is UNDEFINED:
            return UNDEFINED
    return current


def resolve(value: Any, path: str, data: Optional[Mapping] = None) -> Any:
    """
    Resolve a path, retrying against fallback data when it is absent.

    None counts as a present value and does not trigger the fallback.
    """
    resolved = resolve_path(value, path)
    if resolved is UNDEFINED and data is not None:
        return resolve_path(data, path)
    return resolved


def has_path(value: Any, path: str, data: Optional[Mapping] = None) -> bool:
    return resolve(value, path, data) is not UNDEFINED
