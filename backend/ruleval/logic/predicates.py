"""
Type Predicate Registry.

Named, pure predicates used by the ``type`` rule. The registry is built once at
import time and exposed read-only.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional

from .kinds import (
    PRIMITIVE_KINDS,
    ValueKind,
    classify,
    is_finite_number,
    is_nan,
)

TypePredicate = Callable[[Any], bool]


def is_truthy(value: Any) -> bool:
    """
    JavaScript-style truthiness.

    Empty collections are truthy, NaN is falsy and infinity is truthy.
    """
    kind = classify(value)
    if kind in (ValueKind.UNDEFINED, ValueKind.NULL):
        return False
    if kind is ValueKind.BOOLEAN:
        return value
    if kind is ValueKind.NUMBER:
        return not is_nan(value) and value != 0
    if kind is ValueKind.STRING:
        return len(value) > 0
    return True


def is_falsy(value: Any) -> bool:
    return not is_truthy(value)


def _is_integer(value: Any) -> bool:
    if not is_finite_number(value):
        return False
    return value == int(value)


def _is_float(value: Any) -> bool:
    if not is_finite_number(value):
        return False
    return value != int(value)


def _kind_in(*kinds: ValueKind) -> TypePredicate:
    allowed = frozenset(kinds)
    return lambda value: classify(value) in allowed


_OBJECT_KINDS = frozenset(ValueKind) - PRIMITIVE_KINDS

_is_object = _kind_in(*_OBJECT_KINDS)
_is_object_like = _kind_in(*(_OBJECT_KINDS - {ValueKind.FUNCTION}))

_PREDICATES: Dict[str, TypePredicate] = {
    "bool": _kind_in(ValueKind.BOOLEAN),
    "string": _kind_in(ValueKind.STRING),
    "number": _kind_in(ValueKind.NUMBER),
    "integer": _is_integer,
    "float": _is_float,
    "array": _kind_in(ValueKind.ARRAY),
    "arrayLike": _kind_in(ValueKind.ARRAY, ValueKind.STRING, ValueKind.ARRAY_LIKE),
    "map": _kind_in(ValueKind.MAP),
    "set": _kind_in(ValueKind.SET),
    "object": _is_object,
    "objectLike": _is_object_like,
    "plainObject": _kind_in(ValueKind.PLAIN_OBJECT),
    "function": _kind_in(ValueKind.FUNCTION),
    "regExp": _kind_in(ValueKind.REGEXP),
    "date": _kind_in(ValueKind.DATE),
    "null": _kind_in(ValueKind.NULL),
    "undefined": _kind_in(ValueKind.UNDEFINED),
    "nil": _kind_in(ValueKind.NULL, ValueKind.UNDEFINED),
    "error": _kind_in(ValueKind.ERROR),
    "truthy": is_truthy,
    "falsy": is_falsy,
}

# snake_case spellings for rule files written by Python users
_ALIASES = {
    "boolean": "bool",
    "array_like": "arrayLike",
    "object_like": "objectLike",
    "plain_object": "plainObject",
    "regexp": "regExp",
}

TYPE_PREDICATES = MappingProxyType({
    **_PREDICATES,
    **{alias: _PREDICATES[name] for alias, name in _ALIASES.items()},
})


def get_type_predicate(name: Any) -> Optional[TypePredicate]:
    """Look up a type predicate by name, returning None if unknown."""
    if not isinstance(name, str):
        return None
    return TYPE_PREDICATES.get(name)


def check_type(value: Any, name: Any) -> bool:
    """
    Check a value against a named type.

    Args:
        value: The value to test.
        name: A registered type name.

    Returns:
        The predicate result, or False for an unknown type name.
    """
    predicate = get_type_predicate(name)
    if predicate is None:
        return False
    return bool(predicate(value))


def list_types() -> List[str]:
    """List registered type names."""
    return sorted(TYPE_PREDICATES)
