"""
Comparison operators.

Binary predicates applied to the current value and the rule argument. Every
operator is total: incomparable operands give False instead of raising.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Callable, Optional

from .kinds import ValueKind, classify, is_nan

Operator = Callable[[Any, Any], bool]

_ORDERABLE_KINDS = frozenset({ValueKind.NUMBER, ValueKind.STRING, ValueKind.DATE})


def strict_equals(left: Any, right: Any) -> bool:
    """
    Equality without cross-kind coercion.

    ``True == 1`` holds in Python but not here; NaN never equals itself.
    """
    left_kind = classify(left)
    if left_kind is not classify(right):
        return False
    if left_kind is ValueKind.NUMBER and (is_nan(left) or is_nan(right)):
        return False
    try:
        return bool(left == right)
    except (TypeError, ValueError, ArithmeticError):
        return False


def _ordered(compare: Callable[[Any, Any], bool]) -> Operator:
    def operator(current: Any, argument: Any) -> bool:
        kind = classify(current)
        if kind not in _ORDERABLE_KINDS or kind is not classify(argument):
            return False
        try:
            return bool(compare(current, argument))
        except (TypeError, ArithmeticError):
            # date vs datetime, signaling NaN
            return False
    return operator


def _affix(method: str) -> Operator:
    def operator(current: Any, argument: Any) -> bool:
        if not isinstance(current, str):
            return False
        if isinstance(argument, (list, tuple)):
            if not argument or not all(isinstance(a, str) for a in argument):
                return False
            argument = tuple(argument)
        elif not isinstance(argument, str):
            return False
        return getattr(current, method)(argument)
    return operator


def _matches(current: Any, argument: Any) -> bool:
    """Regex search of a string value."""
    if not isinstance(current, str):
        return False
    if isinstance(argument, re.Pattern):
        return bool(argument.search(current))
    if not isinstance(argument, str):
        return False
    try:
        return bool(re.search(argument, current))
    except re.error:
        return False


OPERATORS = MappingProxyType({
    "eq": strict_equals,
    "neq": lambda current, argument: not strict_equals(current, argument),
    "gt": _ordered(lambda a, b: a > b),
    "gte": _ordered(lambda a, b: a >= b),
    "lt": _ordered(lambda a, b: a < b),
    "lte": _ordered(lambda a, b: a <= b),
    "startsWith": _affix("startswith"),
    "endsWith": _affix("endswith"),
    "matches": _matches,
})


def get_operator(name: str) -> Optional[Operator]:
    return OPERATORS.get(name)
