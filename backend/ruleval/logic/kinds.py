"""
Value kind classification.

Every value is mapped to exactly one ValueKind. The type predicates and the
comparison operators are written against these kinds instead of probing the
value with ad hoc isinstance chains.
"""

from __future__ import annotations

import datetime
import decimal
import math
import numbers
import re
from collections.abc import Mapping, Set
from enum import Enum
from typing import Any


class _Undefined:
    """Marker for an absent value (a missing property or path)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (_Undefined, ())


UNDEFINED = _Undefined()


class ValueKind(str, Enum):
    """Kind tag produced by classify()."""
    UNDEFINED = "undefined"
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    STRING = "string"
    ARRAY = "array"
    ARRAY_LIKE = "array_like"
    MAP = "map"
    SET = "set"
    PLAIN_OBJECT = "plain_object"
    FUNCTION = "function"
    REGEXP = "regexp"
    DATE = "date"
    ERROR = "error"
    OBJECT = "object"


PRIMITIVE_KINDS = frozenset({
    ValueKind.UNDEFINED,
    ValueKind.NULL,
    ValueKind.BOOLEAN,
    ValueKind.NUMBER,
    ValueKind.STRING,
})


def classify(value: Any) -> ValueKind:
    """
    Classify a value into a single ValueKind.

    The order of the checks matters: bool before numbers (bool is an int
    subclass), exact dict before other mappings, and callables before the
    generic sized/object fallbacks.
    """
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (numbers.Real, decimal.Decimal)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if type(value) is dict:
        return ValueKind.PLAIN_OBJECT
    if isinstance(value, Mapping):
        return ValueKind.MAP
    if isinstance(value, Set):
        return ValueKind.SET
    if isinstance(value, re.Pattern):
        return ValueKind.REGEXP
    if isinstance(value, datetime.date):
        return ValueKind.DATE
    if isinstance(value, BaseException):
        return ValueKind.ERROR
    if callable(value):
        return ValueKind.FUNCTION
    if hasattr(type(value), "__len__"):
        return ValueKind.ARRAY_LIKE
    return ValueKind.OBJECT


def is_finite_number(value: Any) -> bool:
    """Check for a NUMBER that is neither NaN nor infinite."""
    if classify(value) is not ValueKind.NUMBER:
        return False
    if isinstance(value, decimal.Decimal):
        return value.is_finite()
    try:
        return math.isfinite(value)
    except (TypeError, ValueError):
        return False


def is_nan(value: Any) -> bool:
    if classify(value) is not ValueKind.NUMBER:
        return False
    if isinstance(value, decimal.Decimal):
        return value.is_nan()
    try:
        return math.isnan(value)
    except (TypeError, ValueError):
        return False
