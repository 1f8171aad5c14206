"""
Rule nodes.

A rule position holds either a rule tree (a mapping of rule-name to argument)
or a custom predicate callable. ``to_node`` tags the raw value once so the
evaluator dispatches on the tag.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Union


@dataclass(frozen=True)
class RuleTree:
    """Mapping of rule-name to rule argument."""
    rules: Mapping


@dataclass(frozen=True)
class Predicate:
    """Custom predicate called as ``fn(value, rule_argument, options)``."""
    fn: Callable[..., Any]


@dataclass(frozen=True)
class InvalidRule:
    """Anything else found where a rule tree was expected. Never satisfied."""
    raw: Any


RuleNode = Union[RuleTree, Predicate, InvalidRule]


def to_node(raw: Any) -> RuleNode:
    if isinstance(raw, Mapping):
        return RuleTree(raw)
    if callable(raw):
        return Predicate(raw)
    return InvalidRule(raw)
