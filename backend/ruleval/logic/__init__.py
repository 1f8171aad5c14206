"""
Logic engine for ruleval.

Provides value classification, type predicates, path resolution and the
recursive rule evaluator.
"""

from .kinds import UNDEFINED, ValueKind, classify
from .predicates import TYPE_PREDICATES, check_type, is_falsy, is_truthy
from .operators import OPERATORS, strict_equals
from .paths import has_path, resolve, resolve_path
from .nodes import InvalidRule, Predicate, RuleTree, to_node
from .evaluator import RuleEvaluator, explain, validate

__all__ = [
    "UNDEFINED",
    "ValueKind",
    "classify",
    "TYPE_PREDICATES",
    "check_type",
    "is_falsy",
    "is_truthy",
    "OPERATORS",
    "strict_equals",
    "has_path",
    "resolve",
    "resolve_path",
    "InvalidRule",
    "Predicate",
    "RuleTree",
    "to_node",
    "RuleEvaluator",
    "explain",
    "validate",
]
