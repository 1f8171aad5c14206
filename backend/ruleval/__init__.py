"""
ruleval: declarative, recursive rule matching.

Evaluates nested rule trees built from plain mappings against arbitrary
values and returns a single boolean verdict.

    from backend.ruleval import validate

    validate({"age": 35}, {"match": {"age": {"type": "integer", "gte": 18}}})
"""

from .models import EvaluationReport, TraceRecord, ValidationOptions
from .logic import (
    UNDEFINED,
    RuleEvaluator,
    ValueKind,
    check_type,
    classify,
    explain,
    is_falsy,
    is_truthy,
    resolve,
    validate,
)
from .loader import (
    NamedRule,
    RuleLoadError,
    load_rule_sets,
    load_rule_sets_file,
    load_rules,
    load_rules_file,
)
from .engine import RuleEngine

__version__ = "1.0.0"
__all__ = [
    "validate",
    "explain",
    "RuleEvaluator",
    "ValidationOptions",
    "EvaluationReport",
    "TraceRecord",
    "UNDEFINED",
    "ValueKind",
    "classify",
    "check_type",
    "is_truthy",
    "is_falsy",
    "resolve",
    "NamedRule",
    "RuleLoadError",
    "load_rules",
    "load_rules_file",
    "load_rule_sets",
    "load_rule_sets_file",
    "RuleEngine",
]
