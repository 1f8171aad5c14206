"""
Rule Evaluator.

Walks a rule tree recursively against a value and returns a single boolean.

A rule tree is a mapping of rule-name to argument:
    {"type": "string", "startsWith": "Matt"}
    {"all": {"has": ["name", "age"]}, "not": {"has": {"role": "guest"}}}
    {"match": {"age": {"gte": 18}, "name": lambda v: bool(v)}}

Sibling rule-names combine with AND. ``any``/``all``/``not`` evaluate a nested
tree against the same value with OR, explicit AND and negated AND. ``match``
moves into properties of the current value.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from ..models import EvaluationReport, TraceRecord, ValidationOptions
from .kinds import UNDEFINED, ValueKind, classify
from .nodes import InvalidRule, Predicate, RuleNode, RuleTree, to_node
from .operators import get_operator, strict_equals
from .paths import has_path, resolve
from .predicates import check_type

logger = logging.getLogger(__name__)

OptionsLike = Union[ValidationOptions, Mapping, None]


class _DepthExceeded(Exception):
    """Unwinds the whole evaluation when nesting passes max_depth."""


class Combine(str, Enum):
    """How the rule-names of one tree node combine."""
    DEFAULT = "default"  # AND, the implicit combination of sibling rules
    ALL = "all"          # AND, inside an explicit ``all`` combinator
    ANY = "any"          # OR


def _items(value: Any) -> List[Any]:
    """View a value as a list of items; scalars become a singleton."""
    kind = classify(value)
    if kind in (ValueKind.ARRAY, ValueKind.SET):
        return list(value)
    if kind in (ValueKind.UNDEFINED, ValueKind.NULL):
        return []
    return [value]


def _contains(items: List[Any], needle: Any) -> bool:
    return any(strict_equals(item, needle) for item in items)


def _has_value(resolved: Any, expected: Any, require_all: bool) -> bool:
    """Check a resolved property against an expected value or values."""
    if resolved is UNDEFINED:
        return False

    if classify(expected) in (ValueKind.ARRAY, ValueKind.SET):
        candidates = _items(resolved)
        if require_all:
            return all(_contains(candidates, e) for e in expected)
        return any(_contains(candidates, e) for e in expected)

    if strict_equals(resolved, expected):
        return True
    if classify(resolved) in (ValueKind.ARRAY, ValueKind.SET):
        return _contains(list(resolved), expected)
    return False


def _positional_arity(fn: Callable[..., Any]) -> Optional[int]:
    """Count positional parameters; None means the callable takes *args."""
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return 1

    count = 0
    for param in signature.parameters.values():
        if param.kind is param.VAR_POSITIONAL:
            return None
        if param.kind in (param.POSITIONAL_ONLY, param.POSITIONAL_OR_KEYWORD):
            count += 1
    return count


class RuleEvaluator:
    """
    Evaluator for rule trees.

    An evaluator holds the options for one or more evaluations and, when
    ``collect_trace`` is set, the trace records of every rule it evaluates.
    The module-level ``validate`` creates a fresh evaluator per call.
    """

    def __init__(self, options: OptionsLike = None, collect_trace: bool = False):
        """
        Initialize the evaluator.

        Args:
            options: ValidationOptions, or a mapping coerced into one.
            collect_trace: Keep TraceRecords in ``self.trace``.
        """
        self.options = ValidationOptions.coerce(options)
        self.trace: Optional[List[TraceRecord]] = [] if collect_trace else None
        self._handlers: Dict[str, Callable[..., bool]] = {
            "type": self._eval_type,
            "has": self._eval_has,
            "any": self._eval_any,
            "all": self._eval_all,
            "not": self._eval_not,
            "match": self._eval_match,
            "includesAny": self._eval_includes_any,
            "includesAll": self._eval_includes_all,
        }

    @property
    def data(self) -> Optional[Dict[str, Any]]:
        return self.options.data

    def evaluate(self, value: Any, rules: Any) -> bool:
        """
        Evaluate a rule tree or custom predicate against a value.

        Args:
            value: The value to test.
            rules: A rule tree mapping or a callable predicate.

        Returns:
            The verdict.
        """
        try:
            return self._evaluate_node(value, to_node(rules), Combine.DEFAULT, 0, "")
        except _DepthExceeded:
            return False

    def is_known_rule(self, name: str) -> bool:
        return name in self._handlers or get_operator(name) is not None

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def _evaluate_node(
        self,
        value: Any,
        node: RuleNode,
        mode: Combine,
        depth: int,
        path: str,
    ) -> bool:
        if depth > self.options.max_depth:
            logger.warning(
                "Rule nesting exceeds max_depth=%d at '%s'; failing evaluation",
                self.options.max_depth, path or "<root>",
            )
            raise _DepthExceeded(path)

        if isinstance(node, Predicate):
            result = self._call_predicate(node.fn, value, None)
            self._record(path or "<root>", "predicate", node.fn, value, result, depth)
            return result

        if isinstance(node, InvalidRule):
            if self.options.debug:
                logger.debug("Invalid rule node at '%s': %r", path or "<root>", node.raw)
            return False

        return self._evaluate_tree(value, node, mode, depth, path)

    def _evaluate_tree(
        self,
        value: Any,
        tree: RuleTree,
        mode: Combine,
        depth: int,
        path: str,
    ) -> bool:
        any_mode = mode is Combine.ANY

        for name, argument in tree.rules.items():
            rule_path = f"{path}.{name}" if path else str(name)
            handler = self._handlers.get(name)

            if handler is not None:
                result = handler(value, argument, mode, depth, rule_path)
            else:
                operator = get_operator(name)
                if operator is not None:
                    result = operator(value, argument)
                elif self.options.strict:
                    logger.warning("Unknown rule '%s' at '%s'", name, rule_path)
                    result = False
                else:
                    if self.options.debug:
                        logger.debug("Ignoring unknown rule '%s' at '%s'", name, rule_path)
                    continue

            self._record(rule_path, name, argument, value, result, depth)

            if any_mode and result:
                return True
            if not any_mode and not result:
                return False

        return not any_mode

    def _call_predicate(self, fn: Callable[..., Any], value: Any, argument: Any) -> bool:
        """Call ``fn(value, argument, options)`` with as many args as it accepts."""
        args = (value, argument, self.options)
        arity = _positional_arity(fn)
        if arity is not None:
            args = args[:arity]
        return bool(fn(*args))

    def _record(
        self,
        path: str,
        rule: str,
        argument: Any,
        value: Any,
        result: bool,
        depth: int,
    ) -> None:
        if self.trace is None and not self.options.debug:
            return

        record = TraceRecord(
            path=path,
            rule=str(rule),
            argument=argument,
            value=value,
            result=result,
            depth=depth,
        )
        if self.trace is not None:
            self.trace.append(record)
        if self.options.debug:
            logger.debug(
                "%s%s = %s (value=%r, argument=%r)",
                "  " * depth, path, result, value, argument,
            )

    # ------------------------------------------------------------------
    # Rule handlers
    # ------------------------------------------------------------------

    def _eval_type(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        """``type: name`` or ``type: [names]`` (any of)."""
        if isinstance(argument, (list, tuple)):
            return any(check_type(value, name) for name in argument)
        return check_type(value, argument)

    def _eval_has(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        """
        Existence and containment checks.

        - "a.b": the path resolves to a defined value.
        - ["a", "b"]: any path resolves; every path inside an ``all`` subtree.
        - {"a": expected}: every entry matches, in every combine mode. A list
          of expected values matches on overlap, or on full containment
          inside an ``all`` subtree.

        Full containment under ``all`` is stricter than the plain overlap
        rule, so ``all: {has: {...}}`` can fail where the inlined ``has``
        passes.
        """
        if isinstance(argument, str):
            return has_path(value, argument, self.data)

        if isinstance(argument, (list, tuple)):
            found = (
                isinstance(p, str) and has_path(value, p, self.data)
                for p in argument
            )
            return all(found) if mode is Combine.ALL else any(found)

        if isinstance(argument, Mapping):
            require_all = mode is Combine.ALL
            matched = (
                isinstance(p, str)
                and _has_value(resolve(value, p, self.data), expected, require_all)
                for p, expected in argument.items()
            )
            return all(matched)

        return False

    def _eval_any(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        return self._evaluate_node(value, to_node(argument), Combine.ANY, depth + 1, path)

    def _eval_all(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        return self._evaluate_node(value, to_node(argument), Combine.ALL, depth + 1, path)

    def _eval_not(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        node = to_node(argument)
        if isinstance(node, InvalidRule):
            return False
        return not self._evaluate_node(value, node, Combine.DEFAULT, depth + 1, path)

    def _eval_match(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        """Apply nested rules to properties of the current value."""
        if not isinstance(argument, Mapping):
            return False

        for prop, rules in argument.items():
            resolved = resolve(value, prop, self.data)
            prop_path = f"{path}.{prop}"
            result = self._evaluate_node(
                resolved, to_node(rules), Combine.DEFAULT, depth + 1, prop_path
            )
            if not result:
                return False
        return True

    def _eval_includes_any(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        items = _items(value)
        return any(_contains(items, e) for e in _items(argument))

    def _eval_includes_all(self, value: Any, argument: Any, mode: Combine, depth: int, path: str) -> bool:
        items = _items(value)
        return all(_contains(items, e) for e in _items(argument))


def validate(value: Any, rules: Any, options: OptionsLike = None) -> bool:
    """
    Validate a value against a rule tree.

    Args:
        value: The value to test.
        rules: A rule tree mapping or a custom predicate callable.
        options: ValidationOptions or a mapping with ``data``, ``debug``,
            ``strict`` and ``max_depth``.

    Returns:
        True if the value satisfies the rules.
    """
    return RuleEvaluator(options).evaluate(value, rules)


def explain(value: Any, rules: Any, options: OptionsLike = None) -> EvaluationReport:
    """Validate and return the verdict with the trace of evaluated rules."""
    evaluator = RuleEvaluator(options, collect_trace=True)
    result = evaluator.evaluate(value, rules)
    return EvaluationReport(result=result, trace=evaluator.trace or [])
