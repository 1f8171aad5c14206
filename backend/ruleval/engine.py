"""
Rule Engine.

Evaluates a collection of named rules against a value and reports which of
them match.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .loader import NamedRule, load_rule_sets
from .logic.evaluator import RuleEvaluator
from .models import ValidationOptions

logger = logging.getLogger(__name__)

MATCH_STRATEGIES = ("first_match", "priority", "all_match")


class RuleEngine:
    """
    High-level engine for named rules.

    Usage:
        engine = RuleEngine.from_yaml(open("rules.yaml").read())
        result = engine.evaluate({"age": 21})
        result["matches"]  # ["adult"]
    """

    def __init__(self, rules: List[NamedRule], config: Optional[Dict[str, Any]] = None):
        """
        Initialize the rule engine.

        Args:
            rules: Named rules, evaluated in order.
            config: Configuration with match_strategy and options.
        """
        self.rules = list(rules)
        self.config = config or {}
        self.match_strategy = self.config.get("match_strategy", "first_match")
        self.options = ValidationOptions.coerce(self.config.get("options"))

    @classmethod
    def from_yaml(cls, yaml_content: str, config: Optional[Dict[str, Any]] = None) -> "RuleEngine":
        """Create an engine from a rule-set YAML document."""
        return cls(load_rule_sets(yaml_content), config)

    def _ordered_rules(self) -> List[NamedRule]:
        if self.match_strategy == "priority":
            return sorted(self.rules, key=lambda r: r.priority, reverse=True)
        return self.rules

    def _check_strategy(self) -> None:
        if self.match_strategy not in MATCH_STRATEGIES:
            raise ValueError(
                f"Unknown match_strategy '{self.match_strategy}'. "
                f"Expected one of: {', '.join(MATCH_STRATEGIES)}"
            )

    def match(self, value: Any) -> List[NamedRule]:
        """
        Find the rules a value satisfies.

        Raises:
            ValueError: If the match strategy is unknown.
        """
        self._check_strategy()

        evaluator = RuleEvaluator(self.options)
        matches = []
        for rule in self._ordered_rules():
            if evaluator.evaluate(value, rule.rules):
                logger.debug("Rule '%s' matched", rule.id)
                matches.append(rule)
                if self.match_strategy != "all_match":
                    break
        return matches

    def evaluate(self, value: Any) -> Dict[str, Any]:
        """
        Evaluate all rules against a value.

        Returns:
            Evaluation result with matched rule ids. An unknown match
            strategy is reported in the result; errors raised by custom
            predicates propagate.
        """
        try:
            self._check_strategy()
        except ValueError as e:
            return {
                "success": False,
                "error": str(e),
                "matches": [],
                "matched_count": 0,
                "first_match": None,
            }

        matches = self.match(value)
        return {
            "success": True,
            "matches": [r.id for r in matches],
            "matched_count": len(matches),
            "first_match": matches[0].id if matches else None,
        }

    def find_matching_rule(self, value: Any) -> Optional[NamedRule]:
        """Find the first rule the value satisfies under the match strategy."""
        result = self.match(value)
        return result[0] if result else None
