"""
Rule loading from YAML.

Rule trees are plain nested mappings, so they can be kept in YAML files:

    all:
      type: object
      not:
        has: [name, age]

A rule-set document holds several named rules:

    rules:
      - id: adult
        priority: 10
        rules:
          match:
            age: {gte: 18}
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml


class RuleLoadError(ValueError):
    """Raised when a rule document cannot be parsed into rules."""


@dataclass
class NamedRule:
    """A rule tree with an identifier."""

    id: str
    rules: Any
    priority: int = 0
    description: str = ""
    tags: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NamedRule":
        """Build a NamedRule from a rule-set entry."""
        if not isinstance(data, dict):
            raise RuleLoadError(f"Rule entry must be a mapping, got {type(data).__name__}")
        if "id" not in data:
            raise RuleLoadError("Rule entry is missing 'id'")

        rules = data.get("rules", {})
        if not isinstance(rules, dict):
            raise RuleLoadError(f"Rule '{data['id']}' must define 'rules' as a mapping")

        return cls(
            id=str(data["id"]),
            rules=rules,
            priority=int(data.get("priority", 0)),
            description=data.get("description", ""),
            tags=list(data.get("tags", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "rules": self.rules,
            "priority": self.priority,
            "description": self.description,
            "tags": self.tags,
        }


def _safe_load(yaml_content: str) -> Any:
    try:
        return yaml.safe_load(yaml_content)
    except yaml.YAMLError as e:
        raise RuleLoadError(f"Invalid YAML: {e}") from e


def load_rules(yaml_content: str) -> Dict[str, Any]:
    """
    Load a single rule tree from YAML content.

    Args:
        yaml_content: YAML document whose root is a rule tree.

    Returns:
        The rule tree. An empty document gives an empty tree.

    Raises:
        RuleLoadError: If the YAML is invalid or its root is not a mapping.
    """
    data = _safe_load(yaml_content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuleLoadError(f"Rule tree must be a mapping, got {type(data).__name__}")
    return data


def load_rules_file(path: Union[str, Path]) -> Dict[str, Any]:
    """Load a single rule tree from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return load_rules(f.read())


def load_rule_sets(yaml_content: str) -> List[NamedRule]:
    """
    Load named rules from a rule-set document.

    Raises:
        RuleLoadError: If the document has no ``rules`` list or an entry is malformed.
    """
    data = _safe_load(yaml_content) or {}
    if not isinstance(data, dict):
        raise RuleLoadError("Rule-set document must be a mapping")

    entries = data.get("rules")
    if not isinstance(entries, list):
        raise RuleLoadError("Rule-set document must contain a 'rules' list")

    named = [NamedRule.from_dict(entry) for entry in entries]

    seen = set()
    for rule in named:
        if rule.id in seen:
            raise RuleLoadError(f"Duplicate rule id: {rule.id}")
        seen.add(rule.id)

    return named


def load_rule_sets_file(path: Union[str, Path]) -> List[NamedRule]:
    """Load named rules from a YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        return load_rule_sets(f.read())
