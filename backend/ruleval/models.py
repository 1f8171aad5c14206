"""
Pydantic models for ruleval.

Defines the options threaded through a rule evaluation and the trace records
produced while evaluating.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


DEFAULT_MAX_DEPTH = 64


class ValidationOptions(BaseModel):
    """
    Options for a single validate() call.

    Attributes:
        data: Fallback mapping consulted when a property path is absent.
        debug: Emit trace records through logging. Never changes the result.
        strict: Fail on unknown rule-names instead of ignoring them.
        max_depth: Maximum nesting of rule nodes before evaluation gives up.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    data: Optional[Dict[str, Any]] = None
    debug: bool = False
    strict: bool = False
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)

    @field_validator("data", mode="before")
    @classmethod
    def validate_data(cls, v: Any) -> Any:
        """Fallback data must be a mapping."""
        if v is None or isinstance(v, dict):
            return v
        if isinstance(v, Mapping):
            return dict(v)
        raise ValueError("data must be a mapping of property names to values")

    @classmethod
    def coerce(
        cls,
        options: Union["ValidationOptions", Mapping[str, Any], None],
    ) -> "ValidationOptions":
        """Accept an options instance, a plain mapping or None."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))


@dataclass
class TraceRecord:
    """One evaluated rule-name and its partial result."""

    path: str
    rule: str
    argument: Any
    value: Any
    result: bool
    depth: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "rule": self.rule,
            "argument": repr(self.argument),
            "value": repr(self.value),
            "result": self.result,
            "depth": self.depth,
        }


@dataclass
class EvaluationReport:
    """Verdict of an evaluation together with its trace."""

    result: bool
    trace: List[TraceRecord] = field(default_factory=list)

    @property
    def failed_rules(self) -> List[TraceRecord]:
        return [r for r in self.trace if not r.result]

    def summary(self) -> str:
        """Generate a human-readable summary."""
        lines = [f"Evaluation {'PASSED' if self.result else 'FAILED'}"]
        for record in self.trace:
            indent = "  " * (record.depth + 1)
            mark = "ok" if record.result else "FAIL"
            lines.append(f"{indent}{record.path}: {mark}")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "result": self.result,
            "trace": [r.to_dict() for r in self.trace],
        }
