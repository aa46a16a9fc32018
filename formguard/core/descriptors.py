# formguard/core/descriptors.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Declarative tokens attached to form fields.

A RuleDescriptor names one validation rule and its parameters; a
ConditionDescriptor guards one rule kind (or every rule) on a field. Both are
immutable and compare structurally.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple, Type, Union

from formguard.interfaces.types import RuleKind, WidgetID


class _AllRules(Enum):
    """Sentinel type for a condition that gates every rule on a field."""

    ALL_RULES = "*"

    def __repr__(self) -> str:
        return "ALL_RULES"


ALL_RULES = _AllRules.ALL_RULES


@dataclass(frozen=True)
class RuleDescriptor:
    """
    Immutable description of one declared validation rule.

    Attributes:
        kind: Rule kind used to look up the validator (e.g. "min_length")
        params: Sorted (name, value) pairs parameterizing the rule
    """

    kind: RuleKind
    params: Tuple[Tuple[str, Any], ...] = ()

    def __post_init__(self) -> None:
        if not self.kind or not isinstance(self.kind, str):
            raise ValueError("Rule kind must be a non-empty string")

    @classmethod
    def of(cls, kind: RuleKind, **params: Any) -> "RuleDescriptor":
        """Build a descriptor from keyword parameters. Parameters set to None are dropped."""
        return cls(kind, tuple(sorted((k, v) for k, v in params.items() if v is not None)))

    def get(self, name: str, default: Any = None) -> Any:
        """Return a parameter value, or ``default`` if the rule does not carry it."""
        for key, value in self.params:
            if key == name:
                return value
        return default

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.params)

    @property
    def message(self) -> Optional[str]:
        """Message template overriding the validator's default, if any."""
        return self.get("message")


@dataclass(frozen=True)
class ConditionDescriptor:
    """
    Immutable guard for the rules of one field.

    Attributes:
        widget_id: Id of the widget supplying the condition's input value,
            looked up in the scope of the validated target
        evaluator: Zero-argument constructible type with ``evaluate(value)``
        gates: Rule kind this condition guards, or ALL_RULES
    """

    widget_id: WidgetID
    evaluator: Type[Any]
    gates: Union[RuleKind, _AllRules] = field(default=ALL_RULES)

    def __post_init__(self) -> None:
        if self.widget_id is None:
            raise ValueError("Condition widget id cannot be None")
        if not isinstance(self.evaluator, type):
            raise ValueError("Condition evaluator must be a type")

    @property
    def gates_all(self) -> bool:
        return self.gates is ALL_RULES

    def gates_kind(self, kind: RuleKind) -> bool:
        """Check whether this condition guards rules of the given kind."""
        return not self.gates_all and self.gates == kind


def describe(descriptor: Union[RuleDescriptor, ConditionDescriptor]) -> str:
    """Short human readable form used in log messages."""
    if isinstance(descriptor, ConditionDescriptor):
        return f"condition({descriptor.evaluator.__name__} on {descriptor.widget_id!r}, gates={descriptor.gates!r})"
    params: Mapping[str, Any] = descriptor.as_dict()
    args = ", ".join(f"{k}={v!r}" for k, v in params.items())
    return f"{descriptor.kind}({args})"
