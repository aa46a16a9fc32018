# formguard/validators/rules.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""Factories for the rule and condition descriptors handled by the built-in validators."""

from typing import Any, Optional, Type, Union

from formguard.core.descriptors import ALL_RULES, ConditionDescriptor, RuleDescriptor
from formguard.interfaces.types import WidgetID


def not_empty(order: Optional[int] = None, message: Optional[str] = None, trim: bool = False) -> RuleDescriptor:
    return RuleDescriptor.of("not_empty", order=order, message=message, trim=trim or None)


def min_length(length: int, order: Optional[int] = None, message: Optional[str] = None) -> RuleDescriptor:
    return RuleDescriptor.of("min_length", length=length, order=order, message=message)


def max_length(length: int, order: Optional[int] = None, message: Optional[str] = None) -> RuleDescriptor:
    return RuleDescriptor.of("max_length", length=length, order=order, message=message)


def regex(
    pattern: str, order: Optional[int] = None, message: Optional[str] = None, allow_empty: bool = False
) -> RuleDescriptor:
    return RuleDescriptor.of("regex", pattern=pattern, order=order, message=message, allow_empty=allow_empty or None)


def number_range(
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
    order: Optional[int] = None,
    message: Optional[str] = None,
) -> RuleDescriptor:
    """Numeric range rule; a bound left as None is open."""
    return RuleDescriptor.of("number_range", minimum=minimum, maximum=maximum, order=order, message=message)


def checked(expected: bool = True, order: Optional[int] = None, message: Optional[str] = None) -> RuleDescriptor:
    return RuleDescriptor.of("checked", expected=expected, order=order, message=message)


def when(widget_id: WidgetID, evaluator: Type[Any], gates: Union[str, Any] = ALL_RULES) -> ConditionDescriptor:
    """Guard a field's rules (or only rules of kind ``gates``) with a condition."""
    return ConditionDescriptor(widget_id, evaluator, gates)
