# formguard/core/conditions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from enum import Enum, auto
from typing import Any

from formguard.core.descriptors import ConditionDescriptor
from formguard.core.errors import ConditionInstantiationError, ConfigurationError, UnknownScopeError
from formguard.interfaces.protocols import FieldAdapterResolver, ViewContainer, Widget, WidgetScope

logger = logging.getLogger(__name__)


class ConditionScope(Enum):
    """Where the widget feeding a condition is looked up.

    Used to resolve condition widget ids against a validation target.
    """

    SCREEN = auto()  # Target looks up widgets itself
    CONTAINER = auto()  # Target holds a current view that looks up widgets
    WIDGET = auto()  # Target is a widget acting as its own scope


def resolve_scope(target: Any) -> ConditionScope:
    """Classify a validation target.

    Raises:
        UnknownScopeError: If the target cannot look up widgets
    """
    if isinstance(target, ViewContainer):
        return ConditionScope.CONTAINER
    if isinstance(target, WidgetScope):
        return ConditionScope.WIDGET if isinstance(target, Widget) else ConditionScope.SCREEN
    raise UnknownScopeError(f"unknown target {target!r}")


class ConditionEvaluator:
    """Evaluates condition descriptors against a validation target.

    Conditions are assumed to be correctly configured: a missing condition
    widget or a condition type that cannot be constructed is a programming
    error and is raised, never reported as a validation failure.
    """

    def __init__(self, adapter_resolver: FieldAdapterResolver):
        self._adapter_resolver = adapter_resolver

    def find_condition_widget(self, target: Any, condition: ConditionDescriptor) -> Any:
        """Locate the widget named by a condition in the target's scope.

        Raises:
            UnknownScopeError: If the target's scope is not recognized
            ConfigurationError: If the widget cannot be found
        """
        scope = resolve_scope(target)
        if scope is ConditionScope.CONTAINER:
            view = target.current_view
            if view is None:
                raise ConfigurationError(f"{type(target).__name__} has no current view to look up conditions in")
            widget = view.find_widget(condition.widget_id)
        else:
            widget = target.find_widget(condition.widget_id)

        if widget is None:
            raise ConfigurationError(
                f"Condition widget {condition.widget_id!r} not found in {scope.name.lower()} {type(target).__name__}"
            )
        return widget

    def evaluate(self, target: Any, condition: ConditionDescriptor) -> bool:
        """Evaluate a condition for a target.

        Args:
            target: The validated target (not the guarded field's widget)
            condition: The condition to evaluate

        Returns:
            Whether the guarded rules should run

        Raises:
            ConditionInstantiationError: If the evaluator type cannot be constructed
            ConfigurationError: If the condition widget cannot be located
        """
        widget = self.find_condition_widget(target, condition)
        adapter = self._adapter_resolver.get_adapter(widget, None)
        value = adapter.get_value(None, target, widget)

        try:
            evaluator = condition.evaluator()
        except Exception as e:
            raise ConditionInstantiationError(
                f"Cannot instantiate condition {condition.evaluator.__name__}: {e}"
            ) from e

        result = bool(evaluator.evaluate(value))
        logger.debug(f"Condition {condition.evaluator.__name__} on {condition.widget_id!r} evaluated to {result}")
        return result
