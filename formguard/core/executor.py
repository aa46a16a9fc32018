# formguard/core/executor.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from formguard.core.conditions import ConditionEvaluator
from formguard.core.fields import FieldDiscovery, FieldRecord
from formguard.interfaces.protocols import FieldAdapterResolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationFailure:
    """The first failing rule of one field.

    Attributes:
        widget: The widget that failed validation
        message: Human readable message produced by the validator
        order: Order of the failing rule, used to sort reports
    """

    widget: Any
    message: str
    order: int


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a whole target."""

    success: bool
    failures: Tuple[ValidationFailure, ...] = field(default_factory=tuple)


def sort_failures(failures: List[ValidationFailure]) -> List[ValidationFailure]:
    """Stable ascending sort by order."""
    return sorted(failures, key=lambda f: f.order)


class ValidationExecutor:
    """Runs field rules and aggregates failures.

    Class Invariants:
    1. A field yields at most one failure per pass
    2. Rules of a field run in ascending order and stop at the first failure
    3. Target failures are reported in ascending order, ties in field order

    Threading/Concurrency Guarantees:
    1. The executor keeps no per-call state; callers serialize target passes
    """

    def __init__(
        self,
        discovery: FieldDiscovery,
        adapter_resolver: FieldAdapterResolver,
        conditions: Optional[ConditionEvaluator] = None,
    ):
        self._discovery = discovery
        self._adapter_resolver = adapter_resolver
        self._conditions = conditions or ConditionEvaluator(adapter_resolver)

    @property
    def discovery(self) -> FieldDiscovery:
        return self._discovery

    def validate_field(self, context: Any, target: Any, record: FieldRecord, widget: Any) -> Optional[ValidationFailure]:
        """Validate one field.

        Args:
            context: Context handed to validators for message production
            target: The target owning the field
            record: The field's record from the target's index
            widget: The field's widget

        Returns:
            The failure of the first failing rule, or None if the field passes
        """
        condition = record.condition
        if condition is not None and condition.gates_all:
            if not self._conditions.evaluate(target, condition):
                logger.debug(f"Field '{record.name}' skipped by condition")
                return None

        for validator_rule in record.rules:
            rule = validator_rule.rule
            if condition is not None and condition.gates_kind(rule.kind):
                if not self._conditions.evaluate(target, condition):
                    continue

            adapter = self._adapter_resolver.get_adapter(widget, rule.kind)
            value = adapter.get_value(rule, target, widget)
            validator = validator_rule.validator
            if not validator.validate(rule, value):
                message = validator.get_message(context, rule, value)
                logger.debug(f"Field '{record.name}' failed '{rule.kind}': {message}")
                return ValidationFailure(widget, message, validator_rule.order)

        return None

    def validate_target(self, context: Any, target: Any) -> ValidationResult:
        """Validate every indexed field of a target.

        Raises:
            ConfigurationError: If discovery or a condition is misconfigured
        """
        failures: List[ValidationFailure] = []
        index = self._discovery.get_fields_for_target(target)
        for widget, record in index.items():
            failure = self.validate_field(context, target, record, widget)
            if failure is not None:
                failures.append(failure)

        failures = sort_failures(failures)
        return ValidationResult(success=not failures, failures=tuple(failures))
