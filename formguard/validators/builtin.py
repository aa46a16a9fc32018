# formguard/validators/builtin.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
import math
import re
from collections.abc import Sized
from typing import Any, Optional, Tuple

from formguard.core.descriptors import RuleDescriptor

logger = logging.getLogger(__name__)

DEFAULT_ORDER = 1000


class _MessageFields(dict):
    """Format mapping that leaves unknown placeholders in place."""

    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class BaseValidator:
    """
    Shared behaviour of the built-in validators.

    Subclasses declare ``kinds`` and ``message_template`` and implement
    ``is_valid``. A rule's ``order`` parameter overrides ``default_order``; its
    ``message`` parameter overrides the template. Templates are formatted with
    the rule parameters and ``value``.
    """

    kinds: Tuple[str, ...] = ()
    default_order = DEFAULT_ORDER
    message_template = "Invalid value"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        raise NotImplementedError("Must be implemented by subclasses")

    def validate(self, rule: RuleDescriptor, value: Any) -> bool:
        return bool(self.is_valid(rule, value))

    def get_order(self, rule: RuleDescriptor) -> int:
        return int(rule.get("order", self.default_order))

    def get_message(self, context: Any, rule: RuleDescriptor, value: Any) -> str:
        template = rule.message or self.message_template
        # Message production is delegated to the context when it can translate
        translate = getattr(context, "translate", None)
        if callable(translate):
            template = translate(template)
        fields = _MessageFields(rule.as_dict())
        fields["value"] = value
        try:
            return template.format_map(fields)
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            logger.debug(f"Message template {template!r} left unformatted: {e}")
            return template


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


class NotEmptyValidator(BaseValidator):
    kinds = ("not_empty",)
    message_template = "This field is required"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        if value is None:
            return False
        if isinstance(value, str):
            return bool(value.strip() if rule.get("trim", False) else value)
        if isinstance(value, Sized):
            return len(value) > 0
        return True


class MinLengthValidator(BaseValidator):
    kinds = ("min_length",)
    message_template = "Enter at least {length} characters"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        return len(_as_text(value)) >= rule.get("length", 0)


class MaxLengthValidator(BaseValidator):
    kinds = ("max_length",)
    message_template = "Enter at most {length} characters"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        return len(_as_text(value)) <= rule.get("length", 0)


class RegexValidator(BaseValidator):
    kinds = ("regex",)
    message_template = "Value has an invalid format"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        text = _as_text(value)
        if not text and rule.get("allow_empty", False):
            return True
        return re.fullmatch(rule.get("pattern", ""), text) is not None


class NumberRangeValidator(BaseValidator):
    kinds = ("number_range",)
    message_template = "Enter a number between {minimum} and {maximum}"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        number = _as_number(value)
        if number is None:
            return False
        minimum = rule.get("minimum")
        maximum = rule.get("maximum")
        if minimum is not None and number < minimum:
            return False
        if maximum is not None and number > maximum:
            return False
        return True

    def get_message(self, context: Any, rule: RuleDescriptor, value: Any) -> str:
        if rule.message is None:
            bounds = (rule.get("minimum") is not None, rule.get("maximum") is not None)
            template = {
                (False, False): "Enter a number",
                (True, False): "Enter a number of at least {minimum}",
                (False, True): "Enter a number up to {maximum}",
            }.get(bounds)
            if template is not None:
                rule = RuleDescriptor.of(rule.kind, message=template, **rule.as_dict())
        return super().get_message(context, rule, value)


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return None if math.isnan(number) else number


class CheckedValidator(BaseValidator):
    kinds = ("checked",)
    message_template = "This option must be selected"

    def is_valid(self, rule: RuleDescriptor, value: Any) -> bool:
        return bool(value) == rule.get("expected", True)


BUILTIN_VALIDATORS = (
    NotEmptyValidator,
    MinLengthValidator,
    MaxLengthValidator,
    RegexValidator,
    NumberRangeValidator,
    CheckedValidator,
)
