"""Built-in validators, condition evaluators and descriptor factories."""

from .builtin import (
    BUILTIN_VALIDATORS,
    DEFAULT_ORDER,
    BaseValidator,
    CheckedValidator,
    MaxLengthValidator,
    MinLengthValidator,
    NotEmptyValidator,
    NumberRangeValidator,
    RegexValidator,
)
from .conditions import IsChecked, IsNotChecked, IsNotEmpty
from .rules import checked, max_length, min_length, not_empty, number_range, regex, when

__all__ = [
    "BUILTIN_VALIDATORS",
    "DEFAULT_ORDER",
    "BaseValidator",
    "CheckedValidator",
    "MaxLengthValidator",
    "MinLengthValidator",
    "NotEmptyValidator",
    "NumberRangeValidator",
    "RegexValidator",
    "IsChecked",
    "IsNotChecked",
    "IsNotEmpty",
    "checked",
    "max_length",
    "min_length",
    "not_empty",
    "number_range",
    "regex",
    "when",
]
