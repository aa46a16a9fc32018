# formguard/validators/conditions.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any


class IsChecked:
    """Holds when the condition widget is checked (or otherwise truthy)."""

    def evaluate(self, value: Any) -> bool:
        return bool(value)


class IsNotChecked:
    def evaluate(self, value: Any) -> bool:
        return not value


class IsNotEmpty:
    """Holds when the condition widget carries non-blank text."""

    def evaluate(self, value: Any) -> bool:
        return value is not None and str(value).strip() != ""
