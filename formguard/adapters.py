# formguard/adapters.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Default field adapters.

Toolkits usually provide their own resolver; the default one reads the
conventional ``get_value()`` / ``value`` / ``text`` / ``checked`` accessors and
lets callers register adapters per widget type and rule kind.
"""

from threading import RLock
from typing import Any, Dict, Optional, Tuple, Type

from formguard.core.errors import ConfigurationError
from formguard.interfaces.types import RuleKind

_MISSING = object()


class ValueAdapter:
    """Reads a widget's value from its conventional accessors."""

    accessors = ("value", "text", "checked")

    def get_value(self, rule: Any, target: Any, widget: Any) -> Any:
        getter = getattr(widget, "get_value", None)
        if callable(getter):
            return getter()
        for name in self.accessors:
            value = getattr(widget, name, _MISSING)
            if value is not _MISSING:
                return value
        raise ConfigurationError(f"No value accessor on widget {widget!r}")


class CheckedStateAdapter:
    """Reads the checked state of a two-state widget."""

    def get_value(self, rule: Any, target: Any, widget: Any) -> bool:
        is_checked = getattr(widget, "is_checked", None)
        if callable(is_checked):
            return bool(is_checked())
        checked = getattr(widget, "checked", _MISSING)
        if checked is _MISSING:
            raise ConfigurationError(f"Widget {widget!r} has no checked state")
        return bool(checked)


class DefaultFieldAdapterResolver:
    """Chooses adapters by widget type and rule kind.

    Lookup order for a widget and a rule kind:
    1. Adapter registered for a class in the widget's MRO and the rule kind
    2. Adapter registered for a class in the widget's MRO and any kind
    3. Adapter registered for the rule kind and any widget type
    4. The fallback ValueAdapter
    """

    def __init__(self):
        self._adapters: Dict[Tuple[Optional[Type[Any]], Optional[RuleKind]], Any] = {
            (None, "checked"): CheckedStateAdapter(),
        }
        self._fallback = ValueAdapter()
        self._lock = RLock()

    def register(self, adapter: Any, widget_type: Optional[Type[Any]] = None, rule_kind: Optional[RuleKind] = None) -> None:
        """Register an adapter.

        Args:
            adapter: Object with ``get_value(rule, target, widget)``
            widget_type: Widget class the adapter applies to, None for any
            rule_kind: Rule kind the adapter applies to, None for any

        Raises:
            ValueError: If the adapter is None or both keys are None
        """
        if adapter is None:
            raise ValueError("adapter cannot be None")
        if widget_type is None and rule_kind is None:
            raise ValueError("adapter must be registered for a widget type, a rule kind or both")
        with self._lock:
            self._adapters[(widget_type, rule_kind)] = adapter

    def get_adapter(self, widget: Any, rule_kind: Optional[RuleKind]) -> Any:
        with self._lock:
            mro = type(widget).__mro__
            if rule_kind is not None:
                for cls in mro:
                    adapter = self._adapters.get((cls, rule_kind))
                    if adapter is not None:
                        return adapter
            for cls in mro:
                adapter = self._adapters.get((cls, None))
                if adapter is not None:
                    return adapter
            if rule_kind is not None:
                adapter = self._adapters.get((None, rule_kind))
                if adapter is not None:
                    return adapter
            return self._fallback
