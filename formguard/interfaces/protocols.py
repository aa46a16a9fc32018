# formguard/interfaces/protocols.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from typing import Any, Optional, Protocol, Tuple, runtime_checkable

from formguard.interfaces.types import FocusListener, RuleKind, WidgetID


@runtime_checkable
class Widget(Protocol):
    """
    Widget protocol for type checking.

    Any object exposing a ``widget_id`` is treated as a widget. Declared fields
    whose current value is not a widget are ignored by field discovery.

    Runtime Invariants:
    - The widget id does not change while the widget is attached to a target.
    """

    widget_id: WidgetID


@runtime_checkable
class WidgetScope(Protocol):
    """
    Something that can look up widgets by id: a screen, or a widget acting as
    its own scope (a container widget).
    """

    def find_widget(self, widget_id: WidgetID) -> Optional[Widget]:
        """Return the widget with the given id, or None if it is not in scope."""
        ...


@runtime_checkable
class ViewContainer(Protocol):
    """
    A holder of a current view (a page or fragment-like object). Condition
    widgets are looked up inside ``current_view``.
    """

    current_view: Optional[WidgetScope]


@runtime_checkable
class FormContainer(Protocol):
    """
    A widget container that delivers focus changes.

    Error Handling:
    - ``remove_focus_listener`` is only called while ``observer_alive`` is True.
    """

    context: Any

    @property
    def observer_alive(self) -> bool:
        """Whether focus listeners can still be attached to or removed from the container."""
        ...

    def add_focus_listener(self, listener: FocusListener) -> None: ...

    def remove_focus_listener(self, listener: FocusListener) -> None: ...


@runtime_checkable
class FieldAdapter(Protocol):
    """
    Extracts the value a rule or a condition is evaluated against.

    ``rule`` is None when the value is read for a condition.
    """

    def get_value(self, rule: Any, target: Any, widget: Widget) -> Any: ...


@runtime_checkable
class FieldAdapterResolver(Protocol):
    """
    Chooses the adapter for a widget and a rule kind. ``rule_kind`` is None in
    condition mode.
    """

    def get_adapter(self, widget: Widget, rule_kind: Optional[RuleKind]) -> FieldAdapter: ...


@runtime_checkable
class Validator(Protocol):
    """
    Validator protocol.

    Runtime Invariants:
    - ``validate`` is deterministic and synchronous.
    - ``get_order`` depends only on the rule descriptor.
    - Validators are constructed without arguments and shared between targets.
    """

    kinds: Tuple[RuleKind, ...]

    def validate(self, rule: Any, value: Any) -> bool: ...

    def get_message(self, context: Any, rule: Any, value: Any) -> str: ...

    def get_order(self, rule: Any) -> int: ...


@runtime_checkable
class Condition(Protocol):
    """
    Condition evaluator protocol. Implementations are constructed without
    arguments for every evaluation.
    """

    def evaluate(self, value: Any) -> bool: ...
