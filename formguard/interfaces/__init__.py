"""Contracts between the engine and widget toolkits, adapters and validators."""

from .protocols import (
    Condition,
    FieldAdapter,
    FieldAdapterResolver,
    FormContainer,
    Validator,
    ViewContainer,
    Widget,
    WidgetScope,
)

__all__ = [
    "Condition",
    "FieldAdapter",
    "FieldAdapterResolver",
    "FormContainer",
    "Validator",
    "ViewContainer",
    "Widget",
    "WidgetScope",
]
