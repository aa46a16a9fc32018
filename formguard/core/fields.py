# formguard/core/fields.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Field declaration and discovery.

Targets declare their validated fields up front instead of being walked by
reflection: a class attribute ``__form_fields__`` holds a sequence of FieldSpec
entries, usually produced by FormSchema. Discovery turns the declarations of
one target instance into a TargetFieldIndex, resolving validators and sorting
rules by their order.
"""

import logging
import weakref
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from formguard.core.cache import ValidationCache
from formguard.core.descriptors import ConditionDescriptor, RuleDescriptor, describe
from formguard.core.errors import ConfigurationError, FieldAccessError
from formguard.core.registry import ValidatorRegistry
from formguard.interfaces.protocols import Widget
from formguard.interfaces.types import WidgetGetter

logger = logging.getLogger(__name__)

FORM_FIELDS_ATTRIBUTE = "__form_fields__"

Descriptor = Union[RuleDescriptor, ConditionDescriptor]
WidgetRef = Callable[[], Optional[Any]]


class _StrongRef:
    """Reference-like holder for widgets that do not support weak references."""

    __slots__ = ("_obj",)

    def __init__(self, obj: Any):
        self._obj = obj

    def __call__(self) -> Any:
        return self._obj


def widget_ref(widget: Any) -> WidgetRef:
    """Weak reference to a widget, or a strong one if the widget cannot be weakly referenced."""
    try:
        return weakref.ref(widget)
    except TypeError:
        return _StrongRef(widget)


class FieldSpec:
    """Declaration of one validated field of a target type.

    Rule and condition descriptors are passed together, in declaration order,
    the way annotations would be stacked on a field.

    Example:
        FieldSpec("email", not_empty(order=1), regex(EMAIL_PATTERN, order=2))
        FieldSpec("phone", min_length(6), when("wants_call", IsChecked))
    """

    def __init__(self, name: str, *descriptors: Descriptor, getter: Optional[WidgetGetter] = None):
        """Initialize a field declaration.

        Args:
            name: Attribute name holding the widget on the target
            descriptors: Rule descriptors and at most one condition descriptor
            getter: Optional callable reading the widget from a target instead
                of attribute access

        Raises:
            ValueError: If name is empty or a descriptor has an unknown type
        """
        if not name or not isinstance(name, str):
            raise ValueError("Field name must be a non-empty string")
        for descriptor in descriptors:
            if not isinstance(descriptor, (RuleDescriptor, ConditionDescriptor)):
                raise ValueError(f"Unsupported descriptor on field '{name}': {descriptor!r}")
        self.name = name
        self.descriptors: Tuple[Descriptor, ...] = tuple(descriptors)
        self.getter = getter

    @property
    def rules(self) -> Tuple[RuleDescriptor, ...]:
        return tuple(d for d in self.descriptors if isinstance(d, RuleDescriptor))

    @property
    def conditions(self) -> Tuple[ConditionDescriptor, ...]:
        return tuple(d for d in self.descriptors if isinstance(d, ConditionDescriptor))

    def read(self, target: Any) -> Any:
        """Read the field's current value from a target.

        Private (double underscore) names are looked up under their mangled
        names along the target's class hierarchy.

        Raises:
            FieldAccessError: If the value cannot be read
        """
        try:
            if self.getter is not None:
                return self.getter(target)
            return _read_attribute(target, self.name)
        except FieldAccessError:
            raise
        except Exception as e:
            raise FieldAccessError(f"Cannot read field '{self.name}' of {type(target).__name__}: {e}") from e

    def __repr__(self) -> str:
        return f"FieldSpec({self.name!r}, {', '.join(describe(d) for d in self.descriptors)})"


def _read_attribute(target: Any, name: str) -> Any:
    try:
        return getattr(target, name)
    except AttributeError:
        if not name.startswith("__") or name.endswith("__"):
            raise
        for cls in type(target).__mro__:
            mangled = f"_{cls.__name__.lstrip('_')}{name}"
            if hasattr(target, mangled):
                return getattr(target, mangled)
        raise


class FormSchema:
    """Builds the field declarations of a target type.

    Example:
        class SignupScreen(Screen):
            __form_fields__ = (
                FormSchema()
                .field("name", not_empty())
                .field("age", number_range(18, 120), when("adult_check", IsChecked))
                .build()
            )
    """

    def __init__(self):
        self._fields: Dict[str, FieldSpec] = {}

    def field(self, name: str, *descriptors: Descriptor, getter: Optional[WidgetGetter] = None) -> "FormSchema":
        """Declare a field.

        Raises:
            ValueError: If the field is already declared
        """
        if name in self._fields:
            raise ValueError(f"Field '{name}' is already declared")
        self._fields[name] = FieldSpec(name, *descriptors, getter=getter)
        return self

    def build(self) -> Tuple[FieldSpec, ...]:
        return tuple(self._fields.values())


def declared_fields(target: Any) -> List[FieldSpec]:
    """Collect the field declarations of a target's class hierarchy.

    Base class declarations come first; a subclass redeclaring a field name
    replaces the inherited declaration in place.
    """
    specs: Dict[str, FieldSpec] = {}
    for cls in reversed(type(target).__mro__):
        declared: Sequence[FieldSpec] = cls.__dict__.get(FORM_FIELDS_ATTRIBUTE, ())
        for spec in declared:
            if not isinstance(spec, FieldSpec):
                raise ConfigurationError(f"{cls.__name__}.{FORM_FIELDS_ATTRIBUTE} must contain FieldSpec entries")
            specs[spec.name] = spec
    return list(specs.values())


@dataclass(frozen=True)
class ValidatorRule:
    """A rule descriptor paired with its validator and reporting order."""

    rule: RuleDescriptor
    validator: Any
    order: int

    @classmethod
    def create(cls, rule: RuleDescriptor, validator: Any) -> "ValidatorRule":
        return cls(rule, validator, int(validator.get_order(rule)))

    @property
    def kind(self) -> str:
        return self.rule.kind


@dataclass(frozen=True)
class FieldRecord:
    """One validated field of a target.

    Attributes:
        name: Declared field name
        widget_ref: Reference to the field's widget, weak where the widget allows it
        condition: Optional guard for the field's rules
        rules: Validator rules sorted ascending by order (stable)
    """

    name: str
    widget_ref: WidgetRef
    condition: Optional[ConditionDescriptor]
    rules: Tuple[ValidatorRule, ...]

    @property
    def widget(self) -> Optional[Any]:
        return self.widget_ref()


class TargetFieldIndex(Mapping):
    """Read-only mapping from widget (by identity) to FieldRecord.

    Iteration follows discovery order. Widgets are held weakly where they
    support it, so a cached index does not keep a target's widget tree alive;
    entries whose widget has been reclaimed are skipped.
    """

    def __init__(self, records: Sequence[FieldRecord] = ()):
        self._records: Dict[int, FieldRecord] = {}
        for record in records:
            widget = record.widget
            if widget is not None:
                self._records[id(widget)] = record

    def _live(self) -> Iterator[Tuple[Any, FieldRecord]]:
        for record in self._records.values():
            widget = record.widget
            if widget is not None:
                yield widget, record

    def __getitem__(self, widget: Any) -> FieldRecord:
        record = self._records.get(id(widget))
        if record is None or record.widget is not widget:
            raise KeyError(widget)
        return record

    def __iter__(self) -> Iterator[Any]:
        for widget, _ in self._live():
            yield widget

    def __len__(self) -> int:
        return sum(1 for _ in self._live())

    def __contains__(self, widget: object) -> bool:
        record = self._records.get(id(widget))
        return record is not None and record.widget is widget

    def records(self) -> List[FieldRecord]:
        return [record for _, record in self._live()]

    def __repr__(self) -> str:
        return f"TargetFieldIndex({[record.name for record in self.records()]})"


class FieldDiscovery:
    """Builds and caches field indexes for validation targets.

    Class Invariants:
    1. Fields whose current value is not a widget are ignored
    2. Rule descriptors without a registered validator are dropped
    3. A field declares at most one condition
    4. Fields left without rules are not indexed
    5. A cached index is never rebuilt until evicted or cleared
    """

    def __init__(self, registry: ValidatorRegistry, cache: Optional[ValidationCache] = None):
        self._registry = registry
        self._cache: ValidationCache = cache if cache is not None else ValidationCache()

    @property
    def cache(self) -> ValidationCache:
        return self._cache

    def get_fields_for_target(self, target: Any) -> TargetFieldIndex:
        """Return the cached field index of a target, building it on first use."""
        index = self._cache.get(target)
        if index is None:
            index = self._cache.store(target, self.find_fields_to_validate(target))
        return index

    def find_fields_to_validate(self, target: Any) -> TargetFieldIndex:
        """Discover the validated fields of a target.

        Raises:
            FieldAccessError: If a declared field cannot be read
            ValidatorInstantiationError: If a validator cannot be constructed
            ConfigurationError: If a field declares more than one condition
        """
        records: List[FieldRecord] = []
        for spec in declared_fields(target):
            if not spec.rules:
                continue
            widget = spec.read(target)
            if not isinstance(widget, Widget):
                logger.debug(f"Skipping field '{spec.name}': not a widget")
                continue

            conditions = spec.conditions
            if len(conditions) > 1:
                raise ConfigurationError(
                    f"Field '{spec.name}' of {type(target).__name__} declares {len(conditions)} conditions; at most one is allowed"
                )

            rules = []
            for rule in spec.rules:
                validator = self._registry.resolve(rule)
                if validator is None:
                    logger.debug(f"No validator for {describe(rule)} on field '{spec.name}'")
                    continue
                rules.append(ValidatorRule.create(rule, validator))
            if not rules:
                continue
            rules.sort(key=lambda r: r.order)

            records.append(
                FieldRecord(
                    name=spec.name,
                    widget_ref=widget_ref(widget),
                    condition=conditions[0] if conditions else None,
                    rules=tuple(rules),
                )
            )

        logger.debug(f"Discovered {len(records)} validated fields on {type(target).__name__}")
        return TargetFieldIndex(records)
