# formguard/core/registry.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
from threading import RLock
from typing import Any, Dict, List, Optional, Tuple, Type

from formguard.core.descriptors import RuleDescriptor
from formguard.core.errors import ValidatorInstantiationError
from formguard.interfaces.types import RuleKind

logger = logging.getLogger(__name__)


class ValidatorRegistry:
    """Maps rule kinds to validator instances.

    Validator types declare the rule kinds they handle in a ``kinds`` class
    attribute. Instances are created lazily on first use and shared by every
    target validated through the registry.

    Class Invariants:
    1. Registration is additive; there is no removal
    2. Registering the same type twice has no further effect
    3. The most recent registration for a kind wins
    4. At most one instance exists per registered type

    Threading/Concurrency Guarantees:
    1. Registration and resolution are serialized by a reentrant lock
    """

    def __init__(self, include_builtins: bool = True):
        """Initialize the registry.

        Args:
            include_builtins: Pre-register the validators shipped with formguard
        """
        self._types_by_kind: Dict[RuleKind, Type[Any]] = {}
        self._registered: List[Type[Any]] = []
        self._instances: Dict[Type[Any], Any] = {}
        self._lock = RLock()

        if include_builtins:
            from formguard.validators.builtin import BUILTIN_VALIDATORS

            for validator_type in BUILTIN_VALIDATORS:
                self.register(validator_type)

    def register(self, validator_type: Type[Any]) -> None:
        """Register a validator type for the rule kinds it declares.

        Args:
            validator_type: Zero-argument constructible validator class

        Raises:
            ValueError: If validator_type is None or declares no rule kinds
        """
        if validator_type is None:
            raise ValueError("validator cannot be None")
        kinds: Tuple[RuleKind, ...] = tuple(getattr(validator_type, "kinds", ()) or ())
        if not kinds:
            raise ValueError(f"Validator {validator_type!r} must declare the rule kinds it supports")

        with self._lock:
            if validator_type in self._registered:
                return
            self._registered.append(validator_type)
            for kind in kinds:
                previous = self._types_by_kind.get(kind)
                if previous is not None and previous is not validator_type:
                    logger.debug(f"Validator {validator_type.__name__} replaces {previous.__name__} for '{kind}'")
                self._types_by_kind[kind] = validator_type

    def resolve(self, rule: RuleDescriptor) -> Optional[Any]:
        """Return the validator handling a rule descriptor.

        Args:
            rule: The rule descriptor to resolve

        Returns:
            The shared validator instance, or None if no validator handles the
            descriptor's kind

        Raises:
            ValidatorInstantiationError: If the validator cannot be constructed
        """
        with self._lock:
            validator_type = self._types_by_kind.get(rule.kind)
            if validator_type is None:
                return None

            instance = self._instances.get(validator_type)
            if instance is None:
                try:
                    instance = validator_type()
                except Exception as e:
                    raise ValidatorInstantiationError(
                        f"Cannot instantiate validator {validator_type.__name__}: {e}"
                    ) from e
                self._instances[validator_type] = instance
            return instance

    def registered_kinds(self) -> List[RuleKind]:
        """Get the rule kinds that currently resolve to a validator."""
        with self._lock:
            return sorted(self._types_by_kind)

    def __contains__(self, kind: object) -> bool:
        with self._lock:
            return kind in self._types_by_kind
