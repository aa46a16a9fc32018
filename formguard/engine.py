# formguard/engine.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Validation engine facade.

Architecture:
- Owns a validator registry, a field cache, the one-shot validation lock and
  the continuous validation sessions
- Collaborators are injected; nothing is shared between engine instances

Design Patterns:
- Facade Pattern: single entry point for callers
- Dependency Injection: registry and adapter resolver passed in

Error Handling:
- Missing required arguments raise ValueError before any side effect
- Configuration problems raise ConfigurationError subclasses to the caller
- Failing rules are reported through the callback, never raised
"""

import logging
from typing import Any, Optional, Type

from formguard.adapters import DefaultFieldAdapterResolver
from formguard.config import EngineConfig
from formguard.core.cache import ValidationCache
from formguard.core.conditions import ConditionEvaluator
from formguard.core.executor import ValidationExecutor, ValidationResult
from formguard.core.fields import FieldDiscovery
from formguard.core.registry import ValidatorRegistry
from formguard.interfaces.protocols import FieldAdapterResolver
from formguard.interfaces.types import ValidationCallback
from formguard.runtime.concurrency import ValidationLock
from formguard.runtime.continuous import ContinuousValidationController

logger = logging.getLogger(__name__)


class ValidationEngine:
    """Validates declared form fields of UI targets.

    Class Invariants:
    1. One-shot validations are serialized according to the configured lock scope
    2. Field indexes are cached per target and reclaimed with the target
    3. At most one continuous session exists per target

    Example:
        engine = ValidationEngine()
        ok = engine.validate(screen, screen, lambda success, failures: ...)
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        registry: Optional[ValidatorRegistry] = None,
        adapter_resolver: Optional[FieldAdapterResolver] = None,
    ):
        """Initialize an engine.

        Args:
            config: Engine configuration, defaults to EngineConfig()
            registry: Validator registry; a new one is created when omitted
            adapter_resolver: Field adapter resolver; DefaultFieldAdapterResolver
                when omitted
        """
        self._config = config or EngineConfig()
        self._registry = registry or ValidatorRegistry(include_builtins=self._config.include_builtin_validators)
        self._adapter_resolver = adapter_resolver or DefaultFieldAdapterResolver()
        self._cache: ValidationCache = ValidationCache()
        self._discovery = FieldDiscovery(self._registry, self._cache)
        self._executor = ValidationExecutor(
            self._discovery,
            self._adapter_resolver,
            ConditionEvaluator(self._adapter_resolver),
        )
        self._lock = ValidationLock(self._config.lock_scope)
        self._continuous = ContinuousValidationController(self._executor)

    @property
    def config(self) -> EngineConfig:
        return self._config

    @property
    def registry(self) -> ValidatorRegistry:
        return self._registry

    @property
    def cache(self) -> ValidationCache:
        return self._cache

    @property
    def executor(self) -> ValidationExecutor:
        return self._executor

    @property
    def continuous(self) -> ContinuousValidationController:
        return self._continuous

    def register_validator(self, validator_type: Type[Any]) -> None:
        """Register a custom validator type.

        Raises:
            ValueError: If validator_type is None or declares no rule kinds
        """
        if validator_type is None:
            raise ValueError("validator cannot be None")
        self._registry.register(validator_type)

    def clear_caches(self) -> bool:
        """Drop every cached field index.

        Returns:
            True if at least one target had been cached
        """
        cleaned = self._cache.clear()
        logger.debug(f"Cleared validation caches (had entries: {cleaned})")
        return cleaned

    def evict(self, target: Any) -> bool:
        """Drop the cached field index of one target, e.g. after its widgets changed."""
        return self._cache.evict(target)

    def validate(self, context: Any, target: Any, callback: Optional[ValidationCallback] = None) -> bool:
        """Validate every declared field of a target.

        Args:
            context: Context handed to validators for message production
            target: Object declaring the validated fields
            callback: Optional callable receiving ``(success, failures)`` with
                failures sorted by rule order

        Returns:
            Whether every field passed

        Raises:
            ValueError: If context or target is None
            ConfigurationError: If fields, validators or conditions are misconfigured
        """
        if context is None:
            raise ValueError("context cannot be None")
        if target is None:
            raise ValueError("target cannot be None")

        with self._lock.hold(target):
            result: ValidationResult = self._executor.validate_target(context, target)

        logger.debug(
            f"Validated {type(target).__name__}: success={result.success}, failures={len(result.failures)}"
        )
        # Callback runs after the lock is released; it may start another validation
        if callback is not None:
            callback(result.success, list(result.failures))
        return result.success

    def validate_screen(self, screen: Any, callback: Optional[ValidationCallback] = None) -> bool:
        """Validate a screen that serves as its own context."""
        return self.validate(screen, screen, callback)

    def validate_container(self, container: Any, callback: Optional[ValidationCallback] = None) -> bool:
        """Validate a view container, using its ``context`` attribute as context.

        Raises:
            ValueError: If container is None or has no context
        """
        if container is None:
            raise ValueError("target cannot be None")
        return self.validate(getattr(container, "context", None), container, callback)

    def start_continuous_validation(self, target: Any, container: Any, callback: Optional[ValidationCallback]) -> None:
        """Validate fields of a target as focus leaves them.

        Raises:
            ValueError: If target or container is None
        """
        self._continuous.start(target, container, callback)

    def stop_continuous_validation(self, target: Any) -> bool:
        """Stop continuous validation of a target.

        Returns:
            True if the focus listener was removed
        """
        return self._continuous.stop(target)
