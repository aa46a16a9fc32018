"""formguard: declarative field validation for UI forms

This package validates the widget-valued fields of screens, view containers
and widget holders against rules declared on their classes.

Responsibilities:
    - Field declaration and discovery
    - Validator registration and resolution
    - Conditional rule evaluation
    - Ordered failure reporting
    - Focus-driven (continuous) validation

Interactions:
    - Client code through the ValidationEngine facade
    - Widget toolkits through the protocols in formguard.interfaces
    - Logging system for diagnostics

Cross-cutting Concerns:
    Thread Safety:
        - One-shot validations are serialized by the engine
        - Caches and session maps are guarded by reentrant locks

    Error Handling:
        - Caller misuse raises ValueError
        - Configuration problems raise FormGuardError subclasses
        - Failing rules are reported as data, never raised

    Logging:
        - Module level loggers under the "formguard" namespace
        - No handlers are installed by the package
"""

from .config import EngineConfig, LockScope
from .core import (
    ALL_RULES,
    ConditionDescriptor,
    FieldSpec,
    FormSchema,
    RuleDescriptor,
    ValidationFailure,
    ValidationResult,
)
from .core.errors import (
    ConditionInstantiationError,
    ConfigurationError,
    FieldAccessError,
    FormGuardError,
    UnknownScopeError,
    ValidatorInstantiationError,
)
from .engine import ValidationEngine

__version__ = "0.1.0"

__all__ = [
    "ALL_RULES",
    "ConditionDescriptor",
    "ConditionInstantiationError",
    "ConfigurationError",
    "EngineConfig",
    "FieldAccessError",
    "FieldSpec",
    "FormGuardError",
    "FormSchema",
    "LockScope",
    "RuleDescriptor",
    "UnknownScopeError",
    "ValidationEngine",
    "ValidationFailure",
    "ValidationResult",
    "ValidatorInstantiationError",
]
