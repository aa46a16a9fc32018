"""
Core package providing the validation-execution engine.

Architecture:
- Declares fields and their rule and condition descriptors
- Resolves validators and caches discovered fields per target
- Evaluates conditions and runs field rules in order

Design Patterns:
- Registry Pattern for validators
- Strategy Pattern for field adapters and conditions
- Builder Pattern for field declarations

Cross-cutting:
- Error handling with consistent propagation
- Weak ownership of targets and widgets
"""

# Import order matters to avoid circular dependencies
from .descriptors import ALL_RULES, ConditionDescriptor, RuleDescriptor
from .cache import IdentityWeakMap, ValidationCache
from .registry import ValidatorRegistry
from .fields import FieldDiscovery, FieldRecord, FieldSpec, FormSchema, TargetFieldIndex, ValidatorRule
from .conditions import ConditionEvaluator, ConditionScope
from .executor import ValidationExecutor, ValidationFailure, ValidationResult

__all__ = [
    # Descriptors
    "ALL_RULES",
    "ConditionDescriptor",
    "RuleDescriptor",
    # Discovery and caching
    "IdentityWeakMap",
    "ValidationCache",
    "ValidatorRegistry",
    "FieldDiscovery",
    "FieldRecord",
    "FieldSpec",
    "FormSchema",
    "TargetFieldIndex",
    "ValidatorRule",
    # Execution
    "ConditionEvaluator",
    "ConditionScope",
    "ValidationExecutor",
    "ValidationFailure",
    "ValidationResult",
]
