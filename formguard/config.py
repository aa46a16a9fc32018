# formguard/config.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from dataclasses import dataclass
from enum import Enum, auto


class LockScope(Enum):
    """Granularity of the lock serializing one-shot validations."""

    GLOBAL = auto()  # One validation in flight across all targets
    PER_TARGET = auto()  # One validation in flight per target


@dataclass(frozen=True)
class EngineConfig:
    """
    Immutable configuration of a ValidationEngine.

    Attributes:
        lock_scope: Granularity of the one-shot validation lock
        include_builtin_validators: Pre-register the shipped validators in a
            registry created by the engine
    """

    lock_scope: LockScope = LockScope.GLOBAL
    include_builtin_validators: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.lock_scope, LockScope):
            raise TypeError(f"lock_scope must be a LockScope enum value, got {type(self.lock_scope)}")
