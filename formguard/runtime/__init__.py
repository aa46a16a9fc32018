"""
Runtime package for validation scheduling.

Architecture:
- Serializes one-shot validations
- Drives continuous validation from focus changes

Cross-cutting:
- Thread safety
- Weak ownership of targets and containers
"""

from .concurrency import ValidationLock
from .continuous import ContinuousSession, ContinuousValidationController, FocusChangeListener, SessionStatus

__all__ = [
    "ContinuousSession",
    "ContinuousValidationController",
    "FocusChangeListener",
    "SessionStatus",
    "ValidationLock",
]
