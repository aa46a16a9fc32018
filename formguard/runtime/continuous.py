# formguard/runtime/continuous.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
"""
Focus-driven validation.

Architecture:
- One session per target while continuous validation is active
- A focus listener attached to the form container validates the field that
  focus just left and reports its failure alone
- Sessions reference their target and container weakly

Design Patterns:
- Observer Pattern: focus listener on the form container
- Mediator Pattern: controller ties container, index and callback together

Threading/Concurrency:
- Focus callbacks arrive on the UI thread and do not take the one-shot
  validation lock; field index population is idempotent instead
"""

import logging
import weakref
from enum import Enum, auto
from threading import RLock
from typing import Any, Optional

from formguard.core.cache import IdentityWeakMap
from formguard.core.executor import ValidationExecutor
from formguard.core.fields import TargetFieldIndex, WidgetRef, widget_ref
from formguard.interfaces.types import ValidationCallback

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Lifecycle of continuous validation for one target."""

    INACTIVE = auto()  # No listener attached
    ACTIVE = auto()  # Listener attached, validating on focus changes


class FocusChangeListener:
    """Validates the field that focus leaves.

    The ``old_focus`` argument delivered by toolkits is not reliable, so the
    listener tracks the last focused widget itself.
    """

    def __init__(
        self,
        executor: ValidationExecutor,
        index: TargetFieldIndex,
        target: Any,
        container: Any,
        callback: Optional[ValidationCallback],
    ):
        self._executor = executor
        self._index = index
        self._target_ref = weakref.ref(target)
        self._container_ref = weakref.ref(container)
        self._callback = callback
        self._focused_ref: Optional[WidgetRef] = None

    @property
    def focused_widget(self) -> Optional[Any]:
        """The last widget this listener saw gaining focus."""
        return self._focused_ref() if self._focused_ref is not None else None

    def __call__(self, old_focus: Any, new_focus: Any) -> None:
        target = self._target_ref()
        container = self._container_ref()
        if target is None or container is None:
            return

        focused = self.focused_widget
        if focused is not None and focused is not new_focus:
            record = self._index.get(focused)
            if record is not None:
                failure = self._executor.validate_field(container.context, target, record, focused)
                if failure is not None and self._callback is not None:
                    self._callback(False, [failure])

        self._focused_ref = widget_ref(new_focus) if new_focus is not None else None


class ContinuousSession:
    """State of continuous validation for one target."""

    def __init__(self, target: Any, container: Any, index: TargetFieldIndex, listener: FocusChangeListener):
        self._target_name = type(target).__name__
        self._container_ref = weakref.ref(container)
        self.index = index
        self.listener = listener
        self.status = SessionStatus.ACTIVE

    @property
    def container(self) -> Optional[Any]:
        return self._container_ref()

    def detach(self) -> bool:
        """Remove the listener from the container if it can still deliver events.

        Returns:
            True if the listener was removed
        """
        self.status = SessionStatus.INACTIVE
        container = self.container
        if container is None or not container.observer_alive:
            logger.warning(f"Focus observer of {self._target_name} is gone; listener not removed")
            return False
        container.remove_focus_listener(self.listener)
        return True


class ContinuousValidationController:
    """Manages continuous validation sessions keyed by target identity.

    Class Invariants:
    1. At most one session per target
    2. Starting an active target does nothing
    3. A session is discarded on stop or when its target is reclaimed

    Threading/Concurrency Guarantees:
    1. Session bookkeeping is serialized by a reentrant lock
    """

    def __init__(self, executor: ValidationExecutor):
        self._executor = executor
        self._sessions: IdentityWeakMap[ContinuousSession] = IdentityWeakMap(on_reclaim=self._reclaimed)
        self._lock = RLock()

    def start(self, target: Any, container: Any, callback: Optional[ValidationCallback]) -> None:
        """Start validating a target's fields as focus moves.

        Args:
            target: The object declaring the validated fields
            container: Form container delivering focus changes
            callback: Receives ``(False, [failure])`` for each failing field

        Raises:
            ValueError: If target or container is None
            ConfigurationError: If the target's fields cannot be discovered
        """
        if container is None:
            raise ValueError("form container cannot be None")
        if target is None:
            raise ValueError("target cannot be None")

        with self._lock:
            if target in self._sessions:
                logger.debug(f"Continuous validation already running for {type(target).__name__}")
                return

            index = self._executor.discovery.get_fields_for_target(target)
            listener = FocusChangeListener(self._executor, index, target, container, callback)
            container.add_focus_listener(listener)
            self._sessions.setdefault(target, ContinuousSession(target, container, index, listener))
            logger.debug(f"Started continuous validation for {type(target).__name__} ({len(index)} fields)")

    def stop(self, target: Any) -> bool:
        """Stop continuous validation of a target.

        Returns:
            True if a listener was removed from the form container; False if no
            session existed or the container could no longer deliver events
        """
        with self._lock:
            session = self._sessions.pop(target)
        if session is None:
            return False
        logger.debug(f"Stopping continuous validation for {type(target).__name__}")
        return session.detach()

    def status(self, target: Any) -> SessionStatus:
        return SessionStatus.ACTIVE if self.is_active(target) else SessionStatus.INACTIVE

    def is_active(self, target: Any) -> bool:
        return target in self._sessions

    def session(self, target: Any) -> Optional[ContinuousSession]:
        return self._sessions.get(target)

    def active_count(self) -> int:
        """Number of targets with an active session."""
        return len(self._sessions)

    def __len__(self) -> int:
        return self.active_count()

    @staticmethod
    def _reclaimed(session: ContinuousSession) -> None:
        container = session.container
        if container is not None and container.observer_alive:
            container.remove_focus_listener(session.listener)
        session.status = SessionStatus.INACTIVE
