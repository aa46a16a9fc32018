# formguard/runtime/concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Iterator

from formguard.config import LockScope
from formguard.core.cache import IdentityWeakMap


class _LockFactory:
    """
    Internal factory for producing the reentrant locks guarding validation
    passes. Reentrant so a callback may start a nested validation.
    """

    def create_lock(self) -> threading.RLock:
        """
        Return a new lock instance.
        """
        return threading.RLock()


def get_lock() -> threading.RLock:
    """
    Provide a new lock instance to be used for synchronization.
    """
    return _LockFactory().create_lock()


@contextmanager
def with_lock(lock: Any) -> Iterator[None]:
    """
    A convenience context manager that acquires the given lock upon entry and
    releases it upon exit, ensuring safe access to shared resources.
    """
    lock.acquire()
    try:
        yield
    finally:
        lock.release()


class ValidationLock:
    """
    Serializes one-shot target validations, either globally or per target.
    Per-target locks live as long as their target.
    """

    def __init__(self, scope: LockScope = LockScope.GLOBAL) -> None:
        self._scope = scope
        self._global = get_lock()
        self._per_target: IdentityWeakMap[threading.RLock] = IdentityWeakMap()

    @property
    def scope(self) -> LockScope:
        return self._scope

    def lock_for(self, target: Any) -> threading.RLock:
        """
        Return the lock guarding validation of the given target.
        """
        if self._scope is LockScope.GLOBAL:
            return self._global
        with with_lock(self._global):
            return self._per_target.setdefault(target, get_lock())

    @contextmanager
    def hold(self, target: Any) -> Iterator[None]:
        with with_lock(self.lock_for(target)):
            yield
