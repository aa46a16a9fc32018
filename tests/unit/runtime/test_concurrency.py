# tests/unit/runtime/test_concurrency.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import threading
import time

from formguard.config import LockScope
from formguard.runtime.concurrency import ValidationLock, get_lock, with_lock


class Target:
    pass


def test_get_lock_is_reentrant():
    lock = get_lock()
    with with_lock(lock):
        with with_lock(lock):
            pass


def test_with_lock_releases_on_error():
    lock = get_lock()
    try:
        with with_lock(lock):
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert lock.acquire(blocking=False)
    lock.release()


def test_global_scope_shares_one_lock():
    locks = ValidationLock()
    assert locks.scope is LockScope.GLOBAL
    assert locks.lock_for(Target()) is locks.lock_for(Target())


def test_per_target_scope():
    locks = ValidationLock(LockScope.PER_TARGET)
    a, b = Target(), Target()
    assert locks.lock_for(a) is locks.lock_for(a)
    assert locks.lock_for(a) is not locks.lock_for(b)


def test_hold_serializes_same_target():
    locks = ValidationLock(LockScope.PER_TARGET)
    target = Target()
    active = []
    overlaps = []

    def worker():
        with locks.hold(target):
            if active:
                overlaps.append(True)
            active.append(1)
            time.sleep(0.01)
            active.pop()

    threads = [threading.Thread(target=worker) for _ in range(5)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert overlaps == []
