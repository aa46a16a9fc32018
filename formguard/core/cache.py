# formguard/core/cache.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details

import logging
import weakref
from threading import RLock
from typing import Callable, Dict, Generic, List, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

V = TypeVar("V")


class IdentityWeakMap(Generic[V]):
    """Mapping keyed by object identity that does not keep its keys alive.

    ``weakref.WeakKeyDictionary`` compares keys by equality; form targets are
    compared by identity, and may define ``__eq__`` without ``__hash__``.
    Entries are dropped as soon as their key is reclaimed.

    Class Invariants:
    1. At most one entry per live key
    2. An entry never outlives its key
    3. A reused id() never resolves to a stale entry
    """

    def __init__(self, on_reclaim: Optional[Callable[[V], None]] = None):
        """Initialize an empty map.

        Args:
            on_reclaim: Optional callable receiving the value of an entry whose
                key was garbage collected
        """
        self._entries: Dict[int, Tuple[weakref.ReferenceType, V]] = {}
        self._on_reclaim = on_reclaim
        self._lock = RLock()

    def _key_ref(self, key: object) -> weakref.ReferenceType:
        key_id = id(key)

        def _reclaimed(ref: weakref.ReferenceType) -> None:
            with self._lock:
                entry = self._entries.get(key_id)
                if entry is None or entry[0] is not ref:
                    return
                del self._entries[key_id]
            if self._on_reclaim is not None:
                self._on_reclaim(entry[1])

        try:
            return weakref.ref(key, _reclaimed)
        except TypeError as e:
            raise ValueError(f"{type(key).__name__} objects must support weak references") from e

    def get(self, key: object) -> Optional[V]:
        with self._lock:
            entry = self._entries.get(id(key))
            if entry is None or entry[0]() is not key:
                return None
            return entry[1]

    def setdefault(self, key: object, value: V) -> V:
        """Store ``value`` unless a live entry for ``key`` exists; return the stored value."""
        with self._lock:
            existing = self.get(key)
            if existing is not None:
                return existing
            self._entries[id(key)] = (self._key_ref(key), value)
            return value

    def pop(self, key: object) -> Optional[V]:
        with self._lock:
            value = self.get(key)
            if value is not None:
                del self._entries[id(key)]
            return value

    def clear(self) -> List[V]:
        """Remove every entry and return the removed values."""
        with self._lock:
            values = [value for ref, value in self._entries.values() if ref() is not None]
            self._entries.clear()
            return values

    def values(self) -> List[V]:
        with self._lock:
            return [value for ref, value in self._entries.values() if ref() is not None]

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for ref, _ in self._entries.values() if ref() is not None)


class ValidationCache(Generic[V]):
    """Cache of discovered field indexes per validation target.

    Entries are created lazily on first validation of a target and vanish with
    the target. ``clear`` empties the cache in bulk; ``evict`` releases a single
    target deterministically.

    Threading/Concurrency Guarantees:
    1. Population is first-writer-wins: a racing build for the same target is
       discarded and the stored index is returned to both callers
    """

    def __init__(self):
        self._entries: IdentityWeakMap[V] = IdentityWeakMap()

    def get(self, target: object) -> Optional[V]:
        return self._entries.get(target)

    def store(self, target: object, index: V) -> V:
        """Store an index for a target unless one is already cached.

        Returns:
            The cached index, which is ``index`` unless another build won
        """
        stored = self._entries.setdefault(target, index)
        if stored is not index:
            logger.debug(f"Discarding duplicate field index built for {type(target).__name__}")
        return stored

    def evict(self, target: object) -> bool:
        """Drop the cached index of one target.

        Returns:
            True if an entry was removed
        """
        return self._entries.pop(target) is not None

    def clear(self) -> bool:
        """Drop every cached index.

        Returns:
            True if the cache held at least one entry
        """
        return len(self._entries.clear()) > 0

    def __contains__(self, target: object) -> bool:
        return target in self._entries

    def __len__(self) -> int:
        return len(self._entries)
