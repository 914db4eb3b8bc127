"""Shared-access wrappers around ConsistentHasher.

LockedRing serialises every call on one RLock; fine when writes are rare.
SnapshotRing gives lock-free reads: writers mutate a private clone under a
lock and publish it with a single reference assignment, so readers only ever
see complete rings.
"""
from __future__ import annotations

from typing import Any, Callable, Optional, Set, TypeVar
import logging
import threading

from consistent_hash_ring import ConsistentHasher

log = logging.getLogger(__name__)

T = TypeVar("T")


class LockedRing:
    def __init__(self, ring: Optional[ConsistentHasher] = None):
        self._ring = ring if ring is not None else ConsistentHasher()
        self._lock = threading.RLock()

    def add(self, node_id: Any, weight: int) -> None:
        with self._lock:
            self._ring.add(node_id, weight)

    def remove(self, node_id: Any, weight: int) -> int:
        with self._lock:
            return self._ring.remove(node_id, weight)

    def erase(self, node_id: Any) -> None:
        with self._lock:
            self._ring.erase(node_id)

    def weight(self, node_id: Any) -> int:
        with self._lock:
            return self._ring.weight(node_id)

    def hash(self, resource: float) -> Any:
        with self._lock:
            return self._ring.hash(resource)

    def locate(self, key: str) -> Any:
        with self._lock:
            return self._ring.locate(key)

    def empty(self) -> bool:
        with self._lock:
            return self._ring.empty()

    def alive_set(self) -> Set[Any]:
        with self._lock:
            return self._ring.alive_set()

    def snapshot(self) -> ConsistentHasher:
        with self._lock:
            return self._ring.clone()


class SnapshotRing:
    def __init__(self, ring: Optional[ConsistentHasher] = None):
        self._current = ring if ring is not None else ConsistentHasher()
        self._write_lock = threading.Lock()

    def _mutate(self, op: Callable[[ConsistentHasher], T]) -> T:
        with self._write_lock:
            draft = self._current.clone()
            result = op(draft)
            self._current = draft
        log.debug("published ring vnodes=%d", len(draft))
        return result

    def add(self, node_id: Any, weight: int) -> None:
        self._mutate(lambda r: r.add(node_id, weight))

    def remove(self, node_id: Any, weight: int) -> int:
        return self._mutate(lambda r: r.remove(node_id, weight))

    def erase(self, node_id: Any) -> None:
        self._mutate(lambda r: r.erase(node_id))

    def snapshot(self) -> ConsistentHasher:
        """Current published ring; treat as read-only."""
        return self._current

    def weight(self, node_id: Any) -> int:
        return self._current.weight(node_id)

    def hash(self, resource: float) -> Any:
        return self._current.hash(resource)

    def locate(self, key: str) -> Any:
        return self._current.locate(key)

    def empty(self) -> bool:
        return self._current.empty()

    def alive_set(self) -> Set[Any]:
        return self._current.alive_set()
