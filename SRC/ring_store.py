"""Ordered position -> node id store backing the ring.
Sorted position list for O(log N) successor lookups via bisect.
"""
from __future__ import annotations

from typing import Any, Dict, Iterator, List, Tuple
import bisect


class RingStore:
    def __init__(self) -> None:
        self._positions: List[float] = []
        self._owners: Dict[float, Any] = {}

    def __len__(self) -> int:
        return len(self._positions)

    def __contains__(self, position: float) -> bool:
        return position in self._owners

    def __iter__(self) -> Iterator[Tuple[float, Any]]:
        for p in self._positions:
            yield p, self._owners[p]

    def insert_if_absent(self, position: float, node_id: Any) -> bool:
        if position in self._owners:
            return False
        bisect.insort(self._positions, position)
        self._owners[position] = node_id
        return True

    def erase(self, position: float) -> Any:
        node_id = self._owners.pop(position)
        idx = bisect.bisect_left(self._positions, position)
        del self._positions[idx]
        return node_id

    def erase_value(self, node_id: Any) -> int:
        keep = [p for p in self._positions if self._owners[p] != node_id]
        removed = len(self._positions) - len(keep)
        if removed:
            self._owners = {p: self._owners[p] for p in keep}
            self._positions = keep
        return removed

    def first_at_or_after(self, position: float) -> int:
        """Index of the first entry >= position, wrapping to 0 past the end."""
        if not self._positions:
            raise IndexError("first_at_or_after on empty store")
        idx = bisect.bisect_left(self._positions, position)
        return idx % len(self._positions)

    def entry(self, index: int) -> Tuple[float, Any]:
        p = self._positions[index % len(self._positions)]
        return p, self._owners[p]

    def count_by_value(self, node_id: Any) -> int:
        return sum(1 for owner in self._owners.values() if owner == node_id)

    def copy(self) -> "RingStore":
        other = RingStore()
        other._positions = list(self._positions)
        other._owners = dict(self._owners)
        return other
