"""Weighted consistent hashing ring over the unit interval.
- Sorted position store for O(log N) lookups via bisect
- Weight of a node == number of its virtual nodes
- Deterministic placement through an injected position generator
No locking here: wrap with concurrent_ring for shared use.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Set, Tuple, TYPE_CHECKING
import copy
import logging
import operator

from errors import CapacityExceeded, EmptyRing, InvalidResource, InvalidWeight
from positions import MixPositionGenerator, PositionGenerator, get_generator, key_resource
from ring_store import RingStore

if TYPE_CHECKING:
    from config import RingConfig

log = logging.getLogger(__name__)

MAX_NODES = 1 << 20


def _check_weight(weight: Any) -> int:
    try:
        count = operator.index(weight)
    except TypeError:
        raise InvalidWeight(weight) from None
    if count < 0:
        raise InvalidWeight(weight)
    return count


class ConsistentHasher:
    """Consistent hashing ring with weighted virtual nodes."""
    def __init__(self, max_nodes: int = MAX_NODES, generator: Optional[PositionGenerator] = None):
        self.max_nodes = max_nodes
        self._generator: PositionGenerator = generator or MixPositionGenerator()
        self._store = RingStore()
        # id -> virtual node count; keys are exactly the alive set
        self._weights: Dict[Any, int] = {}

    @classmethod
    def from_config(cls, cfg: "RingConfig") -> "ConsistentHasher":
        return cls(max_nodes=cfg.max_nodes, generator=get_generator(cfg.generator, cfg.seed))

    @property
    def generator(self) -> PositionGenerator:
        return self._generator

    def __len__(self) -> int:
        return len(self._store)

    def add(self, node_id: Any, weight: int) -> None:
        weight = _check_weight(weight)
        if weight == 0:
            return
        size = len(self._store)
        if size + weight >= self.max_nodes:
            raise CapacityExceeded(weight, size, self.max_nodes)
        slot = self._weights.get(node_id, 0)
        placed = 0
        while placed < weight:
            position = self._generator(node_id, slot)
            slot += 1
            if self._store.insert_if_absent(position, node_id):
                placed += 1
        self._weights[node_id] = self._weights.get(node_id, 0) + weight
        log.debug("added node=%s vnodes=%d weight=%d", node_id, weight, self._weights[node_id])

    def remove(self, node_id: Any, weight: int) -> int:
        weight = _check_weight(weight)
        current = self._weights.get(node_id, 0)
        weight = min(weight, current)
        for _ in range(weight):
            target = self._generator(node_id, current - 1)
            idx = self._store.first_at_or_after(target)
            position, owner = self._store.entry(idx)
            while owner != node_id:
                idx += 1
                position, owner = self._store.entry(idx)
            self._store.erase(position)
            current -= 1
        if current:
            self._weights[node_id] = current
        else:
            self._weights.pop(node_id, None)
        if weight:
            log.debug("removed node=%s vnodes=%d weight=%d", node_id, weight, current)
        return current

    def erase(self, node_id: Any) -> None:
        removed = self._store.erase_value(node_id)
        self._weights.pop(node_id, None)
        if removed:
            log.debug("erased node=%s vnodes=%d", node_id, removed)

    def weight(self, node_id: Any) -> int:
        return self._weights.get(node_id, 0)

    def hash(self, resource: float) -> Any:
        if not self._store:
            raise EmptyRing()
        if not 0.0 <= resource <= 1.0:
            raise InvalidResource(resource)
        return self._store.entry(self._store.first_at_or_after(resource))[1]

    def locate(self, key: str) -> Any:
        return self.hash(key_resource(key))

    def empty(self) -> bool:
        return not self._store

    def alive_set(self) -> Set[Any]:
        return set(self._weights)

    def nodes(self) -> List[Any]:
        return list(self._weights.keys())

    def dump_positions(self) -> List[Tuple[float, Any]]:
        return list(self._store)

    def stats(self) -> Dict[str, int]:
        return {"nodes": len(self._weights), "vnodes": len(self._store), "max_nodes": self.max_nodes}

    def clone(self) -> "ConsistentHasher":
        """Clone the ring for before/after comparison; the generator is shared."""
        other = copy.copy(self)
        other._store = self._store.copy()
        other._weights = dict(self._weights)
        return other
