"""Rebalancing analysis.

Plan owner changes for resources between two rings and measure how load
spreads over the alive nodes.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, Optional, Tuple
from collections import Counter

from consistent_hash_ring import ConsistentHasher

Move = Tuple[Optional[Any], Optional[Any]]


def _owner(ring: ConsistentHasher, resource: float) -> Optional[Any]:
    return None if ring.empty() else ring.hash(resource)


class RebalancePlanner:
    def plan_moved(self, resources: Iterable[float], ring_before: ConsistentHasher, ring_after: ConsistentHasher) -> Dict[float, Move]:
        """Return dict resource -> (from_owner, to_owner) for resources whose owner changed."""
        moved = {}
        for r in resources:
            b = _owner(ring_before, r)
            a = _owner(ring_after, r)
            if b != a:
                moved[r] = (b, a)
        return moved

    def stats(self, plan: Dict[float, Move]) -> Dict[str, Any]:
        by_to = Counter([to for (_, to) in plan.values() if to is not None])
        by_from = Counter([frm for (frm, _) in plan.values() if frm is not None])
        return {
            "moved_count": float(len(plan)),
            "by_to": dict(by_to),
            "by_from": dict(by_from),
        }


def moved_fraction(resources: Iterable[float], ring_before: ConsistentHasher, ring_after: ConsistentHasher) -> float:
    resources = list(resources)
    if not resources:
        return 0.0
    plan = RebalancePlanner().plan_moved(resources, ring_before, ring_after)
    return len(plan) / len(resources)


def load_distribution(ring: ConsistentHasher, resources: Iterable[float]) -> Counter:
    return Counter(ring.hash(r) for r in resources)


def hit_ratios(ring: ConsistentHasher, counts: Counter) -> Dict[Any, float]:
    """Hits per unit of weight for every alive node; 0 for nodes with no hits."""
    ratios = {}
    for node_id in ring.nodes():
        hits = counts.get(node_id, 0)
        ratios[node_id] = hits / ring.weight(node_id) if hits else 0.0
    return ratios
