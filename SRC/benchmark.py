"""Throughput and load-balance driver for the ring.

Each round times `samples` lookups, reports weights / hits / hit ratio per
node, then mutates the ring. Mutation phases cycle add -> remove -> erase.

    python SRC/benchmark.py --nodes 26 --rounds 6 --samples 200000
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional
from collections import Counter
import argparse
import logging
import random
import string
import time

from config import RingConfig, configure_logging
from consistent_hash_ring import ConsistentHasher
from errors import CapacityExceeded
from rebalance import hit_ratios

log = logging.getLogger(__name__)

PHASES = ("add", "remove", "erase")


@dataclass
class RoundReport:
    round: int
    phase: str
    elapsed_ms: float
    average_ms: float
    per_second: int
    weights: Dict[int, int]
    hits: Dict[Any, int]
    ratios: Dict[Any, float]


def node_name(node_id: Any) -> str:
    letters = string.ascii_lowercase
    if isinstance(node_id, int) and 0 <= node_id < len(letters):
        return letters[node_id]
    return f"n{node_id}"


def _mutate(ring: ConsistentHasher, phase: str, nodes: int, rng: random.Random) -> None:
    if phase == "add":
        for _ in range(nodes):
            try:
                ring.add(rng.randint(0, nodes - 1), rng.randint(0, 50))
            except CapacityExceeded as e:
                log.warning("skipped add: %s", e)
    elif phase == "remove":
        for _ in range(nodes):
            ring.remove(rng.randint(0, nodes - 1), rng.randint(0, 50))
    else:
        ring.erase(rng.randint(0, nodes - 1))


def run_benchmark(nodes: int = 26, rounds: int = 3, samples: int = 100_000,
                  seed: Optional[int] = None, ring: Optional[ConsistentHasher] = None) -> Iterator[RoundReport]:
    rng = random.Random(seed)
    ring = ring if ring is not None else ConsistentHasher()
    for i in range(nodes):
        ring.add(i, rng.randint(100, 200))

    for n in range(rounds):
        hits: Counter = Counter(dict.fromkeys(range(nodes), 0))
        begin = time.perf_counter()
        if not ring.empty():
            for _ in range(samples):
                hits[ring.hash(rng.random())] += 1
        elapsed = (time.perf_counter() - begin) * 1000.0
        average = elapsed / samples if samples else 0.0
        phase = PHASES[n % len(PHASES)]
        yield RoundReport(
            round=n,
            phase=phase,
            elapsed_ms=elapsed,
            average_ms=average,
            per_second=int(1000 / average) if average else 0,
            weights={i: ring.weight(i) for i in range(nodes)},
            hits=hits,
            ratios=hit_ratios(ring, hits),
        )
        _mutate(ring, phase, nodes, rng)


def format_report(report: RoundReport) -> List[str]:
    return [
        f"process time: total={report.elapsed_ms:.0f}ms average={report.average_ms:.6f}ms "
        f"speed={report.per_second} per second",
        "node weight: " + " ".join(f"{node_name(k)}={v}" for k, v in report.weights.items()),
        "node counter: " + " ".join(f"{node_name(k)}={v}" for k, v in report.hits.items()),
        "hit ratio: " + " ".join(f"{node_name(k)}={v:.2f}" for k, v in report.ratios.items()),
    ]


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark the weighted consistent hashing ring.")
    parser.add_argument("--nodes", type=int, default=26)
    parser.add_argument("--rounds", type=int, default=3)
    parser.add_argument("--samples", type=int, default=100_000)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    cfg = RingConfig.from_env()
    configure_logging(cfg.log_level)
    ring = ConsistentHasher.from_config(cfg)
    for report in run_benchmark(args.nodes, args.rounds, args.samples, args.seed, ring):
        print()
        for line in format_report(report):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
