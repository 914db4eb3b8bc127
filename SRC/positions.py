"""Deterministic virtual-node placement.
- A position generator maps (node id, slot index) to a point in [0, 1)
- Default is an integer avalanche mix; xxh3_64 is available as an alternative
- Same generator + seed + add sequence => bit-identical ring
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict
import operator

try:
    import xxhash
except ImportError as e:
    raise RuntimeError("xxhash is required. Install with: pip install xxhash") from e

# (node_id, slot) -> position in [0, 1)
PositionGenerator = Callable[[Any, int], float]

MASK32 = 0xFFFFFFFF
GOLDEN_RATIO = 0x9E3779B9
# largest prime below 2**32
MODULUS = 4294967291
_SCALE53 = float(1 << 53)


def h64(data: bytes, seed: int = 0) -> int:
    return xxhash.xxh3_64_intdigest(data, seed=seed)


def key_hash(key: str, seed: int = 0) -> int:
    return h64(key.encode("utf-8"), seed)


def unit_interval(value: int) -> float:
    """Scale a 64-bit digest to [0, 1) keeping the top 53 bits."""
    return (value >> 11) / _SCALE53


def key_resource(key: str, seed: int = 0) -> float:
    """Resource value for an arbitrary string key."""
    return unit_interval(key_hash(key, seed))


def mix(a: int, b: int, c: int) -> int:
    """Jenkins 96-bit mix; returns the final c word."""
    a &= MASK32
    b &= MASK32
    c &= MASK32
    a = ((a - b - c) ^ (c >> 13)) & MASK32
    b = ((b - c - a) ^ (a << 8)) & MASK32
    c = ((c - a - b) ^ (b >> 13)) & MASK32
    a = ((a - b - c) ^ (c >> 12)) & MASK32
    b = ((b - c - a) ^ (a << 16)) & MASK32
    c = ((c - a - b) ^ (b >> 5)) & MASK32
    a = ((a - b - c) ^ (c >> 3)) & MASK32
    b = ((b - c - a) ^ (a << 10)) & MASK32
    c = ((c - a - b) ^ (b >> 15)) & MASK32
    return c


@dataclass(frozen=True)
class MixPositionGenerator:
    seed: int = 0

    def __call__(self, node_id: Any, slot: int) -> float:
        ident = operator.index(node_id)
        # zigzag keeps negative ids distinct from their magnitude
        rest = ident << 1 if ident >= 0 else ((-ident) << 1) - 1
        a = GOLDEN_RATIO + (rest & MASK32)
        b = GOLDEN_RATIO + slot
        c = self.seed
        rest >>= 32
        # ids wider than 32 bits are mixed in one limb at a time
        while rest:
            c = mix(a, b, c)
            a = GOLDEN_RATIO + (rest & MASK32)
            rest >>= 32
        return (mix(a, b, c) % MODULUS) / MODULUS


@dataclass(frozen=True)
class Xxh3PositionGenerator:
    seed: int = 0

    def __call__(self, node_id: Any, slot: int) -> float:
        return unit_interval(key_hash(f"{node_id}#{slot}", self.seed))


GENERATORS: Dict[str, Callable[[int], PositionGenerator]] = {
    "mix": MixPositionGenerator,
    "xxh3": Xxh3PositionGenerator,
}


def get_generator(name: str, seed: int = 0) -> PositionGenerator:
    try:
        factory = GENERATORS[name]
    except KeyError:
        raise ValueError(f"Unknown position generator {name!r}; choose from {sorted(GENERATORS)}") from None
    return factory(seed)
