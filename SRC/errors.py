"""Error kinds raised by the hash ring.
Every failure leaves the ring unchanged.
"""
from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    CAPACITY_EXCEEDED = "capacity_exceeded"
    EMPTY_RING = "empty_ring"
    INVALID_RESOURCE = "invalid_resource"
    INVALID_WEIGHT = "invalid_weight"


class RingError(Exception):
    kind: ErrorKind


class CapacityExceeded(RingError, OverflowError):
    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(self, requested: int, size: int, max_nodes: int):
        self.requested = requested
        self.size = size
        self.max_nodes = max_nodes
        super().__init__(
            f"adding {requested} virtual nodes to a ring of {size} would reach capacity {max_nodes}"
        )


class EmptyRing(RingError, LookupError):
    kind = ErrorKind.EMPTY_RING

    def __init__(self) -> None:
        super().__init__("empty ring")


class InvalidResource(RingError, ValueError):
    kind = ErrorKind.INVALID_RESOURCE

    def __init__(self, resource: Any):
        self.resource = resource
        super().__init__(f"resource {resource!r} outside [0, 1]")


class InvalidWeight(RingError, ValueError):
    kind = ErrorKind.INVALID_WEIGHT

    def __init__(self, weight: Any):
        self.weight = weight
        super().__init__(f"weight must be >= 0, got {weight!r}")
