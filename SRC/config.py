"""Ring construction settings read from the environment, plus logging setup."""
from __future__ import annotations

from dataclasses import dataclass
from os import getenv
import logging

from consistent_hash_ring import MAX_NODES

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class RingConfig:
    max_nodes: int = MAX_NODES
    generator: str = "mix"
    seed: int = 0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "RingConfig":
        return cls(
            max_nodes=int(getenv("RING_MAX_NODES", str(MAX_NODES))),
            generator=getenv("RING_GENERATOR", "mix"),
            seed=int(getenv("RING_SEED", "0")),
            log_level=getenv("LOG_LEVEL", "INFO"),
        )


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
