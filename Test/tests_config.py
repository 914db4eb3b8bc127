from config import RingConfig
from consistent_hash_ring import MAX_NODES, ConsistentHasher
from positions import Xxh3PositionGenerator


def test_defaults(monkeypatch):
    for name in ("RING_MAX_NODES", "RING_GENERATOR", "RING_SEED", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    cfg = RingConfig.from_env()
    assert cfg == RingConfig(max_nodes=MAX_NODES, generator="mix", seed=0, log_level="INFO")


def test_from_env_builds_ring(monkeypatch):
    monkeypatch.setenv("RING_MAX_NODES", "500")
    monkeypatch.setenv("RING_GENERATOR", "xxh3")
    monkeypatch.setenv("RING_SEED", "9")
    cfg = RingConfig.from_env()
    ring = ConsistentHasher.from_config(cfg)
    assert ring.max_nodes == 500
    assert ring.generator == Xxh3PositionGenerator(9)
