from benchmark import format_report, main, node_name, run_benchmark
from consistent_hash_ring import ConsistentHasher
from positions import Xxh3PositionGenerator


def test_rounds_cycle_mutation_phases():
    reports = list(run_benchmark(nodes=5, rounds=4, samples=2000, seed=1))
    assert [r.phase for r in reports] == ["add", "remove", "erase", "add"]
    first = reports[0]
    assert sum(first.hits.values()) == 2000
    assert all(100 <= w <= 200 for w in first.weights.values())
    assert set(first.ratios) == {0, 1, 2, 3, 4}


def test_same_seed_same_routing():
    a = [r.hits for r in run_benchmark(nodes=6, rounds=3, samples=500, seed=42)]
    b = [r.hits for r in run_benchmark(nodes=6, rounds=3, samples=500, seed=42)]
    assert a == b


def test_capacity_errors_are_skipped():
    ring = ConsistentHasher(max_nodes=5 * 200 + 60)
    reports = list(run_benchmark(nodes=5, rounds=2, samples=100, seed=3, ring=ring))
    assert len(reports) == 2
    assert len(ring) < ring.max_nodes


def test_format_report_names_nodes():
    report = next(run_benchmark(nodes=3, rounds=1, samples=100, seed=0))
    lines = format_report(report)
    assert lines[0].startswith("process time:")
    assert lines[1].startswith("node weight: a=")
    assert node_name(30) == "n30"


def test_main(capsys):
    assert main(["--nodes", "3", "--rounds", "2", "--samples", "100", "--seed", "5"]) == 0
    out = capsys.readouterr().out
    assert out.count("hit ratio:") == 2


def test_ring_with_foreign_ids():
    ring = ConsistentHasher(generator=Xxh3PositionGenerator())
    ring.add(100, 300)
    ring.add("edge", 300)
    report = next(run_benchmark(nodes=3, rounds=1, samples=500, seed=8, ring=ring))
    assert sum(report.hits.values()) == 500
    assert report.hits[100] > 0
    assert report.hits["edge"] > 0
    assert report.ratios["edge"] > 0
    assert node_name(100) == "n100"
