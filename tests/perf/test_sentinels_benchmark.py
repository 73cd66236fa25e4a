"""Performance sentinels (gated)."""

from __future__ import annotations

import pytest

from injectgraph._internal.benchmarks import (
    MAX_LINEAR_CHAIN_MS,
    MAX_RING_OF_CYCLES_MS,
    MAX_WIDE_FANOUT_MS,
    linear_chain,
    ring_of_cycles,
    run_pipeline,
    wide_fanout,
)


def _assert_budget(benchmark, max_ms: float) -> None:
    mean_ms = benchmark.stats.stats.mean * 1000.0
    assert mean_ms < max_ms, f"Mean {mean_ms:.2f} ms exceeded budget {max_ms:.2f} ms"


@pytest.mark.perf
def test_linear_chain_sentinel(benchmark):
    classes = linear_chain(5000)
    graph = benchmark.pedantic(lambda: run_pipeline(classes, ["S2500"]), rounds=3, iterations=1)

    assert len(graph.nodes) == 5000
    assert len(graph.edges) == 4999
    assert graph.circular_dependencies == []

    _assert_budget(benchmark, MAX_LINEAR_CHAIN_MS)


@pytest.mark.perf
def test_wide_fanout_sentinel(benchmark):
    classes = wide_fanout(2000)
    graph = benchmark.pedantic(lambda: run_pipeline(classes, ["Leaf7"]), rounds=3, iterations=1)

    # Leaf7 upstream reaches Root; Root's other leaves are not reached
    assert graph.node_ids() == ["Root", "Leaf7"]
    assert len(graph.edges) == 1

    _assert_budget(benchmark, MAX_WIDE_FANOUT_MS)


@pytest.mark.perf
def test_ring_of_cycles_sentinel(benchmark):
    classes = ring_of_cycles(1000)
    graph = benchmark.pedantic(lambda: run_pipeline(classes, ["A0"]), rounds=3, iterations=1)

    assert len(graph.nodes) == 2000
    assert len(graph.circular_dependencies) == 1000
    assert sum(1 for e in graph.edges if e.is_circular) == 1000

    _assert_budget(benchmark, MAX_RING_OF_CYCLES_MS)
