"""Performance sentinel workloads and budgets (internal)."""

from __future__ import annotations

import os
from time import perf_counter
from typing import List, Tuple

from injectgraph.kernel.cycles import detect_cycles
from injectgraph.kernel.filter import filter_graph
from injectgraph.kernel.graph import assemble_graph
from injectgraph.kernel.model import Graph, ResolvedClass, ResolvedDependency


def _budget_from_env(var_name: str, default_ms: float) -> float:
    raw = os.getenv(var_name)
    if not raw:
        return default_ms
    try:
        return float(raw)
    except ValueError:
        return default_ms


MAX_LINEAR_CHAIN_MS = _budget_from_env("INJECTGRAPH_MAX_LINEAR_CHAIN_MS", 1000.0)
MAX_WIDE_FANOUT_MS = _budget_from_env("INJECTGRAPH_MAX_WIDE_FANOUT_MS", 1000.0)
MAX_RING_OF_CYCLES_MS = _budget_from_env("INJECTGRAPH_MAX_RING_OF_CYCLES_MS", 1000.0)


def linear_chain(length: int) -> List[ResolvedClass]:
    """S0 -> S1 -> ... -> S{length-1}."""
    return [
        ResolvedClass(
            name=f"S{i}",
            kind="service",
            dependencies=[ResolvedDependency(token=f"S{i + 1}", parameter_name="next")] if i + 1 < length else [],
        )
        for i in range(length)
    ]


def wide_fanout(width: int) -> List[ResolvedClass]:
    """One root component depending on `width` leaf services."""
    root = ResolvedClass(
        name="Root",
        kind="component",
        dependencies=[ResolvedDependency(token=f"Leaf{i}", parameter_name=f"leaf{i}") for i in range(width)],
    )
    leaves = [ResolvedClass(name=f"Leaf{i}", kind="service") for i in range(width)]
    return [root, *leaves]


def ring_of_cycles(count: int) -> List[ResolvedClass]:
    """`count` two-node cycles chained together: Ai <-> Bi, Bi -> A(i+1)."""
    classes = []
    for i in range(count):
        a_deps = [ResolvedDependency(token=f"B{i}", parameter_name="b")]
        b_deps = [ResolvedDependency(token=f"A{i}", parameter_name="a")]
        if i + 1 < count:
            b_deps.append(ResolvedDependency(token=f"A{i + 1}", parameter_name="next"))
        classes.append(ResolvedClass(name=f"A{i}", kind="service", dependencies=a_deps))
        classes.append(ResolvedClass(name=f"B{i}", kind="service", dependencies=b_deps))
    return classes


def run_pipeline(classes: List[ResolvedClass], entry: List[str] | None = None) -> Graph:
    graph = detect_cycles(assemble_graph(classes))
    return filter_graph(graph, entry=entry, direction="both")


def time_pipeline(classes: List[ResolvedClass], entry: List[str] | None = None) -> Tuple[float, Graph]:
    """Run assemble -> detect -> filter and return elapsed ms plus the graph."""
    start = perf_counter()
    graph = run_pipeline(classes, entry)
    elapsed_ms = (perf_counter() - start) * 1000.0
    return elapsed_ms, graph
