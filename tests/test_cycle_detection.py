"""Tests for cycle detection in the dependency graph."""

from injectgraph.kernel.cycles import detect_cycles, find_cycles
from injectgraph.kernel.graph import assemble_graph
from injectgraph.kernel.model import ResolvedClass, ResolvedDependency


def _graph(adjacency):
    """Build a graph from {name: [tokens]} keeping insertion order."""
    return assemble_graph([
        ResolvedClass(
            name=name,
            kind="service",
            dependencies=[ResolvedDependency(token=t, parameter_name=t.lower()) for t in tokens],
        )
        for name, tokens in adjacency.items()
    ])


def _circular(graph):
    return [(e.from_, e.to) for e in graph.edges if e.is_circular]


def test_three_node_cycle_behind_entry():
    graph = detect_cycles(_graph({
        "EntryNode": ["CycleA"],
        "CycleA": ["CycleB"],
        "CycleB": ["CycleC"],
        "CycleC": ["CycleA"],
    }))
    assert graph.circular_dependencies == [["CycleA", "CycleB", "CycleC"]]
    assert _circular(graph) == [("CycleC", "CycleA")]


def test_two_node_cycle():
    graph = detect_cycles(_graph({"AuthService": ["SessionStore"], "SessionStore": ["AuthService"]}))
    assert graph.circular_dependencies == [["AuthService", "SessionStore"]]
    assert _circular(graph) == [("SessionStore", "AuthService")]


def test_self_loop_marked_but_not_reported():
    graph = detect_cycles(_graph({"SelfRefService": ["SelfRefService"]}))
    assert graph.circular_dependencies == []
    assert _circular(graph) == [("SelfRefService", "SelfRefService")]
    assert graph.edges[0].is_self_loop


def test_acyclic_diamond_has_no_cycles():
    graph = detect_cycles(_graph({
        "Top": ["Left", "Right"],
        "Left": ["Bottom"],
        "Right": ["Bottom"],
        "Bottom": [],
    }))
    assert graph.circular_dependencies == []
    assert _circular(graph) == []
    assert all("isCircular" not in e for e in graph.to_dict()["edges"])


def test_overlapping_cycles_each_reported():
    graph = detect_cycles(_graph({"A": ["B"], "B": ["A", "C"], "C": ["A"]}))
    assert graph.circular_dependencies == [["A", "B"], ["A", "B", "C"]]
    assert _circular(graph) == [("B", "A"), ("C", "A")]


def test_dangling_tokens_are_ignored():
    graph = detect_cycles(_graph({"A": ["HttpClient", "B"], "B": ["Router"]}))
    assert graph.circular_dependencies == []
    assert len(graph.edges) == 3


def test_input_graph_is_not_modified():
    graph = _graph({"A": ["B"], "B": ["A"]})
    detected = detect_cycles(graph)
    assert graph.circular_dependencies == []
    assert all(e.is_circular is None for e in graph.edges)
    assert detected is not graph
    assert detected.node_ids() == graph.node_ids()


def test_wire_form_marks_circular_edge():
    graph = detect_cycles(_graph({"A": ["B"], "B": ["A"]}))
    data = graph.to_dict()
    assert data["edges"] == [
        {"from": "A", "to": "B"},
        {"from": "B", "to": "A", "isCircular": True},
    ]
    assert data["circularDependencies"] == [["A", "B"]]


def test_deep_chain_does_not_recurse():
    length = 20000
    adjacency = {f"S{i}": [f"S{i + 1}"] for i in range(length - 1)}
    adjacency[f"S{length - 1}"] = ["S0"]
    report = find_cycles(_graph(adjacency))
    assert len(report.cycles) == 1
    assert len(report.cycles[0]) == length
    assert report.cycles[0][0] == "S0"
    assert report.circular_edges == {length - 1}


def test_detection_is_deterministic():
    adjacency = {"A": ["B", "C"], "B": ["C", "A"], "C": ["A", "B"]}
    first = detect_cycles(_graph(adjacency)).to_dict()
    second = detect_cycles(_graph(adjacency)).to_dict()
    assert first == second
