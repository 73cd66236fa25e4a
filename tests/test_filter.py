"""Tests for directional sub-graph extraction."""

import logging

import pytest

from injectgraph.api import build_graph, load_facts
from injectgraph.kernel.config import GraphConfig
from injectgraph.kernel.filter import apply_config, filter_graph, traverse


@pytest.fixture
def diamond(fixtures_dir):
    return build_graph(load_facts(fixtures_dir / "diamond.json"))


@pytest.fixture
def cycle_chain(fixtures_dir):
    return build_graph(load_facts(fixtures_dir / "cycle_chain.json"))


@pytest.fixture
def app_graph(fixtures_dir):
    return build_graph(load_facts(fixtures_dir / "app_facts.json"))


def _pairs(graph):
    return [(e.from_, e.to) for e in graph.edges]


def test_no_entries_returns_graph_unchanged(diamond):
    assert filter_graph(diamond) is diamond
    assert filter_graph(diamond, entry=[]) is diamond
    assert apply_config(diamond, GraphConfig()) is diamond


def test_downstream(diamond):
    sub = filter_graph(diamond, entry=["Left"], direction="downstream")
    assert sub.node_ids() == ["Left", "Bottom"]
    assert _pairs(sub) == [("Left", "Bottom")]


def test_upstream(diamond):
    sub = filter_graph(diamond, entry=["Left"], direction="upstream")
    assert sub.node_ids() == ["Top", "Left"]
    assert _pairs(sub) == [("Top", "Left")]


def test_upstream_from_leaf_reaches_everything(diamond):
    sub = filter_graph(diamond, entry=["Bottom"], direction="upstream")
    assert sub.node_ids() == diamond.node_ids()
    assert _pairs(sub) == _pairs(diamond)


def test_both_is_union_of_directions(diamond):
    sub = filter_graph(diamond, entry=["Left"], direction="both")
    # Right is a sibling, reachable only by mixing directions
    assert sub.node_ids() == ["Top", "Left", "Bottom"]
    assert _pairs(sub) == [("Top", "Left"), ("Left", "Bottom")]


def test_multiple_entries(diamond):
    sub = filter_graph(diamond, entry=["Left", "Right"], direction="downstream")
    assert sub.node_ids() == ["Left", "Right", "Bottom"]
    assert _pairs(sub) == [("Left", "Bottom"), ("Right", "Bottom")]


def test_unknown_entry_is_ignored_with_warning(diamond, caplog):
    with caplog.at_level(logging.WARNING, logger="injectgraph"):
        sub = filter_graph(diamond, entry=["Nope"], direction="downstream")
    assert sub.nodes == []
    assert sub.edges == []
    assert "Entry point 'Nope' not found in graph" in caplog.text


def test_unknown_entry_alongside_known(diamond):
    sub = filter_graph(diamond, entry=["Nope", "Right"], direction="downstream")
    assert sub.node_ids() == ["Right", "Bottom"]


def test_dangling_edges_kept_downstream(app_graph):
    sub = filter_graph(app_graph, entry=["UserService"], direction="downstream")
    assert sub.node_ids() == ["UserService", "LoggerService"]
    assert _pairs(sub) == [
        ("UserService", "HttpClient"),
        ("UserService", "LoggerService"),
        ("LoggerService", "LOG_CONFIG"),
    ]


def test_cycle_dropped_when_not_reached(app_graph):
    assert app_graph.circular_dependencies == [["AuthService", "SessionStore"]]
    sub = filter_graph(app_graph, entry=["UserService"], direction="downstream")
    assert sub.circular_dependencies == []


def test_cycle_kept_with_circular_marks(cycle_chain):
    sub = filter_graph(cycle_chain, entry=["CycleA"], direction="downstream")
    assert sub.node_ids() == ["CycleA", "CycleB", "CycleC"]
    assert sub.circular_dependencies == [["CycleA", "CycleB", "CycleC"]]
    assert [e.is_circular for e in sub.edges] == [None, None, True]


def test_upstream_from_cycle_member(cycle_chain):
    sub = filter_graph(cycle_chain, entry=["CycleB"], direction="upstream")
    assert sub.node_ids() == ["EntryNode", "CycleA", "CycleB", "CycleC"]
    assert sub.circular_dependencies == [["CycleA", "CycleB", "CycleC"]]


def test_filter_does_not_modify_input(cycle_chain):
    before = cycle_chain.to_dict()
    filter_graph(cycle_chain, entry=["CycleC"], direction="both")
    assert cycle_chain.to_dict() == before


def test_traverse_reports_followed_edges(diamond):
    reached, followed = traverse(diamond, ["Top"], "downstream")
    assert reached == {"Top", "Left", "Right", "Bottom"}
    assert followed == {0, 1, 2, 3}


def test_apply_config(diamond):
    config = GraphConfig(entry=["Right"], direction="upstream")
    assert apply_config(diamond, config).node_ids() == ["Top", "Right"]


def test_downstream_from_top_covers_diamond(diamond):
    down = filter_graph(diamond, entry=["Top"], direction="downstream")
    assert down.node_ids() == ["Top", "Left", "Right", "Bottom"]
    assert len(down.edges) == 4
    # Top has no ancestors, so both adds nothing
    assert filter_graph(diamond, entry=["Top"], direction="both").to_dict() == down.to_dict()


def test_downstream_from_entry_node_keeps_cycle(cycle_chain):
    sub = filter_graph(cycle_chain, entry=["EntryNode"], direction="downstream")
    assert sub.node_ids() == ["EntryNode", "CycleA", "CycleB", "CycleC"]
    assert sub.circular_dependencies == [["CycleA", "CycleB", "CycleC"]]
    [circular] = [e for e in sub.edges if e.is_circular]
    assert (circular.from_, circular.to) == ("CycleC", "CycleA")


def test_isolated_node_kept_without_entries(app_graph):
    assert "OrphanService" in app_graph.node_ids()
    assert not any("OrphanService" in (e.from_, e.to) for e in app_graph.edges)


def test_node_ids_unique_and_cycles_without_repeats(app_graph):
    ids = app_graph.node_ids()
    assert len(ids) == len(set(ids))
    for cycle in app_graph.circular_dependencies:
        assert len(cycle) == len(set(cycle))
