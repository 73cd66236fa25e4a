"""Directional sub-graph extraction from entry nodes."""

import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from injectgraph._internal.logging import LogCategory, log_event

from .config import Direction, GraphConfig
from .model import Graph

logger = logging.getLogger(__name__)


def _adjacency(graph: Graph, direction: Direction) -> Dict[str, List[Tuple[int, str]]]:
    """Map node/token -> [(edge index, neighbour)] following edges forward or backward."""
    adjacency: Dict[str, List[Tuple[int, str]]] = {}
    for edge_index, edge in enumerate(graph.edges):
        if direction == "downstream":
            adjacency.setdefault(edge.from_, []).append((edge_index, edge.to))
        else:
            adjacency.setdefault(edge.to, []).append((edge_index, edge.from_))
    return adjacency


def traverse(graph: Graph, entries: Iterable[str], direction: Direction) -> Tuple[Set[str], Set[int]]:
    """Reachability from entries in one direction.

    Returns the ids reached (including dangling tokens reached downstream)
    and the indices of the edges followed. Entries that match no node are
    ignored.
    """
    known = set(graph.node_ids())
    adjacency = _adjacency(graph, direction)
    reached: Set[str] = set()
    followed: Set[int] = set()

    stack = [entry for entry in entries if entry in known]
    while stack:
        current = stack.pop()
        if current in reached:
            continue
        reached.add(current)
        for edge_index, neighbour in adjacency.get(current, []):
            followed.add(edge_index)
            if neighbour not in reached:
                stack.append(neighbour)

    return reached, followed


def _cycle_survives(cycle: List[str], node_ids: Set[str], edge_pairs: Set[Tuple[str, str]]) -> bool:
    if not cycle or not all(node_id in node_ids for node_id in cycle):
        return False
    return all(
        (cycle[i], cycle[(i + 1) % len(cycle)]) in edge_pairs
        for i in range(len(cycle))
    )


def filter_graph(
    graph: Graph,
    entry: Optional[Iterable[str]] = None,
    direction: Direction = "downstream",
) -> Graph:
    """Sub-graph reachable from entry ids.

    - No entries: the input graph is returned as is.
    - downstream / upstream: nodes and edges touched by forward / backward traversal.
    - both: union of the downstream and upstream results, each computed
      from the same entries.

    Cycles are kept only if every node (and edge) of the cycle survives.
    The input graph is never modified.
    """
    entries = list(entry or [])
    if not entries:
        return graph

    missing = [e for e in entries if graph.get_node(e) is None]
    for entry_id in missing:
        log_event(
            logger, logging.WARNING, LogCategory.FILTERING,
            f"Entry point '{entry_id}' not found in graph",
        )

    directions: List[Direction] = ["downstream", "upstream"] if direction == "both" else [direction]
    reached: Set[str] = set()
    followed: Set[int] = set()
    for current_direction in directions:
        ids, edge_indices = traverse(graph, entries, current_direction)
        reached |= ids
        followed |= edge_indices

    nodes = [node for node in graph.nodes if node.id in reached]
    edges = [edge for i, edge in enumerate(graph.edges) if i in followed]

    node_ids = {node.id for node in nodes}
    edge_pairs = {(edge.from_, edge.to) for edge in edges}
    cycles = [
        list(cycle) for cycle in graph.circular_dependencies
        if _cycle_survives(cycle, node_ids, edge_pairs)
    ]

    log_event(
        logger, logging.INFO, LogCategory.FILTERING,
        f"Filtered graph: {len(nodes)} nodes, {len(edges)} edges",
        entries=entries, direction=direction,
    )
    return Graph(nodes=nodes, edges=edges, circular_dependencies=cycles)


def apply_config(graph: Graph, config: GraphConfig) -> Graph:
    """Filter a graph with the entry/direction settings of a GraphConfig."""
    return filter_graph(graph, entry=config.entry, direction=config.direction)
