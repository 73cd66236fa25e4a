"""Detect circular dependencies in an assembled graph."""

import logging
from typing import Dict, List, NamedTuple, Set, Tuple

from injectgraph._internal.logging import LogCategory, log_event

from .model import Graph

logger = logging.getLogger(__name__)

WHITE = 0  # Unvisited
GRAY = 1   # On the current DFS path
BLACK = 2  # Fully explored


class CycleReport(NamedTuple):
    cycles: List[List[str]]
    circular_edges: Set[int]  # Indices into graph.edges


def find_cycles(graph: Graph) -> CycleReport:
    """Iterative three-color DFS over nodes and edges in list order.

    When an edge reaches a node that is still on the current path, the
    cycle is the path from that node up to the current one, and the edge
    is circular. A self-loop edge is circular but is not reported as a cycle.

    Uses an explicit stack (no recursion), so chain depth is not bounded by
    the interpreter's recursion limit. Each node and edge is handled once.
    """
    node_ids = graph.node_ids()
    index_of: Dict[str, int] = {node_id: i for i, node_id in enumerate(node_ids)}

    # Outgoing (edge index, target node index) per node; dangling targets have no index.
    outgoing: List[List[Tuple[int, int]]] = [[] for _ in node_ids]
    for edge_index, edge in enumerate(graph.edges):
        source = index_of.get(edge.from_)
        target = index_of.get(edge.to)
        if source is None or target is None:
            continue
        outgoing[source].append((edge_index, target))

    color = [WHITE] * len(node_ids)
    path: List[int] = []
    path_position: Dict[int, int] = {}
    cycles: List[List[str]] = []
    circular_edges: Set[int] = set()

    for root in range(len(node_ids)):
        if color[root] != WHITE:
            continue

        # Stack frames: [node index, position in its outgoing list]
        stack: List[List[int]] = [[root, 0]]
        color[root] = GRAY
        path_position[root] = len(path)
        path.append(root)

        while stack:
            frame = stack[-1]
            node, position = frame
            if position == len(outgoing[node]):
                stack.pop()
                color[node] = BLACK
                path.pop()
                del path_position[node]
                continue

            frame[1] += 1
            edge_index, target = outgoing[node][position]
            if color[target] == WHITE:
                color[target] = GRAY
                path_position[target] = len(path)
                path.append(target)
                stack.append([target, 0])
            elif color[target] == GRAY:
                circular_edges.add(edge_index)
                if target != node:
                    start = path_position[target]
                    cycles.append([node_ids[i] for i in path[start:]])

    return CycleReport(cycles=cycles, circular_edges=circular_edges)


def detect_cycles(graph: Graph) -> Graph:
    """Return a copy of the graph with circular edges marked and cycles listed."""
    report = find_cycles(graph)
    edges = [
        edge.model_copy(update={"is_circular": True}) if i in report.circular_edges else edge
        for i, edge in enumerate(graph.edges)
    ]
    if report.cycles or report.circular_edges:
        log_event(
            logger, logging.INFO, LogCategory.GRAPH_CONSTRUCTION,
            "Detected circular dependencies",
            cycles=len(report.cycles), circular_edges=len(report.circular_edges),
        )
    return Graph(nodes=list(graph.nodes), edges=edges, circular_dependencies=report.cycles)
