"""Render a graph as a Mermaid flowchart (internal)."""

import logging
import re

from injectgraph._internal.logging import timed
from injectgraph.kernel.model import Graph

logger = logging.getLogger(__name__)

EMPTY_GRAPH = "flowchart LR\n  %% Empty graph - no nodes to display"

_SEPARATORS = re.compile(r"[.\-]")
_INVALID = re.compile(r"[^a-zA-Z0-9_]")


def sanitize_node_name(name: str) -> str:
    """Make an id safe for Mermaid: '.'/'-' become '_', other symbols are dropped."""
    return _INVALID.sub("", _SEPARATORS.sub("_", name))


def format_mermaid(graph: Graph) -> str:
    """flowchart LR with one line per edge; circular edges are dotted and labelled."""
    if not graph.nodes:
        return EMPTY_GRAPH

    with timed(logger, "mermaid-format"):
        lines = ["flowchart LR"]
        for edge in graph.edges:
            source = sanitize_node_name(edge.from_)
            target = sanitize_node_name(edge.to)
            if edge.is_circular:
                lines.append(f"  {source} -.->|circular| {target}")
            else:
                lines.append(f"  {source} --> {target}")

        if graph.circular_dependencies:
            lines.append("")
            lines.append("  %% Circular Dependencies Detected:")
            for cycle in graph.circular_dependencies:
                lines.append(f"  %% {' -> '.join(cycle)} -> {cycle[0]}")

    return "\n".join(lines)
