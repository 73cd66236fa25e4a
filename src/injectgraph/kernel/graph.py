"""Assemble resolved classes into a dependency graph."""

import logging
from typing import Iterable, List, Set

from injectgraph._internal.logging import LogCategory, log_event
from injectgraph.codes import WarningCategory

from .diagnostics import DiagnosticsContext
from .model import Edge, Graph, Node, ResolvedClass

logger = logging.getLogger(__name__)


def assemble_graph(
    classes: Iterable[ResolvedClass],
    include_decorators: bool = True,
    diagnostics: DiagnosticsContext | None = None,
) -> Graph:
    """Build nodes and edges in discovery order.

    - One node per class, then one edge per resolved dependency.
    - Tokens that match no class still get an edge; no placeholder node is added.
    - With include_decorators=False every edge omits `flags`.
    - A class without a name, or whose name was already seen, is dropped
      (first occurrence wins).

    The returned graph carries no cycle information yet; see cycles.detect_cycles.
    """
    nodes: List[Node] = []
    edges: List[Edge] = []
    seen: Set[str] = set()

    for position, resolved in enumerate(classes, start=1):
        line = resolved.location.line if resolved.location else None
        column = resolved.location.column if resolved.location else None
        name = (resolved.name or "").strip()
        if not name:
            if diagnostics is not None:
                diagnostics.warn(
                    WarningCategory.SKIPPED_CLASSES,
                    f"Dropping class record {position} without a name",
                    file=resolved.file_path or "",
                    line=line,
                    column=column,
                    suggestion="Give the class a name so it can be included in the dependency graph",
                )
            continue
        if name in seen:
            if diagnostics is not None:
                diagnostics.warn(
                    WarningCategory.SKIPPED_CLASSES,
                    f"Duplicate class name '{name}' at class record {position}; keeping the first occurrence",
                    file=resolved.file_path or "",
                    line=line,
                    column=column,
                    suggestion="Rename one of the classes so every class name is unique",
                )
            continue
        seen.add(name)

        nodes.append(Node(id=name, kind=resolved.kind))
        for dependency in resolved.dependencies:
            flags = dependency.flags if include_decorators else None
            if flags is not None and flags.is_empty():
                flags = None
            edges.append(Edge(from_=name, to=dependency.token, flags=flags))

    dangling = {edge.to for edge in edges} - seen
    log_event(
        logger, logging.INFO, LogCategory.GRAPH_CONSTRUCTION,
        "Assembled dependency graph",
        nodes=len(nodes), edges=len(edges), external_tokens=len(dangling),
    )
    return Graph(nodes=nodes, edges=edges, circular_dependencies=[])
