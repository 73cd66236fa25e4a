"""Public API for the injectgraph engine.

High-level functions that run the whole pipeline and return complete,
structured results:

    facts -> resolve -> assemble -> detect cycles -> filter

Each stage is a pure transformation. The only state is the
DiagnosticsContext passed in by the caller (a fresh one is created when
none is given).
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from injectgraph._internal.io.facts import load_facts_from_path, parse_facts
from injectgraph._internal.logging import LogCategory, log_event, timed
from injectgraph.codes import Severity, WarningCategory
from injectgraph.kernel.config import GraphConfig
from injectgraph.kernel.cycles import detect_cycles
from injectgraph.kernel.diagnostics import DiagnosticsContext, StructuredWarnings
from injectgraph.kernel.facts import ClassFacts
from injectgraph.kernel.filter import apply_config
from injectgraph.kernel.graph import assemble_graph
from injectgraph.kernel.model import Graph, ResolvedClass
from injectgraph.kernel.resolver import resolve_classes

logger = logging.getLogger(__name__)

FactsInput = Union[str, os.PathLike, Path, Dict[str, Any], List[Any]]


class AnalysisResult(BaseModel):
    """Stable result model for one pipeline run."""
    graph: Graph
    warnings: StructuredWarnings
    stats: Dict[str, Any] = Field(default_factory=dict)  # Resolver statistics (decorator counts, ...)


def load_facts(source: FactsInput) -> List[ClassFacts]:
    """Load class facts from a JSON file path, a dict or a list of records."""
    if isinstance(source, (dict, list)):
        return parse_facts(source)
    return load_facts_from_path(Path(source))


def _record_cycle_warnings(graph: Graph, diagnostics: DiagnosticsContext) -> None:
    for cycle in graph.circular_dependencies:
        diagnostics.warn(
            WarningCategory.CIRCULAR_REFERENCES,
            f"Circular dependency: {' -> '.join(cycle)} -> {cycle[0]}",
            suggestion="Break the cycle with an optional dependency, a factory or an event",
            severity=Severity.INFO,
        )


def build_graph(
    classes: Sequence[Union[ClassFacts, ResolvedClass]],
    config: Optional[GraphConfig] = None,
    diagnostics: Optional[DiagnosticsContext] = None,
) -> Graph:
    """Run the pipeline on facts (or already resolved classes) and return the graph.

    Facts are resolved first; ResolvedClass records go straight to the
    assembler. The unfiltered graph is not kept; call the kernel stages
    directly when both are needed.
    """
    config = config or GraphConfig()
    diagnostics = diagnostics if diagnostics is not None else DiagnosticsContext()

    with timed(logger, "graph-build", LogCategory.GRAPH_CONSTRUCTION):
        facts = [c for c in classes if isinstance(c, ClassFacts)]
        if facts and len(facts) != len(classes):
            raise TypeError("build_graph() expects either ClassFacts or ResolvedClass records, not both")
        resolved = resolve_classes(facts, diagnostics) if facts else list(classes)

        graph = assemble_graph(resolved, include_decorators=config.include_decorators, diagnostics=diagnostics)
        graph = detect_cycles(graph)
        _record_cycle_warnings(graph, diagnostics)

    if config.entry:
        with timed(logger, "graph-filter", LogCategory.FILTERING):
            graph = apply_config(graph, config)

    log_event(
        logger, logging.INFO, LogCategory.GRAPH_CONSTRUCTION,
        f"Graph built: {len(graph.nodes)} nodes, {len(graph.edges)} edges",
        cycles=len(graph.circular_dependencies), warnings=diagnostics.count,
    )
    return graph


def analyze(
    facts: Union[FactsInput, Sequence[ClassFacts]],
    config: Optional[GraphConfig] = None,
    diagnostics: Optional[DiagnosticsContext] = None,
) -> AnalysisResult:
    """Load (if needed) and analyze facts; returns graph, warnings and statistics."""
    diagnostics = diagnostics if diagnostics is not None else DiagnosticsContext()
    if isinstance(facts, (list, tuple)) and all(isinstance(c, ClassFacts) for c in facts):
        classes = list(facts)
    else:
        classes = load_facts(facts)

    graph = build_graph(classes, config=config, diagnostics=diagnostics)
    return AnalysisResult(
        graph=graph,
        warnings=diagnostics.structured(),
        stats=diagnostics.stats.to_dict(),
    )
