"""Render a graph as indented JSON (internal)."""

import logging

from injectgraph._internal.canonical_json import pretty_dumps
from injectgraph._internal.logging import LogCategory, log_event, timed
from injectgraph.kernel.model import Graph

logger = logging.getLogger(__name__)


def format_json(graph: Graph) -> str:
    """{nodes, edges, circularDependencies} with 2-space indentation."""
    with timed(logger, "json-format") as timer:
        result = pretty_dumps(graph.to_dict())
    log_event(
        logger, logging.DEBUG, LogCategory.PERFORMANCE,
        "JSON output complete",
        output_size=len(result), elapsed_ms=round(timer.elapsed_ms, 3),
    )
    return result
