"""injectgraph: dependency-injection graph engine for decorator-annotated classes."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("injectgraph")
except PackageNotFoundError:
    __version__ = "dev"

# Public API exports
# Note: the pipeline functions live in injectgraph.api; the kernel stages
# (resolver, assembler, cycles, filter) stay importable from injectgraph.kernel.
from injectgraph.api import AnalysisResult, analyze, build_graph, load_facts
from injectgraph.codes import ErrorCode, ExitCode, Severity, WarningCategory
from injectgraph.kernel.config import GraphConfig
from injectgraph.kernel.diagnostics import Diagnostic, DiagnosticsContext
from injectgraph.kernel.model import Edge, EdgeFlags, Graph, Node

__all__ = [
    "__version__",
    "analyze",
    "build_graph",
    "load_facts",
    "AnalysisResult",
    "GraphConfig",
    "Diagnostic",
    "DiagnosticsContext",
    "Graph",
    "Node",
    "Edge",
    "EdgeFlags",
    "ErrorCode",
    "ExitCode",
    "Severity",
    "WarningCategory",
]
