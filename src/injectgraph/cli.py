"""injectgraph CLI: build a dependency-injection graph from analyzer facts."""

import argparse
import json
import logging
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path

from injectgraph._internal.logging import reset_logging
from injectgraph.codes import ErrorCode
from injectgraph.errors import CliError, classify_exit_code, format_error

logger = logging.getLogger(__name__)


def _build_parser(injectgraph_version: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="injectgraph",
        description="Dependency-injection graph from decorated constructor facts"
    )
    parser.add_argument("--version", action="version", version=f"injectgraph {injectgraph_version}")
    parser.add_argument(
        "-p", "--facts",
        dest="facts",
        type=Path,
        required=True,
        help="Path to the facts JSON produced by the source analyzer"
    )
    parser.add_argument(
        "-f", "--format",
        choices=["json", "mermaid"],
        default="json",
        help="Output format: json (default) or mermaid"
    )
    parser.add_argument(
        "-e", "--entry",
        nargs="+",
        default=None,
        metavar="SYMBOL",
        help="Starting nodes for a sub-graph"
    )
    parser.add_argument(
        "-d", "--direction",
        choices=["upstream", "downstream", "both"],
        default="downstream",
        help="Filtering direction from the entry nodes (default: downstream)"
    )
    parser.add_argument(
        "--include-decorators",
        action="store_true",
        help="Include Optional/Self/SkipSelf/Host flags on edges"
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (stdout if omitted)"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show detailed processing information on stderr"
    )
    return parser


def _run(args: argparse.Namespace) -> None:
    # Lazy import: kernel and renderers load only when a graph is built
    from pydantic import ValidationError

    from injectgraph._internal.io.facts import load_facts_from_path
    from injectgraph._internal.io.output import write_output
    from injectgraph._internal.logging import LogCategory, configure_logging, log_event, timed
    from injectgraph._internal.reporting.json_formatter import format_json
    from injectgraph._internal.reporting.mermaid_formatter import format_mermaid
    from injectgraph.api import build_graph
    from injectgraph.kernel.config import GraphConfig
    from injectgraph.kernel.diagnostics import DiagnosticsContext

    log_stats = configure_logging(args.verbose)
    diagnostics = DiagnosticsContext()

    try:
        config = GraphConfig(
            direction=args.direction,
            entry=args.entry,
            include_decorators=args.include_decorators,
        )
    except ValidationError as e:
        raise CliError(
            f"Invalid arguments: {e.errors()[0]['msg']}",
            ErrorCode.INVALID_ARGUMENTS,
        ) from e

    if args.verbose:
        options = {
            "facts": str(args.facts),
            "format": args.format,
            "entry": config.entry,
            "direction": config.direction,
            "includeDecorators": config.include_decorators,
            "out": str(args.out) if args.out else None,
            "verbose": args.verbose,
        }
        print(f"CLI Options: {json.dumps(options, indent=2)}", file=sys.stderr)

    with timed(logger, "total-execution") as total:
        log_event(logger, logging.INFO, LogCategory.FILE_PROCESSING, "Loading facts", path=str(args.facts))
        classes = load_facts_from_path(args.facts)
        if args.verbose:
            print(f"Found {len(classes)} decorated classes", file=sys.stderr)

        graph = build_graph(classes, config=config, diagnostics=diagnostics)
        if args.verbose:
            print(f"Graph: {len(graph.nodes)} nodes, {len(graph.edges)} edges", file=sys.stderr)
            if graph.circular_dependencies:
                print(f"Detected {len(graph.circular_dependencies)} circular dependencies", file=sys.stderr)

        content = format_mermaid(graph) if args.format == "mermaid" else format_json(graph)
        write_output(content, args.out)
        if args.verbose and args.out:
            print(f"Output written to: {args.out}", file=sys.stderr)

    if args.verbose:
        structured = diagnostics.structured()
        print("\nPerformance Summary:", file=sys.stderr)
        print(f"  Total time: {total.elapsed_ms:.2f}ms", file=sys.stderr)
        print(f"  Total logs: {log_stats.total_logs}", file=sys.stderr)
        print(f"  Warnings: {structured.total_count}", file=sys.stderr)
        for category, warnings in structured.categories.items():
            if warnings:
                print(f"    {category}: {len(warnings)}", file=sys.stderr)
        stats = diagnostics.stats
        print(f"  Parameters: {stats.total_parameters}", file=sys.stderr)
        print(f"  Legacy decorators: {stats.legacy_decorators_used}", file=sys.stderr)
        print(f"  inject() calls: {stats.inject_patterns_used}", file=sys.stderr)


def main():
    """Main CLI entry point for injectgraph."""
    try:
        injectgraph_version = get_version("injectgraph")
    except PackageNotFoundError:
        injectgraph_version = "dev"

    parser = _build_parser(injectgraph_version)
    args = parser.parse_args()

    try:
        _run(args)
    except CliError as e:
        print(format_error(e, verbose=args.verbose), file=sys.stderr)
        sys.exit(int(classify_exit_code(e)))
    except MemoryError as e:
        error = CliError("Memory limit exceeded while building the graph", ErrorCode.MEMORY_LIMIT_EXCEEDED)
        error.__traceback__ = e.__traceback__
        print(format_error(error, verbose=args.verbose), file=sys.stderr)
        sys.exit(int(classify_exit_code(error)))
    except Exception as e:
        error = CliError(str(e), ErrorCode.INTERNAL_ERROR, context={"originalError": type(e).__name__})
        error.__traceback__ = e.__traceback__
        print(format_error(error, verbose=args.verbose), file=sys.stderr)
        sys.exit(int(classify_exit_code(error)))
    finally:
        reset_logging()


if __name__ == "__main__":
    main()
