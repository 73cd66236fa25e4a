"""Test public API surface - ensure imports work correctly and no side effects.

This test verifies:
- injectgraph exposes analyze, build_graph, load_facts
- Functions work on tiny fixtures
- Importing the package does not configure logging
"""

import logging


def test_package_exports_core_functions():
    import injectgraph
    from injectgraph import analyze, build_graph, load_facts

    assert callable(analyze)
    assert callable(build_graph)
    assert callable(load_facts)
    for name in injectgraph.__all__:
        assert hasattr(injectgraph, name), name


def test_api_functions_work_on_fixtures(fixtures_dir):
    from injectgraph import AnalysisResult, analyze

    result = analyze(fixtures_dir / "diamond.json")
    assert isinstance(result, AnalysisResult)
    assert result.graph.node_ids() == ["Top", "Left", "Right", "Bottom"]


def test_kernel_stages_importable():
    from injectgraph.kernel.cycles import detect_cycles
    from injectgraph.kernel.filter import filter_graph
    from injectgraph.kernel.graph import assemble_graph
    from injectgraph.kernel.resolver import resolve_classes

    assert all(callable(f) for f in (detect_cycles, filter_graph, assemble_graph, resolve_classes))


def test_import_has_no_logging_side_effects():
    import injectgraph  # noqa: F401

    package_logger = logging.getLogger("injectgraph")
    assert not any(getattr(h, "_injectgraph_handler", False) for h in package_logger.handlers)
