"""Packaging regression tests.

Tests that verify the source layout and installed package behavior.
"""

from pathlib import Path


def test_source_layout():
    repo_root = Path(__file__).resolve().parent.parent
    src_pkg = repo_root / "src" / "injectgraph"

    assert src_pkg.exists(), "injectgraph package should exist in src/"
    assert (src_pkg / "kernel").exists(), "injectgraph.kernel should exist"
    assert (src_pkg / "_internal").exists(), "injectgraph._internal should exist"
    assert (repo_root / "pyproject.toml").exists()


def test_import_boundary():
    import injectgraph
    import injectgraph.kernel  # noqa: F401

    # Check version: in dev mode it's "dev", in installed mode it's "1.0.0"
    assert injectgraph.__version__ in ("1.0.0", "dev")


def test_console_script_target():
    from injectgraph.cli import main

    assert callable(main)
