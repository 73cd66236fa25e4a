"""Pytest configuration for tests.

No sys.path hacks - tests should import from installed injectgraph package.
"""

from pathlib import Path

import pytest

from injectgraph._internal.logging import reset_logging
from injectgraph.kernel.diagnostics import DiagnosticsContext

FIXTURES = Path(__file__).resolve().parent.parent / "fixtures"


def pytest_addoption(parser):
    """Add gated perf test option."""
    parser.addoption(
        "--run-perf",
        action="store_true",
        default=False,
        help="Run performance sentinel benchmarks (gated)."
    )


def pytest_collection_modifyitems(config, items):
    """Skip perf-marked tests unless --run-perf is set."""
    if config.getoption("--run-perf"):
        return
    skip_perf = pytest.mark.skip(reason="perf tests gated; pass --run-perf")
    for item in items:
        if "perf" in item.keywords:
            item.add_marker(skip_perf)


@pytest.fixture
def diagnostics():
    """Fresh diagnostics context, reset after the test."""
    context = DiagnosticsContext()
    yield context
    context.reset()


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture(autouse=True)
def _clean_logging():
    yield
    reset_logging()
