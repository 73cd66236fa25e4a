"""Logging setup, log categories and timing helpers (internal).

Every module logs through `logging.getLogger(__name__)`; this module only
decides how records under the `injectgraph` logger are rendered and counted.
"""

import logging
import sys
from contextlib import contextmanager
from enum import Enum
from time import perf_counter
from typing import Any, Dict, Iterator, Optional, TextIO

from injectgraph._internal.canonical_json import canonical_dumps

PACKAGE_LOGGER = "injectgraph"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(category)s] %(message)s%(context_suffix)s"


class LogCategory(str, Enum):
    """Processing phase a log record belongs to."""
    FILE_PROCESSING = "file-processing"
    TYPE_RESOLUTION = "type-resolution"
    GRAPH_CONSTRUCTION = "graph-construction"
    FILTERING = "filtering"
    ERROR_RECOVERY = "error-recovery"
    PERFORMANCE = "performance"


class _CategoryFilter(logging.Filter):
    """Fill in `category` and render `context` for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        category = getattr(record, "category", None)
        record.category = getattr(category, "value", category) or "-"
        context = getattr(record, "context", None)
        record.context_suffix = f" {canonical_dumps(context)}" if context else ""
        return True


class LogStats(logging.Handler):
    """Counts emitted records, in total and per category."""

    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.total_logs = 0
        self.category_counts: Dict[str, int] = {}

    def emit(self, record: logging.LogRecord) -> None:
        category = getattr(record, "category", None)
        category = getattr(category, "value", category) or "-"
        self.total_logs += 1
        self.category_counts[category] = self.category_counts.get(category, 0) + 1


def configure_logging(verbose: bool = False, stream: Optional[TextIO] = None) -> LogStats:
    """Install the stderr handler on the package logger and return its counter.

    Calling it again replaces the handlers installed by a previous call.
    """
    reset_logging()
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    stream_handler = logging.StreamHandler(stream or sys.stderr)
    stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    stream_handler.addFilter(_CategoryFilter())
    stats = LogStats()
    for handler in (stream_handler, stats):
        handler._injectgraph_handler = True
        package_logger.addHandler(handler)

    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    return stats


def log_event(
    log: logging.Logger,
    level: int,
    category: LogCategory,
    message: str,
    **context: Any,
) -> None:
    """Log a message tagged with a category and optional JSON context."""
    log.log(level, message, extra={"category": category.value, "context": context or None})


class Timer:
    """Elapsed milliseconds of one timed block."""

    def __init__(self, label: str):
        self.label = label
        self.elapsed_ms = 0.0


@contextmanager
def timed(
    log: logging.Logger,
    label: str,
    category: LogCategory = LogCategory.PERFORMANCE,
) -> Iterator[Timer]:
    """Measure a block in milliseconds and log the result at DEBUG."""
    timer = Timer(label)
    start = perf_counter()
    try:
        yield timer
    finally:
        timer.elapsed_ms = (perf_counter() - start) * 1000.0
        log_event(log, logging.DEBUG, category, f"{label} finished", elapsed_ms=round(timer.elapsed_ms, 3))


def reset_logging() -> None:
    """Remove the handlers installed by configure_logging()."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if getattr(handler, "_injectgraph_handler", False):
            package_logger.removeHandler(handler)
    package_logger.setLevel(logging.NOTSET)
