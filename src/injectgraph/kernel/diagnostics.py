"""Diagnostics context: structured warnings and resolver statistics.

The context is an explicit object threaded through every stage instead of
module-level state. A CLI invocation or test owns one context and calls
reset() between independent runs so warning counts never leak across them.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from pydantic import BaseModel, ConfigDict, Field

from injectgraph.codes import Severity, WarningCategory

logger = logging.getLogger(__name__)


class Diagnostic(BaseModel):
    """A single advisory diagnostic. Never blocks the pipeline."""
    category: WarningCategory
    message: str
    file: str = ""
    line: Optional[int] = None
    column: Optional[int] = None
    suggestion: Optional[str] = None
    severity: Severity = Severity.WARNING

    model_config = ConfigDict(extra="forbid", frozen=True, use_enum_values=True)

    def dedupe_key(self) -> Tuple:
        return (self.category, self.file, self.line, self.column, self.message)


class StructuredWarnings(BaseModel):
    """Warnings grouped by category plus the total count."""
    categories: Dict[str, List[Diagnostic]]
    total_count: int = Field(..., alias="totalCount")

    model_config = ConfigDict(populate_by_name=True)


@dataclass
class ResolverStats:
    """Counters gathered while resolving parameters (verbose reporting only)."""
    decorator_counts: Dict[str, int] = field(
        default_factory=lambda: {"optional": 0, "self": 0, "skipSelf": 0, "host": 0}
    )
    skipped_decorators: List[Dict[str, str]] = field(default_factory=list)
    parameters_with_decorators: int = 0
    parameters_without_decorators: int = 0
    legacy_decorators_used: int = 0
    inject_patterns_used: int = 0
    total_parameters: int = 0

    def to_dict(self) -> Dict:
        return {
            "decoratorCounts": dict(self.decorator_counts),
            "skippedDecorators": [dict(entry) for entry in self.skipped_decorators],
            "parametersWithDecorators": self.parameters_with_decorators,
            "parametersWithoutDecorators": self.parameters_without_decorators,
            "legacyDecoratorsUsed": self.legacy_decorators_used,
            "injectPatternsUsed": self.inject_patterns_used,
            "totalParameters": self.total_parameters,
        }


class DiagnosticsContext:
    """Collects warnings for one pipeline run.

    Identical warnings are recorded once for the lifetime of the context, so
    resolving the same input twice without reset() does not re-warn.
    """

    def __init__(self):
        self._warnings: List[Diagnostic] = []
        self._seen: Set[Tuple] = set()
        self.stats = ResolverStats()

    def reset(self) -> None:
        """Drop all warnings, dedupe keys and statistics."""
        self._warnings = []
        self._seen = set()
        self.stats = ResolverStats()

    def add(self, warning: Diagnostic) -> bool:
        """Record a warning. Returns False if an identical one was already recorded."""
        key = warning.dedupe_key()
        if key in self._seen:
            return False
        self._seen.add(key)
        self._warnings.append(warning)

        level = logging.INFO if warning.severity == Severity.INFO.value else logging.WARNING
        location = f"{warning.file}:{warning.line}" if warning.line else warning.file
        logger.log(
            level,
            "%s%s",
            warning.message,
            f" ({location})" if location else "",
            extra={"category": warning.category},
        )
        return True

    def warn(
        self,
        category: WarningCategory,
        message: str,
        file: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None,
        suggestion: Optional[str] = None,
        severity: Severity = Severity.WARNING,
    ) -> bool:
        """Build and record a warning in one call."""
        return self.add(
            Diagnostic(
                category=category,
                message=message,
                file=file,
                line=line,
                column=column,
                suggestion=suggestion,
                severity=severity,
            )
        )

    @property
    def warnings(self) -> List[Diagnostic]:
        return list(self._warnings)

    @property
    def count(self) -> int:
        return len(self._warnings)

    def by_category(self, category: WarningCategory) -> List[Diagnostic]:
        return [w for w in self._warnings if w.category == category.value]

    def structured(self) -> StructuredWarnings:
        categories: Dict[str, List[Diagnostic]] = {c.value: [] for c in WarningCategory}
        for warning in self._warnings:
            categories[warning.category].append(warning)
        return StructuredWarnings(categories=categories, total_count=len(self._warnings))
