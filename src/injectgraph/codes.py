"""Warning, error and exit code constants for injectgraph.

These constants prevent stringly-typed categories and codes and ensure
client code uses the same values the engine and CLI emit.
"""

from enum import Enum, IntEnum


class WarningCategory(str, Enum):
    """Buckets of the structured warning report (non-blocking)."""

    TYPE_RESOLUTION = "typeResolution"
    SKIPPED_TYPES = "skippedTypes"
    UNRESOLVED_IMPORTS = "unresolvedImports"
    CIRCULAR_REFERENCES = "circularReferences"
    PERFORMANCE = "performance"
    SKIPPED_CLASSES = "skippedClasses"


class Severity(str, Enum):
    """Severity attached to every warning."""

    WARNING = "warning"
    ERROR = "error"
    INFO = "info"


class ErrorCode(str, Enum):
    """Error codes raised by the CLI and IO layers."""

    # Fatal
    FACTS_NOT_FOUND = "FACTS_NOT_FOUND"
    FACTS_INVALID = "FACTS_INVALID"
    MEMORY_LIMIT_EXCEEDED = "MEMORY_LIMIT_EXCEEDED"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_ARGUMENTS = "INVALID_ARGUMENTS"
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # Recoverable
    OUTPUT_WRITE_ERROR = "OUTPUT_WRITE_ERROR"


class ExitCode(IntEnum):
    """Process exit codes for the injectgraph CLI."""

    SUCCESS = 0
    GENERAL_ERROR = 1
    INVALID_ARGUMENTS = 2
    INPUT_ERROR = 3
    PARSING_ERROR = 4
    MEMORY_ERROR = 6
    PERMISSION_ERROR = 8
