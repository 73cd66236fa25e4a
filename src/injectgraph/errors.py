"""CLI error type, exit code classification and user-facing error text.

The graph engine itself never raises for recoverable conditions; these
errors come from loading input, writing output and argument handling.
"""

import traceback
from typing import Any, Dict, Optional

from injectgraph._internal.canonical_json import canonical_dumps
from injectgraph.codes import ErrorCode, ExitCode

FATAL_CODES = frozenset({
    ErrorCode.FACTS_NOT_FOUND,
    ErrorCode.FACTS_INVALID,
    ErrorCode.MEMORY_LIMIT_EXCEEDED,
    ErrorCode.INTERNAL_ERROR,
    ErrorCode.INVALID_ARGUMENTS,
    ErrorCode.PERMISSION_DENIED,
})

EXIT_CODES = {
    ErrorCode.FACTS_NOT_FOUND: ExitCode.INPUT_ERROR,
    ErrorCode.FACTS_INVALID: ExitCode.PARSING_ERROR,
    ErrorCode.MEMORY_LIMIT_EXCEEDED: ExitCode.MEMORY_ERROR,
    ErrorCode.PERMISSION_DENIED: ExitCode.PERMISSION_ERROR,
    ErrorCode.INVALID_ARGUMENTS: ExitCode.INVALID_ARGUMENTS,
}

RECOVERY_GUIDANCE = {
    ErrorCode.FACTS_NOT_FOUND: [
        "Check that the facts file path is correct",
        "Run the source analyzer first to produce the facts file",
        "Try using an absolute path instead of a relative one",
    ],
    ErrorCode.FACTS_INVALID: [
        "Validate the JSON syntax of the facts file",
        "Compare the file against the schema emitted by scripts/generate_schemas.py",
        "Remove unknown keys; every record is validated strictly",
    ],
    ErrorCode.MEMORY_LIMIT_EXCEEDED: [
        "Process a smaller portion of the codebase",
        "Use --entry filtering to limit scope",
    ],
    ErrorCode.OUTPUT_WRITE_ERROR: [
        "Check file permissions for the output location",
        "Try writing to a different location",
        "Omit --out to write to stdout instead",
    ],
    ErrorCode.PERMISSION_DENIED: [
        "Check file and directory permissions",
        "Verify read access to the facts file and write access to the output location",
    ],
    ErrorCode.INVALID_ARGUMENTS: [
        "Review --help for valid options",
        "Ensure all required arguments are provided",
    ],
}

DEFAULT_GUIDANCE = [
    "Review the error message for specific details",
    "Try running with --verbose for more information",
]


class CliError(Exception):
    """Structured error raised by the CLI and IO layers."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        file_path: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = ErrorCode(code)
        self.file_path = file_path
        self.context = context or {}
        super().__init__(message)

    def is_fatal(self) -> bool:
        return self.code in FATAL_CODES

    def is_recoverable(self) -> bool:
        return not self.is_fatal()


def classify_exit_code(error: Optional[CliError]) -> ExitCode:
    """Map an error to the process exit code (SUCCESS for None)."""
    if error is None:
        return ExitCode.SUCCESS
    return EXIT_CODES.get(error.code, ExitCode.GENERAL_ERROR)


def recovery_guidance(error: CliError) -> list[str]:
    return list(RECOVERY_GUIDANCE.get(error.code, DEFAULT_GUIDANCE))


def format_error(error: CliError, verbose: bool = False) -> str:
    """Render an error for stderr: header, details, suggestions, optional traceback."""
    header = "Fatal Error" if error.is_fatal() else "Warning"

    lines = [header, "", f"Message: {error.message}"]
    if error.file_path:
        lines.append(f"File: {error.file_path}")
    lines.append(f"Code: {error.code.value}")

    if error.context:
        lines.append("")
        lines.append("Context:")
        for key, value in error.context.items():
            lines.append(f"  {key}: {canonical_dumps(value)}")

    lines.append("")
    lines.append("Suggestions:")
    for suggestion in recovery_guidance(error):
        lines.append(f"  - {suggestion}")

    if verbose and error.__traceback__ is not None:
        lines.append("")
        lines.append("Traceback:")
        lines.append("".join(traceback.format_tb(error.__traceback__)).rstrip())

    lines.append("")
    lines.append("Run with --help for usage information")
    lines.append("Use --verbose for detailed debugging information")
    return "\n".join(lines)
