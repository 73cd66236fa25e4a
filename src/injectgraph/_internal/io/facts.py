"""Load collaborator facts files (internal)."""

import json
import logging
from pathlib import Path
from typing import Any, List, Union

from pydantic import ValidationError

from injectgraph._internal.logging import LogCategory, log_event
from injectgraph.codes import ErrorCode
from injectgraph.errors import CliError
from injectgraph.kernel.facts import ClassFacts, FactsDocument

logger = logging.getLogger(__name__)


def parse_facts(data: Any, source: str = "<memory>") -> List[ClassFacts]:
    """Validate a facts document: a list of class records or {"classes": [...]}."""
    if isinstance(data, list):
        data = {"classes": data}
    if not isinstance(data, dict):
        raise CliError(
            "Facts document must be a JSON object or array",
            ErrorCode.FACTS_INVALID,
            file_path=source,
        )
    try:
        document = FactsDocument(**data)
    except ValidationError as e:
        raise CliError(
            f"Invalid facts document: {e.error_count()} validation error(s)",
            ErrorCode.FACTS_INVALID,
            file_path=source,
            context={"errors": [err["msg"] for err in e.errors()[:5]]},
        ) from e
    return document.classes


def load_facts_from_path(path: Union[str, Path]) -> List[ClassFacts]:
    """Read and validate a facts JSON file."""
    facts_path = Path(path)
    if not facts_path.exists():
        raise CliError(
            f"Facts file not found at: {facts_path}",
            ErrorCode.FACTS_NOT_FOUND,
            file_path=str(facts_path),
        )
    try:
        raw = facts_path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise CliError(
            f"Permission denied reading facts file: {facts_path}",
            ErrorCode.PERMISSION_DENIED,
            file_path=str(facts_path),
        ) from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise CliError(
            f"Invalid JSON in facts file: {e}",
            ErrorCode.FACTS_INVALID,
            file_path=str(facts_path),
        ) from e

    classes = parse_facts(data, source=str(facts_path))
    log_event(
        logger, logging.INFO, LogCategory.FILE_PROCESSING,
        "Loaded facts file",
        path=str(facts_path), classes=len(classes),
    )
    return classes
