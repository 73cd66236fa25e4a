"""Centralized JSON serialization.

Two renderings are used across the package: a canonical one (sorted keys,
compact separators) for byte-stable comparisons and log context, and an
indented one for human-facing graph output. Node and edge lists are never
reordered by either; their discovery order is part of the output.
"""

import json
from typing import Any


def canonical_dumps(obj: Any) -> str:
    """
    Canonical JSON serialization for byte-stable output.

    Rules:
    - UTF-8 (no ASCII escaping)
    - Sorted keys
    - Stable separators (",", ":")
    - List order preserved as given
    """
    return json.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        default=str,
    )


def pretty_dumps(obj: Any) -> str:
    """Indented JSON (2 spaces), key order preserved."""
    return json.dumps(obj, indent=2, ensure_ascii=False)
