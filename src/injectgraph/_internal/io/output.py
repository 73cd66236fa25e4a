"""Write rendered output to stdout or a file (internal)."""

import sys
from pathlib import Path
from typing import Optional, TextIO, Union

from injectgraph.codes import ErrorCode
from injectgraph.errors import CliError


def write_output(
    content: str,
    path: Optional[Union[str, Path]] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Write to the given stream (stdout by default) or to a file.

    Parent directories of the file are created as needed.
    """
    if path is None:
        (stream or sys.stdout).write(content)
        return

    out_path = Path(path)
    try:
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise CliError(
            f"Failed to write output file: {e}",
            ErrorCode.OUTPUT_WRITE_ERROR,
            file_path=str(out_path),
        ) from e
