import json
import os
from typing import Any

from gemma.errors import FileAccessError


def read_text_file(path: str, label: str) -> str:
    """Read a whole UTF-8 text file, naming it by ``label`` in errors."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"failed to read {label} file {path}: {e}") from e


def read_json_file(path: str, label: str) -> Any:
    """Read and decode a JSON file.

    Only read failures raise :class:`FileAccessError`; decode errors are left
    to the caller so it can report them in its own terms.
    """
    return json.loads(read_text_file(path, label))


def write_output(text: str, output_path: str) -> None:
    """
    Overwrite ``output_path`` with ``text``, creating parent directories if needed.
    """
    try:
        os.makedirs(os.path.dirname(output_path) or ".", exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise FileAccessError(f"failed to write output file {output_path}: {e}") from e
