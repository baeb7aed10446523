from __future__ import annotations

import json
from typing import Any

from jsonschema import validate
from jsonschema.exceptions import ValidationError as _SchemaValidationError

from .errors import InvalidJSONResponse, ResponseFormatError


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def parse_json(text: str) -> Any:
    """Parse JSON from a model response.

    Assumes the provider was instructed to return JSON only. The raw text is
    kept on the error for diagnostics. ``NaN`` and ``Infinity`` are rejected.
    """

    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError as e:
        raise InvalidJSONResponse(
            f"Failed to parse response as JSON: {e}", raw_text=text
        ) from e


def validate_json(instance: Any, schema: dict[str, Any]) -> None:
    try:
        validate(instance=instance, schema=schema)
    except _SchemaValidationError as e:
        raise ResponseFormatError(
            f"Response does not match the schema: {e.message}"
        ) from e


def format_json(value: Any) -> str:
    """Re-serialize with two-space indentation, keeping non-ASCII text as is.

    Keys keep the order the model produced them in.
    """
    try:
        return json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        raise ResponseFormatError(f"Failed to format JSON response: {e}") from e
