"""Translate loosely-typed JSON-Schema documents into :class:`SchemaNode` trees.

Only the subset Gemini's response schema understands is supported: ``type``,
``description``, ``properties``, ``items``, ``required``, ``enum`` and
``format``. Everything else in the document is ignored.

The translation happens once, at the boundary. After it the rest of the
package only sees typed nodes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .errors import SchemaError, UnsupportedType
from .types import SUPPORTED_KINDS, SchemaNode

ITEMS_MARKER = "items"

DEFAULT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "message": {
            "type": "string",
            "description": "Response message from Gemini",
        },
    },
    "required": ["message"],
}


def _optional_str(document: Mapping[str, Any], key: str) -> str | None:
    value = document.get(key)
    return value if isinstance(value, str) else None


def _string_entries(value: Any) -> tuple[str, ...]:
    # Non-string entries are dropped, not rejected.
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(v for v in value if isinstance(v, str))


def _kind(document: Mapping[str, Any]) -> str:
    raw = document.get("type")
    if raw is None:
        raise SchemaError("missing 'type'")
    if not isinstance(raw, str):
        raise SchemaError(f"'type' must be a string, got {type(raw).__name__}")
    kind = raw.strip().lower()
    if kind not in SUPPORTED_KINDS:
        raise UnsupportedType(raw)
    return kind


def _properties(value: Any) -> dict[str, SchemaNode]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SchemaError("'properties' must be an object")

    out: dict[str, SchemaNode] = {}
    for name, child in value.items():
        try:
            out[str(name)] = _translate(child)
        except SchemaError as e:
            raise e.nest(str(name))
    return out


def _items(value: Any) -> SchemaNode | None:
    if value is None:
        return None
    try:
        return _translate(value)
    except SchemaError as e:
        raise e.nest(ITEMS_MARKER)


def _translate(document: Any) -> SchemaNode:
    if not isinstance(document, Mapping):
        raise SchemaError(
            f"schema node must be an object, got {type(document).__name__}"
        )

    kind = _kind(document)
    return SchemaNode(
        kind=kind,  # type: ignore[arg-type]
        description=_optional_str(document, "description"),
        properties=_properties(document.get("properties")) if kind == "object" else {},
        items=_items(document.get("items")) if kind == "array" else None,
        required=_string_entries(document.get("required")),
        enum=_string_entries(document.get("enum")),
        format=_optional_str(document, "format"),
    )


def default_schema() -> SchemaNode:
    return translate_schema(DEFAULT_SCHEMA)


def translate_schema(document: Any) -> SchemaNode:
    """Translate one schema node (top-level or nested) into a :class:`SchemaNode`.

    Raises :class:`SchemaError` (or :class:`UnsupportedType`) when any node in
    the tree is malformed; no partial tree is ever returned. The error path
    names the property (or ``items``) chain leading to the failing node.
    """
    try:
        return _translate(document)
    except RecursionError as e:
        raise SchemaError("schema document is nested too deeply") from e


def validation_schema(node: SchemaNode) -> dict[str, Any]:
    """JSON-Schema used to check a decoded response against ``node``.

    Enum values are always strings in a :class:`SchemaNode`, so they are only
    enforced on string nodes.
    """
    out: dict[str, Any] = {"type": node.kind}
    if node.kind == "object" and node.properties:
        out["properties"] = {
            name: validation_schema(child) for name, child in node.properties.items()
        }
    if node.kind == "array" and node.items is not None:
        out["items"] = validation_schema(node.items)
    if node.required:
        out["required"] = list(node.required)
    if node.enum and node.kind == "string":
        out["enum"] = list(node.enum)
    return out
