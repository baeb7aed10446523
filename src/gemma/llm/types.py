from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Optional

SchemaKind = Literal["object", "array", "string", "number", "integer", "boolean"]

SUPPORTED_KINDS: tuple[str, ...] = (
    "object",
    "array",
    "string",
    "number",
    "integer",
    "boolean",
)


@dataclass(frozen=True)
class SchemaNode:
    """One node of a response schema.

    ``properties`` is only populated for objects and ``items`` only for arrays.
    """

    kind: SchemaKind
    description: Optional[str] = None
    properties: dict[str, "SchemaNode"] = field(default_factory=dict)
    items: Optional["SchemaNode"] = None
    required: tuple[str, ...] = ()
    enum: tuple[str, ...] = ()
    format: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Canonical JSON-Schema form of this node (only populated keys)."""
        out: dict[str, Any] = {"type": self.kind}
        if self.description is not None:
            out["description"] = self.description
        if self.format is not None:
            out["format"] = self.format
        if self.kind == "object" and self.properties:
            out["properties"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.kind == "array" and self.items is not None:
            out["items"] = self.items.to_dict()
        if self.required:
            out["required"] = list(self.required)
        if self.enum:
            out["enum"] = list(self.enum)
        return out


@dataclass(frozen=True)
class GenerationRequest:
    model: str
    prompt: str
    response_schema: Optional[SchemaNode] = None
    mime_type: Optional[str] = None


@dataclass(frozen=True)
class GenerationResult:
    """Provider-neutral result container.

    ``parsed_json`` is only set once ``raw_text`` has been decoded.
    """

    provider: str
    model: str
    raw_text: str
    parsed_json: Any = None
