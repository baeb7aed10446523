from __future__ import annotations

from typing import Any, Optional

from google import genai
from google.genai import types as genai_types

from gemma import logger as logger_mod

from .base import LLMClient, LLMConfig
from .errors import NoCandidates, ProviderError
from .types import GenerationRequest, GenerationResult, SchemaNode

log = logger_mod.get_logger()

_PROVIDER_TYPES = {
    "object": genai_types.Type.OBJECT,
    "array": genai_types.Type.ARRAY,
    "string": genai_types.Type.STRING,
    "number": genai_types.Type.NUMBER,
    "integer": genai_types.Type.INTEGER,
    "boolean": genai_types.Type.BOOLEAN,
}


def to_provider_schema(node: SchemaNode) -> genai_types.Schema:
    """Map a :class:`SchemaNode` tree onto ``google.genai`` typed schemas.

    Object nodes also carry ``property_ordering`` so the model emits keys in
    the order the document declared them.
    """
    fields: dict[str, Any] = {"type": _PROVIDER_TYPES[node.kind]}
    if node.description is not None:
        fields["description"] = node.description
    if node.format is not None:
        fields["format"] = node.format
    if node.kind == "object" and node.properties:
        fields["properties"] = {
            name: to_provider_schema(child) for name, child in node.properties.items()
        }
        fields["property_ordering"] = list(node.properties)
    if node.kind == "array" and node.items is not None:
        fields["items"] = to_provider_schema(node.items)
    if node.required:
        fields["required"] = list(node.required)
    if node.enum:
        fields["enum"] = list(node.enum)
    return genai_types.Schema(**fields)


def extract_text(response: Any) -> str:
    """Concatenate the text parts of the first candidate, in order.

    Parts without text (function calls, inline data) are skipped.
    """
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        raise NoCandidates()

    content = getattr(candidates[0], "content", None)
    parts = getattr(content, "parts", None) or []
    return "".join(
        part.text for part in parts if isinstance(getattr(part, "text", None), str)
    )


class GeminiLLM(LLMClient):
    """google-genai client wrapper.

    Supports two modes:
    - JSON mode: ``application/json`` mime type plus a typed response schema
    - Plain mode: no generation config, text is returned as produced
    """

    def __init__(self, config: LLMConfig, client: Optional[genai.Client] = None):
        self._cfg = config
        if client is not None:
            self._client = client
            return
        try:
            self._client = genai.Client(api_key=config.api_key)
        except Exception as e:  # noqa: BLE001
            raise ProviderError(f"Failed to create Gemini client: {e}") from e

    def __enter__(self) -> "GeminiLLM":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        try:
            self._client.close()
        except Exception as e:  # noqa: BLE001
            log.warning("Failed to close Gemini client: %s", e)

    def _build_generation_config(
        self, request: GenerationRequest
    ) -> Optional[genai_types.GenerateContentConfig]:
        if request.response_schema is None and request.mime_type is None:
            return None
        return genai_types.GenerateContentConfig(
            response_mime_type=request.mime_type,
            response_schema=(
                to_provider_schema(request.response_schema)
                if request.response_schema is not None
                else None
            ),
        )

    def generate(self, request: GenerationRequest) -> GenerationResult:
        config = self._build_generation_config(request)
        log.debug(
            "Calling Gemini model=%s mime_type=%s prompt_chars=%d",
            request.model,
            request.mime_type,
            len(request.prompt),
        )
        try:
            response = self._client.models.generate_content(
                model=request.model,
                contents=request.prompt,
                config=config,
            )
        except Exception as e:  # noqa: BLE001
            raise ProviderError(f"Failed to generate content: {e}") from e

        raw = extract_text(response)
        log.debug("Gemini returned %d characters", len(raw))
        return GenerationResult(provider="gemini", model=request.model, raw_text=raw)
