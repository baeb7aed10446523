"""LLM provider abstractions (Gemini today).

Design goals:
- Keep provider-specific SDKs isolated.
- Translate JSON-Schema documents into typed nodes once, at the boundary.
- Provide a small, stable interface for "prompt in, JSON out" use cases.
"""

from .factory import build_llm
from .schema import DEFAULT_SCHEMA, default_schema, translate_schema
from .types import GenerationRequest, GenerationResult, SchemaNode

__all__ = [
    "DEFAULT_SCHEMA",
    "GenerationRequest",
    "GenerationResult",
    "SchemaNode",
    "build_llm",
    "default_schema",
    "translate_schema",
]
