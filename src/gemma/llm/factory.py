from __future__ import annotations

from .base import LLMClient, LLMConfig
from .errors import LLMError
from .gemini_client import GeminiLLM


def build_llm(*, provider: str, model: str, api_key: str) -> LLMClient:
    """Factory for provider clients.

    Providers:
    - gemini

    Extend by adding new provider clients and mapping here.
    """

    p = provider.lower().strip()
    if p == "gemini":
        return GeminiLLM(LLMConfig(provider="gemini", model=model, api_key=api_key))

    raise LLMError(f"Unknown LLM provider: {provider}")
