from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .types import GenerationRequest, GenerationResult


@dataclass(frozen=True)
class LLMConfig:
    provider: str
    model: str
    api_key: str


class LLMClient(Protocol):
    """Single-shot text generation, optionally constrained by a response schema.

    Clients hold a network connection and are used as context managers so the
    connection is released on every exit path.
    """

    def generate(self, request: GenerationRequest) -> GenerationResult:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def __enter__(self) -> "LLMClient":
        raise NotImplementedError

    def __exit__(self, *exc_info) -> None:
        raise NotImplementedError
