from __future__ import annotations

from gemma.errors import GemmaError


class LLMError(GemmaError):
    pass


class SchemaError(LLMError):
    """Raised when a schema document cannot be translated.

    ``path`` holds the property names (and ``items`` markers) leading from the
    root of the document to the node that failed.
    """

    stage = "schema"

    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.message = message
        self.path = tuple(path)
        super().__init__(self._render())

    def _render(self) -> str:
        if not self.path:
            return self.message
        return f"{'.'.join(self.path)}: {self.message}"

    def nest(self, segment: str) -> "SchemaError":
        """Prefix the error path with ``segment`` and return the same error."""
        self.path = (segment, *self.path)
        self.args = (self._render(),)
        return self


class UnsupportedType(SchemaError):
    def __init__(self, name: str, path: tuple[str, ...] = ()):
        self.type_name = name
        super().__init__(f"unsupported schema type {name!r}", path)


class ProviderError(LLMError):
    """The remote generation call failed."""

    stage = "provider"


class NoCandidates(ProviderError):
    def __init__(self, message: str = "no response candidates received"):
        super().__init__(message)


class ResponseFormatError(LLMError):
    """The model output could not be used in the requested format."""

    stage = "response"


class InvalidJSONResponse(ResponseFormatError):
    def __init__(self, message: str, raw_text: str):
        self.raw_text = raw_text
        super().__init__(message)
