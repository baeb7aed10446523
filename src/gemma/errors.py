class GemmaError(RuntimeError):
    """Base error for gemma.

    ``stage`` is a short static tag naming the part of the run that failed.
    """

    stage = "run"

    def describe(self) -> str:
        return f"[{self.stage}] {self}"


class ConfigurationError(GemmaError):
    """Missing or invalid flags, environment variables or API key."""

    stage = "config"


class FileAccessError(GemmaError):
    """A prompt, input, schema or output file could not be read or written."""

    stage = "io"
