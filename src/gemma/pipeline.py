"""One request/response cycle: load inputs, call Gemini, format, emit.

A run is a single linear pass through :class:`RunState`. Any failure moves the
run to ``FAILED`` and propagates; nothing is retried and output is only
written once every earlier step has succeeded.
"""

from __future__ import annotations

import enum
import sys
from dataclasses import dataclass, replace
from typing import Callable, Optional

from gemma import config
from gemma import logger as logger_mod
from gemma.files import read_json_file, read_text_file, write_output
from gemma.llm._json import format_json, parse_json, validate_json
from gemma.llm.base import LLMClient
from gemma.llm.errors import SchemaError
from gemma.llm.factory import build_llm
from gemma.llm.schema import default_schema, translate_schema, validation_schema
from gemma.llm.types import GenerationRequest, GenerationResult, SchemaNode

log = logger_mod.get_logger()

LLMFactory = Callable[..., LLMClient]


class RunState(enum.Enum):
    IDLE = "idle"
    INPUTS_LOADED = "inputs_loaded"
    SCHEMA_READY = "schema_ready"
    REQUEST_SENT = "request_sent"
    RESPONSE_RECEIVED = "response_received"
    FORMATTED = "formatted"
    FAILED = "failed"
    TERMINAL = "terminal"


@dataclass(frozen=True)
class RunOptions:
    prompt_file: str
    input_file: str
    model: str = config.DEFAULT_MODEL
    schema_file: Optional[str] = None
    output_file: Optional[str] = None
    plain: bool = False


def build_prompt(prompt: str, input_text: str) -> str:
    return f"{prompt}\n\nInput:\n{input_text}"


def load_schema(path: str) -> SchemaNode:
    try:
        document = read_json_file(path, "schema")
    except ValueError as e:
        raise SchemaError(f"failed to parse schema file {path}: {e}") from e
    return translate_schema(document)


class ResponsePipeline:
    """Drives one run from files on disk to formatted output.

    ``llm_factory`` is called with ``provider``, ``model`` and ``api_key``
    keyword arguments, and only after the schema has been translated.
    """

    def __init__(
        self,
        options: RunOptions,
        *,
        api_key: str,
        provider: str = "gemini",
        llm_factory: LLMFactory = build_llm,
    ):
        self.options = options
        self.state = RunState.IDLE
        self.result: Optional[GenerationResult] = None
        self._api_key = api_key
        self._provider = provider
        self._llm_factory = llm_factory

    def _advance(self, state: RunState) -> None:
        log.debug("Run state %s -> %s", self.state.name, state.name)
        self.state = state

    def prepare(self) -> GenerationRequest:
        opts = self.options
        prompt = read_text_file(opts.prompt_file, "prompt")
        input_text = read_text_file(opts.input_file, "input")
        self._advance(RunState.INPUTS_LOADED)

        schema: Optional[SchemaNode] = None
        if opts.schema_file:
            schema = load_schema(opts.schema_file)
        elif not opts.plain:
            schema = default_schema()
        self._advance(RunState.SCHEMA_READY)

        return GenerationRequest(
            model=opts.model,
            prompt=build_prompt(prompt, input_text),
            response_schema=schema,
            mime_type=config.JSON_MIME_TYPE if schema is not None else None,
        )

    def send(self, request: GenerationRequest) -> GenerationResult:
        with self._llm_factory(
            provider=self._provider, model=request.model, api_key=self._api_key
        ) as llm:
            self._advance(RunState.REQUEST_SENT)
            result = llm.generate(request)
        self._advance(RunState.RESPONSE_RECEIVED)
        return result

    def format_result(
        self, request: GenerationRequest, result: GenerationResult
    ) -> str:
        if request.response_schema is None:
            self.result = result
            self._advance(RunState.FORMATTED)
            return result.raw_text

        parsed = parse_json(result.raw_text)
        validate_json(parsed, validation_schema(request.response_schema))
        self.result = replace(result, parsed_json=parsed)
        self._advance(RunState.FORMATTED)
        return format_json(parsed)

    def emit(self, text: str, *, plain: bool = False) -> None:
        if self.options.output_file:
            write_output(text, self.options.output_file)
            log.info("Wrote output to %s", self.options.output_file)
        elif plain:
            sys.stdout.write(text)
        else:
            print(text)

    def run(self) -> str:
        try:
            request = self.prepare()
            text = self.format_result(request, self.send(request))
            self.emit(text, plain=request.response_schema is None)
            return text
        except Exception:
            self._advance(RunState.FAILED)
            raise
        finally:
            self._advance(RunState.TERMINAL)


def run(
    options: RunOptions, *, api_key: str, llm_factory: LLMFactory = build_llm
) -> str:
    """Run one request/response cycle and return the emitted text."""
    return ResponsePipeline(options, api_key=api_key, llm_factory=llm_factory).run()
