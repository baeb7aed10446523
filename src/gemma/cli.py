"""Command line entry point.

    gemma -prompt=prompt.txt -input=input.txt [-schema=schema.json] [-output=out.json]

Exit code is 0 on success and 1 on any failure.
"""

from __future__ import annotations

import argparse
import sys
from typing import Optional, Sequence

from gemma import config
from gemma import logger as logger_mod
from gemma.errors import ConfigurationError, GemmaError
from gemma.pipeline import RunOptions, run

log = logger_mod.get_logger()

EPILOG = f"""Environment variables:
  {config.API_KEY_ENV}   Google Gemini API key (required)
  LOGGING_LEVEL    DEBUG, INFO, WARNING, ERROR or CRITICAL (default: WARNING)
"""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str):  # type: ignore[override]
        raise ConfigurationError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="gemma",
        description="Send a prompt and an input file to Gemini and print JSON.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
    )
    parser.add_argument(
        "-prompt", "--prompt", dest="prompt", required=True, help="Path to prompt file"
    )
    parser.add_argument(
        "-input", "--input", dest="input", required=True, help="Path to input file"
    )
    parser.add_argument(
        "-model",
        "--model",
        dest="model",
        default=config.DEFAULT_MODEL,
        help=f"Model to use (default: {config.DEFAULT_MODEL})",
    )
    parser.add_argument(
        "-schema", "--schema", dest="schema", help="Path to JSON schema file"
    )
    parser.add_argument(
        "-output", "--output", dest="output", help="Output file path (default: stdout)"
    )
    parser.add_argument(
        "-plain",
        "--plain",
        dest="plain",
        action="store_true",
        help="Return the model text as is, without a response schema",
    )
    parser.add_argument(
        "-env",
        "--env",
        dest="env",
        default=config.DEFAULT_ENV_FILE,
        help=f"dotenv file to load (default: {config.DEFAULT_ENV_FILE})",
    )
    parser.add_argument(
        "-log-level", "--log-level", dest="log_level", help="Override LOGGING_LEVEL"
    )
    return parser


def _resolve_options(args: argparse.Namespace) -> RunOptions:
    if args.plain and args.schema:
        raise ConfigurationError("-plain and -schema cannot be used together")
    return RunOptions(
        prompt_file=args.prompt,
        input_file=args.input,
        model=args.model,
        schema_file=args.schema or None,
        output_file=args.output or None,
        plain=args.plain,
    )


def _api_key() -> str:
    api_key = config.get_str(config.API_KEY_ENV, on_missing=config.OnMissing.FAIL)
    if not api_key.strip():
        raise ConfigurationError(
            f"{config.API_KEY_ENV} environment variable is required"
        )
    return api_key


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except ConfigurationError as e:
        parser.print_usage(sys.stderr)
        log.critical("Application error: %s", e.describe())
        return 1

    try:
        if config.load_env_file(args.env):
            log.debug("Loaded environment from %s", args.env)
        level = args.log_level or config.get_str("LOGGING_LEVEL")
        if level:
            logger_mod.set_logging_level(level)

        options = _resolve_options(args)
        run(options, api_key=_api_key())
    except GemmaError as e:
        log.critical("Application error: %s", e.describe())
        return 1
    return 0
