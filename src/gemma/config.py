"""Environment-backed configuration.

Lookups take an explicit :class:`OnMissing` mode instead of reading a
process-wide switch, so one call site can fail fast while another falls back
to a default.
"""

from __future__ import annotations

import enum
import os
from typing import Optional

from dotenv import load_dotenv

from gemma.errors import ConfigurationError

API_KEY_ENV = "GEMINI_API_KEY"
DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_ENV_FILE = ".env"
JSON_MIME_TYPE = "application/json"

LOGGING_LEVEL = os.getenv("LOGGING_LEVEL", "WARNING").upper()

_TRUE = {"1", "t", "true", "y", "yes", "on"}
_FALSE = {"0", "f", "false", "n", "no", "off"}


class OnMissing(enum.Enum):
    FAIL = "fail"
    FALLBACK = "fallback"


def load_env_file(path: str = DEFAULT_ENV_FILE) -> bool:
    """Overlay a dotenv file onto ``os.environ``.

    Values in the file win over variables already set in the process.
    Returns False when the file does not exist.
    """
    if not os.path.isfile(path):
        return False
    return load_dotenv(path, override=True)


def _lookup(key: str, on_missing: OnMissing) -> Optional[str]:
    value = os.environ.get(key)
    if value is None and on_missing is OnMissing.FAIL:
        raise ConfigurationError(f"Missing environment variable {key}")
    return value


def get_str(
    key: str, default: str = "", *, on_missing: OnMissing = OnMissing.FALLBACK
) -> str:
    value = _lookup(key, on_missing)
    return default if value is None else value


def get_int(
    key: str, default: int = 0, *, on_missing: OnMissing = OnMissing.FALLBACK
) -> int:
    value = _lookup(key, on_missing)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        if on_missing is OnMissing.FAIL:
            raise ConfigurationError(
                f"Environment variable {key} is not an integer: {value!r}"
            ) from e
        return default


def get_bool(
    key: str, default: bool = False, *, on_missing: OnMissing = OnMissing.FALLBACK
) -> bool:
    value = _lookup(key, on_missing)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    if on_missing is OnMissing.FAIL:
        raise ConfigurationError(
            f"Environment variable {key} is not a boolean: {value!r}"
        )
    return default


def get_list(
    key: str,
    sep: str = ",",
    default: Optional[list[str]] = None,
    *,
    on_missing: OnMissing = OnMissing.FALLBACK,
) -> list[str]:
    value = _lookup(key, on_missing)
    if not value:
        return list(default or [])
    return value.split(sep)
