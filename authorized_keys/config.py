# authorized_keys/config.py

from __future__ import annotations
from dataclasses import dataclass
import os
from .constants import ENV_STRICT_BASE64

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class ParserConfig:
    """
    Knobs for the line parser.

    strict_base64: also run the base64 padding check on the encoded key
    token. Off by default, in which case the token after the key type is
    taken as-is.
    """
    strict_base64: bool = False


DEFAULT_CONFIG = ParserConfig()


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in _TRUTHY


def load_config(config: dict | None = None) -> ParserConfig:
    """
    Resolve a ParserConfig.

    Precedence: explicit ``config`` dict, then environment, then defaults.
    """
    config = config or {}
    strict = config.get("strict_base64")
    if strict is None:
        strict = os.getenv(ENV_STRICT_BASE64, "0")

    return ParserConfig(strict_base64=_as_bool(strict))
