"""
authorized_keys
===============
Parse, edit and write OpenSSH ``authorized_keys`` files.

Provides:
- Data model (KeysFile, KeyAuthorization, PublicKey, KeyType, KeyOption)
- Escape-aware line and file parsers
- Serializer and chainable editing operations
- Fingerprints and cryptography key bridging
"""

from .config import ParserConfig, load_config
from .errors import (
    AuthorizedKeysError,
    FileParseError,
    InvalidBase64Padding,
    KeyDecodeError,
    MissingEncodedKey,
    MissingKeyType,
    UnrecognizedKeyType,
    UnsupportedKeyError,
)
from .models import (
    Comment,
    Key,
    KeyAuthorization,
    KeyOption,
    KeyOptions,
    KeysFile,
    KeysFileLine,
    KeyType,
    PublicKey,
)
from .parser import parse_authorization, parse_keys_file, parse_line, parse_option, parse_options

__all__ = [
    "AuthorizedKeysError",
    "Comment",
    "FileParseError",
    "InvalidBase64Padding",
    "Key",
    "KeyAuthorization",
    "KeyDecodeError",
    "KeyOption",
    "KeyOptions",
    "KeysFile",
    "KeysFileLine",
    "KeyType",
    "MissingEncodedKey",
    "MissingKeyType",
    "ParserConfig",
    "PublicKey",
    "UnrecognizedKeyType",
    "UnsupportedKeyError",
    "load_config",
    "parse_authorization",
    "parse_keys_file",
    "parse_line",
    "parse_option",
    "parse_options",
]
