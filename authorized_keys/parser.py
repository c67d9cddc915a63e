"""
authorized_keys.parser
----------------------
Line and file parsers for OpenSSH ``authorized_keys``.

A key line is ``[options] key-type encoded-key [comments]``. The options
list is optional and looks just like an unknown key type, so the first
unrecognized token is held back as the options string; a second one before
any key type is an error.
"""

from __future__ import annotations
from enum import Enum
from typing import List, Optional
from .atoms import iter_fields, split_fields, split_once, parse_key_type, validate_base64
from .config import ParserConfig, DEFAULT_CONFIG
from .constants import WHITESPACE, OPTION_SEPARATOR, VALUE_SEPARATOR, COMMENT_CHAR
from .errors import (
    AuthorizedKeysError, FileParseError, MissingEncodedKey, MissingKeyType, UnrecognizedKeyType,
)
from .logger import get_logger
from .models import Comment, Key, KeyAuthorization, KeyOption, KeyOptions, KeysFile, KeysFileLine, PublicKey

log = get_logger("authorized_keys.parser")


class _State(Enum):
    AWAITING_FIRST_TOKEN = "awaiting_first_token"
    AWAITING_ENCODED_KEY = "awaiting_encoded_key"
    DONE = "done"


# --------- Options ----------
def _option_value(raw: Optional[str]) -> Optional[str]:
    # drop the surrounding quotes; escapes inside are kept as written
    if not raw or len(raw) < 2:
        return None
    return raw[1:-1]


def parse_option(segment: str) -> KeyOption:
    """``name`` or ``name="value"`` -> KeyOption."""
    name, raw_value = split_once(segment, VALUE_SEPARATOR)
    return KeyOption(name, _option_value(raw_value))


def parse_options(options: Optional[str]) -> KeyOptions:
    if not options:
        return []
    return [
        parse_option(segment)
        for segment in split_fields(options, OPTION_SEPARATOR)
        if segment
    ]


# --------- Lines ----------
def parse_authorization(line: str, config: ParserConfig | None = None) -> KeyAuthorization:
    """
    Parse one key line.

    Raises UnrecognizedKeyType, MissingKeyType, MissingEncodedKey, or
    InvalidBase64Padding when ``config.strict_base64`` is set.
    """
    config = config or DEFAULT_CONFIG
    line = line.rstrip("\r\n")

    state = _State.AWAITING_FIRST_TOKEN
    options: Optional[str] = None
    key_type = None
    encoded_key: Optional[str] = None
    comments = ""

    for token, end, terminated in iter_fields(line, WHITESPACE, collapse=True):
        if state is _State.AWAITING_FIRST_TOKEN:
            if not terminated:
                # the last token on the line is taken as key data
                if parse_key_type(token) is not None:
                    raise MissingEncodedKey()
                encoded_key = token
                break

            key_type = parse_key_type(token)
            if key_type is not None:
                state = _State.AWAITING_ENCODED_KEY
            elif options is not None:
                raise UnrecognizedKeyType(token)
            else:
                options = token

        elif state is _State.AWAITING_ENCODED_KEY:
            encoded_key = token
            comments = line[end:].strip()
            state = _State.DONE
            break

    if key_type is None:
        raise MissingKeyType()
    if not encoded_key:
        raise MissingEncodedKey()

    if config.strict_base64:
        validate_base64(encoded_key)

    return KeyAuthorization(
        options=parse_options(options),
        key=PublicKey(key_type=key_type, encoded_key=encoded_key),
        comments=comments,
    )


def is_comment_line(line: str) -> bool:
    """
    True for blank lines, whitespace-only lines and lines whose first
    non-whitespace character is ``#``.

    sshd skips leading spaces and tabs before looking for ``#``, and so do we.
    """
    stripped = line.lstrip()
    return not stripped or stripped.startswith(COMMENT_CHAR)


def parse_line(line: str, config: ParserConfig | None = None) -> KeysFileLine:
    if is_comment_line(line):
        return Comment(line)
    return Key(parse_authorization(line, config))


def _split_lines(text: str) -> List[str]:
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# --------- Files ----------
def parse_keys_file(text: str, config: ParserConfig | None = None) -> KeysFile:
    """
    Parse a whole file. The first bad line aborts with FileParseError
    carrying its 1-based line number.
    """
    lines: List[KeysFileLine] = []

    for lineno, line in enumerate(_split_lines(text), start=1):
        try:
            lines.append(parse_line(line, config))
        except AuthorizedKeysError as e:
            log.warning(f"[PARSE] line {lineno} rejected: {e}")
            raise FileParseError(lineno, e) from e

    log.debug(f"[PARSE] {len(lines)} lines parsed")
    return KeysFile(lines=lines)
