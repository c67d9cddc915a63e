"""
authorized_keys.atoms
---------------------
Smallest pieces of the ``authorized_keys`` grammar:

- character classifiers (whitespace, identifier, base64 body)
- FieldSplitter: splits on a separator while honoring quotes and backslashes
- key type recognition and base64 literal matching

Nothing in here raises on bad input except ``validate_base64``; callers
decide what a miss means.
"""

from __future__ import annotations
from typing import Iterator, List, Optional, Tuple
from .constants import ESCAPE, QUOTE, BASE64_PAD
from .errors import InvalidBase64Padding, UnrecognizedKeyType
from .models import KeyType

_ASCII_WHITESPACE = " \t\n\r\f"


# --------- Character classifiers ----------
def is_whitespace(ch: str) -> bool:
    return len(ch) == 1 and ch in _ASCII_WHITESPACE


def is_base64_body_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch in "+/")


def is_identifier(token: str) -> bool:
    """
    Alphanumerics and dashes, starting with an ASCII letter and ending with
    an ASCII letter or digit (``restrict``, ``no-pty``, ``ssh-ed25519``).
    """
    if not token or not all(c.isalnum() or c == "-" for c in token):
        return False
    first, last = token[0], token[-1]
    return first.isascii() and first.isalpha() and last.isascii() and last.isalnum()


# --------- Escape-aware splitting ----------
class FieldSplitter:
    """
    Per-character state machine deciding whether a character still belongs
    to the current field.

    A backslash toggles the pending escape and is always kept. An unescaped
    double-quote toggles quoting. A separator outside quotes ends the field
    and is dropped. Unbalanced quotes are not reported here.
    """

    def __init__(self, separators: str):
        self.separators = separators
        self.in_quotes = False
        self.pending_escape = False

    def still_part(self, ch: str) -> bool:
        if ch == ESCAPE:
            # a second backslash cancels the first
            self.pending_escape = not self.pending_escape
            return True

        if ch == QUOTE and not self.pending_escape:
            self.in_quotes = not self.in_quotes
        elif ch in self.separators and not self.in_quotes:
            return False

        self.pending_escape = False
        return True

    def reset(self) -> None:
        self.in_quotes = False
        self.pending_escape = False


def iter_fields(text: str, separators: str, collapse: bool = False) -> Iterator[Tuple[str, int, bool]]:
    """
    Yield ``(field, end, terminated)`` for each field of ``text``.

    ``end`` is the index just past the separator that closed the field (or
    ``len(text)`` for the last one); ``terminated`` tells whether a separator
    actually closed it. With ``collapse``, separators met while no field is in
    progress are skipped, so runs of separators count as one and no empty
    fields are produced.
    """
    splitter = FieldSplitter(separators)
    current: List[str] = []

    for i, ch in enumerate(text):
        if collapse and not current and ch in separators:
            continue

        if splitter.still_part(ch):
            current.append(ch)
        else:
            splitter.reset()
            yield "".join(current), i + 1, True
            current = []

    if current or not collapse:
        yield "".join(current), len(text), False


def split_fields(text: str, separators: str, collapse: bool = False) -> List[str]:
    return [field for field, _, _ in iter_fields(text, separators, collapse)]


def split_once(text: str, separator: str) -> Tuple[str, Optional[str]]:
    """Split at the first unquoted ``separator``; the remainder is left untouched."""
    splitter = FieldSplitter(separator)
    for i, ch in enumerate(text):
        if not splitter.still_part(ch):
            return text[:i], text[i + 1:]
    return text, None


# --------- Validators ----------
def parse_key_type(token: str) -> Optional[KeyType]:
    try:
        return KeyType.from_str(token)
    except UnrecognizedKeyType:
        return None


def match_base64(text: str) -> Optional[str]:
    """
    Match a padded base64 literal at the start of ``text``.

    Returns the matched token, or None. The body length modulo 4 decides the
    padding: 1 is never valid, 2 and 3 need exactly ``4 - rem`` ``=``, 0 needs
    none. Whatever follows the token must be whitespace.
    """
    body_len = 0
    for ch in text:
        if not is_base64_body_char(ch):
            break
        body_len += 1

    if body_len == 0:
        return None

    remainder = body_len % 4
    if remainder == 1:
        return None

    end = body_len
    if remainder in (2, 3):
        padding = BASE64_PAD * (4 - remainder)
        if text[end:end + len(padding)] != padding:
            return None
        end += len(padding)

    if end < len(text) and not is_whitespace(text[end]):
        return None

    return text[:end]


def validate_base64(token: str) -> str:
    if match_base64(token) != token:
        raise InvalidBase64Padding(token)
    return token
