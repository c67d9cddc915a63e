"""
authorized_keys.utils
---------------------
Base64 codec helpers and option value escaping.

Option values are stored exactly as they appear between the quotes of an
``authorized_keys`` line, so ``escape_option_value`` / ``unescape_option_value``
are the only places where backslash sequences are interpreted.
"""

from __future__ import annotations
import base64, binascii
from .constants import ESCAPE, QUOTE
from .errors import KeyDecodeError

def b64e(b: bytes) -> str:
    return base64.b64encode(b).decode("ascii")

def b64d(s: str) -> bytes:
    try:
        return base64.b64decode(s.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise KeyDecodeError(f"invalid base64 key data: {e}") from e

def escape_option_value(value: str) -> str:
    # Not idempotent: escaping twice escapes the escapes.
    return value.replace(ESCAPE, ESCAPE * 2).replace(QUOTE, ESCAPE + QUOTE)

def unescape_option_value(value: str) -> str:
    """Resolve ``\\"`` and ``\\\\`` into literal characters; other escapes are kept."""
    out = []
    i = 0
    n = len(value)
    while i < n:
        ch = value[i]
        if ch == ESCAPE and i + 1 < n and value[i + 1] in (ESCAPE, QUOTE):
            out.append(value[i + 1])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)
