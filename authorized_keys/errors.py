from __future__ import annotations


class AuthorizedKeysError(ValueError):
    pass


class UnrecognizedKeyType(AuthorizedKeysError):
    """A token sits where a key type must be, but is not one."""

    def __init__(self, token: str):
        self.token = token
        super().__init__(f"{token} is not a recognised key type")


class MissingKeyType(AuthorizedKeysError):
    def __init__(self, msg: str = "could not parse key type"):
        super().__init__(msg)


class MissingEncodedKey(AuthorizedKeysError):
    def __init__(self, msg: str = "could not parse encoded key"):
        super().__init__(msg)


class InvalidBase64Padding(AuthorizedKeysError):
    def __init__(self, token: str):
        self.token = token
        super().__init__(f"{token!r} is not a validly padded base64 value")


class KeyDecodeError(AuthorizedKeysError):
    pass


class UnsupportedKeyError(AuthorizedKeysError):
    pass


class FileParseError(AuthorizedKeysError):
    """
    Raised by the file parser when any line fails.

    ``lineno`` is 1-based; ``cause`` is the line-level error.
    """

    def __init__(self, lineno: int, cause: AuthorizedKeysError):
        self.lineno = lineno
        self.cause = cause
        super().__init__(f"failed to parse line {lineno}: {cause}")
