"""
authorized_keys.models
----------------------
Data model for OpenSSH ``authorized_keys`` files, plus the serializer and
the editing operations that work on it.

A file is a list of lines; every line is either a ``Comment`` (kept
verbatim) or a ``Key`` wrapping a ``KeyAuthorization``:

    [options] key-type encoded-key [comments]

Editing methods on ``KeyAuthorization`` never mutate the receiver; each one
returns a new value so calls can be chained:

    key.clear_options().option_name("restrict").option("command", "uptime")
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, NamedTuple, Optional, Union
from .constants import (
    ECDSA_SHA2_NISTP256, ECDSA_SHA2_NISTP384, ECDSA_SHA2_NISTP521,
    SSH_ED25519, SSH_DSS, SSH_RSA, OPTION_SEPARATOR, VALUE_SEPARATOR, QUOTE,
)
from .errors import UnrecognizedKeyType
from .utils import b64d, b64e, escape_option_value, unescape_option_value


class KeyType(str, Enum):
    ECDSA_SHA2_NISTP256 = ECDSA_SHA2_NISTP256
    ECDSA_SHA2_NISTP384 = ECDSA_SHA2_NISTP384
    ECDSA_SHA2_NISTP521 = ECDSA_SHA2_NISTP521
    SSH_ED25519 = SSH_ED25519
    SSH_DSS = SSH_DSS
    SSH_RSA = SSH_RSA

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, value: str) -> "KeyType":
        """Case-insensitive lookup of a wire identifier such as ``ssh-ed25519``."""
        try:
            return cls(value.lower())
        except ValueError:
            raise UnrecognizedKeyType(value) from None

    @classmethod
    def enum_values(cls) -> List["KeyType"]:
        return list(cls)

    @classmethod
    def string_values(cls) -> List[str]:
        return [kt.value for kt in cls]

    @classmethod
    def name_value_pairs(cls) -> List[tuple]:
        return [(kt, kt.value) for kt in cls]


class KeyOption(NamedTuple):
    """
    ``(name, value)``; ``value`` is None for bare flags such as ``restrict``.

    Values are stored as written between the quotes, escapes included.
    """
    name: str
    value: Optional[str] = None

    def __str__(self) -> str:
        if self.value is None:
            return self.name
        return f"{self.name}{VALUE_SEPARATOR}{QUOTE}{self.value}{QUOTE}"


KeyOptions = List[KeyOption]


@dataclass(frozen=True)
class PublicKey:
    key_type: KeyType = KeyType.SSH_RSA
    encoded_key: str = ""   # base64 body as written, not re-validated

    def __str__(self) -> str:
        return f"{self.key_type} {self.encoded_key}"


@dataclass
class KeyAuthorization:
    options: KeyOptions = field(default_factory=list)
    key: PublicKey = field(default_factory=PublicKey)
    comments: str = ""

    @property
    def key_type(self) -> KeyType:
        return self.key.key_type

    @property
    def encoded_key(self) -> str:
        return self.key.encoded_key

    @classmethod
    def parse(cls, line: str, config=None) -> "KeyAuthorization":
        from .parser import parse_authorization
        return parse_authorization(line, config)

    # ---------------------------
    # Serialization
    # ---------------------------
    def key_def(self) -> str:
        """Mandatory part of the line: ``key-type encoded-key``."""
        return str(self.key)

    def options_string(self) -> str:
        return OPTION_SEPARATOR.join(str(KeyOption(*opt)) for opt in self.options)

    def __str__(self) -> str:
        parts = []
        options = self.options_string()
        if options:
            parts.append(options)
        parts.append(self.key_def())
        comments = self.comments.strip()
        if comments:
            parts.append(comments)
        return " ".join(parts)

    def key_bytes(self) -> bytes:
        return b64d(self.key.encoded_key)

    # ---------------------------
    # Getters
    # ---------------------------
    def get_options(self, name: str) -> List[Optional[str]]:
        """Raw values of every option called ``name``, in order."""
        return [value for n, value in self.options if n == name]

    def get_option_values(self, name: str) -> List[Optional[str]]:
        return [
            None if value is None else unescape_option_value(value)
            for value in self.get_options(name)
        ]

    def has_option(self, name: str) -> bool:
        return any(n == name for n, _ in self.options)

    # ---------------------------
    # Editing
    # ---------------------------
    def _evolve(self, **changes) -> "KeyAuthorization":
        changes.setdefault("options", [KeyOption(*opt) for opt in self.options])
        return replace(self, **changes)

    def raw_option(self, name: str, value: Optional[str] = None) -> "KeyAuthorization":
        """Append an option; ``value`` is stored without escaping."""
        options = [KeyOption(*opt) for opt in self.options]
        options.append(KeyOption(name, value))
        return self._evolve(options=options)

    def option(self, name: str, value: Optional[str] = None) -> "KeyAuthorization":
        """Append an option, backslash-escaping ``\\`` and ``"`` in ``value``."""
        if value is not None:
            value = escape_option_value(value)
        return self.raw_option(name, value)

    def option_name(self, name: str) -> "KeyAuthorization":
        return self.raw_option(name, None)

    def clear_options(self) -> "KeyAuthorization":
        return self._evolve(options=[])

    def remove_named_options(self, name: str) -> "KeyAuthorization":
        return self._evolve(options=[KeyOption(*opt) for opt in self.options if opt[0] != name])

    def remove_options(self, name: str, value: Optional[str] = None) -> "KeyAuthorization":
        """Drop options matching both ``name`` and ``value``; None only matches bare flags."""
        return self._evolve(options=[
            KeyOption(*opt) for opt in self.options
            if opt[0] != name or opt[1] != value
        ])

    def remove_comments(self) -> "KeyAuthorization":
        return self._evolve(comments="")

    def with_comments(self, comments: str) -> "KeyAuthorization":
        return self._evolve(comments=comments)

    def with_key_type(self, key_type: Union[KeyType, str]) -> "KeyAuthorization":
        if not isinstance(key_type, KeyType):
            key_type = KeyType.from_str(key_type)
        return self._evolve(key=replace(self.key, key_type=key_type))

    def with_encoded_key(self, encoded_key: str) -> "KeyAuthorization":
        return self._evolve(key=replace(self.key, encoded_key=encoded_key))

    def with_key_bytes(self, data: bytes) -> "KeyAuthorization":
        return self.with_encoded_key(b64e(data))

    def with_public_key(self, public_key) -> "KeyAuthorization":
        """Take key type and data from a ``cryptography`` public key object."""
        from .crypto import encode_public_key
        return self._evolve(key=encode_public_key(public_key))

    # ---------------------------
    # Dict form
    # ---------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "options": [list(opt) for opt in self.options],
            "key_type": self.key.key_type.value,
            "encoded_key": self.key.encoded_key,
            "comments": self.comments,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeyAuthorization":
        return cls(
            options=[KeyOption(*opt) for opt in data.get("options", [])],
            key=PublicKey(
                key_type=KeyType.from_str(data.get("key_type", SSH_RSA)),
                encoded_key=data.get("encoded_key", ""),
            ),
            comments=data.get("comments", ""),
        )


class KeysFileLine:
    """One line of an ``authorized_keys`` file: ``Comment`` or ``Key``."""

    def to_dict(self) -> Dict[str, Any]:
        raise NotImplementedError

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "KeysFileLine":
        if data.get("type") == "comment":
            return Comment(data.get("line", ""))
        return Key(KeyAuthorization.from_dict(data))


@dataclass
class Comment(KeysFileLine):
    """Blank, whitespace-only or ``#`` line, kept verbatim."""
    line: str = ""

    def __str__(self) -> str:
        return self.line

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "comment", "line": self.line}


@dataclass
class Key(KeysFileLine):
    authorization: KeyAuthorization = field(default_factory=KeyAuthorization)

    def __str__(self) -> str:
        return str(self.authorization)

    def to_dict(self) -> Dict[str, Any]:
        d = {"type": "key"}
        d.update(self.authorization.to_dict())
        return d


@dataclass
class KeysFile:
    lines: List[KeysFileLine] = field(default_factory=list)

    @classmethod
    def parse(cls, text: str, config=None) -> "KeysFile":
        from .parser import parse_keys_file
        return parse_keys_file(text, config)

    @classmethod
    def from_lines(cls, lines: Iterable[Union[KeysFileLine, KeyAuthorization]]) -> "KeysFile":
        """Build a file from lines; bare authorizations are wrapped in ``Key``."""
        return cls(lines=[
            Key(line) if isinstance(line, KeyAuthorization) else line
            for line in lines
        ])

    def __iter__(self) -> Iterator[KeysFileLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def keys(self) -> Iterator[KeyAuthorization]:
        for line in self.lines:
            if isinstance(line, Key):
                yield line.authorization

    def __str__(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)

    def to_dict(self) -> Dict[str, Any]:
        return {"lines": [line.to_dict() for line in self.lines]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "KeysFile":
        return cls(lines=[KeysFileLine.from_dict(d) for d in data.get("lines", [])])
