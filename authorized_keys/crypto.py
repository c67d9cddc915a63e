from __future__ import annotations
from typing import Union
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
import hashlib
from .errors import UnrecognizedKeyType, UnsupportedKeyError
from .models import KeyAuthorization, KeyType, PublicKey
from .utils import b64e, b64d
"""
authorized_keys.crypto
----------------------
Bridges parsed keys and ``cryptography`` public key objects:

- key_fingerprint(): OpenSSH style ``SHA256:...`` fingerprint of key data
- load_public_key(): PublicKey / KeyAuthorization -> cryptography key
- encode_public_key(): cryptography key -> PublicKey

Parsing never calls into this module; use it when the key material itself
has to be checked.
"""

def key_fingerprint(encoded_key: str) -> str:
    """
    Same format ``ssh-keygen -l`` prints: SHA256 of the decoded key blob,
    base64 without padding.
    """
    digest = hashlib.sha256(b64d(encoded_key)).digest()
    return "SHA256:" + b64e(digest).rstrip("=")

def load_public_key(key: Union[PublicKey, KeyAuthorization]):
    if isinstance(key, KeyAuthorization):
        key = key.key
    data = str(key).encode("ascii", errors="replace")
    try:
        return serialization.load_ssh_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise UnsupportedKeyError(f"cannot load {key.key_type} key: {e}") from e

def encode_public_key(public_key) -> PublicKey:
    try:
        raw = public_key.public_bytes(
            encoding=serialization.Encoding.OpenSSH,
            format=serialization.PublicFormat.OpenSSH,
        )
    except (ValueError, UnsupportedAlgorithm, AttributeError) as e:
        raise UnsupportedKeyError(f"cannot encode {type(public_key).__name__}: {e}") from e

    key_type, encoded_key = raw.decode("ascii").split()[:2]
    try:
        return PublicKey(key_type=KeyType.from_str(key_type), encoded_key=encoded_key)
    except UnrecognizedKeyType as e:
        raise UnsupportedKeyError(f"{key_type} keys are not supported") from e
