# MIT License © 2025 Motohiro Suzuki
"""
transport/codec.py

Text form of signatures and ciphertexts on the CLI boundary:
URL-safe base64 alphabet (A-Z a-z 0-9 - _), no '=' padding.

decode() is strict: foreign characters, an impossible length
(len % 4 == 1) or non-zero trailing bits are all InvalidEncoding.
"""

from __future__ import annotations

import base64
import binascii
import re

from acli.protocol.errors import InvalidEncoding

_ALPHABET_RE = re.compile(r"[A-Za-z0-9_-]*")


def encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(bytes(data)).rstrip(b"=").decode("ascii")


def decode(text: str) -> bytes:
    s = text.strip()
    if not _ALPHABET_RE.fullmatch(s):
        raise InvalidEncoding("invalid character in url-safe base64 text")
    if len(s) % 4 == 1:
        raise InvalidEncoding(f"invalid url-safe base64 length: {len(s)}")

    padding = "=" * (-len(s) % 4)
    try:
        raw = base64.urlsafe_b64decode(s + padding)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"invalid url-safe base64 text: {e}") from e

    # reject texts whose unused trailing bits are non-zero
    if encode(raw) != s:
        raise InvalidEncoding("non-canonical url-safe base64 text")
    return raw
