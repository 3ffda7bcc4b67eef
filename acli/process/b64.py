# MIT License © 2025 Motohiro Suzuki
"""
process/b64.py

base64 encode/decode for the `base64` subcommand.
  standard : RFC 4648 alphabet, '=' padded
  urlsafe  : URL-safe alphabet, unpadded (same as transport/codec.py)
"""

from __future__ import annotations

import base64
import binascii
from enum import Enum
from typing import BinaryIO

from acli.protocol.errors import InvalidEncoding, UnsupportedFormat
from acli.transport import codec


class Base64Format(str, Enum):
    STANDARD = "standard"
    URLSAFE = "urlsafe"

    @staticmethod
    def parse(token: str) -> "Base64Format":
        n = str(token).strip().lower()
        for f in Base64Format:
            if f.value == n:
                return f
        raise UnsupportedFormat(f"Invalid base64 format: {token} (expected standard or urlsafe)")

    def __str__(self) -> str:
        return self.value


def process_encode(reader: BinaryIO, fmt: Base64Format) -> str:
    data = reader.read()
    if fmt == Base64Format.URLSAFE:
        return codec.encode(data)
    return base64.b64encode(data).decode("ascii")


def process_decode(reader: BinaryIO, fmt: Base64Format) -> bytes:
    raw = reader.read()
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise InvalidEncoding("base64 input is not ascii text") from e

    # tolerate line wrapping and trailing newline
    text = "".join(text.split())
    if fmt == Base64Format.URLSAFE:
        return codec.decode(text)
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidEncoding(f"invalid base64 text: {e}") from e
