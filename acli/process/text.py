# MIT License © 2025 Motohiro Suzuki
"""
process/text.py

Glue between the `text` subcommands and crypto/*: each call reads its input
handle once, to end-of-stream, then hands whole bytes to the core.
"""

from __future__ import annotations

from typing import BinaryIO, Dict

from acli.crypto import cipher, keystore, sig_backends
from acli.crypto.sig_backends import KeyFormat


def process_text_sign(reader: BinaryIO, key: bytes, fmt: KeyFormat) -> bytes:
    msg = reader.read()
    return sig_backends.sign(fmt, key, msg)


def process_text_verify(reader: BinaryIO, key: bytes, sig: bytes, fmt: KeyFormat) -> bool:
    msg = reader.read()
    return sig_backends.verify(fmt, key, msg, sig)


def process_text_key_generate(fmt: KeyFormat) -> Dict[str, bytes]:
    return keystore.generate(fmt)


def process_text_encrypt(reader: BinaryIO, key: bytes, aead: str) -> bytes:
    return cipher.encrypt(key, reader.read(), aead=aead)


def process_text_decrypt(framed: bytes, key: bytes, aead: str) -> bytes:
    return cipher.decrypt(key, framed, aead=aead)
