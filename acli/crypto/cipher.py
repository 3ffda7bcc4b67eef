# MIT License © 2025 Motohiro Suzuki
"""
crypto/cipher.py

Symmetric text encryption.

Frame:
    nonce (12 bytes) || ciphertext || tag (16 bytes)

Any key length is accepted; the AEAD key is derived from it with
HKDF-SHA256 (crypto/kdf.py). A fresh random nonce is drawn per call, so
encrypting the same input twice never yields the same frame.
"""

from __future__ import annotations

import logging
import os

from acli.crypto.aead import NONCE_LEN, TAG_LEN, get_aead_backend
from acli.crypto.kdf import derive_working_key
from acli.protocol.config import DEFAULT_AEAD
from acli.protocol.errors import MalformedCiphertext

logger = logging.getLogger(__name__)

MIN_FRAME_LEN = NONCE_LEN + TAG_LEN


def encrypt(key: bytes, plaintext: bytes, *, aead: str = DEFAULT_AEAD) -> bytes:
    backend = get_aead_backend(aead)
    nonce = os.urandom(NONCE_LEN)
    ct = backend.encrypt(derive_working_key(key), nonce, bytes(plaintext), None)
    logger.debug("%s: encrypted %d bytes", backend.name, len(plaintext))
    return nonce + ct


def decrypt(key: bytes, framed: bytes, *, aead: str = DEFAULT_AEAD) -> bytes:
    framed = bytes(framed)
    if len(framed) < MIN_FRAME_LEN:
        raise MalformedCiphertext(
            f"ciphertext too short: {len(framed)} bytes (minimum {MIN_FRAME_LEN})"
        )
    backend = get_aead_backend(aead)
    nonce, ct = framed[:NONCE_LEN], framed[NONCE_LEN:]
    pt = backend.decrypt(derive_working_key(key), nonce, ct, None)
    logger.debug("%s: decrypted %d bytes", backend.name, len(pt))
    return pt
