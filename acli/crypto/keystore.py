# MIT License © 2025 Motohiro Suzuki
"""
crypto/keystore.py

Key material on disk is one raw file per named blob, no header:
  blake3   -> blake3.key              (32-byte shared key)
  ed25519  -> ed25519.sk, ed25519.pk  (32-byte seed, 32-byte public key)

generate() only produces bytes; writing them out is the caller's job.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Dict

from cryptography.hazmat.primitives.asymmetric.ed25519 import Ed25519PrivateKey

from acli.crypto.sig_backends import KEY_LEN, KeyFormat, derive_public_key
from acli.io_utils import get_content
from acli.protocol.errors import InvalidKeyLength

logger = logging.getLogger(__name__)

BLAKE3_KEY_NAME = "blake3.key"
ED25519_SK_NAME = "ed25519.sk"
ED25519_PK_NAME = "ed25519.pk"


@dataclass(frozen=True)
class KeyMaterial:
    """
    Signing-side key material. For ed25519 the public key is computed from
    the seed on access, so the two can never disagree.
    """
    fmt: KeyFormat
    secret: bytes

    def __post_init__(self) -> None:
        if len(self.secret) != KEY_LEN:
            raise InvalidKeyLength(self.fmt.value, KEY_LEN, len(self.secret))

    @property
    def public_key(self) -> bytes:
        if self.fmt == KeyFormat.BLAKE3:
            # symmetric: the verifying key is the shared key
            return self.secret
        return derive_public_key(self.secret)

    def blobs(self) -> Dict[str, bytes]:
        if self.fmt == KeyFormat.BLAKE3:
            return {BLAKE3_KEY_NAME: self.secret}
        return {
            ED25519_SK_NAME: self.secret,
            ED25519_PK_NAME: self.public_key,
        }


def _expect_len(fmt: KeyFormat, raw: bytes) -> bytes:
    if len(raw) != KEY_LEN:
        raise InvalidKeyLength(fmt.value, KEY_LEN, len(raw))
    return raw


def load(path: str, fmt: KeyFormat) -> KeyMaterial:
    """Load a signing key (blake3 key or ed25519 seed) from a raw 32-byte file."""
    raw = _expect_len(fmt, get_content(path))
    logger.debug("loaded %s signing key from %s", fmt.value, path)
    return KeyMaterial(fmt=fmt, secret=raw)


def load_verifying_key(path: str, fmt: KeyFormat) -> bytes:
    """
    Verification-side key: the shared key for blake3, the raw public key for
    ed25519. Public key bytes are taken as-is, never re-derived from a seed.
    """
    raw = _expect_len(fmt, get_content(path))
    logger.debug("loaded %s verifying key from %s", fmt.value, path)
    return raw


def generate(fmt: KeyFormat) -> Dict[str, bytes]:
    if fmt == KeyFormat.BLAKE3:
        km = KeyMaterial(fmt=fmt, secret=os.urandom(KEY_LEN))
    else:
        sk = Ed25519PrivateKey.generate()
        km = KeyMaterial(fmt=fmt, secret=sk.private_bytes_raw())
    logger.debug("generated %s key material: %s", fmt.value, ", ".join(km.blobs()))
    return km.blobs()
