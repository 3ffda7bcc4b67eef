# MIT License © 2025 Motohiro Suzuki
"""
crypto/sig_backends.py

Text signing backends behind one sign/verify pair:
- blake3  : BLAKE3 keyed hash (MAC). One shared 32-byte key signs and verifies.
- ed25519 : Ed25519 signature. 32-byte seed signs, 32-byte public key verifies.

The set is closed: get_sig_backend() knows exactly these two formats and
has no default fallback.

Key length is checked before any cryptographic work and a bad key raises
InvalidKeyLength. A bad signature is never an error: verify() returns False.
"""

from __future__ import annotations

import hmac
from enum import Enum

import blake3
from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from acli.protocol.errors import InvalidKeyLength, UnsupportedFormat

KEY_LEN = 32
BLAKE3_SIG_LEN = 32
ED25519_SIG_LEN = 64


class KeyFormat(str, Enum):
    BLAKE3 = "blake3"
    ED25519 = "ed25519"

    @staticmethod
    def parse(token: str) -> "KeyFormat":
        n = str(token).strip().lower()
        for f in KeyFormat:
            if f.value == n:
                return f
        raise UnsupportedFormat(f"Unknown format: {token} (expected blake3 or ed25519)")

    def __str__(self) -> str:
        return self.value


def _check_key(fmt: KeyFormat, key: bytes) -> bytes:
    if len(key) != KEY_LEN:
        raise InvalidKeyLength(fmt.value, KEY_LEN, len(key))
    return bytes(key)


def derive_public_key(seed: bytes) -> bytes:
    """Ed25519 public key for a 32-byte seed. Pure: same seed, same key."""
    seed = _check_key(KeyFormat.ED25519, seed)
    return Ed25519PrivateKey.from_private_bytes(seed).public_key().public_bytes_raw()


# =========================
# Base
# =========================

class SigBackend:
    fmt: KeyFormat
    sig_len: int

    def sign(self, key: bytes, msg: bytes) -> bytes:
        raise NotImplementedError

    def verify(self, key: bytes, msg: bytes, sig: bytes) -> bool:
        raise NotImplementedError


# =========================
# BLAKE3 keyed hash
# =========================

class Blake3Sig(SigBackend):
    fmt = KeyFormat.BLAKE3
    sig_len = BLAKE3_SIG_LEN

    def sign(self, key: bytes, msg: bytes) -> bytes:
        key = _check_key(self.fmt, key)
        return blake3.blake3(bytes(msg), key=key).digest()

    def verify(self, key: bytes, msg: bytes, sig: bytes) -> bool:
        expected = self.sign(key, msg)
        sig = bytes(sig)
        if len(sig) != self.sig_len:
            return False
        return hmac.compare_digest(expected, sig)


# =========================
# Ed25519
# =========================

class Ed25519Sig(SigBackend):
    fmt = KeyFormat.ED25519
    sig_len = ED25519_SIG_LEN

    def sign(self, key: bytes, msg: bytes) -> bytes:
        seed = _check_key(self.fmt, key)
        return Ed25519PrivateKey.from_private_bytes(seed).sign(bytes(msg))

    def verify(self, key: bytes, msg: bytes, sig: bytes) -> bool:
        pk = _check_key(self.fmt, key)
        sig = bytes(sig)
        if len(sig) != self.sig_len:
            return False
        try:
            pk_obj = Ed25519PublicKey.from_public_bytes(pk)
        except ValueError:
            # 32 bytes that are not a valid curve point cannot verify anything
            return False
        try:
            pk_obj.verify(sig, bytes(msg))
        except InvalidSignature:
            return False
        return True


_BACKENDS = {
    KeyFormat.BLAKE3: Blake3Sig(),
    KeyFormat.ED25519: Ed25519Sig(),
}


def get_sig_backend(fmt: KeyFormat | str) -> SigBackend:
    if not isinstance(fmt, KeyFormat):
        fmt = KeyFormat.parse(fmt)
    return _BACKENDS[fmt]


def sign(fmt: KeyFormat | str, key: bytes, msg: bytes) -> bytes:
    return get_sig_backend(fmt).sign(key, msg)


def verify(fmt: KeyFormat | str, key: bytes, msg: bytes, sig: bytes) -> bool:
    return get_sig_backend(fmt).verify(key, msg, sig)
