# MIT License © 2025 Motohiro Suzuki
"""
crypto/aead.py

AEAD backends for text encrypt/decrypt. Both take a 32-byte key and a
12-byte nonce and append a 16-byte tag, so the frame layout does not
depend on which one is selected.
"""

from __future__ import annotations

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM, ChaCha20Poly1305

from acli.protocol.errors import AuthenticationFailed, UnsupportedFormat

NONCE_LEN = 12
TAG_LEN = 16


# =========================
# Base
# =========================

class AEADBackend:
    name: str

    def encrypt(self, key: bytes, nonce: bytes, plaintext: bytes, aad: bytes | None) -> bytes:
        raise NotImplementedError

    def decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes, aad: bytes | None) -> bytes:
        raise NotImplementedError


class _CryptographyAEAD(AEADBackend):
    _cls: type

    def encrypt(self, key: bytes, nonce: bytes, plaintext: bytes, aad: bytes | None) -> bytes:
        return self._cls(key).encrypt(nonce, plaintext, aad)

    def decrypt(self, key: bytes, nonce: bytes, ciphertext: bytes, aad: bytes | None) -> bytes:
        try:
            return self._cls(key).decrypt(nonce, ciphertext, aad)
        except InvalidTag as e:
            raise AuthenticationFailed(f"{self.name}: ciphertext failed authentication") from e


# =========================
# ChaCha20-Poly1305
# =========================

class _ChaCha20Poly1305(_CryptographyAEAD):
    name = "chacha20-poly1305"
    _cls = ChaCha20Poly1305


# =========================
# AES-256-GCM
# =========================

class _AESGCM(_CryptographyAEAD):
    name = "aes-gcm"
    _cls = AESGCM


# =========================
# Resolver
# =========================

def get_aead_backend(name: str) -> AEADBackend:
    n = name.strip().lower()

    if n in ("chacha20-poly1305", "chacha20poly1305", "chacha20"):
        return _ChaCha20Poly1305()

    if n in ("aesgcm", "aes-gcm", "aes-256-gcm"):
        return _AESGCM()

    raise UnsupportedFormat(f"unknown aead backend: {name}")
