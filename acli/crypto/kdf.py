# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import hashlib
import hmac

WORKING_KEY_LEN = 32

_CIPHER_SALT = b"acli-text-cipher"
_CIPHER_INFO = b"acli-text-cipher-key-v1"


def hkdf_sha256(ikm: bytes, salt: bytes, info: bytes, length: int) -> bytes:
    if length <= 0:
        raise ValueError("length must be > 0")

    prk = hmac.new(salt, ikm, hashlib.sha256).digest()
    t = b""
    okm = b""
    c = 1
    while len(okm) < length:
        t = hmac.new(prk, t + info + bytes([c]), hashlib.sha256).digest()
        okm += t
        c += 1
        if c > 255:
            raise ValueError("hkdf too long")
    return okm[:length]


def derive_working_key(key: bytes) -> bytes:
    """
    Fixed-size cipher key from caller key material of any length (empty included).
    Deterministic: the same input always yields the same 32 bytes.
    """
    return hkdf_sha256(ikm=bytes(key), salt=_CIPHER_SALT, info=_CIPHER_INFO, length=WORKING_KEY_LEN)
