# MIT License © 2025 Motohiro Suzuki
import os

import pytest

from acli.crypto import cipher
from acli.crypto.aead import NONCE_LEN, TAG_LEN, get_aead_backend
from acli.crypto.kdf import derive_working_key, hkdf_sha256
from acli.protocol.errors import AuthenticationFailed, MalformedCiphertext, UnsupportedFormat

AEADS = ["chacha20-poly1305", "aes-gcm"]


@pytest.mark.parametrize("aead", AEADS)
@pytest.mark.parametrize("key", [b"", b"k", b"\x00" * 32, os.urandom(100)])
def test_roundtrip_any_key_length(aead, key):
    for pt in (b"", b"hello", os.urandom(1000)):
        assert cipher.decrypt(key, cipher.encrypt(key, pt, aead=aead), aead=aead) == pt


def test_frame_layout():
    framed = cipher.encrypt(b"key", b"hello")
    assert len(framed) == NONCE_LEN + len(b"hello") + TAG_LEN
    assert cipher.MIN_FRAME_LEN == 28


def test_encrypt_is_not_deterministic():
    key = b"\x00" * 32
    a = cipher.encrypt(key, b"hello")
    b = cipher.encrypt(key, b"hello")
    assert a != b
    assert a[:NONCE_LEN] != b[:NONCE_LEN]
    assert cipher.decrypt(key, a) == cipher.decrypt(key, b) == b"hello"


@pytest.mark.parametrize("aead", AEADS)
def test_any_flipped_byte_fails_authentication(aead):
    key = b"secret"
    framed = cipher.encrypt(key, b"attack at dawn", aead=aead)
    for i in range(len(framed)):
        x = bytearray(framed)
        x[i] ^= 0x80
        with pytest.raises(AuthenticationFailed):
            cipher.decrypt(key, bytes(x), aead=aead)


def test_wrong_key_fails_authentication():
    framed = cipher.encrypt(b"right", b"data")
    with pytest.raises(AuthenticationFailed):
        cipher.decrypt(b"wrong", framed)


def test_truncated_but_long_enough_fails_authentication():
    framed = cipher.encrypt(b"k", b"some longer plaintext")
    with pytest.raises(AuthenticationFailed):
        cipher.decrypt(b"k", framed[:-1])


@pytest.mark.parametrize("n", [0, 1, 12, 27])
def test_short_frame_is_malformed(n):
    with pytest.raises(MalformedCiphertext):
        cipher.decrypt(b"k", b"\x00" * n)


def test_minimum_frame_is_not_malformed():
    # 28 bytes passes the length check and then fails the tag check
    with pytest.raises(AuthenticationFailed):
        cipher.decrypt(b"k", b"\x00" * 28)


def test_backends_are_not_interchangeable():
    framed = cipher.encrypt(b"k", b"data", aead="aes-gcm")
    with pytest.raises(AuthenticationFailed):
        cipher.decrypt(b"k", framed, aead="chacha20-poly1305")


def test_unknown_aead_backend():
    with pytest.raises(UnsupportedFormat):
        get_aead_backend("demo-xor")


def test_working_key_derivation():
    k1 = derive_working_key(b"a")
    assert len(k1) == 32
    assert k1 == derive_working_key(b"a")
    assert k1 != derive_working_key(b"b")
    assert len(derive_working_key(b"")) == 32


def test_hkdf_rfc5869_case1():
    ikm = bytes.fromhex("0b" * 22)
    salt = bytes.fromhex("000102030405060708090a0b0c")
    info = bytes.fromhex("f0f1f2f3f4f5f6f7f8f9")
    okm = hkdf_sha256(ikm, salt, info, 42)
    assert okm.hex() == (
        "3cb25f25faacd57a90434f64d0362f2a2d2d0a90cf1a5a4c5db02d56ecc4c5bf"
        "34007208d5b887185865"
    )


def test_hkdf_rejects_bad_length():
    with pytest.raises(ValueError):
        hkdf_sha256(b"x", b"", b"", 0)
