# MIT License © 2025 Motohiro Suzuki
import os

import pytest

from acli.protocol.errors import InvalidEncoding
from acli.transport.codec import decode, encode


def test_roundtrip_including_empty():
    for n in (0, 1, 2, 3, 4, 31, 32, 33, 64):
        b = os.urandom(n)
        assert decode(encode(b)) == b


def test_encode_is_urlsafe_and_unpadded():
    s = encode(b"\xfb\xff\xfe")  # standard alphabet would give "+//+"
    assert s == "-__-"
    assert "=" not in encode(b"a")
    assert encode(b"") == ""


def test_decode_strips_surrounding_whitespace():
    assert decode(encode(b"hello") + "\n") == b"hello"


@pytest.mark.parametrize("bad", ["ab+c", "ab/c", "aGVsbG8=", "a b", "é"])
def test_decode_rejects_foreign_characters(bad):
    with pytest.raises(InvalidEncoding):
        decode(bad)


def test_decode_rejects_impossible_length():
    with pytest.raises(InvalidEncoding):
        decode("abcde")


def test_decode_rejects_noncanonical_trailing_bits():
    # "aGVsbG8" is canonical for b"hello"; "aGVsbG9" sets unused bits
    assert decode("aGVsbG8") == b"hello"
    with pytest.raises(InvalidEncoding):
        decode("aGVsbG9")
