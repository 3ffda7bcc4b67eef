# MIT License © 2025 Motohiro Suzuki
import io

import pytest

from acli.process.b64 import Base64Format, process_decode, process_encode
from acli.protocol.errors import InvalidEncoding, UnsupportedFormat


def test_standard_encode_decode():
    assert process_encode(io.BytesIO(b"hello"), Base64Format.STANDARD) == "aGVsbG8="
    assert process_decode(io.BytesIO(b"aGVsbG8=\n"), Base64Format.STANDARD) == b"hello"


def test_urlsafe_is_unpadded():
    assert process_encode(io.BytesIO(b"hello"), Base64Format.URLSAFE) == "aGVsbG8"
    assert process_decode(io.BytesIO(b"aGVsbG8"), Base64Format.URLSAFE) == b"hello"


def test_decode_ignores_line_wrapping():
    assert process_decode(io.BytesIO(b"aGVs\nbG8=\n"), Base64Format.STANDARD) == b"hello"


@pytest.mark.parametrize("fmt,bad", [
    (Base64Format.STANDARD, b"aGVsbG8"),
    (Base64Format.STANDARD, b"a-_b"),
    (Base64Format.URLSAFE, b"aGVsbG8="),
    (Base64Format.URLSAFE, b"\xff\xfe"),
])
def test_decode_invalid(fmt, bad):
    with pytest.raises(InvalidEncoding):
        process_decode(io.BytesIO(bad), fmt)


def test_format_parse():
    assert Base64Format.parse("URLSAFE") is Base64Format.URLSAFE
    with pytest.raises(UnsupportedFormat):
        Base64Format.parse("base32")
