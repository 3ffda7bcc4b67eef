# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

from enum import Enum


class AcliError(Exception):
    pass


class InputNotFound(AcliError):
    pass


class KeyIoError(AcliError):
    pass


class InputIoError(AcliError):
    pass


class InvalidKeyLength(AcliError):
    def __init__(self, fmt: str, expected: int, got: int) -> None:
        super().__init__(f"{fmt} key must be {expected} bytes (got {got})")
        self.fmt = fmt
        self.expected = expected
        self.got = got


class InvalidEncoding(AcliError):
    pass


class MalformedCiphertext(AcliError):
    pass


class AuthenticationFailed(AcliError):
    pass


class UnsupportedFormat(AcliError):
    pass


class TokenError(AcliError):
    pass


class ExitCode(int, Enum):
    """
    Process exit codes. Keep values stable once published.
    """
    OK = 0
    NOT_VERIFIED = 1
    NOT_FOUND = 2
    IO = 3
    INVALID_KEY_LENGTH = 4
    INVALID_ENCODING = 5
    MALFORMED = 6
    AUTH_FAILED = 7
    UNSUPPORTED_FORMAT = 8
    TOKEN = 9
    INTERNAL = 70

    @staticmethod
    def from_error(err: BaseException) -> "ExitCode":
        m = {
            InputNotFound: ExitCode.NOT_FOUND,
            KeyIoError: ExitCode.IO,
            InputIoError: ExitCode.IO,
            InvalidKeyLength: ExitCode.INVALID_KEY_LENGTH,
            InvalidEncoding: ExitCode.INVALID_ENCODING,
            MalformedCiphertext: ExitCode.MALFORMED,
            AuthenticationFailed: ExitCode.AUTH_FAILED,
            UnsupportedFormat: ExitCode.UNSUPPORTED_FORMAT,
            TokenError: ExitCode.TOKEN,
        }
        return m.get(type(err), ExitCode.INTERNAL)
