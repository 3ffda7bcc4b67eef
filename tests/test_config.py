# MIT License © 2025 Motohiro Suzuki
import logging

import pytest

from acli.logging_config import StderrHandler, setup_logging
from acli.protocol.config import AcliConfig, load_config
from acli.protocol.errors import (
    AuthenticationFailed,
    ExitCode,
    InputNotFound,
    InvalidKeyLength,
)


def test_defaults():
    assert load_config({}) == AcliConfig()
    cfg = load_config({})
    assert cfg.aead == "chacha20-poly1305"
    assert cfg.jwt_secret == "acli-secret"
    assert cfg.http_port == 8080


def test_env_overrides():
    cfg = load_config({
        "ACLI_AEAD": " AES-GCM ",
        "ACLI_JWT_SECRET": "s3cret",
        "ACLI_LOG_LEVEL": "debug",
        "ACLI_HTTP_PORT": "9000",
    })
    assert cfg.aead == "aes-gcm"
    assert cfg.jwt_secret == "s3cret"
    assert cfg.log_level == "DEBUG"
    assert cfg.http_port == 9000


def test_blank_env_falls_back_to_default():
    assert load_config({"ACLI_AEAD": "  ", "ACLI_HTTP_PORT": ""}) == AcliConfig()


@pytest.mark.parametrize("port", ["abc", "70000", "-1"])
def test_bad_port(port):
    with pytest.raises(ValueError) as ei:
        load_config({"ACLI_HTTP_PORT": port})
    assert "ACLI_HTTP_PORT" in str(ei.value)


def test_load_config_reads_os_environ(monkeypatch):
    monkeypatch.setenv("ACLI_JWT_SECRET", "from-env")
    assert load_config().jwt_secret == "from-env"


def test_exit_code_mapping():
    assert ExitCode.from_error(InputNotFound("x")) == ExitCode.NOT_FOUND
    assert ExitCode.from_error(InvalidKeyLength("blake3", 32, 1)) == ExitCode.INVALID_KEY_LENGTH
    assert ExitCode.from_error(AuthenticationFailed("x")) == ExitCode.AUTH_FAILED
    assert ExitCode.from_error(RuntimeError("x")) == ExitCode.INTERNAL


def test_invalid_key_length_message():
    e = InvalidKeyLength("ed25519", 32, 5)
    assert "32" in str(e) and "5" in str(e)
    assert (e.expected, e.got) == (32, 5)


def test_setup_logging_is_idempotent():
    lg = setup_logging("INFO")
    n = len([h for h in lg.handlers if isinstance(h, StderrHandler)])
    lg2 = setup_logging(logging.DEBUG)
    assert lg2 is lg
    assert len([h for h in lg.handlers if isinstance(h, StderrHandler)]) == n == 1
    assert lg.level == logging.DEBUG


def test_setup_logging_writes_to_current_stderr(capsys):
    lg = setup_logging(logging.INFO)
    logging.getLogger("acli.test").info("hello-log")
    err = capsys.readouterr().err
    assert "hello-log" in err
    assert "[INFO]" in err
    lg.setLevel(logging.WARNING)


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ValueError):
        setup_logging("LOUD")
