# MIT License © 2025 Motohiro Suzuki
"""
io_utils.py

Input resolution for every subcommand:
  "-"        -> stdin (binary)
  otherwise  -> file at that path, which must exist when resolved
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from acli.protocol.errors import InputIoError, InputNotFound, KeyIoError

STDIN_TOKEN = "-"


def resolve_input(token: str) -> str:
    if token == STDIN_TOKEN or Path(token).exists():
        return token
    raise InputNotFound(f"File does not exist: {token}")


def resolve_output_dir(path: str) -> Path:
    p = Path(path)
    if p.exists() and p.is_dir():
        return p
    raise InputNotFound(f"Path does not exist: {path}")


def get_reader(token: str) -> BinaryIO:
    if token == STDIN_TOKEN:
        return sys.stdin.buffer
    p = Path(resolve_input(token))
    try:
        return open(p, "rb")
    except OSError as e:
        raise InputIoError(f"cannot open input {p}: {e}") from e


@contextmanager
def open_input(token: str) -> Iterator[BinaryIO]:
    """get_reader() that closes file handles on exit; stdin is left open."""
    reader = get_reader(token)
    try:
        yield reader
    finally:
        if token != STDIN_TOKEN:
            reader.close()


def read_all(token: str) -> bytes:
    with open_input(token) as reader:
        return reader.read()


def get_content(path: str) -> bytes:
    """Read a whole key file. Missing or unreadable -> KeyIoError."""
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise KeyIoError(f"cannot read key file {path}: {e}") from e
