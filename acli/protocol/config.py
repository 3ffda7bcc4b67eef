# MIT License © 2025 Motohiro Suzuki
"""
protocol/config.py

Runtime settings, read from the environment once per invocation:
  ACLI_AEAD        aead backend for text encrypt/decrypt (default chacha20-poly1305)
  ACLI_JWT_SECRET  HS256 secret for jwt sign/verify (default acli-secret)
  ACLI_LOG_LEVEL   logging level name (default WARNING)
  ACLI_HTTP_PORT   default port for http serve (default 8080)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_AEAD = "chacha20-poly1305"
DEFAULT_JWT_SECRET = "acli-secret"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_HTTP_PORT = 8080


@dataclass(frozen=True)
class AcliConfig:
    aead: str = DEFAULT_AEAD
    jwt_secret: str = DEFAULT_JWT_SECRET
    log_level: str = DEFAULT_LOG_LEVEL
    http_port: int = DEFAULT_HTTP_PORT


def _env_str(env: Mapping[str, str], name: str, default: str) -> str:
    s = env.get(name, "").strip()
    return s or default


def _env_port(env: Mapping[str, str], name: str, default: int) -> int:
    s = env.get(name, "").strip()
    if not s:
        return default
    try:
        port = int(s)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer (got {s!r})") from e
    if port < 0 or port > 0xFFFF:
        raise ValueError(f"{name} out of range: {port}")
    return port


def load_config(env: Optional[Mapping[str, str]] = None) -> AcliConfig:
    e = os.environ if env is None else env
    return AcliConfig(
        aead=_env_str(e, "ACLI_AEAD", DEFAULT_AEAD).lower(),
        jwt_secret=_env_str(e, "ACLI_JWT_SECRET", DEFAULT_JWT_SECRET),
        log_level=_env_str(e, "ACLI_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
        http_port=_env_port(e, "ACLI_HTTP_PORT", DEFAULT_HTTP_PORT),
    )
