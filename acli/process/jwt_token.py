# MIT License © 2025 Motohiro Suzuki
"""
process/jwt_token.py

HS256 tokens carrying sub / aud / exp.
decode() checks the signature and expiry; the audience is carried but not
validated.
"""

from __future__ import annotations

import re
import time
from dataclasses import asdict, dataclass
from typing import Optional

import jwt

from acli.protocol.config import DEFAULT_JWT_SECRET
from acli.protocol.errors import TokenError

ALGORITHM = "HS256"

_DURATION_RE = re.compile(r"^(\d+)([smhdw])$")
_UNIT_SECONDS = {"s": 1, "m": 60, "h": 3600, "d": 86400, "w": 604800}


@dataclass(frozen=True)
class Claims:
    sub: str
    aud: str
    exp: int


def parse_exp(value: str, now: Optional[int] = None) -> int:
    """
    "10000000000" -> absolute UNIX seconds
    "14d" / "2h" / "30m" / "45s" / "1w" -> now + duration
    """
    s = str(value).strip().lower()
    if s.isdigit():
        return int(s)
    m = _DURATION_RE.match(s)
    if not m:
        raise TokenError(f"invalid exp: {value!r} (expected UNIX seconds or e.g. 14d, 2h, 30m)")
    base = int(time.time()) if now is None else int(now)
    return base + int(m.group(1)) * _UNIT_SECONDS[m.group(2)]


def process_jwt_encode(sub: str, aud: str, exp: int, secret: str = DEFAULT_JWT_SECRET) -> str:
    claims = Claims(sub=sub, aud=aud, exp=int(exp))
    return jwt.encode(asdict(claims), secret, algorithm=ALGORITHM)


def process_jwt_decode(token: str, secret: str = DEFAULT_JWT_SECRET) -> Claims:
    try:
        payload = jwt.decode(
            token.strip(),
            secret,
            algorithms=[ALGORITHM],
            options={"verify_aud": False, "require": ["exp"]},
        )
    except jwt.PyJWTError as e:
        raise TokenError(f"invalid token: {e}") from e

    try:
        return Claims(sub=str(payload["sub"]), aud=str(payload["aud"]), exp=int(payload["exp"]))
    except (KeyError, TypeError, ValueError) as e:
        raise TokenError(f"token is missing claim: {e}") from e
