# MIT License © 2025 Motohiro Suzuki
"""
process/genpass.py

Random passwords from the enabled character classes. Look-alike characters
(0 O 1 l I) are left out of every class.
"""

from __future__ import annotations

import logging
import math
import secrets
from typing import List

logger = logging.getLogger(__name__)

UPPER = "ABCDEFGHJKLMNPQRSTUVWXYZ"
LOWER = "abcdefghijkmnopqrstuvwxyz"
NUMBER = "23456789"
SYMBOL = "!@#$%^&*_"


def estimate_entropy_bits(length: int, alphabet_size: int) -> float:
    if length <= 0 or alphabet_size <= 1:
        return 0.0
    return length * math.log2(alphabet_size)


def process_genpass(
    length: int = 16,
    upper: bool = True,
    lower: bool = True,
    number: bool = True,
    symbol: bool = True,
) -> str:
    classes: List[str] = []
    if upper:
        classes.append(UPPER)
    if lower:
        classes.append(LOWER)
    if number:
        classes.append(NUMBER)
    if symbol:
        classes.append(SYMBOL)

    if not classes:
        raise ValueError("at least one character class must be enabled")
    if length < len(classes):
        raise ValueError(f"length must be >= {len(classes)} for the enabled character classes")

    rng = secrets.SystemRandom()
    alphabet = "".join(classes)

    # one of each enabled class, the rest from the union
    chars = [secrets.choice(c) for c in classes]
    chars += [secrets.choice(alphabet) for _ in range(length - len(chars))]
    rng.shuffle(chars)

    logger.info(
        "password strength: ~%.0f bits (%d chars over %d symbols)",
        estimate_entropy_bits(length, len(alphabet)),
        length,
        len(alphabet),
    )
    return "".join(chars)
