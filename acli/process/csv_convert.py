# MIT License © 2025 Motohiro Suzuki
"""
process/csv_convert.py

CSV -> JSON / YAML. With a header row every record becomes a mapping
{column: value}; without one each record is a plain list of strings.
"""

from __future__ import annotations

import csv
import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any, List

import yaml

from acli.protocol.errors import UnsupportedFormat

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    JSON = "json"
    YAML = "yaml"

    @staticmethod
    def parse(token: str) -> "OutputFormat":
        n = str(token).strip().lower()
        if n == "yml":
            n = "yaml"
        for f in OutputFormat:
            if f.value == n:
                return f
        raise UnsupportedFormat(f"Unknown output format: {token} (expected json or yaml)")

    def __str__(self) -> str:
        return self.value


def read_rows(path: str, *, header: bool = True, delimiter: str = ",") -> List[Any]:
    with open(path, newline="", encoding="utf-8") as f:
        if header:
            return [dict(r) for r in csv.DictReader(f, delimiter=delimiter)]
        return [list(r) for r in csv.reader(f, delimiter=delimiter)]


def render(rows: List[Any], fmt: OutputFormat) -> str:
    if fmt == OutputFormat.JSON:
        return json.dumps(rows, ensure_ascii=False, indent=2) + "\n"
    return yaml.safe_dump(rows, allow_unicode=True, sort_keys=False)


def process_csv(
    input_path: str,
    output_path: str,
    fmt: OutputFormat,
    *,
    header: bool = True,
    delimiter: str = ",",
) -> int:
    rows = read_rows(input_path, header=header, delimiter=delimiter)
    Path(output_path).write_text(render(rows, fmt), encoding="utf-8")
    logger.info("wrote %d rows from %s to %s (%s)", len(rows), input_path, output_path, fmt.value)
    return len(rows)
