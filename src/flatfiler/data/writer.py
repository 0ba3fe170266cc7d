"""Write records back out as fixed-width lines."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

from flatfiler.codec import encode
from flatfiler.record import Record


def write_records(records: Iterable[Record], stream: TextIO, newline: str = "\n") -> int:
    count = 0
    for record in records:
        stream.write(encode(record) + newline)
        count += 1
    return count


def dump_records(
    records: Iterable[Record], path: Path, encoding: str = "utf-8", newline: str = "\n"
) -> int:
    """Encode records into ``path``, creating parent directories; returns the count."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding=encoding, newline="") as f:
        return write_records(records, f, newline=newline)
