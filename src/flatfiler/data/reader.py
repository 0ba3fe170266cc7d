"""Line source for flat files: iterate lines and decode them against a schema."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from flatfiler.codec import decode
from flatfiler.errors import FieldFilterError, RecordLengthError
from flatfiler.record import Record
from flatfiler.schema.registry import Schema

logger = logging.getLogger(__name__)


@dataclass
class ReaderConfig:
    encoding: str = "utf-8"
    errors: Literal["strict", "skip"] = "strict"  # per-line policy for malformed lines


def _chop(line: str) -> str:
    """Remove exactly one line terminator (\r\n, \n or \r)."""
    if line.endswith("\r\n"):
        return line[:-2]
    if line.endswith(("\n", "\r")):
        return line[:-1]
    return line


def iter_lines(stream: Iterable[str]) -> Iterator[tuple[str, int]]:
    """Yield ``(text, line_number)`` with terminators stripped and empty lines skipped.

    Line numbers are 1-based physical positions, so skipped blank lines still
    count.
    """
    for line_number, line in enumerate(stream, start=1):
        text = _chop(line)
        if not text:
            continue
        yield text, line_number


def iter_records(
    schema: Schema, stream: Iterable[str], config: ReaderConfig | None = None
) -> Iterator[Record]:
    cfg = config or ReaderConfig()
    for text, line_number in iter_lines(stream):
        try:
            yield decode(schema, text, line_number)
        except (RecordLengthError, FieldFilterError) as exc:
            if cfg.errors != "skip":
                raise
            logger.warning("Skipping malformed line: %s", exc)


def each_record(
    schema: Schema,
    stream: Iterable[str],
    callback: Callable[[Record], object],
    config: ReaderConfig | None = None,
) -> int:
    """Full-file pass handing each decoded Record to ``callback``; returns the count."""
    count = 0
    for record in iter_records(schema, stream, config):
        callback(record)
        count += 1
    return count


def load_records(path: Path, schema: Schema, config: ReaderConfig | None = None) -> list[Record]:
    """Read and decode every record of a flat file on disk."""
    cfg = config or ReaderConfig()
    with path.open(encoding=cfg.encoding, newline="") as f:
        return list(iter_records(schema, f, cfg))
