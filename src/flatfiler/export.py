"""Export decoded records as JSONL or Arrow IPC for downstream analytics."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import orjson
import pyarrow as pa

from flatfiler.record import Record
from flatfiler.schema.registry import Schema


def _default(obj: Any) -> Any:
    # filters may produce dates, Decimals or custom objects
    return str(obj)


def record_payload(record: Record) -> dict[str, Any]:
    return {"line_number": record.line_number, **record.as_dict()}


def records_to_jsonl(records: Iterable[Record], path: Path) -> int:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("wb") as f:
        for record in records:
            f.write(orjson.dumps(record_payload(record), default=_default) + b"\n")
            count += 1
    return count


def records_to_arrow(records: Iterable[Record], schema: Schema, path: Path) -> int:
    """Write records to an Arrow IPC file; field values are stored as strings."""
    path.parent.mkdir(parents=True, exist_ok=True)
    rows = list(records)
    columns: dict[str, list[Any]] = {"line_number": [r.line_number for r in rows]}
    for name in schema.field_names:
        # keep the schema simple: stringify whatever the filters produced
        columns[name] = [None if r.get(name) is None else str(r.get(name)) for r in rows]
    arrow_schema = pa.schema(
        [pa.field("line_number", pa.int64())]
        + [pa.field(name, pa.string()) for name in schema.field_names]
    )
    table = pa.table(columns, schema=arrow_schema)
    with pa.OSFile(str(path), "wb") as sink:
        with pa.ipc.new_file(sink, table.schema) as writer:
            writer.write_table(table)
    return len(rows)
