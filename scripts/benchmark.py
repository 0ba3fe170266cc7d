"""Micro-benchmarks for decode/encode on synthetic lines."""

from __future__ import annotations

import time

from flatfiler.codec import decode, encode
from flatfiler.data.generator import generate_lines
from flatfiler.schema.registry import Schema


def _people_schema() -> Schema:
    schema = Schema("people")
    schema.add_field("first_name", width=10, filter="strip")
    schema.add_field("last_name", width=10, filter="strip")
    schema.add_field("birthday", width=8)
    schema.pad(width=2)
    return schema


def benchmark_codec(records: int = 10_000, runs: int = 3) -> dict[str, float]:
    schema = _people_schema()
    lines, _ = generate_lines(schema, count=records)
    best_decode = None
    best_encode = None
    for _ in range(runs):
        start = time.perf_counter()
        decoded = [decode(schema, line, i) for i, line in enumerate(lines, start=1)]
        elapsed = time.perf_counter() - start
        best_decode = elapsed if best_decode is None or elapsed < best_decode else best_decode

        start = time.perf_counter()
        for record in decoded:
            encode(record)
        elapsed = time.perf_counter() - start
        best_encode = elapsed if best_encode is None or elapsed < best_encode else best_encode
    return {
        "records": records,
        "decode_seconds": best_decode or 0.0,
        "encode_seconds": best_encode or 0.0,
        "decode_per_second": records / best_decode if best_decode else 0.0,
    }


if __name__ == "__main__":
    result = benchmark_codec()
    print(result)
