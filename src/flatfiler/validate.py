from __future__ import annotations

import hashlib
from pathlib import Path
from typing import Any

from flatfiler.codec import decode
from flatfiler.data.reader import ReaderConfig, iter_lines
from flatfiler.errors import FlatFileError, RecordLengthError
from flatfiler.schema.registry import Schema


def _hash_file(path: Path, algo: str = "sha256") -> str:
    h = hashlib.new(algo)
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return f"{algo}:{h.hexdigest()}"


def validate_file(
    schema: Schema, path: Path, max_errors: int = 20, config: ReaderConfig | None = None
) -> dict[str, Any]:
    """Decode every line of ``path`` and report problems instead of raising."""
    cfg = config or ReaderConfig()
    result: dict[str, Any] = {
        "schema": schema.name,
        "path": str(path),
        "exists": path.exists(),
        "size_bytes": path.stat().st_size if path.exists() else 0,
        "expected_width": schema.total_width,
        "hash": None,
        "lines": 0,
        "records": 0,
        "short_lines": 0,
        "long_lines": 0,
        "filter_errors": 0,
        "errors": [],
        "warnings": [],
    }
    if not path.exists():
        result["warnings"].append("file_missing")
        return result

    result["hash"] = _hash_file(path)
    errors: list[dict[str, Any]] = result["errors"]
    with path.open(encoding=cfg.encoding, newline="") as f:
        for text, line_number in iter_lines(f):
            result["lines"] += 1
            try:
                decode(schema, text, line_number)
            except RecordLengthError as exc:
                key = "short_lines" if exc.observed < exc.expected else "long_lines"
                result[key] += 1
                if len(errors) < max_errors:
                    errors.append(
                        {
                            "line": line_number,
                            "observed": exc.observed,
                            "expected": exc.expected,
                        }
                    )
                continue
            except FlatFileError as exc:
                result["filter_errors"] += 1
                if len(errors) < max_errors:
                    errors.append({"line": line_number, "error": str(exc)})
                continue
            result["records"] += 1

    if result["lines"] == 0:
        result["warnings"].append("empty_file")
    if result["short_lines"] or result["long_lines"]:
        result["warnings"].append("length_mismatch")
    if result["filter_errors"]:
        result["warnings"].append("filter_errors")
    if result["lines"] - result["records"] > max_errors:
        result["errors_capped"] = max_errors
    return result
