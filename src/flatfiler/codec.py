"""Line <-> record conversion for a fixed-width schema.

decode slices a line by the schema's offset table and runs each value field
through its filters; padding columns are dropped. encode runs every field
(padding included, starting from "") through its formatters and left-justifies
the result to the field width with the schema's pad character.
"""

from __future__ import annotations

from typing import Any

from flatfiler.errors import (
    FieldFilterError,
    FieldFormatError,
    FieldOverflowError,
    FlatFileError,
    length_error,
)
from flatfiler.record import Record
from flatfiler.schema.registry import Schema


def decode(schema: Schema, line: str, line_number: int = -1) -> Record:
    """Parse one line (terminator already stripped) into a Record."""
    if len(line) != schema.total_width:
        raise length_error(len(line), schema.total_width, line_number)

    values: dict[str, Any] = {}
    for offset, field in zip(schema.offsets, schema.fields, strict=True):
        if field.is_padding:
            continue
        raw = line[offset : offset + field.width]
        try:
            values[field.name] = field.pass_through_filters(raw)
        except FlatFileError:
            raise
        except Exception as exc:
            raise FieldFilterError(field.name or "", exc, line_number) from exc
    return Record(schema, values, line_number=line_number)


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def encode(record: Record) -> str:
    """Render a Record as a fixed-width line without a trailing terminator."""
    schema = record.schema
    parts: list[str] = []
    for field in schema.fields:
        raw = "" if field.is_padding else _as_text(record.get(field.name))
        try:
            formatted = _as_text(field.pass_through_formatters(raw))
        except FlatFileError:
            raise
        except Exception as exc:
            raise FieldFormatError(field.name or "", exc, record.line_number) from exc
        if len(formatted) > field.width:
            raise FieldOverflowError(field.name or "", formatted, field.width)
        parts.append(formatted.ljust(field.width, schema.pad_char))
    return "".join(parts)


def encode_values(schema: Schema, values: dict[str, Any]) -> str:
    """Shortcut for ``encode(schema.new_record(values))``."""
    return encode(schema.new_record(values))
