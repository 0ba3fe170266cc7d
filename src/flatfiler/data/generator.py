"""Synthetic flat-file generator.

Builds well-formed lines for any schema: each value field gets a random
alphanumeric value of up to its width, left-justified with the schema's pad
character; padding columns are left blank. Used for fixtures and benchmarks.
"""

from __future__ import annotations

import random
import string

from flatfiler.schema.registry import Schema

ALPHABET = string.ascii_uppercase + string.digits


def _random_value(rng: random.Random, width: int) -> str:
    length = rng.randint(1, width)
    return "".join(rng.choice(ALPHABET) for _ in range(length))


def generate_lines(
    schema: Schema, count: int = 8, *, seed: int = 1234
) -> tuple[list[str], list[dict[str, str]]]:
    """Generate ``count`` lines plus the unpadded value written into each field."""
    rng = random.Random(seed)
    lines: list[str] = []
    metadata: list[dict[str, str]] = []

    for _ in range(count):
        parts: list[str] = []
        values: dict[str, str] = {}
        for field in schema.fields:
            if field.is_padding:
                parts.append(schema.pad_char * field.width)
                continue
            value = _random_value(rng, field.width)
            values[field.name or ""] = value
            parts.append(value.ljust(field.width, schema.pad_char))
        lines.append("".join(parts))
        metadata.append(values)

    return lines, metadata
