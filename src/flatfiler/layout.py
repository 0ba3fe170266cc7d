"""Layout files: declare a schema in YAML or JSON.

Example (YAML)::

    name: people
    pad_char: " "
    fields:
      - {name: first_name, width: 10, filter: strip}
      - {name: last_name, width: 10, filter: [strip, upper]}
      - {name: birthday, width: 8}
      - {pad: true, width: 2}

Filters and formatters are transform names, resolved against the schema's
registry and the built-in transforms when a line is decoded or encoded.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from flatfiler.errors import SchemaError
from flatfiler.schema.registry import AUTO, Schema


def _names(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, list) and all(isinstance(v, str) for v in value):
        return list(value)
    raise SchemaError(f"Expected a transform name or list of names, got {value!r}")


@dataclass
class FieldSpec:
    name: str | None
    width: int | None = None
    filters: list[str] = field(default_factory=list)
    formatters: list[str] = field(default_factory=list)
    pad: bool = False

    @staticmethod
    def from_mapping(payload: dict[str, Any]) -> FieldSpec:
        if not isinstance(payload, dict):
            raise SchemaError(f"Each field entry must be a mapping, got {payload!r}")
        pad = payload.get("pad", False)
        if not isinstance(pad, bool):
            raise SchemaError(f"'pad' must be true or false, got {pad!r}")
        return FieldSpec(
            name=str(payload["name"]) if payload.get("name") else None,
            width=payload.get("width"),
            filters=_names(payload.get("filter")),
            formatters=_names(payload.get("formatter")),
            pad=pad,
        )


@dataclass
class Layout:
    name: str
    fields: list[FieldSpec]
    pad_char: str = " "
    source: Path | None = None

    @staticmethod
    def from_mapping(payload: dict[str, Any], source: Path | None = None) -> Layout:
        if not isinstance(payload, dict):
            raise SchemaError("Layout must be a mapping with a 'fields' list")
        raw_fields = payload.get("fields")
        if not isinstance(raw_fields, list):
            raise SchemaError("Layout must contain a 'fields' list")
        return Layout(
            name=str(payload.get("name") or (source.stem if source else "layout")),
            fields=[FieldSpec.from_mapping(f) for f in raw_fields],
            pad_char=str(payload.get("pad_char", " ")),
            source=source,
        )


def load_layout(path: Path) -> Layout:
    text = path.read_text()
    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            payload = yaml.safe_load(text)
        else:
            payload = json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaError(f"Cannot parse layout {path}: {exc}") from exc
    return Layout.from_mapping(payload, source=path)


def build_schema(layout: Layout) -> Schema:
    schema = Schema(layout.name, pad_char=layout.pad_char)
    for spec in layout.fields:

        def configure(descriptor: Any, spec: FieldSpec = spec) -> None:
            for name in spec.filters:
                descriptor.add_filter(name)
            for name in spec.formatters:
                descriptor.add_formatter(name)

        if spec.pad:
            schema.pad(spec.name or AUTO, width=spec.width, configure=configure)
        else:
            schema.add_field(spec.name, width=spec.width, configure=configure)
    return schema


def load_schema(path: Path) -> Schema:
    return build_schema(load_layout(path))
