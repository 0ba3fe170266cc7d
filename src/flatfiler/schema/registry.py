"""Schema: the ordered field layout of one record type.

A schema owns its field descriptors, the running total width, the column
offset table, and a registry of named transforms used by filters/formatters
given by name. Schemas are built once and treated as read-only afterwards;
decoding from several threads against one schema is fine as long as nobody
adds fields after publication.
"""

from __future__ import annotations

import itertools
import logging
from collections.abc import Callable, Mapping
from typing import Any

from flatfiler.errors import SchemaError, UnknownTransformError
from flatfiler.filters import BUILTIN_TRANSFORMS
from flatfiler.record import Record
from flatfiler.schema.field import FieldDescriptor, check_width

logger = logging.getLogger(__name__)

AUTO = "auto"

# shared by every schema so generated pad names are never reused in a process
_pad_ids = itertools.count(1)


def new_pad_name() -> str:
    return f"pad_{next(_pad_ids)}"


class Schema:
    def __init__(self, name: str = "schema", pad_char: str = " ") -> None:
        if len(pad_char) != 1:
            raise SchemaError(f"pad_char must be a single character, got {pad_char!r}")
        self.name = name
        self.pad_char = pad_char
        self._fields: list[FieldDescriptor] = []
        self._offsets: list[int] = []
        self._slots: list[str] = []
        self._transforms: dict[str, Callable[[Any], Any]] = {}
        self.total_width = 0

    def __repr__(self) -> str:
        return f"Schema(name={self.name!r}, fields={len(self._fields)}, width={self.total_width})"

    # -- field definition ------------------------------------------------

    def add_field(
        self,
        name: str | None = None,
        *,
        width: int | None = None,
        filter: Any = None,
        formatter: Any = None,
        configure: Callable[[FieldDescriptor], Any] | None = None,
    ) -> FieldDescriptor:
        """Append a field and return its descriptor.

        ``configure`` receives the descriptor before it joins the layout, so it
        may still set the name or width and push extra filters/formatters.
        """
        descriptor = FieldDescriptor(name=name, width=check_width(width), owner=self)
        descriptor.add_filter(filter)
        descriptor.add_formatter(formatter)
        if configure is not None:
            configure(descriptor)

        descriptor.width = check_width(descriptor.width)
        if not descriptor.name:
            raise SchemaError("Field name is required (pass it or set it in configure)")
        if self.has_field(descriptor.name):
            raise SchemaError(f"Field '{descriptor.name}' already exists in schema '{self.name}'")

        descriptor.lock()
        self._offsets.append(self.total_width)
        self._fields.append(descriptor)
        self._slots.append(f"A{descriptor.width}")
        self.total_width += descriptor.width
        logger.debug(
            "schema %s: field %s width=%d offset=%d",
            self.name,
            descriptor.name,
            descriptor.width,
            self._offsets[-1],
        )
        return descriptor

    def pad(self, name: str = AUTO, **options: Any) -> FieldDescriptor:
        """Add a padding field; its columns are skipped on read and blank on write."""
        if name == AUTO:
            name = new_pad_name()
            while self.has_field(name):
                name = new_pad_name()
        descriptor = self.add_field(name, **options)
        descriptor.is_padding = True
        return descriptor

    # -- named transforms ------------------------------------------------

    def register_transform(self, name: str, func: Callable[[Any], Any]) -> None:
        self._transforms[name] = func

    def transform(self, name: str | None = None) -> Callable[[Callable[[Any], Any]], Callable[[Any], Any]]:
        """Decorator form of ``register_transform``; defaults to the function name."""

        def decorator(func: Callable[[Any], Any]) -> Callable[[Any], Any]:
            self.register_transform(name or func.__name__, func)
            return func

        return decorator

    def lookup_transform(self, name: str) -> Callable[[Any], Any]:
        if name in self._transforms:
            return self._transforms[name]
        if name in BUILTIN_TRANSFORMS:
            return BUILTIN_TRANSFORMS[name]
        raise UnknownTransformError(name, self.name)

    # -- layout queries --------------------------------------------------

    @property
    def fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(self._fields)

    @property
    def non_pad_fields(self) -> tuple[FieldDescriptor, ...]:
        return tuple(f for f in self._fields if not f.is_padding)

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.non_pad_fields if f.name)

    @property
    def offsets(self) -> tuple[int, ...]:
        return tuple(self._offsets)

    @property
    def pack_format(self) -> str:
        """One ``A<width>`` slot per field, in column order."""
        return "".join(self._slots)

    def offset(self, index: int) -> int:
        return self._offsets[index]

    def has_field(self, name: str) -> bool:
        return any(f.name == name for f in self._fields)

    def get_field(self, name: str) -> FieldDescriptor:
        for f in self._fields:
            if f.name == name:
                return f
        raise SchemaError(f"Schema '{self.name}' has no field '{name}'")

    def new_record(self, initial_values: Mapping[str, Any] | None = None) -> Record:
        """Blank record for writing: every field empty, then ``initial_values`` applied."""
        values: dict[str, Any] = {name: "" for name in self.field_names}
        if initial_values:
            values.update(initial_values)
        return Record(self, values)
