"""Records: field values bound to the schema that describes them."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from flatfiler.errors import UnknownFieldError

if TYPE_CHECKING:
    from flatfiler.schema.registry import Schema


class Record:
    """One line's worth of values, keyed by the schema's non-padding field names.

    Keys the schema does not declare are dropped on construction and missing
    ones default to ``""``. ``line_number`` is the 1-based source line, or -1
    for records built in memory.
    """

    __slots__ = ("schema", "_values", "line_number")

    def __init__(
        self, schema: Schema, values: Mapping[str, Any] | None = None, line_number: int = -1
    ) -> None:
        self.schema = schema
        self.line_number = line_number
        given = values or {}
        self._values: dict[str, Any] = {name: given.get(name, "") for name in schema.field_names}

    def __repr__(self) -> str:
        return (
            f"Record(schema={self.schema.name!r}, line_number={self.line_number}, "
            f"values={self._values!r})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Record):
            return NotImplemented
        return self.schema is other.schema and self._values == other._values

    __hash__ = None  # type: ignore[assignment]

    def get(self, name: str) -> Any:
        try:
            return self._values[name]
        except KeyError:
            raise UnknownFieldError(name) from None

    def set(self, name: str, value: Any) -> None:
        if name not in self._values:
            raise UnknownFieldError(name)
        self._values[name] = value

    __getitem__ = get
    __setitem__ = set

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def as_dict(self) -> dict[str, Any]:
        """A copy of the stored values."""
        return dict(self._values)

    def debug_string(self) -> str:
        lines = []
        for f in self.schema.fields:
            value = "" if f.is_padding else self._values.get(f.name or "", "")
            lines.append(f"{f.name}: {value}")
        return "\n".join(lines) + "\n" if lines else ""
