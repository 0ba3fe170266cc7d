"""Field descriptors: one named, fixed-width column of a schema."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from flatfiler.errors import SchemaError
from flatfiler.transform import Transform, as_transform, run_chain

if TYPE_CHECKING:
    from flatfiler.schema.registry import Schema

DEFAULT_WIDTH = 10
_LOCKED_ATTRS = frozenset({"name", "width"})


def check_width(width: Any) -> int:
    """Default a missing width and reject anything that is not a positive int."""
    if width is None:
        return DEFAULT_WIDTH
    if isinstance(width, bool) or not isinstance(width, int):
        raise SchemaError(f"Field width must be an integer, got {width!r}")
    if width <= 0:
        raise SchemaError(f"Field width must be positive, got {width}")
    return width


@dataclass(eq=False)
class FieldDescriptor:
    name: str | None
    width: int = DEFAULT_WIDTH
    owner: Schema | None = field(default=None, repr=False)
    filters: list[Transform] = field(default_factory=list)
    formatters: list[Transform] = field(default_factory=list)
    is_padding: bool = False

    def __post_init__(self) -> None:
        self.width = check_width(self.width)

    def __setattr__(self, key: str, value: Any) -> None:
        if key in _LOCKED_ATTRS and self.__dict__.get("_locked", False):
            raise SchemaError(f"Cannot change '{key}' of field '{self.name}' once it is in a schema")
        super().__setattr__(key, value)

    def lock(self) -> None:
        """Freeze name and width; offsets of the owning schema depend on them."""
        self.__dict__["_locked"] = True

    @property
    def locked(self) -> bool:
        return self.__dict__.get("_locked", False)

    def add_filter(self, entry: Any = None) -> FieldDescriptor:
        """Append a read-time transform; ``None`` is ignored."""
        if entry is not None:
            self.filters.append(as_transform(entry))
        return self

    def add_formatter(self, entry: Any = None) -> FieldDescriptor:
        """Append a write-time transform; ``None`` is ignored."""
        if entry is not None:
            self.formatters.append(as_transform(entry))
        return self

    def pass_through_filters(self, value: Any) -> Any:
        return run_chain(self.filters, value, self.owner)

    def pass_through_formatters(self, value: Any) -> Any:
        return run_chain(self.formatters, value, self.owner)
