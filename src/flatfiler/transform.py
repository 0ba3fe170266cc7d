"""Filter/formatter chain entries.

A chain entry is one of:
- NamedDispatch: a name looked up on the owning schema when the chain runs
- InlineFunction: a callable taking exactly one value
- TransformObject: any object exposing a one-argument ``transform`` method
- Identity: anything else; the value passes through unchanged

Entries are classified once by ``as_transform`` and invoked through ``apply``.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, Union

from flatfiler.errors import UnknownTransformError

if TYPE_CHECKING:
    from flatfiler.schema.registry import Schema

logger = logging.getLogger(__name__)


class Transformer(Protocol):
    def transform(self, value: Any) -> Any: ...


@dataclass(frozen=True)
class NamedDispatch:
    name: str

    def apply(self, value: Any, owner: Schema | None) -> Any:
        if owner is None:
            raise UnknownTransformError(self.name)
        return owner.lookup_transform(self.name)(value)

    def describe(self) -> str:
        return self.name


@dataclass(frozen=True)
class InlineFunction:
    func: Callable[[Any], Any]

    def apply(self, value: Any, owner: Schema | None) -> Any:
        return self.func(value)

    def describe(self) -> str:
        return getattr(self.func, "__name__", repr(self.func))


@dataclass(frozen=True)
class TransformObject:
    obj: Transformer

    def apply(self, value: Any, owner: Schema | None) -> Any:
        return self.obj.transform(value)

    def describe(self) -> str:
        return repr(self.obj)


@dataclass(frozen=True)
class Identity:
    entry: Any

    def apply(self, value: Any, owner: Schema | None) -> Any:
        return value

    def describe(self) -> str:
        return f"identity({self.entry!r})"


Transform = Union[NamedDispatch, InlineFunction, TransformObject, Identity]
TRANSFORM_TYPES = (NamedDispatch, InlineFunction, TransformObject, Identity)


def _takes_one_argument(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # builtins such as int/str expose no signature; assume they accept a value
        return True
    try:
        signature.bind(None)
    except TypeError:
        return False
    return True


def as_transform(entry: Any) -> Transform:
    """Classify a user-supplied chain entry into one of the transform variants."""
    if isinstance(entry, TRANSFORM_TYPES):
        return entry
    if isinstance(entry, str):
        return NamedDispatch(entry)
    method = getattr(entry, "transform", None)
    if callable(method) and _takes_one_argument(method):
        return TransformObject(entry)
    if callable(entry) and _takes_one_argument(entry):
        return InlineFunction(entry)
    logger.debug("Chain entry %r has no usable shape; treating it as identity", entry)
    return Identity(entry)


def run_chain(chain: Iterable[Transform], value: Any, owner: Schema | None) -> Any:
    """Apply each transform left to right, feeding each result into the next."""
    for step in chain:
        value = step.apply(value, owner)
    return value
