"""Built-in transforms available by name to every schema.

Layout files reference these by name (``filter: strip``); schemas fall back to
this registry when a name is not registered on the schema itself.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any


def strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def lstrip(value: Any) -> Any:
    return value.lstrip() if isinstance(value, str) else value


def rstrip(value: Any) -> Any:
    return value.rstrip() if isinstance(value, str) else value


def upper(value: Any) -> Any:
    return value.upper() if isinstance(value, str) else value


def lower(value: Any) -> Any:
    return value.lower() if isinstance(value, str) else value


def to_int(value: Any) -> int | None:
    """Parse a (possibly space padded) integer column; blank becomes None."""
    if isinstance(value, int):
        return value
    text = str(value).strip()
    return int(text) if text else None


def blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


@dataclass(frozen=True)
class ZeroFill:
    """Right-align a value in ``width`` columns with leading zeros."""

    width: int

    def transform(self, value: Any) -> str:
        return str(value).strip().rjust(self.width, "0")


@dataclass(frozen=True)
class Replace:
    old: str
    new: str

    def transform(self, value: Any) -> Any:
        return value.replace(self.old, self.new) if isinstance(value, str) else value


BUILTIN_TRANSFORMS: dict[str, Callable[[Any], Any]] = {
    "strip": strip,
    "lstrip": lstrip,
    "rstrip": rstrip,
    "upper": upper,
    "lower": lower,
    "int": to_int,
    "blank_to_none": blank_to_none,
}
