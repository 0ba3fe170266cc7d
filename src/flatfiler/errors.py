"""Exception hierarchy for schema construction, decoding and encoding."""

from __future__ import annotations


class FlatFileError(Exception):
    """Base class for every error raised by flatfiler."""


class SchemaError(FlatFileError):
    """A schema or field definition is invalid."""


class UnknownTransformError(FlatFileError, LookupError):
    """A named filter/formatter is not registered on the schema."""

    def __init__(self, name: str, schema_name: str | None = None) -> None:
        self.name = name
        self.schema_name = schema_name
        where = f" on schema '{schema_name}'" if schema_name else ""
        super().__init__(f"No transform named '{name}' is registered{where}")


class RecordLengthError(FlatFileError):
    """A line's length does not match the schema's total width."""

    def __init__(self, observed: int, expected: int, line_number: int = -1) -> None:
        self.observed = observed
        self.expected = expected
        self.line_number = line_number
        where = f"line {line_number}: " if line_number >= 0 else ""
        super().__init__(f"{where}length is {observed} but should be {expected}")


class ShortRecordError(RecordLengthError):
    """The line is shorter than the schema's total width."""


class LongRecordError(RecordLengthError):
    """The line is longer than the schema's total width."""


class UnknownFieldError(FlatFileError, LookupError):
    """A field name is not a non-padding field of the record's schema."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown field: {name}")


class FieldOverflowError(FlatFileError):
    """A formatted value does not fit in its field's width."""

    def __init__(self, name: str, value: str, width: int) -> None:
        self.name = name
        self.value = value
        self.width = width
        super().__init__(
            f"Field '{name}' formatted to {len(value)} characters but is {width} wide: {value!r}"
        )


class FieldTransformError(FlatFileError):
    """A filter or formatter raised while processing one field."""

    direction = "transform"

    def __init__(self, name: str, cause: BaseException, line_number: int = -1) -> None:
        self.name = name
        self.cause = cause
        self.line_number = line_number
        where = f"line {line_number}: " if line_number >= 0 else ""
        super().__init__(
            f"{where}{self.direction} for field '{name}' failed: {type(cause).__name__}: {cause}"
        )


class FieldFilterError(FieldTransformError):
    direction = "filter"


class FieldFormatError(FieldTransformError):
    direction = "formatter"


def length_error(observed: int, expected: int, line_number: int = -1) -> RecordLengthError:
    """Pick the short/long variant for a length mismatch."""
    if observed < expected:
        return ShortRecordError(observed, expected, line_number)
    return LongRecordError(observed, expected, line_number)
