import pytest

from flatfiler.codec import decode, encode, encode_values
from flatfiler.errors import (
    FieldFilterError,
    FieldFormatError,
    FieldOverflowError,
    LongRecordError,
    RecordLengthError,
    ShortRecordError,
    UnknownTransformError,
)
from flatfiler.filters import ZeroFill
from flatfiler.schema.registry import Schema


def _people() -> Schema:
    schema = Schema("people")
    schema.add_field("first_name", width=10, filter="strip")
    schema.add_field("last_name", width=10, filter="strip")
    schema.add_field("birthday", width=8)
    return schema


def test_decode_people_line():
    line = "Walt      Whitman   18190531"
    assert len(line) == 28
    record = decode(_people(), line, line_number=3)
    assert record.as_dict() == {
        "first_name": "Walt",
        "last_name": "Whitman",
        "birthday": "18190531",
    }
    assert record.line_number == 3


def test_encode_people_record():
    schema = _people()
    record = schema.new_record(
        {"first_name": "Linus", "last_name": "Torvalds", "birthday": "19691228"}
    )
    line = encode(record)
    assert line == "Linus     Torvalds  19691228"
    assert len(line) == schema.total_width


@pytest.mark.parametrize(
    "line,error",
    [("Walt", ShortRecordError), ("x" * 29, LongRecordError), ("", ShortRecordError)],
)
def test_length_mismatch_reports_both_lengths(line, error):
    with pytest.raises(RecordLengthError) as excinfo:
        decode(_people(), line, line_number=7)
    exc = excinfo.value
    assert isinstance(exc, error)
    assert exc.observed == len(line)
    assert exc.expected == 28
    assert exc.line_number == 7
    assert "28" in str(exc)


def test_padding_columns_are_dropped_and_written_blank():
    schema = Schema(pad_char=".")
    schema.add_field("a", width=3)
    schema.pad(width=2)
    schema.add_field("b", width=3)
    record = decode(schema, "abcXYdef")
    assert record.as_dict() == {"a": "abc", "b": "def"}
    assert encode(record) == "abc..def"


def test_padding_fields_run_formatters_from_empty_string():
    schema = Schema()
    schema.add_field("a", width=2)
    schema.pad("filler", width=3, formatter=lambda v: v + "00")
    assert encode_values(schema, {"a": "x"}) == "x 00 "


def test_round_trip_with_identity_chains():
    schema = Schema()
    schema.add_field("id", width=5)
    schema.pad(width=1)
    schema.add_field("name", width=6)
    line = "00042 Ada   "
    assert encode(decode(schema, line)) == line


def test_formatters_run_after_text_conversion():
    schema = Schema()
    schema.add_field("amount", width=6, filter="int", formatter=ZeroFill(6))
    schema.add_field("note", width=4)
    record = decode(schema, "    42abc ")
    assert record.get("amount") == 42
    assert encode(record) == "000042abc "


def test_none_values_encode_as_blank():
    schema = Schema()
    schema.add_field("a", width=3, filter="blank_to_none")
    record = decode(schema, "   ")
    assert record.get("a") is None
    assert encode(record) == "   "


def test_overflowing_value_is_rejected():
    schema = Schema()
    schema.add_field("code", width=3)
    with pytest.raises(FieldOverflowError) as excinfo:
        encode_values(schema, {"code": "ABCD"})
    assert excinfo.value.name == "code"
    assert excinfo.value.width == 3


def test_filter_chain_order_on_decode_and_formatter_order_on_encode():
    schema = Schema()
    fd = schema.add_field("v", width=4)
    fd.add_filter(lambda v: v.strip()).add_filter(lambda v: f"[{v}]")
    fd.add_formatter(lambda v: v.strip("[]")).add_formatter(lambda v: v.upper())
    record = decode(schema, "ab  ")
    assert record.get("v") == "[ab]"
    assert encode(record) == "AB  "


def test_empty_schema_decodes_empty_line():
    record = decode(Schema(), "")
    assert record.as_dict() == {}


def test_failing_filter_is_wrapped_with_field_and_line():
    schema = Schema()
    schema.add_field("n", width=3, filter="int")
    with pytest.raises(FieldFilterError) as excinfo:
        decode(schema, "abc", line_number=7)
    err = excinfo.value
    assert (err.name, err.line_number) == ("n", 7)
    assert isinstance(err.__cause__, ValueError)
    assert "line 7" in str(err)


def test_failing_formatter_is_wrapped():
    schema = Schema()
    schema.add_field("n", width=3, formatter=lambda v: v + 1)
    with pytest.raises(FieldFormatError) as excinfo:
        encode_values(schema, {"n": "1"})
    assert excinfo.value.name == "n"
    assert isinstance(excinfo.value.cause, TypeError)


def test_library_errors_from_chains_are_not_wrapped():
    schema = Schema()
    schema.add_field("n", width=3, filter="no_such_transform")
    with pytest.raises(UnknownTransformError):
        decode(schema, "abc")
