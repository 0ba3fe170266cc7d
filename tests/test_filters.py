from flatfiler.codec import decode, encode
from flatfiler.filters import BUILTIN_TRANSFORMS, Replace, ZeroFill, blank_to_none, to_int
from flatfiler.schema.registry import Schema


def test_text_filters_ignore_non_text():
    assert BUILTIN_TRANSFORMS["strip"]("  a ") == "a"
    assert BUILTIN_TRANSFORMS["lstrip"]("  a ") == "a "
    assert BUILTIN_TRANSFORMS["rstrip"]("  a ") == "  a"
    assert BUILTIN_TRANSFORMS["upper"]("ab") == "AB"
    assert BUILTIN_TRANSFORMS["lower"]("AB") == "ab"
    assert BUILTIN_TRANSFORMS["strip"](5) == 5


def test_to_int_and_blank_to_none():
    assert to_int("  0042") == 42
    assert to_int("    ") is None
    assert to_int(7) == 7
    assert blank_to_none("   ") is None
    assert blank_to_none(" x ") == " x "


def test_transform_objects_in_a_schema():
    schema = Schema()
    schema.add_field("phone", width=8, filter=Replace("-", ""))
    schema.add_field("qty", width=4, formatter=ZeroFill(4))
    record = decode(schema, "555-1234  7 ")
    assert record.get("phone") == "5551234"
    assert encode(record) == "5551234 0007"
