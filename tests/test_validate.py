from pathlib import Path

from flatfiler.schema.registry import Schema
from flatfiler.validate import validate_file


def _schema() -> Schema:
    schema = Schema("codes")
    schema.add_field("code", width=4, filter="int")
    schema.add_field("label", width=4)
    return schema


def test_validate_missing_file(tmp_path: Path):
    result = validate_file(_schema(), tmp_path / "missing.dat")
    assert result["warnings"] == ["file_missing"]
    assert result["records"] == 0


def test_validate_reports_length_and_filter_errors(tmp_path: Path):
    path = tmp_path / "codes.dat"
    path.write_text("0001ABCD\n\n02\n0003ABCDEF\nXXXXABCD\n0004WXYZ\n")
    result = validate_file(_schema(), path)
    assert result["lines"] == 5
    assert result["records"] == 2
    assert result["short_lines"] == 1
    assert result["long_lines"] == 1
    assert result["filter_errors"] == 1
    assert result["errors"][0] == {"line": 3, "observed": 2, "expected": 8}
    assert result["errors"][2]["line"] == 5
    assert set(result["warnings"]) == {"length_mismatch", "filter_errors"}
    assert result["hash"].startswith("sha256:")


def test_validate_caps_error_list(tmp_path: Path):
    path = tmp_path / "bad.dat"
    path.write_text("x\n" * 5)
    result = validate_file(_schema(), path, max_errors=2)
    assert len(result["errors"]) == 2
    assert result["errors_capped"] == 2


def test_validate_clean_file_has_no_warnings(tmp_path: Path):
    path = tmp_path / "ok.dat"
    path.write_text("0001ABCD\n0002EFGH\n")
    result = validate_file(_schema(), path)
    assert result["records"] == 2
    assert result["warnings"] == []


def test_validate_counts_any_exception_from_a_filter(tmp_path: Path):
    schema = Schema("codes")
    schema.add_field("code", width=4, filter=lambda v: v + 1)
    path = tmp_path / "codes.dat"
    path.write_text("0001\n0002\n")
    result = validate_file(schema, path)
    assert result["records"] == 0
    assert result["filter_errors"] == 2
    assert "TypeError" in result["errors"][0]["error"]
    assert result["warnings"] == ["filter_errors"]
