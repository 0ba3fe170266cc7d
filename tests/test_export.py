import datetime as dt
from pathlib import Path

import orjson
import pyarrow.ipc as pa_ipc

from flatfiler.codec import decode
from flatfiler.export import records_to_arrow, records_to_jsonl
from flatfiler.schema.registry import Schema


def _schema() -> Schema:
    schema = Schema("people")
    schema.add_field("name", width=6, filter="strip")
    schema.pad(width=1)
    schema.add_field(
        "born", width=8, filter=lambda v: dt.datetime.strptime(v, "%Y%m%d").date()
    )
    return schema


def test_records_to_jsonl(tmp_path: Path):
    schema = _schema()
    records = [decode(schema, "Ada    18151210", 1)]
    path = tmp_path / "out.jsonl"
    assert records_to_jsonl(records, path) == 1
    row = orjson.loads(path.read_bytes().splitlines()[0])
    assert row == {"line_number": 1, "name": "Ada", "born": "1815-12-10"}


def test_records_to_arrow(tmp_path: Path):
    schema = _schema()
    records = [decode(schema, "Ada    18151210", 1), decode(schema, "Alan   19120623", 2)]
    path = tmp_path / "out.arrow"
    assert records_to_arrow(records, schema, path) == 2
    with pa_ipc.open_file(path) as reader:
        table = reader.read_all()
    assert table.num_rows == 2
    assert table.column_names == ["line_number", "name", "born"]
    assert table.column("name").to_pylist() == ["Ada", "Alan"]
    assert table.column("born").to_pylist() == ["1815-12-10", "1912-06-23"]
