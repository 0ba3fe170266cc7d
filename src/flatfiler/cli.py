from pathlib import Path

import orjson
import typer
from rich.console import Console
from rich.table import Table

from flatfiler.codec import encode
from flatfiler.data.generator import generate_lines
from flatfiler.data.reader import ReaderConfig, load_records
from flatfiler.errors import FlatFileError
from flatfiler.export import record_payload, records_to_arrow, records_to_jsonl
from flatfiler.layout import load_schema
from flatfiler.log import configure_logging
from flatfiler.schema.registry import Schema
from flatfiler.validate import validate_file

app = typer.Typer(help="Read and write fixed-width flat files described by a layout.")
console = Console()
SUPPORTED_FORMATS = {"json", "jsonl", "arrow"}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    configure_logging("DEBUG" if verbose else "WARNING")


def _load_schema(layout: Path) -> Schema:
    if not layout.is_file():
        raise typer.BadParameter(f"Layout file not found: {layout}")
    try:
        return load_schema(layout)
    except FlatFileError as exc:
        raise typer.BadParameter(f"Invalid layout {layout}: {exc}") from exc


def _require_file(path: Path) -> Path:
    if not path.is_file():
        raise typer.BadParameter(f"Input file not found: {path}")
    return path


@app.command()
def decode(
    layout: Path = typer.Argument(..., help="Layout file (.yaml/.yml/.json)."),
    input: Path = typer.Argument(..., help="Flat file to decode."),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Optional path to write decoded records."
    ),
    format: str = typer.Option("json", "--format", "-f", help="Output format: json | jsonl | arrow."),
    skip_errors: bool = typer.Option(
        False, "--skip-errors", help="Log and skip lines with the wrong length or a failing filter instead of failing."
    ),
    encoding: str = typer.Option("utf-8", "--encoding", help="Text encoding of the input."),
) -> None:
    """Decode every line of a flat file into records."""
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise typer.BadParameter(f"Unsupported format '{format}'. Choose from {SUPPORTED_FORMATS}.")
    if fmt == "arrow" and not output:
        raise typer.BadParameter("Arrow output requires --output.")

    schema = _load_schema(layout)
    config = ReaderConfig(encoding=encoding, errors="skip" if skip_errors else "strict")
    try:
        records = load_records(_require_file(input), schema, config)
    except FlatFileError as exc:
        console.print(f"[bold red]Decode failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if fmt == "arrow" and output:
        records_to_arrow(records, schema, output)
    elif fmt == "jsonl":
        if not output:
            for r in records:
                typer.echo(orjson.dumps(record_payload(r), default=str).decode())
            return
        records_to_jsonl(records, output)
    else:
        payload = [record_payload(r) for r in records]
        if output:
            output.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2, default=str))
        else:
            typer.echo(orjson.dumps(payload, option=orjson.OPT_INDENT_2, default=str).decode())
            return
    console.print(f"[bold green]Wrote[/] {len(records)} records to {output}")


@app.command("encode")
def encode_cmd(
    layout: Path = typer.Argument(..., help="Layout file (.yaml/.yml/.json)."),
    input: Path = typer.Argument(..., help="JSONL file, one object of field values per line."),
    output: Path = typer.Option(..., "--output", "-o", help="Flat file to write."),
    encoding: str = typer.Option("utf-8", "--encoding", help="Text encoding of the output."),
) -> None:
    """Encode JSONL field values into a fixed-width flat file."""
    schema = _load_schema(layout)
    lines: list[str] = []
    with _require_file(input).open("rb") as f:
        for line_number, raw in enumerate(f, start=1):
            if not raw.strip():
                continue
            try:
                values = orjson.loads(raw)
                if not isinstance(values, dict):
                    raise typer.BadParameter(f"{input}:{line_number}: expected a JSON object")
                lines.append(encode(schema.new_record(values)))
            except orjson.JSONDecodeError as exc:
                raise typer.BadParameter(f"{input}:{line_number}: invalid JSON ({exc})") from exc
            except FlatFileError as exc:
                console.print(f"[bold red]Encode failed[/] at {input}:{line_number}: {exc}")
                raise typer.Exit(code=1) from exc

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("".join(line + "\n" for line in lines), encoding=encoding)
    console.print(f"[bold green]Wrote[/] {len(lines)} records to {output}")


@app.command()
def inspect(
    layout: Path = typer.Argument(..., help="Layout file (.yaml/.yml/.json)."),
) -> None:
    """Show the column layout: offsets, widths, padding and transform chains."""
    schema = _load_schema(layout)
    table = Table(title=f"{schema.name} ({schema.total_width} columns)")
    table.add_column("Field")
    table.add_column("Offset", justify="right")
    table.add_column("Width", justify="right")
    table.add_column("Pad")
    table.add_column("Filters")
    table.add_column("Formatters")
    for offset, field in zip(schema.offsets, schema.fields, strict=True):
        table.add_row(
            field.name or "",
            str(offset),
            str(field.width),
            "yes" if field.is_padding else "",
            ", ".join(t.describe() for t in field.filters),
            ", ".join(t.describe() for t in field.formatters),
        )
    console.print(table)


@app.command()
def validate(
    layout: Path = typer.Argument(..., help="Layout file (.yaml/.yml/.json)."),
    input: Path = typer.Argument(..., help="Flat file to check."),
    max_errors: int = typer.Option(20, "--max-errors", help="Errors to list in the report."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write the report as JSON."),
) -> None:
    """Check every line against the layout and report length/filter problems."""
    schema = _load_schema(layout)
    result = validate_file(schema, input, max_errors=max_errors)
    if output:
        output.write_bytes(orjson.dumps(result, option=orjson.OPT_INDENT_2))
        console.print(f"[bold green]Wrote validation report[/] to {output}")
    else:
        typer.echo(orjson.dumps(result, option=orjson.OPT_INDENT_2).decode())
    if result["warnings"]:
        raise typer.Exit(code=1)


@app.command()
def synthetic(
    layout: Path = typer.Argument(..., help="Layout file (.yaml/.yml/.json)."),
    output: Path = typer.Argument(..., help="Path to write the synthetic flat file."),
    count: int = typer.Option(8, "--count", "-c", help="Number of records to emit."),
    seed: int = typer.Option(1234, "--seed", help="Seed for reproducible generation."),
) -> None:
    """Generate well-formed random lines for a layout."""
    schema = _load_schema(layout)
    lines, _ = generate_lines(schema, count=count, seed=seed)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text("".join(line + "\n" for line in lines))
    console.print(f"[bold green]Wrote[/] {count} records to {output}")


if __name__ == "__main__":
    app()
