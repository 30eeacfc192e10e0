import json
from collections.abc import Sequence
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.table import Table

from dofus_data.core.d2i import process_d2i_file
from dofus_data.core.d2o import process_d2o_file
from dofus_data.core.errors import DecodeError
from dofus_data.models import D2oData, Translations, field_type_name

inspect_app = typer.Typer(help="Inspect a single data file.")
console = Console()


def _render_table(headers: Sequence[str], rows: Sequence[tuple[Any, ...]]) -> None:
    table = Table(show_lines=False)
    for h in headers:
        table.add_column(h)
    for row in rows:
        table.add_row(*(str(v) for v in row))
    console.print(table)
    console.print(f"({len(rows)} rows)")


def _load_d2o(path: Path) -> D2oData:
    try:
        return process_d2o_file(path)
    except (DecodeError, OSError) as exc:
        console.print(f"[red]Cannot decode {path}:[/red] {exc}")
        raise typer.Exit(1) from exc


def _load_d2i(path: Path) -> Translations:
    try:
        return process_d2i_file(path)
    except (DecodeError, OSError) as exc:
        console.print(f"[red]Cannot decode {path}:[/red] {exc}")
        raise typer.Exit(1) from exc


@inspect_app.command("classes")
def classes(
    path: Annotated[Path, typer.Argument(help="Path to a .d2o file.")],
    fields: Annotated[bool, typer.Option("--fields", help="List every field instead of one row per class.")] = False,
) -> None:
    """Show the class table of a D2O file."""
    data = _load_d2o(path)
    if not fields:
        rows = [(cid, c.package_name, c.package_class, len(c.fields)) for cid, c in data.classes.items()]
        _render_table(["id", "package", "class", "fields"], rows)
        return

    field_rows = []
    for cid, cls in data.classes.items():
        for f in cls.fields:
            element = field_type_name(f.subtype.type) if f.subtype else ""
            field_rows.append((cid, cls.package_class, f.name, field_type_name(f.type), element))
    _render_table(["id", "class", "field", "type", "element"], field_rows)


@inspect_app.command("objects")
def objects(
    path: Annotated[Path, typer.Argument(help="Path to a .d2o file.")],
    limit: Annotated[int, typer.Option(help="Max objects to print.")] = 10,
) -> None:
    """Print decoded objects of a D2O file as JSON."""
    data = _load_d2o(path)
    console.print_json(json.dumps(data.objects[:limit]))
    console.print(f"({min(limit, len(data.objects))} of {len(data.objects)} objects)")


@inspect_app.command("translation")
def translation(
    path: Annotated[Path, typer.Argument(help="Path to a .d2i file.")],
    text_id: Annotated[int | None, typer.Option("--id", help="Only show this text id.")] = None,
    limit: Annotated[int, typer.Option(help="Max rows to return.")] = 50,
) -> None:
    """Show texts of a D2I file."""
    translations = _load_d2i(path)
    if text_id is not None:
        if text_id not in translations:
            console.print(f"[yellow]No text with id {text_id}[/yellow]")
            raise typer.Exit(1)
        rows = [(text_id, translations[text_id])]
    else:
        rows = sorted(translations.items())[:limit]
    _render_table(["id", "text"], rows)
