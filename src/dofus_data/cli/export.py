import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from dofus_data.core.export import DataFolderError, run_export

console = Console()
logger = logging.getLogger(__name__)


def export(
    data_dir: Annotated[
        Path,
        typer.Argument(envvar="DOFUS_DATA_DIR", help="Game data folder holding common/ and i18n/."),
    ],
    output_dir: Annotated[
        Path,
        typer.Argument(envvar="DOFUS_DATA_OUTPUT_DIR", help="Folder to write JSON and models to (recreated)."),
    ],
) -> None:
    """Export every D2O and D2I file of a game data folder to JSON."""
    logger.info("exporting %s to %s", data_dir, output_dir)
    try:
        report = run_export(data_dir, output_dir)
    except (DataFolderError, OSError) as exc:
        console.print(f"[red]Export failed:[/red] {exc}")
        raise typer.Exit(1) from exc

    console.print(f"[green]Parsed[/green] {report.d2o_parsed} d2o file(s)")
    console.print(f"[green]Parsed[/green] {report.d2i_parsed} d2i file(s)")
    console.print(f"[green]Wrote[/green] {report.model_modules} model module(s)")
    if report.failures:
        console.print(f"[yellow]{len(report.failures)} file(s) failed:[/yellow]")
        for path, reason in report.failures.items():
            console.print(f"  {path}: {reason}")
