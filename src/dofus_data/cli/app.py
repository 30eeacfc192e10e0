import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from dofus_data.cli.export import export
from dofus_data.cli.inspect import inspect_app

app = typer.Typer(
    name="dofus-data",
    help="Dofus data CLI: decode D2O game data and D2I translation files.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

app.command("export")(export)
app.add_typer(inspect_app, name="inspect")


def configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


@app.callback()
def root(
    debug: Annotated[bool, typer.Option("--debug", envvar="DOFUS_DATA_DEBUG", help="Enable debug logging.")] = False,
) -> None:
    configure_logging(debug)
    logging.getLogger(__name__).debug("debug mode enabled")


def main() -> None:
    app()
