"""RXT CLI - Command-line interface for the relational extractor."""

import json
from pathlib import Path
from typing import Optional

import typer
import yaml
from typing_extensions import Annotated

from rxt import __version__
from rxt.core.config import config as rxt_config
from rxt.exceptions import ConfigurationError, ExhaustionError, ExtractionError, RXTError
from rxt.operators.sql import SQLExtractor
from rxt.utils.logging import setup_logging
from rxt.utils.yaml_parser import load_yaml

app = typer.Typer(
    name="rxt",
    help="RXT - Relational record extractor",
    add_completion=True,
)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"rxt version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
) -> None:
    """RXT - Stream records out of any SQL query."""
    pass


@app.command()
def extract(
    config_path: Annotated[
        Path,
        typer.Argument(
            help="Path to the YAML extractor configuration",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    limit: Annotated[
        Optional[int],
        typer.Option("--limit", "-n", min=0, help="Stop after this many records"),
    ] = None,
    schema: Annotated[
        bool,
        typer.Option("--schema", help="Print the column schema before the records"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Verbose output"),
    ] = False,
) -> None:
    """Run the configured query and print one JSON record per line."""
    setup_logging(
        level="DEBUG" if verbose else rxt_config.log_level,
        json_format=rxt_config.log_format == "json",
    )

    try:
        settings = load_yaml(config_path)
        with SQLExtractor() as extractor:
            extractor.configure(settings)
            extractor.begin()

            if schema:
                typer.echo(
                    json.dumps(
                        {"schema": [[c.name, c.dtype.value] for c in extractor.schema.columns]}
                    )
                )

            emitted = 0
            while (limit is None or emitted < limit) and extractor.has_next():
                typer.echo(json.dumps(extractor.next(), default=str))
                emitted += 1

            typer.echo(
                f"Extracted {emitted:,} {extractor.get_unit()} "
                f"(total: {extractor.get_total()})",
                err=True,
            )

    except ConfigurationError as e:
        typer.secho(f"Configuration error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except (ExtractionError, ExhaustionError) as e:
        typer.secho(f"Extraction error: {e}", fg=typer.colors.RED, err=True)
        if verbose and e.__cause__ is not None:
            typer.echo(f"Caused by: {e.__cause__}", err=True)
        raise typer.Exit(code=1)
    except RXTError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


@app.command()
def describe() -> None:
    """Print the parameters the extractor accepts."""
    description = SQLExtractor().get_configuration()
    typer.echo(yaml.safe_dump(description.model_dump(), sort_keys=False))


if __name__ == "__main__":
    app()
