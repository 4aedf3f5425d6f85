"""tpro extract command — recover JSON from raw model output."""

from __future__ import annotations

import json
from typing import Annotated

import typer

from tpro.cli.utils import read_input
from tpro.core.config import load_config
from tpro.llm.extract import extract_json
from tpro.utils.console import console


def extract(
    source: Annotated[
        str,
        typer.Argument(help="File containing model output, or '-' for stdin."),
    ],
    balanced: Annotated[
        bool,
        typer.Option("--balanced", help="Use a balanced-bracket scan instead of greedy slicing."),
    ] = False,
) -> None:
    """Extract a JSON object or array from chatty model output."""
    config = load_config()
    value = extract_json(
        read_input(source),
        balanced=balanced or config.extract.balanced_brackets,
        snippet_length=config.extract.snippet_length,
    )
    if value is None:
        console.print(
            "[red]Could not interpret model output as JSON.[/red] "
            "Retry the request or ask the model for a JSON-only reply."
        )
        raise typer.Exit(1)

    typer.echo(json.dumps(value, ensure_ascii=False, indent=2))
