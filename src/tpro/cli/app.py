"""Transcript Pro CLI entry point."""

from typing import Annotated, Optional

import typer
from dotenv import load_dotenv

from tpro import __version__
from tpro.cli.archive import archive_app
from tpro.cli.extract import extract
from tpro.cli.srt import srt
from tpro.cli.translate import translate

app = typer.Typer(
    name="tpro",
    help="Transcript Pro — salvage JSON from model output, convert and translate subtitles.",
    no_args_is_help=True,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tpro {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=_version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Transcript Pro — salvage JSON from model output, convert and translate subtitles."""
    # Load .env for API keys (GEMINI_API_KEY, OPENAI_API_KEY, etc.)
    # Does not override existing env vars — shell exports take precedence
    load_dotenv(override=False)


app.command("extract")(extract)
app.command("srt")(srt)
app.command("translate")(translate)
app.add_typer(archive_app, name="archive")
