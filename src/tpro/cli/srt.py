"""tpro srt command — turn a model's transcription reply into an SRT file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer

from tpro.cli.utils import read_input
from tpro.core.config import load_config
from tpro.core.models import ArchiveType, TranscriptionResult
from tpro.llm.extract import extract_json
from tpro.subtitles.srt import generate_srt
from tpro.utils.console import console


def srt(
    source: Annotated[
        str,
        typer.Argument(help="File containing the model's transcription reply, or '-' for stdin."),
    ],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output SRT path (prints to stdout if omitted)."),
    ] = None,
    speakers: Annotated[
        bool,
        typer.Option("--speakers", help="Prefix each line with [Speaker]: when known."),
    ] = False,
    archive: Annotated[
        bool,
        typer.Option("--archive", help="Also save the transcript to the archive."),
    ] = False,
    title: Annotated[
        Optional[str],
        typer.Option("--title", help="Archive title (defaults to the input file name)."),
    ] = None,
) -> None:
    """Convert a transcription result in model output to SRT."""
    config = load_config()
    value = extract_json(
        read_input(source),
        balanced=config.extract.balanced_brackets,
        snippet_length=config.extract.snippet_length,
    )
    if value is None:
        console.print("[red]Could not interpret model output as JSON.[/red]")
        raise typer.Exit(1)

    try:
        result = TranscriptionResult.from_model_output(value)
    except ValueError as e:
        console.print(f"[red]Model output is not a transcription result:[/red] {e}")
        raise typer.Exit(1)

    text = generate_srt(result.segments, include_speakers=speakers)
    if output is None:
        typer.echo(text, nl=False)
    else:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Saved:[/green] {output} ({len(result.segments)} segments)")

    if archive:
        from tpro.archive.store import open_archive

        entry = open_archive(config).save(
            ArchiveType.TRANSCRIPT,
            title or (Path(source).stem if source != "-" else "Transcript"),
            result.to_dict(),
            result.language,
            "transcribe_file",
        )
        console.print(f"[green]Archived:[/green] {entry.file_id} (v{entry.version})")
