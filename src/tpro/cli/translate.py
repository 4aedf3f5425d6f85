"""tpro translate command — translate an existing subtitle file."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn

from tpro.core.config import load_config
from tpro.core.models import ArchiveType, Tone
from tpro.subtitles.converter import load_subtitles, save_subtitles
from tpro.utils.console import console


def translate(
    subtitle_file: Annotated[
        Path,
        typer.Argument(help="Path to subtitle file (SRT, VTT, ASS)."),
    ],
    to: Annotated[
        Optional[str],
        typer.Option("--to", "-t", help="Target language (e.g. Burmese, French)."),
    ] = None,
    tone: Annotated[
        Optional[Tone],
        typer.Option("--tone", help="Tone/style profile."),
    ] = None,
    chunk_size: Annotated[
        Optional[int],
        typer.Option("--chunk-size", min=1, help="Segments per translation request."),
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option(help="LiteLLM model string (e.g. gemini/gemini-2.5-flash)."),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Output file path."),
    ] = None,
    fmt: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format: srt, vtt, ass, txt."),
    ] = "srt",
    archive: Annotated[
        bool,
        typer.Option("--archive/--no-archive", help="Save the translation to the archive."),
    ] = True,
) -> None:
    """Translate a subtitle file with an LLM, keeping every timestamp."""
    from tpro.llm.translator import TranslationError, translate_subtitles

    if not subtitle_file.is_file():
        console.print(f"[red]File not found:[/red] {subtitle_file}")
        raise typer.Exit(1)

    config = load_config(
        **{
            "llm.model": model,
            "translation.target_language": to,
            "translation.tone": tone.value if tone is not None else None,
            "translation.chunk_size": chunk_size,
        }
    )
    settings = config.translation

    console.print(f"[bold]Loading subtitles:[/bold] {subtitle_file}")
    segments = load_subtitles(subtitle_file)
    console.print(f"[bold]Segments:[/bold] {len(segments)}")
    if not segments:
        console.print("[yellow]No valid subtitle blocks found, nothing to translate.[/yellow]")
        raise typer.Exit(1)

    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(),
        TextColumn("{task.completed}%"),
        console=console,
    ) as progress:
        task = progress.add_task(f"Translating into {settings.target_language}", total=100)
        try:
            translated = translate_subtitles(
                segments,
                settings.target_language,
                config.llm,
                tone=settings.tone,
                chunk_size=settings.chunk_size,
                on_progress=lambda pct: progress.update(task, completed=pct),
                extract_config=config.extract,
            )
        except TranslationError as e:
            progress.stop()
            console.print(f"[red]Translation failed:[/red] {e}")
            console.print(
                "[dim]No partial output was written. Retry, or lower --chunk-size "
                f"(currently {settings.chunk_size}).[/dim]"
            )
            raise typer.Exit(1)

    if output is not None:
        sub_path = output
    else:
        slug = settings.target_language.lower().replace(" ", "_")
        sub_path = subtitle_file.with_suffix(f".{slug}.{fmt}")

    save_subtitles(translated, sub_path, fmt=fmt)
    console.print(f"[green]Saved:[/green] {sub_path}")

    if archive:
        from tpro.archive.store import open_archive

        entry = open_archive(config).save(
            ArchiveType.TRANSLATION,
            subtitle_file.stem,
            [seg.to_dict() for seg in translated],
            settings.target_language,
            "subtitles",
            metadata={"tone": settings.tone.value, "sourceFile": str(subtitle_file)},
        )
        console.print(f"[green]Archived:[/green] {entry.file_id} (v{entry.version})")
