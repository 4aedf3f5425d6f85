"""Chunked subtitle translation with progress reporting.

Segments are translated in fixed-size chunks, one chunk at a time. Any
chunk failure aborts the whole run: callers either get a full, same-length
translation or a TranslationError, never a partial result.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from tpro.core.config import ExtractConfig, LLMConfig
from tpro.core.models import Tone, TranscriptionSegment
from tpro.llm.client import acomplete
from tpro.llm.extract import extract_json
from tpro.llm.prompts import build_translation_messages
from tpro.utils.console import console

CHUNK_SIZE = 12

ChunkTranslator = Callable[
    [list[TranscriptionSegment], str, Tone],
    Awaitable[list[TranscriptionSegment]],
]
ProgressCallback = Callable[[int], None]


class TranslationError(RuntimeError):
    """A translation chunk failed or returned the wrong number of segments."""

    def __init__(self, message: str, chunk_index: int, total_chunks: int) -> None:
        super().__init__(message)
        self.chunk_index = chunk_index
        self.total_chunks = total_chunks


class TranslationCancelled(Exception):
    """Cancellation was requested before all chunks were translated."""

    def __init__(self, completed_chunks: int, total_chunks: int) -> None:
        super().__init__(
            f"Translation cancelled after {completed_chunks}/{total_chunks} chunks"
        )
        self.completed_chunks = completed_chunks
        self.total_chunks = total_chunks


def chunk_segments(
    segments: list[TranscriptionSegment], chunk_size: int = CHUNK_SIZE
) -> list[list[TranscriptionSegment]]:
    """Split segments into contiguous chunks; the last may be shorter."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be >= 1, got {chunk_size}")
    return [segments[i : i + chunk_size] for i in range(0, len(segments), chunk_size)]


def progress_percent(completed: int, total: int) -> int:
    """Whole-number progress, rounded up so 100 is only reported when done.

    Rounding up gives 34, 67, 100 for three chunks. Nearest rounding would
    report 33 for the first of three chunks, and 14 rather than 15 for 1/7.
    """
    return -(-100 * completed // total)


def _merge_chunk(
    source: list[TranscriptionSegment], translated: list[TranscriptionSegment]
) -> list[TranscriptionSegment]:
    """Take text/speaker from the translation, timing always from the source."""
    merged = []
    for src, out in zip(source, translated, strict=True):
        text = out.text.strip() if out.text else ""
        merged.append(
            TranscriptionSegment(
                start_time=src.start_time,
                end_time=src.end_time,
                text=text or src.text,
                speaker=out.speaker or src.speaker,
            )
        )
    return merged


async def translate_segments(
    segments: list[TranscriptionSegment],
    target_language: str,
    translate_chunk: ChunkTranslator,
    tone: Tone = Tone.NEUTRAL,
    chunk_size: int = CHUNK_SIZE,
    on_progress: ProgressCallback | None = None,
    cancel_event: asyncio.Event | None = None,
) -> list[TranscriptionSegment]:
    """Translate segments chunk by chunk, preserving order and timing.

    Chunks run strictly sequentially. After each chunk, on_progress receives
    the whole-number percentage of chunks completed.

    Args:
        segments: Segments in playback order.
        target_language: Target language label (e.g. "Burmese").
        translate_chunk: Async operation translating one chunk.
        tone: Tone/style profile.
        chunk_size: Maximum segments per translate_chunk call.
        on_progress: Optional callback receiving progress (0-100).
        cancel_event: Checked before each chunk starts; an in-flight chunk
            always runs to completion.

    Returns:
        New segments, same length as the input, with translated text.

    Raises:
        TranslationError: A chunk call raised or returned a result of the
            wrong length. No partial result is returned.
        TranslationCancelled: cancel_event was set between chunks.
    """
    chunks = chunk_segments(segments, chunk_size)
    total_chunks = len(chunks)
    translated: list[TranscriptionSegment] = []

    for index, chunk in enumerate(chunks):
        if cancel_event is not None and cancel_event.is_set():
            raise TranslationCancelled(index, total_chunks)

        try:
            result = await translate_chunk(chunk, target_language, tone)
        except Exception as e:
            raise TranslationError(
                f"Translation failed on chunk {index + 1}/{total_chunks}: {e}",
                chunk_index=index,
                total_chunks=total_chunks,
            ) from e

        if result is None or len(result) != len(chunk):
            got = "no result" if result is None else f"{len(result)} segments"
            raise TranslationError(
                f"Translation chunk {index + 1}/{total_chunks} returned {got}, "
                f"expected {len(chunk)} segments",
                chunk_index=index,
                total_chunks=total_chunks,
            )

        translated.extend(_merge_chunk(chunk, result))
        if on_progress:
            on_progress(progress_percent(index + 1, total_chunks))

    console.print(f"[green]Translation complete:[/green] {len(translated)} segments")
    return translated


class LLMChunkTranslator:
    """Translate one chunk of segments with a chat model via LiteLLM.

    The model is asked for a JSON array mirroring the input; its reply is
    recovered with extract_json so prose or code fences around it are fine.
    """

    def __init__(self, config: LLMConfig, extract_config: ExtractConfig | None = None) -> None:
        self.config = config
        self.extract_config = extract_config or ExtractConfig()

    async def __call__(
        self,
        segments: list[TranscriptionSegment],
        target_language: str,
        tone: Tone,
    ) -> list[TranscriptionSegment]:
        messages = build_translation_messages(segments, target_language, tone)
        response = await acomplete(messages, self.config)

        value = extract_json(
            response,
            balanced=self.extract_config.balanced_brackets,
            snippet_length=self.extract_config.snippet_length,
        )
        if isinstance(value, dict):
            # Some models wrap the array: {"segments": [...]}
            value = value.get("segments")
        if not isinstance(value, list):
            raise ValueError("Model response is not a JSON array of segments")
        if len(value) != len(segments):
            raise ValueError(f"Model returned {len(value)} segments, expected {len(segments)}")

        out = []
        for src, item in zip(segments, value):
            if not isinstance(item, dict) or not isinstance(item.get("text"), str):
                raise ValueError("Translated segment is missing a 'text' string")
            speaker = item.get("speaker")
            out.append(
                TranscriptionSegment(
                    start_time=src.start_time,
                    end_time=src.end_time,
                    text=item["text"],
                    speaker=speaker if isinstance(speaker, str) and speaker.strip() else None,
                )
            )
        return out


def translate_subtitles(
    segments: list[TranscriptionSegment],
    target_language: str,
    llm_config: LLMConfig,
    tone: Tone = Tone.NEUTRAL,
    chunk_size: int = CHUNK_SIZE,
    on_progress: ProgressCallback | None = None,
    extract_config: ExtractConfig | None = None,
) -> list[TranscriptionSegment]:
    """Synchronous entry point: translate segments with the configured LLM."""
    return asyncio.run(
        translate_segments(
            segments,
            target_language,
            LLMChunkTranslator(llm_config, extract_config),
            tone=tone,
            chunk_size=chunk_size,
            on_progress=on_progress,
        )
    )
