"""Subtitle file loading and saving.

SRT goes through the in-house codec so speaker labels and canonical
timestamps survive exactly. Other formats (VTT, ASS/SSA) are read and
written with pysubs2, converting its millisecond times to canonical
timestamps.
"""

from __future__ import annotations

from pathlib import Path

import pysubs2

from tpro.core.models import TranscriptionSegment
from tpro.subtitles.srt import (
    generate_srt,
    ms_to_timestamp,
    parse_srt,
    split_speaker,
    timestamp_to_ms,
)


def load_subtitles(path: Path) -> list[TranscriptionSegment]:
    """Load a subtitle file into TranscriptionSegments.

    Supports SRT, VTT, ASS and SSA.
    """
    path = Path(path)

    if path.suffix.lower() == ".srt":
        return parse_srt(path.read_text(encoding="utf-8-sig"))

    subs = pysubs2.load(str(path), encoding="utf-8")
    segments = []
    for event in subs.events:
        if event.is_comment:
            continue
        text = " ".join(line.strip() for line in event.plaintext.splitlines() if line.strip())
        speaker, text = split_speaker(text)
        if not text:
            continue
        segments.append(
            TranscriptionSegment(
                start_time=ms_to_timestamp(event.start),
                end_time=ms_to_timestamp(event.end),
                text=text,
                speaker=speaker or event.name or None,
            )
        )
    return segments


def save_subtitles(
    segments: list[TranscriptionSegment],
    path: Path,
    fmt: str = "srt",
    include_speakers: bool = True,
) -> Path:
    """Save TranscriptionSegments to a subtitle file.

    Args:
        segments: Segments in playback order.
        path: Output file path.
        fmt: Format: "srt", "vtt", "ass", or "txt".
        include_speakers: Prefix text with "[Speaker]: " where known.

    Returns:
        The path the file was written to.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if fmt == "srt":
        path.write_text(generate_srt(segments, include_speakers), encoding="utf-8")
    elif fmt == "txt":
        text = "\n".join(seg.text for seg in segments if seg.text.strip())
        path.write_text(text, encoding="utf-8")
    else:
        subs = pysubs2.SSAFile()
        for seg in segments:
            prefix = f"[{seg.speaker}]: " if include_speakers and seg.speaker else ""
            subs.events.append(
                pysubs2.SSAEvent(
                    start=timestamp_to_ms(seg.start_time),
                    end=timestamp_to_ms(seg.end_time),
                    text=prefix + seg.text,
                )
            )
        subs.save(str(path), format_=fmt)

    return path
