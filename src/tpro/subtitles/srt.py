"""SRT encode/decode for TranscriptionSegment sequences.

Canonical timestamps inside the program use a period before the
milliseconds (00:00:01.000); SRT on the wire uses a comma (00:00:01,000).
"""

from __future__ import annotations

import re

from tpro.core.models import TranscriptionSegment

_BLOCK_SPLIT_RE = re.compile(r"\n\s*\n")
_TIME_LINE_RE = re.compile(r"(\d{2}:\d{2}:\d{2}[,. ]\d{3})\s*-->\s*(\d{2}:\d{2}:\d{2}[,. ]\d{3})")
_TIMESTAMP_RE = re.compile(r"^(\d{2,}):(\d{2}):(\d{2})[,. ](\d{3})$")

# Speaker labels, tried in order: "[Name]: text" then "Name: text"
_BRACKET_SPEAKER_RE = re.compile(r"^\[([^\]]+)\]:\s*(.*)$")
_BARE_SPEAKER_RE = re.compile(r"^([^:]+):\s*(.*)$")


def normalize_timestamp(timestamp: str) -> str:
    """Convert "HH:MM:SS,mmm" (or space-separated) to "HH:MM:SS.mmm"."""
    return timestamp[:-4] + "." + timestamp[-3:]


def to_wire_timestamp(timestamp: str) -> str:
    """Convert a canonical timestamp to SRT's comma form."""
    return timestamp.replace(".", ",", 1)


def timestamp_to_ms(timestamp: str) -> int:
    """Parse a canonical or wire timestamp into milliseconds.

    Raises:
        ValueError: If the string is not a timestamp.
    """
    match = _TIMESTAMP_RE.match(timestamp.strip())
    if not match:
        raise ValueError(f"Invalid timestamp: {timestamp!r}")
    h, m, s, ms = (int(part) for part in match.groups())
    return ((h * 60 + m) * 60 + s) * 1000 + ms


def ms_to_timestamp(ms: int) -> str:
    """Format milliseconds as a canonical "HH:MM:SS.mmm" timestamp."""
    ms = max(0, int(ms))
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms = divmod(rem, 1000)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"


def split_speaker(raw_text: str) -> tuple[str | None, str]:
    """Split a leading speaker label from subtitle text.

    Returns:
        (speaker, text), with speaker None when no label is present.
    """
    match = _BRACKET_SPEAKER_RE.match(raw_text) or _BARE_SPEAKER_RE.match(raw_text)
    if match:
        return match.group(1).strip(), match.group(2).strip()
    return None, raw_text


def _parse_block(block: str) -> TranscriptionSegment | None:
    lines = [line.strip() for line in block.split("\n")]
    lines = [line for line in lines if line]
    if len(lines) < 3:
        return None

    time_idx = next((i for i, line in enumerate(lines) if "-->" in line), None)
    if time_idx is None:
        return None
    match = _TIME_LINE_RE.search(lines[time_idx])
    if not match:
        return None

    start = normalize_timestamp(match.group(1))
    end = normalize_timestamp(match.group(2))
    if start > end:
        return None

    raw_text = " ".join(lines[time_idx + 1 :]).strip()
    speaker, text = split_speaker(raw_text)
    if not text:
        return None
    return TranscriptionSegment(start_time=start, end_time=end, text=text, speaker=speaker)


def parse_srt(data: str) -> list[TranscriptionSegment]:
    """Decode SRT text into segments, in file order.

    Malformed blocks (too few lines, no time line, bad timestamps, no text)
    are skipped so partial files still yield their valid segments.
    """
    if not data:
        return []
    text = data.replace("\r\n", "\n").replace("\r", "\n").strip()
    segments = []
    for block in _BLOCK_SPLIT_RE.split(text):
        segment = _parse_block(block)
        if segment is not None:
            segments.append(segment)
    return segments


def generate_srt(segments: list[TranscriptionSegment], include_speakers: bool = False) -> str:
    """Encode segments as SRT, numbered from 1 in the given order."""
    blocks = []
    for index, seg in enumerate(segments, 1):
        prefix = f"[{seg.speaker}]: " if include_speakers and seg.speaker else ""
        blocks.append(
            f"{index}\n"
            f"{to_wire_timestamp(seg.start_time)} --> {to_wire_timestamp(seg.end_time)}\n"
            f"{prefix}{seg.text}\n"
        )
    return "\n".join(blocks)
