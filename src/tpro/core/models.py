"""Shared data models for Transcript Pro.

Records serialize to the camelCase JSON shape used by model output and the
archive (startTime, fileId, ...), while Python code uses snake_case fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Tone(str, Enum):
    """Tone/style profile applied to translations."""

    NEUTRAL = "Neutral"
    MOVIE_RECAP = "MovieRecap"
    MYANMAR_DHAMMA = "MyanmarDhamma"


class ArchiveType(str, Enum):
    """Category of an archived work product."""

    STORY = "Story"
    RECAP = "Recap"
    TRANSCRIPT = "Transcript"
    AUDIOBOOK = "Audiobook"
    TRANSLATION = "Translation"
    VOICE = "Voice"
    THUMBNAIL = "Thumbnail"
    CONTENT = "Content"
    VIDEO = "Video"

    @property
    def prefix(self) -> str:
        """Two-letter code used in human-readable file ids."""
        return TYPE_PREFIX[self]


TYPE_PREFIX: dict[ArchiveType, str] = {
    ArchiveType.STORY: "ST",
    ArchiveType.RECAP: "VR",
    ArchiveType.TRANSCRIPT: "TR",
    ArchiveType.AUDIOBOOK: "AR",
    ArchiveType.TRANSLATION: "TL",
    ArchiveType.VOICE: "VO",
    ArchiveType.THUMBNAIL: "TN",
    ArchiveType.CONTENT: "CT",
    ArchiveType.VIDEO: "VD",
}


@dataclass
class TranscriptionSegment:
    """One timed span of speech.

    Times are canonical "HH:MM:SS.mmm" strings.
    """

    start_time: str
    end_time: str
    text: str
    speaker: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "startTime": self.start_time,
            "endTime": self.end_time,
            "text": self.text,
        }
        if self.speaker:
            data["speaker"] = self.speaker
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TranscriptionSegment:
        """Build a segment from its JSON shape.

        Raises:
            ValueError: If a required field is missing or not a string.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Segment must be an object, got {type(data).__name__}")
        for key in ("startTime", "endTime", "text"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Segment field '{key}' missing or not a string")
        speaker = data.get("speaker")
        return cls(
            start_time=data["startTime"],
            end_time=data["endTime"],
            text=data["text"],
            speaker=speaker if isinstance(speaker, str) and speaker.strip() else None,
        )


@dataclass
class TranscriptionResult:
    """Output from a transcription model."""

    full_text: str
    language: str
    segments: list[TranscriptionSegment] = field(default_factory=list)
    duration_seconds: float | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "fullText": self.full_text,
            "language": self.language,
            "segments": [seg.to_dict() for seg in self.segments],
        }
        if self.duration_seconds is not None:
            data["durationSeconds"] = self.duration_seconds
        return data

    @classmethod
    def from_model_output(cls, value: Any) -> TranscriptionResult:
        """Validate a value recovered from model output.

        Accepts either a full result object or a bare list of segments.

        Raises:
            ValueError: If the value does not have the expected shape.
        """
        if isinstance(value, list):
            value = {"segments": value}
        if not isinstance(value, dict):
            raise ValueError("Transcription must be a JSON object or array")

        raw_segments = value.get("segments", [])
        if not isinstance(raw_segments, list):
            raise ValueError("'segments' must be an array")
        segments = [TranscriptionSegment.from_dict(item) for item in raw_segments]

        full_text = value.get("fullText")
        if not isinstance(full_text, str):
            full_text = " ".join(seg.text for seg in segments)

        duration = value.get("durationSeconds")
        return cls(
            full_text=full_text,
            language=str(value.get("language") or "unknown"),
            segments=segments,
            duration_seconds=float(duration) if isinstance(duration, (int, float)) else None,
        )


@dataclass
class ArchiveEntry:
    """A versioned, typed unit of persisted work product."""

    id: str
    file_id: str
    type: ArchiveType
    title: str
    content: Any
    language: str
    tool_id: str
    timestamp: int  # milliseconds since epoch
    version: int
    metadata: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fileId": self.file_id,
            "type": self.type.value,
            "title": self.title,
            "content": self.content,
            "language": self.language,
            "toolId": self.tool_id,
            "timestamp": self.timestamp,
            "version": self.version,
            "metadata": self.metadata,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ArchiveEntry:
        """Rebuild an entry from storage.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If the type is not a known ArchiveType.
        """
        return cls(
            id=data["id"],
            file_id=data["fileId"],
            type=ArchiveType(data["type"]),
            title=data["title"],
            content=data.get("content"),
            language=data.get("language", ""),
            tool_id=data.get("toolId", ""),
            timestamp=int(data["timestamp"]),
            version=int(data["version"]),
            metadata=data.get("metadata"),
        )
