"""Tests for core data models."""

import pytest

from tpro.core.models import (
    ArchiveEntry,
    ArchiveType,
    TranscriptionResult,
    TranscriptionSegment,
)


def test_segment_defaults():
    seg = TranscriptionSegment(start_time="00:00:00.000", end_time="00:00:01.000", text="Hi")
    assert seg.speaker is None


def test_segment_dict_shape():
    seg = TranscriptionSegment("00:00:00.000", "00:00:01.000", "Hi", speaker="Ann")
    assert seg.to_dict() == {
        "startTime": "00:00:00.000",
        "endTime": "00:00:01.000",
        "text": "Hi",
        "speaker": "Ann",
    }
    assert TranscriptionSegment.from_dict(seg.to_dict()) == seg


def test_segment_without_speaker_omits_key():
    assert "speaker" not in TranscriptionSegment("a", "b", "c").to_dict()


@pytest.mark.parametrize(
    "data",
    [
        {"endTime": "00:00:01.000", "text": "x"},
        {"startTime": 1, "endTime": "00:00:01.000", "text": "x"},
        ["not", "an", "object"],
    ],
    ids=["missing-start", "non-string-start", "list"],
)
def test_segment_from_dict_rejects_bad_shape(data):
    with pytest.raises(ValueError):
        TranscriptionSegment.from_dict(data)


def test_result_from_model_output_object():
    value = {
        "fullText": "Hello there",
        "language": "English",
        "segments": [
            {"startTime": "00:00:01.000", "endTime": "00:00:02.000", "text": "Hello there"}
        ],
        "durationSeconds": 2,
    }
    result = TranscriptionResult.from_model_output(value)
    assert result.full_text == "Hello there"
    assert result.language == "English"
    assert result.duration_seconds == 2.0
    assert result.to_dict()["segments"][0]["text"] == "Hello there"


def test_result_from_bare_segment_list():
    value = [
        {"startTime": "00:00:01.000", "endTime": "00:00:02.000", "text": "One"},
        {"startTime": "00:00:02.000", "endTime": "00:00:03.000", "text": "Two"},
    ]
    result = TranscriptionResult.from_model_output(value)
    assert result.full_text == "One Two"
    assert result.language == "unknown"
    assert len(result.segments) == 2


def test_result_from_model_output_rejects_scalar():
    with pytest.raises(ValueError):
        TranscriptionResult.from_model_output("just text")


def test_archive_type_prefix():
    assert ArchiveType.STORY.prefix == "ST"
    assert ArchiveType.RECAP.prefix == "VR"
    assert ArchiveType("Translation").prefix == "TL"


def test_archive_entry_roundtrip():
    entry = ArchiveEntry(
        id="abc",
        file_id="TL-001",
        type=ArchiveType.TRANSLATION,
        title="Episode 1",
        content=[{"text": "hi"}],
        language="Burmese",
        tool_id="subtitles",
        timestamp=1_700_000_000_000,
        version=2,
        metadata={"tone": "Neutral"},
    )
    data = entry.to_dict()
    assert data["fileId"] == "TL-001"
    assert data["type"] == "Translation"
    assert ArchiveEntry.from_dict(data) == entry
