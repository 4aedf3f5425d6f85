"""Tests for subtitle file loading and saving."""

from pathlib import Path

from tpro.core.models import TranscriptionSegment
from tpro.subtitles.converter import load_subtitles, save_subtitles


def _segments() -> list[TranscriptionSegment]:
    return [
        TranscriptionSegment("00:00:01.000", "00:00:04.000", "Bonjour", speaker="Alice"),
        TranscriptionSegment("00:00:04.500", "00:00:08.000", "Monde"),
    ]


def test_save_and_load_srt_roundtrip(tmp_path: Path):
    path = save_subtitles(_segments(), tmp_path / "out.srt", fmt="srt")
    assert path.exists()
    assert load_subtitles(path) == _segments()


def test_save_and_load_vtt_roundtrip(tmp_path: Path):
    """VTT roundtrip keeps timing, text and bracketed speakers."""
    path = save_subtitles(_segments(), tmp_path / "out.vtt", fmt="vtt")
    assert path.read_text(encoding="utf-8").startswith("WEBVTT")

    loaded = load_subtitles(path)
    assert len(loaded) == 2
    assert loaded[0].start_time == "00:00:01.000"
    assert loaded[0].end_time == "00:00:04.000"
    assert loaded[0].text == "Bonjour"
    assert loaded[0].speaker == "Alice"
    assert loaded[1].text == "Monde"


def test_load_sample_vtt(sample_vtt: Path):
    segments = load_subtitles(sample_vtt)
    assert [seg.text for seg in segments] == ["Bonjour tout le monde", "Comment allez-vous ?"]
    assert segments[1].end_time == "00:00:06.250"


def test_save_txt_skips_empty(tmp_path: Path):
    segments = _segments() + [TranscriptionSegment("00:00:09.000", "00:00:10.000", " ")]
    path = save_subtitles(segments, tmp_path / "out.txt", fmt="txt")
    assert path.read_text(encoding="utf-8") == "Bonjour\nMonde"


def test_save_creates_parent_dirs(tmp_path: Path):
    path = save_subtitles(_segments(), tmp_path / "a" / "b" / "out.srt")
    assert path.is_file()
