"""Tests for translation prompt construction."""

import json

from tpro.core.models import Tone, TranscriptionSegment
from tpro.llm.prompts import (
    TONE_INSTRUCTIONS,
    build_translation_messages,
    format_segments_json,
    system_prompt,
)


def _segments():
    return [
        TranscriptionSegment("00:00:01.000", "00:00:02.000", "Bonjour", speaker="Ann"),
        TranscriptionSegment("00:00:02.000", "00:00:03.000", "Ça va ?"),
    ]


def test_every_tone_has_instruction():
    assert set(TONE_INSTRUCTIONS) == set(Tone)


def test_system_prompt_varies_by_tone():
    assert system_prompt(Tone.NEUTRAL) != system_prompt(Tone.MOVIE_RECAP)
    for tone in Tone:
        assert "EXACT same number" in system_prompt(tone)


def test_segments_json_keeps_unicode_and_timing():
    data = json.loads(format_segments_json(_segments()))
    assert data[0] == {
        "startTime": "00:00:01.000",
        "endTime": "00:00:02.000",
        "text": "Bonjour",
        "speaker": "Ann",
    }
    assert "Ça va ?" in format_segments_json(_segments())


def test_build_messages():
    messages = build_translation_messages(_segments(), "English", Tone.MOVIE_RECAP)
    assert [m["role"] for m in messages] == ["system", "user"]
    assert "movie recap" in messages[0]["content"]
    assert "2 subtitle segments into English" in messages[1]["content"]
    assert "Tone profile: MovieRecap" in messages[1]["content"]
