"""Prompt templates for segment translation."""

from __future__ import annotations

import json

from tpro.core.models import Tone, TranscriptionSegment

TRANSLATOR_SYSTEM = """\
You are a professional subtitle translator. Provide accurate, context-aware \
translations that read naturally on screen.\
"""

MOVIE_RECAP_SYSTEM = """\
You are a movie recap narrator. Translate with an engaging, rhythmic, \
story-focused voice.\
"""

MYANMAR_DHAMMA_SYSTEM = """\
You are an expert in Burmese Dhamma literature. Translate with a calm, \
meditative and respectful tone, avoiding literal artifacts.\
"""

TONE_INSTRUCTIONS: dict[Tone, str] = {
    Tone.NEUTRAL: TRANSLATOR_SYSTEM,
    Tone.MOVIE_RECAP: MOVIE_RECAP_SYSTEM,
    Tone.MYANMAR_DHAMMA: MYANMAR_DHAMMA_SYSTEM,
}

SEGMENT_RULES = """

Rules:
- Translate only the "text" field (and "speaker" if it is a descriptive label)
- Copy "startTime" and "endTime" exactly as given, never change them
- Do NOT merge, split, drop or reorder segments: return the EXACT same number of items
- Return ONLY a JSON array of objects with keys startTime, endTime, text and optional speaker
"""

TRANSLATION_USER = """\
Translate these {count} subtitle segments into {target_lang}.
Tone profile: {tone}

Segments:
{segments_json}
"""


def system_prompt(tone: Tone) -> str:
    """System instruction for a tone profile."""
    return TONE_INSTRUCTIONS[tone] + SEGMENT_RULES


def format_segments_json(segments: list[TranscriptionSegment]) -> str:
    """Serialize segments as the JSON array the model is asked to mirror."""
    return json.dumps([seg.to_dict() for seg in segments], ensure_ascii=False, indent=2)


def build_translation_messages(
    segments: list[TranscriptionSegment],
    target_lang: str,
    tone: Tone,
) -> list[dict[str, str]]:
    """Chat messages (OpenAI format) for one translation chunk."""
    return [
        {"role": "system", "content": system_prompt(tone)},
        {
            "role": "user",
            "content": TRANSLATION_USER.format(
                count=len(segments),
                target_lang=target_lang,
                tone=tone.value,
                segments_json=format_segments_json(segments),
            ),
        },
    ]
