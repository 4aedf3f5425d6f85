"""Recover a single JSON value from free-form LLM output.

Model replies wrap JSON in prose, markdown fences, or bad escaping. Each
strategy below takes the trimmed text and returns a value or None; the
first strategy that yields a value wins. Nothing here raises on malformed
input.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable

from rich.markup import escape

from tpro.utils.console import console

SNIPPET_LENGTH = 100

_FENCE_RE = re.compile(r"```(?:json5?|javascript|js)?\s*(.*?)\s*```", re.DOTALL | re.IGNORECASE)
_ESCAPED_QUOTE_RE = re.compile(r"\\'")

_CLOSING = {"{": "}", "[": "]"}

Strategy = Callable[[str], Any]


def _loads(text: str, strict: bool = True) -> Any:
    """json.loads that returns None instead of raising."""
    try:
        return json.loads(text, strict=strict)
    except (ValueError, RecursionError):
        # ValueError also covers oversized integer literals
        return None


def from_fenced_block(text: str) -> Any:
    """Parse the first ```json fenced block, if any."""
    match = _FENCE_RE.search(text)
    if not match or not match.group(1):
        return None
    return _loads(match.group(1).strip())


def _opening_index(text: str) -> int:
    """Index of the first '{' or '[' that has a later matching closer, or -1."""
    first_brace = text.find("{")
    first_bracket = text.find("[")
    if first_brace != -1 and (first_bracket == -1 or first_brace < first_bracket):
        start = first_brace
    elif first_bracket != -1:
        start = first_bracket
    else:
        return -1
    if text.rfind(_CLOSING[text[start]]) <= start:
        return -1
    return start


def greedy_candidate(text: str) -> str | None:
    """Slice from the first opener to the last matching closer in the text.

    Deliberately not a balanced scan: trailing braces after the JSON are
    included, which tolerates commentary that never closes a second value.
    """
    start = _opening_index(text)
    if start == -1:
        return None
    end = text.rfind(_CLOSING[text[start]])
    return text[start : end + 1]


def balanced_candidate(text: str) -> str | None:
    """Slice the first balanced object/array, skipping brackets inside strings."""
    start = _opening_index(text)
    if start == -1:
        return None
    opener = text[start]
    closer = _CLOSING[opener]
    depth = 0
    in_str = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            continue
        if ch == '"':
            in_str = True
        elif ch == opener:
            depth += 1
        elif ch == closer:
            depth -= 1
            if depth == 0:
                return text[start : i + 1]
    return None


def sanitize(candidate: str) -> str:
    """Re-escape raw newlines inside string literals and unescape \\' quotes."""
    out = []
    in_str = False
    escaped = False
    for ch in _ESCAPED_QUOTE_RE.sub("'", candidate):
        if in_str:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_str = False
            elif ch == "\n":
                ch = "\\n"
            elif ch == "\r":
                ch = "\\r"
            elif ch == "\t":
                ch = "\\t"
        elif ch == '"':
            in_str = True
        out.append(ch)
    return "".join(out)


def _candidate_strategies(pick: Callable[[str], str | None]) -> list[Strategy]:
    """Strategies over the bracketed candidate: as-is, sanitized, then lenient."""

    def as_is(text: str) -> Any:
        candidate = pick(text)
        return _loads(candidate) if candidate else None

    def sanitized(text: str) -> Any:
        candidate = pick(text)
        return _loads(sanitize(candidate)) if candidate else None

    def lenient(text: str) -> Any:
        # Unsanitized again, allowing control characters inside strings
        candidate = pick(text)
        return _loads(candidate, strict=False) if candidate else None

    return [as_is, sanitized, lenient]


def whole_text(text: str) -> Any:
    return _loads(text)


def strategies(balanced: bool = False) -> list[Strategy]:
    """Ordered extraction cascade."""
    pick = balanced_candidate if balanced else greedy_candidate
    return [from_fenced_block, *_candidate_strategies(pick), whole_text]


def extract_json(
    text: str | None,
    balanced: bool = False,
    snippet_length: int = SNIPPET_LENGTH,
) -> Any:
    """Extract a JSON object or array from model output.

    Args:
        text: Raw model reply (may be None).
        balanced: Use a balanced-bracket scan instead of the greedy
            first-opener/last-closer slice.
        snippet_length: Max characters of the raw text logged on failure.

    Returns:
        The parsed value, or None if every strategy failed.
    """
    if not text:
        return None
    cleaned = text.strip().lstrip("\ufeff").strip()
    if not cleaned:
        return None

    for strategy in strategies(balanced):
        value = strategy(cleaned)
        if value is not None:
            return value

    snippet = text if len(text) <= snippet_length else text[:snippet_length] + "..."
    console.print(
        "[red]Failed to extract JSON from model response.[/red] "
        f"Raw text snippet: {escape(snippet)}"
    )
    return None
