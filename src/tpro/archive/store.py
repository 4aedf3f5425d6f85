"""Versioned archive of work products with human-readable file ids.

Entries are kept most-recent-first under one key, per-prefix id counters
under another. Saving the same (title, type) again creates a new entry with
the next version; nothing is updated in place.
"""

from __future__ import annotations

import json
import threading
import time
import uuid
from typing import Any

from rich.markup import escape

from tpro.archive.backends import FileBackend, KeyValueBackend
from tpro.core.config import TPROConfig
from tpro.core.models import TYPE_PREFIX, ArchiveEntry, ArchiveType
from tpro.utils.console import console

STORAGE_KEY = "transcript_pro_global_archive"
COUNTER_KEY = "transcript_pro_archive_counters"
MAX_ENTRIES = 500


def _empty_counters() -> dict[str, int]:
    return {prefix: 0 for prefix in TYPE_PREFIX.values()}


def format_file_id(prefix: str, counter: int) -> str:
    """e.g. ("ST", 7) -> "ST-007"; widths past 999 simply grow."""
    return f"{prefix}-{counter:03d}"


def _highest_counter(entries: list[ArchiveEntry], prefix: str) -> int:
    highest = 0
    for entry in entries:
        head, _, number = entry.file_id.partition("-")
        if head == prefix and number.isascii() and number.isdigit():
            highest = max(highest, int(number))
    return highest


class ArchiveStore:
    """Typed, versioned, append-mostly archive over a key-value backend.

    Args:
        backend: Persistence layer (MemoryBackend, FileBackend, ...).
        max_entries: Retention bound; the oldest entries are evicted first.
    """

    def __init__(self, backend: KeyValueBackend, max_entries: int = MAX_ENTRIES) -> None:
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self.backend = backend
        self.max_entries = max_entries
        self._lock = threading.RLock()

    def _read_entries(self) -> list[ArchiveEntry]:
        try:
            raw = self.backend.get(STORAGE_KEY)
            data = json.loads(raw) if raw else []
        except (OSError, ValueError, RecursionError) as e:
            console.print(
                f"[red]Failed to read archive data, treating as empty:[/red] {escape(str(e))}"
            )
            return []
        if not isinstance(data, list):
            console.print("[red]Archive data is not a list, treating as empty.[/red]")
            return []

        entries = []
        for item in data:
            try:
                entries.append(ArchiveEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                console.print(
                    f"[yellow]Skipping unreadable archive entry:[/yellow] {escape(str(e))}"
                )
        return entries

    def _write_entries(self, entries: list[ArchiveEntry]) -> None:
        payload = [entry.to_dict() for entry in entries]
        self.backend.set(STORAGE_KEY, json.dumps(payload, ensure_ascii=False))

    def _read_counters(self) -> dict[str, int]:
        try:
            raw = self.backend.get(COUNTER_KEY)
            data = json.loads(raw) if raw else None
        except (OSError, ValueError, RecursionError) as e:
            console.print(
                f"[red]Failed to read archive counters, resetting:[/red] {escape(str(e))}"
            )
            return _empty_counters()
        if not isinstance(data, dict):
            return _empty_counters()

        counters = _empty_counters()
        for prefix, value in data.items():
            if isinstance(value, int) and not isinstance(value, bool):
                counters[prefix] = value
        return counters

    def _write_counters(self, counters: dict[str, int]) -> None:
        self.backend.set(COUNTER_KEY, json.dumps(counters))

    def _next_file_id(self, type: ArchiveType, entries: list[ArchiveEntry]) -> str:
        counters = self._read_counters()
        prefix = type.prefix
        # Never fall behind a stored id, even if the counters were lost
        current = max(counters.get(prefix, 0), _highest_counter(entries, prefix))
        counters[prefix] = current + 1
        self._write_counters(counters)
        return format_file_id(prefix, counters[prefix])

    def save(
        self,
        type: ArchiveType,
        title: str,
        content: Any,
        language: str,
        tool_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> ArchiveEntry:
        """Store a new entry and return it.

        The version is one more than the number of stored entries with the
        same title and type.
        """
        type = ArchiveType(type)
        with self._lock:
            entries = self._read_entries()
            version = sum(1 for e in entries if e.title == title and e.type == type) + 1

            entry = ArchiveEntry(
                id=uuid.uuid4().hex,
                file_id=self._next_file_id(type, entries),
                type=type,
                title=title,
                content=content,
                language=language,
                tool_id=tool_id,
                timestamp=int(time.time() * 1000),
                version=version,
                metadata=metadata,
            )
            entries.insert(0, entry)
            self._write_entries(entries[: self.max_entries])
        return entry

    def list_all(self) -> list[ArchiveEntry]:
        """All entries, most recent first. Never raises on corrupt storage."""
        with self._lock:
            return self._read_entries()

    def get(self, entry_id: str) -> ArchiveEntry | None:
        return next((e for e in self.list_all() if e.id == entry_id), None)

    def get_by_file_id(self, file_id: str) -> ArchiveEntry | None:
        """Look up an entry by its human-readable id (e.g. "ST-003")."""
        return next((e for e in self.list_all() if e.file_id == file_id), None)

    def history(self, title: str, type: ArchiveType) -> list[ArchiveEntry]:
        """Every stored version of (title, type), oldest first."""
        type = ArchiveType(type)
        matches = [e for e in self.list_all() if e.title == title and e.type == type]
        return sorted(matches, key=lambda e: e.version)

    def delete(self, entry_id: str) -> bool:
        """Remove one entry by id. Returns True if something was removed."""
        with self._lock:
            entries = self._read_entries()
            remaining = [e for e in entries if e.id != entry_id]
            if len(remaining) == len(entries):
                return False
            self._write_entries(remaining)
            return True

    def clear(self) -> None:
        """Remove every entry and reset all id counters."""
        with self._lock:
            self._write_entries([])
            self._write_counters(_empty_counters())


def open_archive(config: TPROConfig) -> ArchiveStore:
    """File-backed archive at the configured location."""
    return ArchiveStore(FileBackend(config.archive_dir), max_entries=config.archive.max_entries)
