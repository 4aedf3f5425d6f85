"""Shared test fixtures."""

from pathlib import Path

import pytest

from tpro.archive.backends import MemoryBackend
from tpro.archive.store import ArchiveStore

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


@pytest.fixture
def sample_srt(fixtures_dir: Path) -> Path:
    return fixtures_dir / "sample.srt"


@pytest.fixture
def sample_vtt(fixtures_dir: Path) -> Path:
    return fixtures_dir / "sample.vtt"


@pytest.fixture
def memory_store() -> ArchiveStore:
    return ArchiveStore(MemoryBackend())
