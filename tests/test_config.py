"""Tests for configuration system."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from tpro.core.config import (
    ArchiveConfig,
    TranslationConfig,
    TPROConfig,
    _deep_merge,
    load_config,
)
from tpro.core.models import Tone


def test_default_config_loads():
    """Config loads without errors and has all required sections."""
    config = load_config()
    assert config.llm.model  # non-empty
    assert config.translation.chunk_size == 12
    assert config.translation.tone is Tone.NEUTRAL
    assert config.archive.max_entries == 500
    assert config.extract.snippet_length == 100
    assert config.extract.balanced_brackets is False


def test_cli_overrides():
    """CLI overrides take precedence over defaults."""
    config = load_config(**{"translation.chunk_size": 6, "translation.tone": "MovieRecap"})
    assert config.translation.chunk_size == 6
    assert config.translation.tone is Tone.MOVIE_RECAP


def test_cli_override_none_ignored():
    """None values in CLI overrides are ignored, defaults preserved."""
    default = load_config()
    overridden = load_config(**{"llm.model": None})
    assert overridden.llm.model == default.llm.model


def test_project_toml_layer(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "tpro.toml").write_text("[archive]\nmax_entries = 42\n")
    assert load_config().archive.max_entries == 42


def test_env_vars_override_toml_layers(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "tpro.toml").write_text("[archive]\nmax_entries = 42\n")
    monkeypatch.setenv("TPRO_ARCHIVE__MAX_ENTRIES", "7")
    monkeypatch.setenv("TPRO_TRANSLATION__CHUNK_SIZE", "3")
    config = load_config()
    assert config.archive.max_entries == 7
    assert config.translation.chunk_size == 3
    assert config.translation.target_language == "English"


def test_cli_overrides_beat_env_vars(monkeypatch):
    monkeypatch.setenv("TPRO_TRANSLATION__CHUNK_SIZE", "3")
    monkeypatch.setenv("TPRO_LLM__MODEL", "openai/gpt-4o-mini")
    config = load_config(**{"translation.chunk_size": 6})
    assert config.translation.chunk_size == 6
    assert config.llm.model == "openai/gpt-4o-mini"


def test_archive_dir_defaults_under_workspace():
    config = TPROConfig(workspace_dir=Path("/tmp/ws"))
    assert config.archive_dir == Path("/tmp/ws/.archive")
    config = TPROConfig(archive=ArchiveConfig(path=Path("/data/archive")))
    assert config.archive_dir == Path("/data/archive")


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        TranslationConfig(chunk_size=0)
    with pytest.raises(ValidationError):
        TranslationConfig(tone="Shouty")
    with pytest.raises(ValidationError):
        ArchiveConfig(max_entries=0)


def test_deep_merge():
    base = {"a": {"b": 1, "c": 2}, "d": 3}
    override = {"a": {"b": 10, "e": 5}, "f": 6}
    result = _deep_merge(base, override)
    assert result == {"a": {"b": 10, "c": 2, "e": 5}, "d": 3, "f": 6}


def test_deep_merge_no_mutation():
    """Deep merge does not mutate the base dict."""
    base = {"a": {"b": 1}}
    override = {"a": {"c": 2}}
    _deep_merge(base, override)
    assert "c" not in base["a"]
