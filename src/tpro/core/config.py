"""Configuration system for Transcript Pro.

Layered config loading (lowest to highest priority):
1. config/default.toml (shipped with package)
2. ~/.config/tpro/config.toml (user-level)
3. ./tpro.toml (project-level)
4. Environment variables (TPRO_ARCHIVE__MAX_ENTRIES, etc.)
5. CLI flags
"""

from __future__ import annotations

import tomllib
from pathlib import Path

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

from tpro.core.models import Tone

_PACKAGE_ROOT = Path(__file__).resolve().parent.parent.parent.parent
_DEFAULT_CONFIG = _PACKAGE_ROOT / "config" / "default.toml"
_USER_CONFIG = Path.home() / ".config" / "tpro" / "config.toml"
_PROJECT_CONFIG = Path("tpro.toml")


class LLMConfig(BaseModel):
    model: str = "gemini/gemini-2.5-flash"  # LiteLLM model string
    api_base: str | None = None
    temperature: float = 0.3
    max_tokens: int = 8192


class TranslationConfig(BaseModel):
    chunk_size: int = Field(default=12, ge=1)
    tone: Tone = Tone.NEUTRAL
    target_language: str = "English"


class ExtractConfig(BaseModel):
    balanced_brackets: bool = False
    snippet_length: int = Field(default=100, ge=0)


class ArchiveConfig(BaseModel):
    max_entries: int = Field(default=500, ge=1)
    path: Path | None = None  # Defaults to <workspace_dir>/.archive


class TPROConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TPRO_",
        env_nested_delimiter="__",
    )

    llm: LLMConfig = LLMConfig()
    translation: TranslationConfig = TranslationConfig()
    extract: ExtractConfig = ExtractConfig()
    archive: ArchiveConfig = ArchiveConfig()
    workspace_dir: Path = Path("./tpro_workspace")

    @property
    def archive_dir(self) -> Path:
        """Directory holding the archive's key files."""
        if self.archive.path is not None:
            return self.archive.path
        return self.workspace_dir / ".archive"


def _load_toml(path: Path) -> dict:
    """Load a TOML file if it exists, return empty dict otherwise."""
    if path.is_file():
        with open(path, "rb") as f:
            return tomllib.load(f)
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_config(**cli_overrides: object) -> TPROConfig:
    """Load configuration from all layers and merge.

    Args:
        **cli_overrides: Direct overrides from CLI flags. Keys can be
            dot-separated (e.g. translation.chunk_size=6).
    """
    config_data: dict = {}
    for path in (_DEFAULT_CONFIG, _USER_CONFIG, _PROJECT_CONFIG):
        layer = _load_toml(path)
        config_data = _deep_merge(config_data, layer)

    # Flatten 'general' section into top-level
    if "general" in config_data:
        general = config_data.pop("general")
        config_data = _deep_merge(config_data, general)

    # Env vars (TPRO_SECTION__KEY) outrank every TOML layer
    config_data = _deep_merge(config_data, EnvSettingsSource(TPROConfig)())

    for key, value in cli_overrides.items():
        if value is None:
            continue
        parts = key.split(".")
        target = config_data
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        target[parts[-1]] = value

    return TPROConfig(**config_data)
