"""Configuration models and helpers for liuyao settings."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, Field, field_validator

__all__ = [
    "CONFIG_FILENAME",
    "CURRENT_SETTINGS_SCHEMA_VERSION",
    "CalendarCfg",
    "CorpusCfg",
    "NarrativeCfg",
    "ScoringCfg",
    "Settings",
    "config_path",
    "default_settings",
    "ensure_default_config",
    "get_config_home",
    "load_settings",
    "save_settings",
]

CURRENT_SETTINGS_SCHEMA_VERSION = 1
CONFIG_FILENAME = "config.yaml"
DEFAULT_TIMEZONE = "Asia/Shanghai"

# -------------------- Settings Schema --------------------


class NarrativeCfg(BaseModel):
    """How readings are rendered."""

    language: Literal["zh", "en"] = "zh"
    include_line_report: bool = True

    @field_validator("language", mode="before")
    @classmethod
    def _normalise_language(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value


class ScoringCfg(BaseModel):
    """Optional scoring phases."""

    moving_line_support: bool = False


class CorpusCfg(BaseModel):
    """Location of the classical-commentary markdown file."""

    path: Optional[str] = None

    @field_validator("path", mode="before")
    @classmethod
    def _blank_path_is_none(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


class CalendarCfg(BaseModel):
    """Default time zone for casting moments."""

    timezone: str = DEFAULT_TIMEZONE

    @field_validator("timezone", mode="before")
    @classmethod
    def _check_timezone(cls, value: object) -> str:
        name = str(value or "").strip() or DEFAULT_TIMEZONE
        try:
            ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"unknown time zone {name!r}") from exc
        return name


class Settings(BaseModel):
    """Top-level settings model persisted on disk."""

    schema_version: int = Field(
        default=CURRENT_SETTINGS_SCHEMA_VERSION,
        ge=1,
        description="Version marker for persisted configuration payloads.",
    )
    narrative: NarrativeCfg = Field(default_factory=NarrativeCfg)
    scoring: ScoringCfg = Field(default_factory=ScoringCfg)
    corpus: CorpusCfg = Field(default_factory=CorpusCfg)
    calendar: CalendarCfg = Field(default_factory=CalendarCfg)


# -------------------- Persistence --------------------


def get_config_home() -> Path:
    """Return the directory where settings should be stored."""

    return Path(os.environ.get("LIUYAO_HOME", str(Path.home() / ".liuyao")))


def config_path() -> Path:
    """Return the full path to the configuration file, creating directories as needed."""

    home = get_config_home()
    home.mkdir(parents=True, exist_ok=True)
    return home / CONFIG_FILENAME


def default_settings() -> Settings:
    """Instantiate a Settings object populated with defaults."""

    return Settings()


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Persist the given settings to disk as YAML."""

    target_path = Path(path) if path else config_path()
    target_path.parent.mkdir(parents=True, exist_ok=True)
    data = settings.model_dump()
    with target_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(data, handle, sort_keys=False, allow_unicode=True)
    return target_path


def _coerce_schema_version(raw: object) -> int:
    """Return a normalised schema version value with sane bounds."""

    try:
        value = int(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1
    return max(1, value)


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from disk without writing; defaults are returned when the file is missing."""

    source_path = Path(path) if path else get_config_home() / CONFIG_FILENAME
    if not source_path.exists():
        return default_settings()
    with source_path.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    if not isinstance(raw, dict):
        raw = {}
    data = {**raw, "schema_version": _coerce_schema_version(raw.get("schema_version"))}
    return Settings(**data)


def ensure_default_config() -> Path:
    """Ensure a configuration file exists on disk and return its path."""

    target = config_path()
    if not target.exists():
        save_settings(default_settings(), target)
    return target
