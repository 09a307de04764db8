"""Configuration helpers exposed at :mod:`liuyao.config`."""

from __future__ import annotations

from .settings import (
    CONFIG_FILENAME,
    CalendarCfg,
    CorpusCfg,
    NarrativeCfg,
    ScoringCfg,
    Settings,
    config_path,
    default_settings,
    ensure_default_config,
    get_config_home,
    load_settings,
    save_settings,
)

__all__ = [
    "CONFIG_FILENAME",
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
