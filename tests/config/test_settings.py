from __future__ import annotations

import pytest
import yaml
from pydantic import ValidationError

from liuyao.config import (
    CONFIG_FILENAME,
    Settings,
    config_path,
    default_settings,
    ensure_default_config,
    get_config_home,
    load_settings,
    save_settings,
)


def test_defaults_without_writing() -> None:
    """A missing config file yields defaults and nothing is written."""

    settings = load_settings()
    assert settings == default_settings()
    assert settings.narrative.language == "zh"
    assert settings.scoring.moving_line_support is False
    assert settings.calendar.timezone == "Asia/Shanghai"
    assert not (get_config_home() / CONFIG_FILENAME).exists()


def test_round_trip(tmp_path) -> None:
    """Saved settings load back unchanged."""

    settings = Settings(
        narrative={"language": "en", "include_line_report": False},
        scoring={"moving_line_support": True},
        corpus={"path": "/data/commentary.md"},
        calendar={"timezone": "UTC"},
    )
    path = save_settings(settings, tmp_path / "config.yaml")
    assert load_settings(path) == settings

    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    assert raw["narrative"]["language"] == "en"


def test_ensure_default_config() -> None:
    """The default file is created once under the config home."""

    path = ensure_default_config()
    assert path == config_path()
    assert path.parent == get_config_home()
    assert load_settings(path) == default_settings()


def test_load_leaves_file_untouched(tmp_path) -> None:
    """An invalid or missing schema version is normalised in memory only."""

    path = tmp_path / "config.yaml"
    text = "schema_version: nonsense\nnarrative:\n  language: ' EN '\n"
    path.write_text(text, encoding="utf-8")

    settings = load_settings(path)
    assert settings.schema_version == 1
    assert settings.narrative.language == "en"
    assert path.read_text(encoding="utf-8") == text

    bare = tmp_path / "bare.yaml"
    bare.write_text("scoring:\n  moving_line_support: true\n", encoding="utf-8")
    assert load_settings(bare).scoring.moving_line_support is True
    assert "schema_version" not in bare.read_text(encoding="utf-8")


def test_blank_corpus_path_is_none() -> None:
    """An empty corpus path means no corpus."""

    assert Settings(corpus={"path": "  "}).corpus.path is None


@pytest.mark.parametrize(
    "payload",
    [
        {"calendar": {"timezone": "Mars/Olympus"}},
        {"narrative": {"language": "fr"}},
    ],
)
def test_invalid_settings(payload) -> None:
    """Unknown time zones and languages are rejected."""

    with pytest.raises(ValidationError):
        Settings(**payload)
