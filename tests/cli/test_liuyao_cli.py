from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from liuyao.cli import app
from liuyao.config import CONFIG_FILENAME, get_config_home

runner = CliRunner()

READING = [
    "analyze",
    "--hexagram", "111111",
    "--changed", "100000",
    "--date", "2000-01-01T12:00",
    "--day-stem", "甲",
    "--day-branch", "子",
    "--month-branch", "午",
    "--void", "戌亥",
    "--category", "career",
]

COMMENTARY = """#### **一、本宫卦**：乾为天 ䷀ （刚健中正）
+ **卦辞**：元亨利贞。
1. **初九爻动（变天风姤 ䷫）**
   - **本爻辞**：潜龙勿用。
   - **爻动含义**：宜潜藏。
"""


def _tosses(*values: str) -> list[str]:
    args: list[str] = []
    for value in values:
        args.extend(["--toss", value])
    return args


def test_cast_from_tosses() -> None:
    """Replayed tosses give the original and transformed hexagrams."""

    result = runner.invoke(app, ["cast", *_tosses("111", "100", "100", "100", "100", "100"), "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["original"] == "111111"
    assert payload["original_name"] == "乾为天"
    assert payload["transformed"] == "011111"
    assert payload["transformed_name"] == "天风姤"
    assert payload["changed"] == "100000"
    assert len(payload["lines"]) == 6


def test_seeded_cast_is_repeatable() -> None:
    """The same seed tosses the same coins."""

    first = runner.invoke(app, ["cast", "--seed", "7", "--json"])
    second = runner.invoke(app, ["cast", "--seed", "7", "--json"])
    assert first.exit_code == 0, first.output
    assert json.loads(first.stdout) == json.loads(second.stdout)


def test_invalid_toss_fails() -> None:
    """Malformed tosses exit with an error."""

    result = runner.invoke(app, ["cast", *_tosses("12", "100", "100", "100", "100", "100")])
    assert result.exit_code == 1


def test_chart_json() -> None:
    """Charts are annotated for the given day stem."""

    result = runner.invoke(app, ["chart", "111111", "--day-stem", "甲", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["name"] == "乾为天"
    assert payload["world"] == 6
    assert payload["lines"][3]["kinship"] == "官鬼"


def test_analyze_json() -> None:
    """A full reading is emitted as JSON."""

    result = runner.invoke(app, [*READING, "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["governing"] == {
        "index": 3,
        "kinship": "官鬼",
        "stem_branch": "壬午",
        "hidden": False,
    }
    assert payload["score"] == 3
    assert payload["strength"] == "强"
    assert payload["judgment"] == "吉"
    assert payload["changed"] == [True, False, False, False, False, False]


def test_analyze_text_report(tmp_path: Path) -> None:
    """The text report carries the verdict and commentary from the corpus file."""

    corpus = tmp_path / "commentary.md"
    corpus.write_text(COMMENTARY, encoding="utf-8")
    result = runner.invoke(app, [*READING, "--corpus", str(corpus)])
    assert result.exit_code == 0, result.output
    assert "断：吉（用神强）" in result.stdout
    assert "初九爻动：潜龙勿用。" in result.stdout


def test_analyze_in_english() -> None:
    """--lang switches the report catalog."""

    result = runner.invoke(app, [*READING, "--lang", "en"])
    assert result.exit_code == 0, result.output
    assert "Judgment: auspicious" in result.stdout


@pytest.mark.parametrize(
    "extra",
    [
        ["--hexagram", "12"],
        ["--category", "lottery"],
        ["--day-branch", "X"],
        ["--changed", "1x?abc"],
    ],
)
def test_analyze_rejects_bad_input(extra: list[str]) -> None:
    """Invalid hexagrams and symbols exit with status 1."""

    result = runner.invoke(app, [*READING, *extra])
    assert result.exit_code == 1


def test_lookup_with_corpus(tmp_path: Path) -> None:
    """Lookups combine the commentary file with the bundled images."""

    corpus = tmp_path / "commentary.md"
    corpus.write_text(COMMENTARY, encoding="utf-8")
    result = runner.invoke(app, ["lookup", "乾为天", "初九", "--corpus", str(corpus), "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["palace"] == 0
    assert payload["judgment"] == "元亨利贞。"
    assert payload["image"] == "天行健，君子以自强不息。"
    assert payload["line"]["name"] == "初九爻动"
    assert payload["line_image"] == "潜龙勿用，阳在下也。"


def test_lookup_unknown_hexagram() -> None:
    """Names outside the palace table fail."""

    result = runner.invoke(app, ["lookup", "不存在"])
    assert result.exit_code == 1


def test_stars_on_branch() -> None:
    """Stars can be listed for a single branch."""

    result = runner.invoke(
        app,
        [
            "stars",
            "--date", "2000-01-01T12:00",
            "--day-stem", "甲",
            "--day-branch", "子",
            "--month-branch", "寅",
            "--branch", "寅",
            "--json",
        ],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout) == {"branch": "寅", "stars": ["禄神", "驿马"]}


def test_calendar_anchor_day() -> None:
    """1949-10-01 is a 甲子 day."""

    result = runner.invoke(app, ["calendar", "1949-10-01T12:00", "--tz", "Asia/Shanghai", "--json"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["day"] == "甲子"
    assert payload["void"] == ["戌", "亥"]


def test_calendar_bad_timezone() -> None:
    """Unknown time zones are a usage error."""

    result = runner.invoke(app, ["calendar", "2000-01-01T12:00", "--tz", "Mars/Olympus"])
    assert result.exit_code != 0


def test_config_init_and_show() -> None:
    """config init writes defaults that config show reads back."""

    result = runner.invoke(app, ["config", "init"])
    assert result.exit_code == 0, result.output
    assert (get_config_home() / CONFIG_FILENAME).exists()

    shown = runner.invoke(app, ["config", "show", "--json"])
    assert shown.exit_code == 0, shown.output
    payload = json.loads(shown.stdout)
    assert payload["schema_version"] == 1
    assert payload["narrative"]["language"] == "zh"
