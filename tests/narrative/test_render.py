from __future__ import annotations

import pytest

from liuyao.annotate import annotate
from liuyao.chinese import Element
from liuyao.corpus import CorpusIndex
from liuyao.engine import AnalysisContext, Fact, FactKind, analyze
from liuyao.narrative import register_translations, render_chart, render_fact, render_report, term, translate

CALENDAR = {"day_stem": "甲", "day_branch": "子", "month_branch": "午", "void_branches": "戌亥"}


def _reading(**kwargs):
    context = AnalysisContext.from_hexagram("111111", "100000", category="career", **CALENDAR)
    return analyze(context, **kwargs)


def test_translate_falls_back() -> None:
    """Unknown locales fall back to Chinese, unknown keys to the default or the key."""

    assert translate("fact.month_clash", locale="fr") == "月破（-4）"
    assert translate("missing.key", default="fallback") == "fallback"
    assert translate("missing.key") == "missing.key"


def test_register_translations() -> None:
    """Registered catalogs are used for their locale."""

    register_translations("test", {"fact.void": "vide"})
    assert translate("fact.void", locale="test") == "vide"


def test_term_by_locale() -> None:
    """Enums show glyphs in Chinese and values elsewhere."""

    assert term(Element.FIRE) == "火"
    assert term(Element.FIRE, "en") == "Fire"
    assert term(None) == "无"


@pytest.mark.parametrize(
    ("fact", "zh", "en"),
    [
        (Fact(FactKind.MONTH_CLASH, points=-4), "月破（-4）", "Clashed by the month (-4)"),
        (Fact(FactKind.LATENT_ACTIVATION, points=1), "旺相逢日冲，暗动（+1）", None),
        (Fact(FactKind.DAY_PUNISHMENT, points=-1, data={"self": True}), "与日辰自刑（-1）", None),
        (
            Fact(FactKind.TIMING, data={"element": Element.WOOD}),
            "事件可能应验于 木 日/月",
            "The matter may come to pass on a Wood day or month",
        ),
    ],
)
def test_render_simple_facts(fact: Fact, zh: str, en: str | None) -> None:
    """Simple facts render from their catalog entry."""

    assert render_fact(fact) == zh
    if en is not None:
        assert render_fact(fact, locale="en") == en


def test_render_chart_rows() -> None:
    """Chart rows run from the top line down, marking moving lines and the World."""

    chart = annotate("111111", "甲")
    rows = render_chart(chart, (True, False, False, False, False, False))

    assert rows[0] == "本卦：乾为天（乾宫，第1卦）"
    assert rows[1] == "玄武 父母壬戌 ▅▅▅▅▅ 世"
    assert rows[4] == "勾陈 父母甲辰 ▅▅▅▅▅ 应"
    assert rows[6] == "青龙 子孙甲子 ▅▅▅▅▅ ○"
    assert rows[-1] == "卦身：巳"


def test_render_chart_shows_hidden_spirit() -> None:
    """Hidden spirits appear beneath their concealing line."""

    rows = render_chart(annotate("011111", "甲"))
    assert "    伏神 妻财甲寅" in rows
    index = rows.index("    伏神 妻财甲寅")
    assert "辛亥" in rows[index - 1]


def test_render_report_sections() -> None:
    """A report carries the calendar, chart, trace and verdict."""

    text = render_report(_reading())
    lines = text.splitlines()

    assert lines[0] == "午月 甲子日 旬空：戌亥"
    assert "变卦：天风姤" in lines
    assert "月建火，用神旺（+2）" in lines
    assert "断：吉（用神强）" in lines
    assert "事件可能应验于 火 日/月" in lines


def test_render_report_without_line_reports() -> None:
    """Line reports can be left out."""

    full = render_report(_reading())
    short = render_report(_reading(), include_line_report=False)
    assert len(short.splitlines()) == len(full.splitlines()) - 6


def test_render_report_decoration() -> None:
    """Commentary is appended when the corpus matches."""

    corpus = CorpusIndex.from_markdown(
        "#### **一、本宫卦**：乾为天 ䷀ （刚健中正）\n"
        "+ **卦辞**：元亨利贞。\n"
        "1. **初九爻动（变天风姤 ䷫）**\n"
        "   - **本爻辞**：潜龙勿用。\n"
        "   - **爻动含义**：宜潜藏。\n"
    )
    text = render_report(_reading(corpus=corpus))
    assert text.splitlines()[-3:] == [
        "卦辞：元亨利贞。",
        "大象：天行健，君子以自强不息。",
        "初九爻动：潜龙勿用。",
    ]


def test_render_report_in_english() -> None:
    """The English catalog covers the whole report."""

    text = render_report(_reading(), locale="en")
    assert text.splitlines()[0] == "Month 午, day 甲子, void: 戌亥"
    assert "Judgment: auspicious (strength 强)" in text
