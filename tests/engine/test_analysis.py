from __future__ import annotations

from datetime import datetime, timezone

import pytest

from liuyao.annotate import Kinship
from liuyao.casting import cast_hexagram
from liuyao.chinese import Element, calendar_context
from liuyao.corpus import CorpusIndex
from liuyao.engine import (
    AnalysisContext,
    FactKind,
    Gender,
    Judgment,
    SelectionRule,
    StrengthLevel,
    StrengthNote,
    analyze,
)
from liuyao.exceptions import InvalidHexagram

CALENDAR = {"day_stem": "甲", "day_branch": "子", "month_branch": "午", "void_branches": "戌亥"}

COMMENTARY = """
#### **一、本宫卦**：乾为天 ䷀ （刚健中正）
+ **卦辞**：元亨利贞。
1. **初九爻动（变天风姤 ䷫）**
   - **本爻辞**：潜龙勿用。
   - **变卦辞**：女壮，勿用取女。
   - **爻动含义**：时机未到，宜潜藏。
"""


def _career():
    return AnalysisContext.from_hexagram("111111", "100000", category="career", **CALENDAR)


def test_career_reading_on_qian() -> None:
    """The Officer 壬午 rules in its month and is activated by the day clash."""

    result = analyze(_career())

    assert result.transformed_chart.binary == "011111"
    assert result.governing_index == 3
    assert result.governing_stem_branch.label() == "壬午"
    assert result.governing_kinship is Kinship.OFFICER
    assert not result.hidden
    assert result.score == 3
    assert result.strength.level is StrengthLevel.STRONG
    assert result.judgment is Judgment.AUSPICIOUS
    assert result.timing.element is Element.FIRE

    kinds = [fact.kind for fact in result.strength_contributions]
    assert kinds == [FactKind.MONTH_STRENGTH, FactKind.DAY_STRENGTH, FactKind.LATENT_ACTIVATION]
    assert sum(fact.points for fact in result.strength_contributions) == result.score

    (stage,) = result.facts_of(FactKind.LIFE_STAGE)
    assert stage.data["stage"] == "胎"
    assert not result.facts_of(FactKind.BUREAU)


def test_selection_fact_comes_first() -> None:
    """Category and selection facts open the trace."""

    facts = analyze(_career()).facts
    assert facts[0].kind is FactKind.CATEGORY
    assert facts[1].kind is FactKind.SELECTION
    assert facts[1].data["rule"] is SelectionRule.SINGLE
    assert facts[-1].kind is FactKind.TIMING


def test_line_reports_run_top_down() -> None:
    """Every line gets a report, top line first."""

    reports = analyze(_career()).facts_of(FactKind.LINE_REPORT)
    assert [fact.line for fact in reports] == [5, 4, 3, 2, 1, 0]
    bottom = reports[-1]
    assert bottom.data["transformed"]["stem_branch"] == "辛丑"
    assert reports[0].data["transformed"] is None


def test_moving_line_acts_on_governing() -> None:
    """The moving 甲子 controls the Fire governing line."""

    (moving,) = analyze(_career()).facts_of(FactKind.MOVING_LINE)
    assert moving.line == 0
    assert moving.data["acts_on_governing"] == "controls"
    assert moving.data["transformed"] == "辛丑"


def test_moving_line_support_is_optional() -> None:
    """With the optional phase enabled a controlling moving line drops strong to weak."""

    plain = analyze(_career())
    assert not plain.facts_of(FactKind.MOVING_LINE_ADJUSTMENT)

    result = analyze(_career(), moving_line_support=True)
    assert result.strength.level is StrengthLevel.WEAK
    assert result.strength.note is StrengthNote.TABOO_SUPPRESSION
    assert result.judgment is Judgment.INAUSPICIOUS
    (adjustment,) = result.facts_of(FactKind.MOVING_LINE_ADJUSTMENT)
    assert adjustment.line == 0


def test_hidden_wealth_reading() -> None:
    """天风姤 has no Wealth line, so the hidden 甲寅 under line 2 governs."""

    context = AnalysisContext.from_hexagram("011111", "000000", category="wealth", **CALENDAR)
    result = analyze(context)

    assert result.hidden
    assert result.governing_index == 1
    assert result.governing_stem_branch.label() == "甲寅"
    assert result.governing_kinship is Kinship.WEALTH
    assert result.score == 2
    assert result.strength.level is StrengthLevel.STRONG
    assert result.timing.element is Element.WOOD

    (relation,) = result.facts_of(FactKind.HIDDEN_RELATION)
    assert relation.points == 2
    assert relation.data["relation"] == "concealing_generates"
    (adjustment,) = result.facts_of(FactKind.HIDDEN_ADJUSTMENT)
    assert adjustment.data["total"] == 2
    assert relation not in result.strength_contributions


def test_marriage_note_for_female_querent() -> None:
    """A strong husband star is reported for a female querent."""

    context = AnalysisContext.from_hexagram(
        "111111", "000000", category="marriage", gender="female", **CALENDAR
    )
    result = analyze(context)
    assert result.governing_kinship is Kinship.OFFICER
    (note,) = result.facts_of(FactKind.MARRIAGE_NOTE)
    assert note.data["gender"] is Gender.FEMALE
    assert note.data["strong"] is True


def test_no_category_reads_world_line() -> None:
    """Without a category the World line governs."""

    context = AnalysisContext.from_hexagram("111111", "000000", **CALENDAR)
    result = analyze(context)
    assert result.governing_index == 5
    assert result.target is None
    assert result.facts[1].data["rule"] is SelectionRule.WORLD_LINE


def test_inconsistent_transformed_hexagram() -> None:
    """The transformed hexagram must follow from the changed lines."""

    with pytest.raises(InvalidHexagram):
        AnalysisContext(
            original="111111",
            transformed="111111",
            changed=(True, False, False, False, False, False),
            day_stem="甲",
            day_branch="子",
            month_branch="午",
        )


def test_context_from_cast() -> None:
    """A cast and its calendar make a context."""

    cast = cast_hexagram(["111", "100", "100", "100", "100", "100"])
    calendar = calendar_context(datetime(2000, 1, 1, 12, tzinfo=timezone.utc))
    context = AnalysisContext.from_cast(cast, calendar, category="career")

    assert context.transformed == "011111"
    assert context.day_branch.glyph == "午"
    assert context.month_branch.glyph == "子"
    assert [branch.glyph for branch in context.void_branches] == ["子", "丑"]


def test_analysis_is_deterministic() -> None:
    """The same context always yields the same reading."""

    assert analyze(_career()).to_payload() == analyze(_career()).to_payload()


def test_corpus_decoration() -> None:
    """Moving lines pick up their commentary along with the Great Image."""

    corpus = CorpusIndex.from_markdown(COMMENTARY)
    result = analyze(_career(), corpus=corpus)

    assert result.decoration.hexagram_text.judgment == "元亨利贞。"
    (line,) = result.decoration.line_texts
    assert line.name == "初九爻动"
    assert line.text == "潜龙勿用。"
    assert result.decoration.image == "天行健，君子以自强不息。"

    assert analyze(_career()).decoration.hexagram_text is None


@pytest.mark.parametrize("changed", ["1x?abc", "10000", "1000000", "200000", (True,) * 5])
def test_malformed_changed_flags(changed) -> None:
    """Changed flags must be exactly six '0'/'1' digits."""

    with pytest.raises(InvalidHexagram):
        AnalysisContext.from_hexagram("010001", changed, day_stem="甲", day_branch="子", month_branch="寅")


def test_bureau_lifts_weak_governing_line() -> None:
    """A substantial 申子辰 bureau turns a weak Water line strong."""

    context = AnalysisContext.from_hexagram(
        "010010",
        "000101",
        day_stem="甲",
        day_branch="辰",
        month_branch="午",
        category="siblings",
    )
    result = analyze(context)

    assert result.governing_index == 5
    assert result.governing_stem_branch.label() == "戊子"
    assert result.score == -9
    assert result.strength.level is StrengthLevel.STRONG
    assert result.strength.note is StrengthNote.BUREAU_SUPPORT
    assert result.judgment is Judgment.AUSPICIOUS

    bureaus = result.facts_of(FactKind.BUREAU)
    assert [(fact.data["branches"], fact.points) for fact in bureaus] == [("申子辰", 4), ("寅午戌", 0)]
    (adjustment,) = result.facts_of(FactKind.BUREAU_ADJUSTMENT)
    assert adjustment.data["total"] == 4
    assert adjustment.data["before"] == "弱"
