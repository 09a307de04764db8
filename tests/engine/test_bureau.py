from __future__ import annotations

import pytest

from liuyao.annotate import annotate, annotate_transformed
from liuyao.chinese import Element, parse_branch
from liuyao.engine import (
    FactKind,
    PoolMember,
    PoolTag,
    Strength,
    StrengthLevel,
    StrengthNote,
    build_pool,
    detect_bureaus,
)
from liuyao.engine.bureau import adjust_for_bureaus

CHANGED = (False, False, False, True, False, True)


def _pool():
    original = annotate("010010", "甲")
    transformed = annotate_transformed("010111", "甲", original.palace.element)
    return build_pool(original, transformed, CHANGED, parse_branch("辰"), parse_branch("午"))


def test_pool_order_and_tags() -> None:
    """Day and month come first, then each line followed by its transformation."""

    pool = _pool()
    assert [(member.branch.glyph, member.tag) for member in pool] == [
        ("辰", PoolTag.DAY),
        ("午", PoolTag.MONTH),
        ("寅", PoolTag.STATIC),
        ("辰", PoolTag.STATIC),
        ("午", PoolTag.STATIC),
        ("申", PoolTag.MOVING),
        ("午", PoolTag.TRANSFORMED),
        ("戌", PoolTag.LATENT),
        ("子", PoolTag.MOVING),
        ("戌", PoolTag.TRANSFORMED),
    ]


def test_substantial_and_partial_bureaus() -> None:
    """Two moving lines plus the day form 申子辰; 寅午戌 only reinforces."""

    findings = detect_bureaus(_pool(), parse_branch("子"), Element.WATER)
    assert [finding.group.label() for finding in findings] == ["申子辰", "寅午戌"]
    assert [finding.substantial for finding in findings] == [True, False]
    assert [finding.points for finding in findings] == [4, 0]

    fact = findings[0].to_fact()
    assert fact.kind is FactKind.BUREAU
    assert fact.data["kind"] == "triad"
    assert fact.data["element"] is Element.WATER


def test_substantial_bureau_scores_by_element() -> None:
    """Without the governing branch a bureau scores by its element."""

    pool = _pool()
    assert detect_bureaus(pool, parse_branch("亥"), Element.WATER)[0].points == 3
    assert detect_bureaus(pool, parse_branch("卯"), Element.WOOD)[0].points == 2
    assert detect_bureaus(pool, parse_branch("午"), Element.FIRE)[0].points == -4


def test_adjust_for_bureaus() -> None:
    """Totals of three or more jump straight to strong or weak."""

    weak = Strength(StrengthLevel.WEAK)
    strong = Strength(StrengthLevel.STRONG)
    neutral = Strength(StrengthLevel.NEUTRAL)

    assert adjust_for_bureaus(weak, 4) == Strength(StrengthLevel.STRONG, StrengthNote.BUREAU_SUPPORT)
    assert adjust_for_bureaus(neutral, 3) == strong
    assert adjust_for_bureaus(strong, -3) == Strength(StrengthLevel.WEAK, StrengthNote.BUREAU_SUPPRESSION)
    assert adjust_for_bureaus(neutral, 2) == neutral


def _members(*pairs: tuple[str, PoolTag]) -> list[PoolMember]:
    return [
        PoolMember(parse_branch(glyph), tag, None if tag is PoolTag.DAY else index)
        for index, (glyph, tag) in enumerate(pairs)
    ]


@pytest.mark.parametrize(
    ("governing", "element", "points"),
    [("子", Element.WATER, 5), ("午", Element.FIRE, -5), ("卯", Element.WOOD, 2)],
)
def test_seasonal_trio_scores(governing: str, element: Element, points: int) -> None:
    """A substantial trio scores five for its own branch and minus five against what it controls."""

    pool = _members(("亥", PoolTag.DAY), ("子", PoolTag.MOVING), ("丑", PoolTag.MOVING))
    (finding,) = detect_bureaus(pool, parse_branch(governing), element)
    assert finding.group.label() == "亥子丑"
    assert finding.group.kind == "trio"
    assert finding.substantial
    assert finding.points == points


@pytest.mark.parametrize(
    ("governing", "element", "points"),
    [("卯", Element.WOOD, 1), ("子", Element.WATER, 1), ("午", Element.FIRE, 0)],
)
def test_partial_bureau_reinforces(governing: str, element: Element, points: int) -> None:
    """A partial bureau adds one when its element matches or generates the governing element."""

    pool = _members(("亥", PoolTag.DAY), ("丑", PoolTag.STATIC), ("子", PoolTag.MOVING))
    (finding,) = detect_bureaus(pool, parse_branch(governing), element)
    assert finding.group.label() == "亥子丑"
    assert not finding.substantial
    assert finding.points == points


def test_quiet_bureau_is_ignored() -> None:
    """Without moving, latent or transformed members a bureau is not reported."""

    pool = _members(("亥", PoolTag.DAY), ("丑", PoolTag.STATIC), ("子", PoolTag.STATIC))
    assert detect_bureaus(pool, parse_branch("子"), Element.WATER) == []
