from __future__ import annotations

import pytest

from liuyao.annotate import (
    Kinship,
    SixSpirit,
    annotate,
    annotate_transformed,
    hexagram_body,
    kinship,
    six_spirits,
)
from liuyao.chinese import Element


def test_same_element_is_siblings() -> None:
    """A line sharing the palace element is a sibling."""

    for element in Element:
        assert kinship(element, element) is Kinship.SIBLINGS


def test_kinship_is_total_and_distinct() -> None:
    """Each palace element sees all five kinships across the five line elements."""

    for palace in Element:
        assert {kinship(palace, line) for line in Element} == set(Kinship)


def test_meng_world_response_and_kinship() -> None:
    """山水蒙: World on line 4, Response on line 1, Parents below and Offspring on the World."""

    chart = annotate("010001", "丙")
    assert chart.kinship_element is Element.FIRE
    assert chart.world_index == 3
    assert chart.response_index == 0
    assert chart.lines[0].kinship is Kinship.PARENTS
    assert chart.lines[3].kinship is Kinship.OFFSPRING
    assert chart.lines[3].marker == "世"
    assert chart.lines[0].marker == "应"


def test_transformed_kinship_follows_original_palace() -> None:
    """乾 turning into 坤: the bottom 未 line is Parents against Metal, not Siblings."""

    original = annotate("111111", "甲")
    transformed = annotate_transformed("000000", "甲", original.palace.element)
    assert transformed.lines[0].branch.glyph == "未"
    assert transformed.lines[0].kinship is Kinship.PARENTS
    assert transformed.kinship_element is Element.METAL


def test_hidden_wealth_under_gou() -> None:
    """天风姤 lacks Wealth; it hides under line 2 as the pure hexagram's 甲寅."""

    chart = annotate("011111", "甲")
    assert Kinship.WEALTH not in {line.kinship for line in chart.lines}
    hidden = chart.lines[1].hidden
    assert hidden is not None
    assert hidden.kinship is Kinship.WEALTH
    assert hidden.stem_branch.label() == "甲寅"
    assert hidden.label() == "妻财甲寅"
    assert all(line.hidden is None for line in chart.lines if line.index != 1)


def test_complete_hexagram_has_no_hidden_spirits() -> None:
    """Pure hexagrams show every kinship."""

    chart = annotate("111111", "甲")
    assert all(line.hidden is None for line in chart.lines)


@pytest.mark.parametrize(
    ("stem", "first"),
    [
        ("甲", SixSpirit.AZURE_DRAGON),
        ("乙", SixSpirit.AZURE_DRAGON),
        ("丙", SixSpirit.VERMILION_BIRD),
        ("丁", SixSpirit.VERMILION_BIRD),
        ("戊", SixSpirit.HOOKED_SERPENT),
        ("己", SixSpirit.SOARING_SERPENT),
        ("庚", SixSpirit.WHITE_TIGER),
        ("辛", SixSpirit.WHITE_TIGER),
        ("壬", SixSpirit.BLACK_TORTOISE),
        ("癸", SixSpirit.BLACK_TORTOISE),
    ],
)
def test_six_spirits_start_from_day_stem(stem: str, first: SixSpirit) -> None:
    """Spirits start at the day stem's spirit and cycle upwards."""

    spirits = six_spirits(stem)
    assert spirits[0] is first
    assert len(set(spirits)) == 6


def test_six_spirit_order() -> None:
    """A Jia day runs 青龙 to 玄武 bottom to top."""

    assert [spirit.glyph for spirit in six_spirits("甲")] == [
        "青龙",
        "朱雀",
        "勾陈",
        "螣蛇",
        "白虎",
        "玄武",
    ]


@pytest.mark.parametrize(
    ("world", "yang", "branch"),
    [(1, True, "子"), (3, True, "寅"), (6, True, "巳"), (1, False, "午"), (6, False, "亥")],
)
def test_hexagram_body(world: int, yang: bool, branch: str) -> None:
    """Yang World lines count from 子, yin ones from 午."""

    body = hexagram_body(world, yang)
    assert body is not None and body.glyph == branch


@pytest.mark.parametrize("world", [0, 7])
def test_hexagram_body_out_of_range(world: int) -> None:
    """World numbers outside 1-6 have no body."""

    assert hexagram_body(world, True) is None


def test_chart_payload() -> None:
    """Charts serialise their palace, markers and lines."""

    payload = annotate("111111", "甲").to_payload()
    assert payload["name"] == "乾为天"
    assert payload["world"] == 6
    assert payload["body"] == "巳"
    assert payload["lines"][3]["stem_branch"] == "壬午"
    assert payload["lines"][3]["kinship"] == "官鬼"
