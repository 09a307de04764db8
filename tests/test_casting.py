from __future__ import annotations

import random

import pytest

from liuyao.casting import LineCast, LineType, cast_hexagram, parse_casts, random_casts
from liuyao.exceptions import InvalidLineCast


@pytest.mark.parametrize(
    ("toss", "expected"),
    [
        ("100", LineType.YOUNG_YANG),
        ("110", LineType.YOUNG_YIN),
        ("111", LineType.OLD_YANG),
        ("000", LineType.OLD_YIN),
    ],
)
def test_heads_decide_line_type(toss: str, expected: LineType) -> None:
    """One head is young yang, two young yin, three old yang, none old yin."""

    assert LineCast.parse(toss).line_type is expected


def test_six_old_yang() -> None:
    """Six old yang lines all move and flip to yin."""

    result = cast_hexagram(["111"] * 6)
    assert result.original == "111111"
    assert result.transformed == "000000"
    assert result.changed == (True,) * 6
    assert result.moving_lines == (0, 1, 2, 3, 4, 5)


def test_six_old_yin() -> None:
    """Six old yin lines all move and flip to yang."""

    result = cast_hexagram(parse_casts(["000"] * 6))
    assert result.original == "000000"
    assert result.transformed == "111111"
    assert result.changed == (True,) * 6


def test_static_cast_keeps_hexagram() -> None:
    """Young lines do not move."""

    result = cast_hexagram(["100", "110", "100", "110", "100", "110"])
    assert result.original == result.transformed == "101010"
    assert not any(result.changed)


@pytest.mark.parametrize("toss", ["11", "1111", "12a", ""])
def test_invalid_toss(toss: str) -> None:
    """Tosses must be exactly three coins."""

    with pytest.raises(InvalidLineCast):
        LineCast.parse(toss)


def test_cast_needs_six_lines() -> None:
    """Five lines are not a hexagram."""

    with pytest.raises(InvalidLineCast):
        cast_hexagram(["111"] * 5)


def test_seeded_casts_repeat() -> None:
    """The same seed reproduces the same cast."""

    first = cast_hexagram(random_casts(random.Random(7)))
    second = cast_hexagram(random_casts(random.Random(7)))
    assert first == second
    assert len(random_casts(random.Random(1), count=3)) == 3
