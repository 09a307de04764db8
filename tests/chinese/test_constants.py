from __future__ import annotations

import pytest

from liuyao.chinese import Element, parse_branch, parse_stem, parse_stem_branch
from liuyao.exceptions import LiuyaoError, UnknownSymbol


@pytest.mark.parametrize("token", ["甲", "Jia", "jia", " JIA "])
def test_parse_stem_accepts_glyph_and_name(token: str) -> None:
    """Stems resolve from glyphs or case-insensitive pinyin."""

    assert parse_stem(token).glyph == "甲"


def test_parse_branch_and_element() -> None:
    """Branches carry their element and animal."""

    branch = parse_branch("Wei")
    assert branch.glyph == "未"
    assert branch.element is Element.EARTH
    assert branch.animal == "Goat"


def test_parse_stem_branch_forms() -> None:
    """Both ``甲子`` and ``Jia-Zi`` parse to the same pair."""

    assert parse_stem_branch("甲子") == parse_stem_branch("Jia-Zi")
    assert parse_stem_branch("壬午").element is Element.FIRE
    assert str(parse_stem_branch("Ren-Wu")) == "壬午"


@pytest.mark.parametrize(
    ("parser", "token"),
    [(parse_stem_branch, ""), (parse_branch, "X"), (parse_stem_branch, "甲子丑"), (parse_stem, "Zi")],
)
def test_unknown_symbols_raise(parser, token: str) -> None:
    """Unparseable tokens raise an engine error that is still a ValueError."""

    with pytest.raises(UnknownSymbol):
        parser(token)
    assert issubclass(UnknownSymbol, LiuyaoError)
    assert issubclass(UnknownSymbol, ValueError)


def test_element_glyphs() -> None:
    """Every element has a single-glyph display form."""

    assert [element.glyph for element in Element] == ["金", "水", "木", "火", "土"]
