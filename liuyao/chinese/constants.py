"""Lookup tables for Heavenly Stems, Earthly Branches and the five elements."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from ..exceptions import UnknownSymbol

__all__ = [
    "EARTHLY_BRANCHES",
    "Element",
    "EarthlyBranch",
    "HEAVENLY_STEMS",
    "HeavenlyStem",
    "StemBranch",
    "branch_for_index",
    "parse_branch",
    "parse_stem",
    "parse_stem_branch",
    "stem_for_index",
]


class Element(StrEnum):
    """The five phases (五行)."""

    METAL = "Metal"
    WATER = "Water"
    WOOD = "Wood"
    FIRE = "Fire"
    EARTH = "Earth"

    @property
    def glyph(self) -> str:
        return _ELEMENT_GLYPHS[self]


_ELEMENT_GLYPHS: Final[dict[Element, str]] = {
    Element.METAL: "金",
    Element.WATER: "水",
    Element.WOOD: "木",
    Element.FIRE: "火",
    Element.EARTH: "土",
}


@dataclass(frozen=True)
class HeavenlyStem:
    """One of the ten Heavenly Stems (天干)."""

    index: int
    glyph: str
    name: str
    element: Element
    polarity: str


@dataclass(frozen=True)
class EarthlyBranch:
    """One of the twelve Earthly Branches (地支)."""

    index: int
    glyph: str
    name: str
    animal: str
    element: Element
    polarity: str


HEAVENLY_STEMS: Final[tuple[HeavenlyStem, ...]] = (
    HeavenlyStem(0, "甲", "Jia", Element.WOOD, "Yang"),
    HeavenlyStem(1, "乙", "Yi", Element.WOOD, "Yin"),
    HeavenlyStem(2, "丙", "Bing", Element.FIRE, "Yang"),
    HeavenlyStem(3, "丁", "Ding", Element.FIRE, "Yin"),
    HeavenlyStem(4, "戊", "Wu", Element.EARTH, "Yang"),
    HeavenlyStem(5, "己", "Ji", Element.EARTH, "Yin"),
    HeavenlyStem(6, "庚", "Geng", Element.METAL, "Yang"),
    HeavenlyStem(7, "辛", "Xin", Element.METAL, "Yin"),
    HeavenlyStem(8, "壬", "Ren", Element.WATER, "Yang"),
    HeavenlyStem(9, "癸", "Gui", Element.WATER, "Yin"),
)


EARTHLY_BRANCHES: Final[tuple[EarthlyBranch, ...]] = (
    EarthlyBranch(0, "子", "Zi", "Rat", Element.WATER, "Yang"),
    EarthlyBranch(1, "丑", "Chou", "Ox", Element.EARTH, "Yin"),
    EarthlyBranch(2, "寅", "Yin", "Tiger", Element.WOOD, "Yang"),
    EarthlyBranch(3, "卯", "Mao", "Rabbit", Element.WOOD, "Yin"),
    EarthlyBranch(4, "辰", "Chen", "Dragon", Element.EARTH, "Yang"),
    EarthlyBranch(5, "巳", "Si", "Snake", Element.FIRE, "Yin"),
    EarthlyBranch(6, "午", "Wu", "Horse", Element.FIRE, "Yang"),
    EarthlyBranch(7, "未", "Wei", "Goat", Element.EARTH, "Yin"),
    EarthlyBranch(8, "申", "Shen", "Monkey", Element.METAL, "Yang"),
    EarthlyBranch(9, "酉", "You", "Rooster", Element.METAL, "Yin"),
    EarthlyBranch(10, "戌", "Xu", "Dog", Element.EARTH, "Yang"),
    EarthlyBranch(11, "亥", "Hai", "Pig", Element.WATER, "Yin"),
)


@dataclass(frozen=True)
class StemBranch:
    """A stem-branch pair (干支) such as ``甲子``; its element is the branch's."""

    stem: HeavenlyStem
    branch: EarthlyBranch

    @property
    def element(self) -> Element:
        return self.branch.element

    def label(self) -> str:
        """Return the two-glyph label (e.g., ``甲子``)."""

        return f"{self.stem.glyph}{self.branch.glyph}"

    def __str__(self) -> str:
        return self.label()


def stem_for_index(index: int) -> HeavenlyStem:
    """Return the Heavenly Stem for ``index`` (0-9)."""

    return HEAVENLY_STEMS[index % len(HEAVENLY_STEMS)]


def branch_for_index(index: int) -> EarthlyBranch:
    """Return the Earthly Branch for ``index`` (0-11)."""

    return EARTHLY_BRANCHES[index % len(EARTHLY_BRANCHES)]


_STEM_LOOKUP: Final[dict[str, HeavenlyStem]] = {
    **{stem.glyph: stem for stem in HEAVENLY_STEMS},
    **{stem.name.lower(): stem for stem in HEAVENLY_STEMS},
}
# "Wu" and "Yin" are both a stem name and a branch name; glyphs are unambiguous.
_BRANCH_LOOKUP: Final[dict[str, EarthlyBranch]] = {
    **{branch.glyph: branch for branch in EARTHLY_BRANCHES},
    **{branch.name.lower(): branch for branch in EARTHLY_BRANCHES},
}


def parse_stem(token: str | HeavenlyStem) -> HeavenlyStem:
    """Resolve a stem from its glyph (``甲``) or pinyin name (``Jia``)."""

    if isinstance(token, HeavenlyStem):
        return token
    try:
        return _STEM_LOOKUP[token.strip().lower()]
    except (KeyError, AttributeError):
        raise UnknownSymbol(f"unknown heavenly stem {token!r}") from None


def parse_branch(token: str | EarthlyBranch) -> EarthlyBranch:
    """Resolve a branch from its glyph (``子``) or pinyin name (``Zi``)."""

    if isinstance(token, EarthlyBranch):
        return token
    try:
        return _BRANCH_LOOKUP[token.strip().lower()]
    except (KeyError, AttributeError):
        raise UnknownSymbol(f"unknown earthly branch {token!r}") from None


def parse_stem_branch(token: str) -> StemBranch:
    """Parse a two-glyph label such as ``甲子`` or a hyphenated ``Jia-Zi``."""

    text = token.strip()
    if "-" in text:
        stem_part, _, branch_part = text.partition("-")
    elif len(text) == 2:
        stem_part, branch_part = text[0], text[1]
    else:
        raise UnknownSymbol(f"cannot parse stem-branch {token!r}")
    return StemBranch(parse_stem(stem_part), parse_branch(branch_part))
