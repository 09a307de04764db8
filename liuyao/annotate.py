"""Relational annotation of a hexagram: kinship, World/Response, hidden spirits."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .chinese.constants import (
    EARTHLY_BRANCHES,
    EarthlyBranch,
    Element,
    HeavenlyStem,
    StemBranch,
    parse_stem,
)
from .elements import Relation, relation
from .najia import assign, validate_hexagram
from .palace import PALACES, HexagramRecord, Palace, pure_hexagram, record_for, world_response

__all__ = [
    "HexagramChart",
    "HiddenSpirit",
    "Kinship",
    "LINE_POSITIONS",
    "LineInfo",
    "SixSpirit",
    "annotate",
    "annotate_transformed",
    "hexagram_body",
    "kinship",
    "six_spirits",
]

LINE_POSITIONS: Final[tuple[str, ...]] = ("初爻", "二爻", "三爻", "四爻", "五爻", "上爻")


class Kinship(StrEnum):
    """The six relatives (六亲) of a line relative to its palace."""

    SIBLINGS = "siblings"
    OFFSPRING = "offspring"
    PARENTS = "parents"
    WEALTH = "wealth"
    OFFICER = "officer"

    @property
    def glyph(self) -> str:
        return _KINSHIP_GLYPHS[self]


_KINSHIP_GLYPHS: Final[dict[Kinship, str]] = {
    Kinship.SIBLINGS: "兄弟",
    Kinship.OFFSPRING: "子孙",
    Kinship.PARENTS: "父母",
    Kinship.WEALTH: "妻财",
    Kinship.OFFICER: "官鬼",
}

_KINSHIP_BY_RELATION: Final[dict[Relation, Kinship]] = {
    Relation.SAME: Kinship.SIBLINGS,
    Relation.GENERATES: Kinship.OFFSPRING,
    Relation.GENERATED_BY: Kinship.PARENTS,
    Relation.CONTROLS: Kinship.WEALTH,
    Relation.NONE: Kinship.OFFICER,
}


def kinship(palace_element: Element, line_element: Element) -> Kinship:
    """Return the kinship of a line element seen from the palace element."""

    return _KINSHIP_BY_RELATION[relation(palace_element, line_element)]


class SixSpirit(StrEnum):
    """The six spirits (六神) laid bottom to top from the day stem."""

    AZURE_DRAGON = "azure_dragon"
    VERMILION_BIRD = "vermilion_bird"
    HOOKED_SERPENT = "hooked_serpent"
    SOARING_SERPENT = "soaring_serpent"
    WHITE_TIGER = "white_tiger"
    BLACK_TORTOISE = "black_tortoise"

    @property
    def glyph(self) -> str:
        return _SPIRIT_GLYPHS[self]


_SPIRIT_GLYPHS: Final[dict[SixSpirit, str]] = {
    SixSpirit.AZURE_DRAGON: "青龙",
    SixSpirit.VERMILION_BIRD: "朱雀",
    SixSpirit.HOOKED_SERPENT: "勾陈",
    SixSpirit.SOARING_SERPENT: "螣蛇",
    SixSpirit.WHITE_TIGER: "白虎",
    SixSpirit.BLACK_TORTOISE: "玄武",
}

_SPIRIT_ORDER: Final[tuple[SixSpirit, ...]] = tuple(SixSpirit)

# Day stem index -> first (bottom line) spirit.
_SPIRIT_START: Final[dict[int, int]] = {
    0: 0,
    1: 0,
    2: 1,
    3: 1,
    4: 2,
    5: 3,
    6: 4,
    7: 4,
    8: 5,
    9: 5,
}


def six_spirits(day_stem: HeavenlyStem | str) -> tuple[SixSpirit, ...]:
    """Return the spirits of lines 1-6 for ``day_stem``."""

    start = _SPIRIT_START[parse_stem(day_stem).index]
    return tuple(_SPIRIT_ORDER[(start + offset) % 6] for offset in range(6))


def hexagram_body(world: int, world_is_yang: bool) -> EarthlyBranch | None:
    """Return the hexagram body (卦身) for a 1-based World line, if in range."""

    if not 1 <= world <= 6:
        return None
    start = 0 if world_is_yang else 6
    return EARTHLY_BRANCHES[(start + world - 1) % 12]


@dataclass(frozen=True)
class HiddenSpirit:
    """A kinship missing from the hexagram, borrowed from the palace's pure hexagram."""

    kinship: Kinship
    stem_branch: StemBranch

    def label(self) -> str:
        return f"{self.kinship.glyph}{self.stem_branch.label()}"


@dataclass(frozen=True)
class LineInfo:
    index: int
    yang: bool
    stem_branch: StemBranch
    kinship: Kinship
    spirit: SixSpirit
    world: bool = False
    response: bool = False
    hidden: HiddenSpirit | None = None

    @property
    def branch(self) -> EarthlyBranch:
        return self.stem_branch.branch

    @property
    def element(self) -> Element:
        return self.stem_branch.element

    @property
    def position(self) -> str:
        return LINE_POSITIONS[self.index]

    @property
    def marker(self) -> str:
        if self.world:
            return "世"
        if self.response:
            return "应"
        return ""

    def to_payload(self) -> dict[str, object]:
        return {
            "index": self.index,
            "position": self.position,
            "yang": self.yang,
            "stem_branch": self.stem_branch.label(),
            "element": self.element.value,
            "kinship": self.kinship.glyph,
            "spirit": self.spirit.glyph,
            "marker": self.marker,
            "hidden": self.hidden.label() if self.hidden else None,
        }


@dataclass(frozen=True)
class HexagramChart:
    """A hexagram with its palace placement and six annotated lines."""

    binary: str
    record: HexagramRecord
    palace: Palace
    kinship_element: Element
    world: int
    response: int
    lines: tuple[LineInfo, ...]
    body: EarthlyBranch | None

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def world_index(self) -> int:
        return self.world - 1

    @property
    def response_index(self) -> int:
        return self.response - 1

    @property
    def world_line(self) -> LineInfo:
        return self.lines[self.world_index]

    def to_payload(self) -> dict[str, object]:
        return {
            **self.record.to_payload(),
            "palace_element": self.palace.element.value,
            "world": self.world,
            "response": self.response,
            "body": self.body.glyph if self.body else None,
            "lines": [line.to_payload() for line in self.lines],
        }


def _chart(
    hexagram: str,
    day_stem: HeavenlyStem | str,
    kinship_element: Element | None,
    with_hidden: bool,
) -> HexagramChart:
    validate_hexagram(hexagram)
    record = record_for(hexagram)
    palace = PALACES[record.palace]
    element = kinship_element if kinship_element is not None else palace.element
    world, response = world_response(record.position)
    spirits = six_spirits(day_stem)
    stem_branches = assign(hexagram)
    kinships = [kinship(element, sb.element) for sb in stem_branches]

    hidden: dict[int, HiddenSpirit] = {}
    if with_hidden:
        missing = set(Kinship) - set(kinships)
        if missing:
            for index, sb in enumerate(assign(pure_hexagram(record.palace))):
                pure_kinship = kinship(element, sb.element)
                if pure_kinship in missing:
                    hidden[index] = HiddenSpirit(pure_kinship, sb)

    lines = tuple(
        LineInfo(
            index=index,
            yang=hexagram[index] == "1",
            stem_branch=stem_branches[index],
            kinship=kinships[index],
            spirit=spirits[index],
            world=index + 1 == world,
            response=index + 1 == response,
            hidden=hidden.get(index),
        )
        for index in range(6)
    )
    return HexagramChart(
        binary=hexagram,
        record=record,
        palace=palace,
        kinship_element=element,
        world=world,
        response=response,
        lines=lines,
        body=hexagram_body(world, hexagram[world - 1] == "1"),
    )


def annotate(hexagram: str, day_stem: HeavenlyStem | str) -> HexagramChart:
    """Annotate an original hexagram, including its hidden spirits (伏神)."""

    return _chart(hexagram, day_stem, None, with_hidden=True)


def annotate_transformed(
    hexagram: str, day_stem: HeavenlyStem | str, original_palace_element: Element
) -> HexagramChart:
    """Annotate a transformed hexagram; kinship is read from the original palace."""

    return _chart(hexagram, day_stem, original_palace_element, with_hidden=False)
