"""Five-element algebra over elements and earthly branches.

Everything here is a pure lookup against the tables below: the generative and
destructive cycles, the branch-pair relations (clash, six combinations,
punishment, harm), the three-branch groupings (triads and seasonal trios),
advancing/retreating transformations, seasonal vitality grading and the
twelve life stages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .chinese.constants import EARTHLY_BRANCHES, EarthlyBranch, Element, parse_branch

__all__ = [
    "BranchGroup",
    "LIFE_STAGES",
    "Movement",
    "Relation",
    "SEASONAL_TRIOS",
    "TRIADS",
    "Vitality",
    "combination",
    "controls",
    "generates",
    "is_clash",
    "is_harm",
    "is_punishment",
    "is_strong",
    "life_stage",
    "month_or_day_strength",
    "movement",
    "relation",
]

_GENERATES: Final[dict[Element, Element]] = {
    Element.METAL: Element.WATER,
    Element.WATER: Element.WOOD,
    Element.WOOD: Element.FIRE,
    Element.FIRE: Element.EARTH,
    Element.EARTH: Element.METAL,
}

_CONTROLS: Final[dict[Element, Element]] = {
    Element.METAL: Element.WOOD,
    Element.WOOD: Element.EARTH,
    Element.EARTH: Element.WATER,
    Element.WATER: Element.FIRE,
    Element.FIRE: Element.METAL,
}


class Relation(StrEnum):
    """Directional relation of element ``a`` towards element ``b``.

    ``NONE`` is left for the only remaining case, ``b`` controlling ``a``.
    """

    SAME = "same"
    GENERATES = "generates"
    CONTROLS = "controls"
    GENERATED_BY = "generated_by"
    NONE = "none"


class Vitality(StrEnum):
    """Seasonal grade of an element against the month or day (旺相休囚死)."""

    PROSPEROUS = "prosperous"
    SUPPORTED = "supported"
    RESTING = "resting"
    TRAPPED = "trapped"
    DEAD = "dead"

    @property
    def glyph(self) -> str:
        return _VITALITY_GLYPHS[self]


_VITALITY_GLYPHS: Final[dict[Vitality, str]] = {
    Vitality.PROSPEROUS: "旺",
    Vitality.SUPPORTED: "相",
    Vitality.RESTING: "休",
    Vitality.TRAPPED: "囚",
    Vitality.DEAD: "死",
}


class Movement(StrEnum):
    """Direction of a moving line whose branch steps to its neighbour."""

    ADVANCING = "advancing"
    RETREATING = "retreating"


def generates(a: Element, b: Element) -> bool:
    return _GENERATES[a] is b


def controls(a: Element, b: Element) -> bool:
    return _CONTROLS[a] is b


def relation(a: Element, b: Element) -> Relation:
    """Return how ``a`` acts on ``b``."""

    if a is b:
        return Relation.SAME
    if generates(a, b):
        return Relation.GENERATES
    if controls(a, b):
        return Relation.CONTROLS
    if generates(b, a):
        return Relation.GENERATED_BY
    return Relation.NONE


def month_or_day_strength(subject: Element, reference: Element) -> Vitality:
    """Grade ``subject`` against the month or day element ``reference``."""

    if subject is reference:
        return Vitality.PROSPEROUS
    if generates(reference, subject):
        return Vitality.SUPPORTED
    if generates(subject, reference):
        return Vitality.RESTING
    if controls(subject, reference):
        return Vitality.TRAPPED
    return Vitality.DEAD


def is_strong(subject: Element, reference: Element) -> bool:
    """Return ``True`` when ``subject`` is prosperous or supported by ``reference``."""

    return month_or_day_strength(subject, reference) in (
        Vitality.PROSPEROUS,
        Vitality.SUPPORTED,
    )


def _pairs(*labels: str) -> frozenset[frozenset[str]]:
    return frozenset(frozenset(label) for label in labels)


_CLASHES: Final = _pairs("子午", "丑未", "寅申", "卯酉", "辰戌", "巳亥")
_HARMS: Final = _pairs("子未", "丑午", "寅巳", "卯辰", "申亥", "酉戌")
_PUNISHMENTS: Final = _pairs("寅巳", "巳申", "寅申", "丑戌", "未戌", "丑未", "子卯")
_SELF_PUNISHMENTS: Final[frozenset[str]] = frozenset("辰午酉亥")

_COMBINATIONS: Final[dict[frozenset[str], Element]] = {
    frozenset("子丑"): Element.EARTH,
    frozenset("寅亥"): Element.WOOD,
    frozenset("卯戌"): Element.FIRE,
    frozenset("辰酉"): Element.METAL,
    frozenset("巳申"): Element.WATER,
    frozenset("午未"): Element.EARTH,
}

# Earth branches advance along the Chou -> Chen -> Wei -> Xu -> Chou chain.
_ADVANCING: Final[frozenset[tuple[str, str]]] = frozenset(
    {
        ("亥", "子"),
        ("寅", "卯"),
        ("巳", "午"),
        ("申", "酉"),
        ("丑", "辰"),
        ("辰", "未"),
        ("未", "戌"),
        ("戌", "丑"),
    }
)


def _glyph(branch: EarthlyBranch | str) -> str:
    return parse_branch(branch).glyph


def is_clash(a: EarthlyBranch | str, b: EarthlyBranch | str) -> bool:
    """Return ``True`` when the branches clash (六冲)."""

    return frozenset((_glyph(a), _glyph(b))) in _CLASHES


def is_harm(a: EarthlyBranch | str, b: EarthlyBranch | str) -> bool:
    """Return ``True`` when the branches harm each other (六害)."""

    return frozenset((_glyph(a), _glyph(b))) in _HARMS


def is_punishment(a: EarthlyBranch | str, b: EarthlyBranch | str) -> bool:
    """Return ``True`` for a pairwise punishment (刑) or a self punishment."""

    ga, gb = _glyph(a), _glyph(b)
    if ga == gb:
        return ga in _SELF_PUNISHMENTS
    return frozenset((ga, gb)) in _PUNISHMENTS


def combination(a: EarthlyBranch | str, b: EarthlyBranch | str) -> Element | None:
    """Return the element produced when ``a`` and ``b`` combine (六合), if they do."""

    return _COMBINATIONS.get(frozenset((_glyph(a), _glyph(b))))


def movement(
    original: EarthlyBranch | str, transformed: EarthlyBranch | str
) -> Movement | None:
    """Return whether a moving line advances (进神) or retreats (退神)."""

    pair = (_glyph(original), _glyph(transformed))
    if pair in _ADVANCING:
        return Movement.ADVANCING
    if (pair[1], pair[0]) in _ADVANCING:
        return Movement.RETREATING
    return None


@dataclass(frozen=True)
class BranchGroup:
    """A three-branch grouping resolving to one element."""

    kind: str
    branches: tuple[EarthlyBranch, EarthlyBranch, EarthlyBranch]
    element: Element

    def label(self) -> str:
        return "".join(branch.glyph for branch in self.branches)


def _group(kind: str, glyphs: str, element: Element) -> BranchGroup:
    branches = tuple(parse_branch(glyph) for glyph in glyphs)
    return BranchGroup(kind, branches, element)  # type: ignore[arg-type]


TRIADS: Final[tuple[BranchGroup, ...]] = (
    _group("triad", "申子辰", Element.WATER),
    _group("triad", "亥卯未", Element.WOOD),
    _group("triad", "寅午戌", Element.FIRE),
    _group("triad", "巳酉丑", Element.METAL),
)

SEASONAL_TRIOS: Final[tuple[BranchGroup, ...]] = (
    _group("trio", "亥子丑", Element.WATER),
    _group("trio", "寅卯辰", Element.WOOD),
    _group("trio", "巳午未", Element.FIRE),
    _group("trio", "申酉戌", Element.METAL),
)


LIFE_STAGES: Final[tuple[str, ...]] = (
    "长生",
    "沐浴",
    "冠带",
    "临官",
    "帝旺",
    "衰",
    "病",
    "死",
    "墓",
    "绝",
    "胎",
    "养",
)

_LIFE_STAGE_START: Final[dict[Element, EarthlyBranch]] = {
    Element.WOOD: EARTHLY_BRANCHES[11],
    Element.FIRE: EARTHLY_BRANCHES[2],
    Element.EARTH: EARTHLY_BRANCHES[8],
    Element.METAL: EARTHLY_BRANCHES[5],
    Element.WATER: EARTHLY_BRANCHES[8],
}


def life_stage(element: Element, branch: EarthlyBranch | str) -> str:
    """Return the twelve-stage life phase (长生十二宫) of ``element`` at ``branch``."""

    start = _LIFE_STAGE_START[element]
    offset = (parse_branch(branch).index - start.index) % len(LIFE_STAGES)
    return LIFE_STAGES[offset]
