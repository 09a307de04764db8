"""Auspicious and baleful stars (神煞) attached to earthly branches.

Stars are looked up from the day stem, the day branch (by its triad) and the
month branch. They do not feed into scoring.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Final

from .chinese.constants import (
    EARTHLY_BRANCHES,
    EarthlyBranch,
    HeavenlyStem,
    parse_branch,
    parse_stem,
)

__all__ = ["Star", "StarPlacement", "star_configuration", "stars_for_branch"]


class Star(StrEnum):
    NOBLEMAN = "贵人"
    PROSPERITY = "禄神"
    GOAT_BLADE = "羊刃"
    INTELLIGENCE = "文昌"
    TRAVELLING_HORSE = "驿马"
    PEACH_BLOSSOM = "桃花"
    ROBBERY = "劫煞"
    CANOPY = "华盖"
    GENERAL = "将星"
    STRATEGY = "谋星"
    HEAVENLY_JOY = "天喜"
    CALAMITY = "灾煞"


# Keyed by day stem.
_NOBLEMAN: Final[dict[str, str]] = {
    "甲": "丑未", "戊": "丑未", "庚": "丑未",
    "乙": "子申", "己": "子申",
    "丙": "亥酉", "丁": "亥酉",
    "壬": "卯巳", "癸": "卯巳",
    "辛": "午寅",
}
_PROSPERITY: Final[dict[str, str]] = dict(zip("甲乙丙丁戊己庚辛壬癸", "寅卯巳午巳午申酉亥子"))
_GOAT_BLADE: Final[dict[str, str]] = dict(zip("甲乙丙丁戊己庚辛壬癸", "卯辰午未午未酉戌子丑"))
_INTELLIGENCE: Final[dict[str, str]] = dict(zip("甲乙丙丁戊己庚辛壬癸", "巳午申酉申酉亥子寅卯"))

# Keyed by the triad of the day branch: 申子辰, 寅午戌, 巳酉丑, 亥卯未.
_TRIAD_OF: Final[dict[str, int]] = {
    branch: group for group, members in enumerate(("申子辰", "寅午戌", "巳酉丑", "亥卯未"))
    for branch in members
}
_BY_TRIAD: Final[dict[Star, str]] = {
    Star.TRAVELLING_HORSE: "寅申亥巳",
    Star.PEACH_BLOSSOM: "酉卯午子",
    Star.ROBBERY: "巳亥寅申",
    Star.CANOPY: "辰戌丑未",
    Star.GENERAL: "子午酉卯",
    Star.STRATEGY: "戌辰未丑",
    Star.CALAMITY: "午子卯酉",
}

# Keyed by month branch.
_HEAVENLY_JOY: Final[dict[str, str]] = dict(zip("寅卯辰巳午未申酉戌亥子丑", "戌亥子丑寅卯辰巳午未申酉"))


@dataclass(frozen=True)
class StarPlacement:
    star: Star
    branches: tuple[EarthlyBranch, ...]

    def label(self) -> str:
        return f"{self.star.value}:{','.join(b.glyph for b in self.branches)}"


def stars_for_branch(
    day_stem: HeavenlyStem | str,
    day_branch: EarthlyBranch | str,
    month_branch: EarthlyBranch | str,
    branch: EarthlyBranch | str,
) -> tuple[Star, ...]:
    """Return the stars sitting on ``branch`` for the given day and month, in canonical order."""

    stem = parse_stem(day_stem).glyph
    day = parse_branch(day_branch).glyph
    month = parse_branch(month_branch).glyph
    target = parse_branch(branch).glyph
    triad = _TRIAD_OF[day]

    found: list[Star] = []
    for star in Star:
        if star is Star.NOBLEMAN:
            hit = target in _NOBLEMAN[stem]
        elif star is Star.PROSPERITY:
            hit = _PROSPERITY[stem] == target
        elif star is Star.GOAT_BLADE:
            hit = _GOAT_BLADE[stem] == target
        elif star is Star.INTELLIGENCE:
            hit = _INTELLIGENCE[stem] == target
        elif star is Star.HEAVENLY_JOY:
            hit = _HEAVENLY_JOY[month] == target
        else:
            hit = _BY_TRIAD[star][triad] == target
        if hit:
            found.append(star)
    return tuple(found)


def star_configuration(
    day_stem: HeavenlyStem | str,
    day_branch: EarthlyBranch | str,
    month_branch: EarthlyBranch | str,
) -> tuple[StarPlacement, ...]:
    """Return every star present for the day, with the branches it sits on (子 first)."""

    placements: dict[Star, list[EarthlyBranch]] = {}
    for branch in EARTHLY_BRANCHES:
        for star in stars_for_branch(day_stem, day_branch, month_branch, branch):
            placements.setdefault(star, []).append(branch)
    return tuple(
        StarPlacement(star, tuple(placements[star])) for star in Star if star in placements
    )
