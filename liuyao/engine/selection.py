"""Governing-line (用神) selection for a question category."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Sequence

from ..annotate import HexagramChart, Kinship
from ..chinese.constants import EarthlyBranch
from ..exceptions import YongShenAbsent
from .models import Category, Gender

__all__ = ["Selection", "SelectionRule", "governing_kinship", "select_governing_line"]

LOG = logging.getLogger(__name__)

_CATEGORY_KINSHIP: Final[dict[Category, Kinship]] = {
    Category.CAREER: Kinship.OFFICER,
    Category.WEALTH: Kinship.WEALTH,
    Category.STUDY: Kinship.PARENTS,
    Category.SAFETY: Kinship.OFFSPRING,
    Category.SIBLINGS: Kinship.SIBLINGS,
    Category.PARENTS: Kinship.PARENTS,
    Category.CHILDREN: Kinship.OFFSPRING,
}


class SelectionRule(StrEnum):
    """Which rule settled the governing line."""

    WORLD_LINE = "world_line"
    SINGLE = "single"
    WORLD = "world"
    MOVING = "moving"
    MONTH_BRANCH = "month_branch"
    DAY_BRANCH = "day_branch"
    RESPONSE = "response"
    LOWEST_INDEX = "lowest_index"
    HIDDEN = "hidden"


@dataclass(frozen=True)
class Selection:
    index: int
    rule: SelectionRule
    hidden: bool = False
    candidates: tuple[int, ...] = ()


def governing_kinship(category: Category | None, gender: Gender | None = None) -> Kinship | None:
    """Return the kinship to search for, or ``None`` when the World line itself governs.

    Marriage questions look for the Officer-Ghost for a female querent and for
    Wealth otherwise; health and unspecified questions read the World line.
    """

    if category is Category.MARRIAGE:
        return Kinship.OFFICER if gender is Gender.FEMALE else Kinship.WEALTH
    if category is None:
        return None
    return _CATEGORY_KINSHIP.get(category)


def select_governing_line(
    chart: HexagramChart,
    target: Kinship | None,
    changed: Sequence[bool],
    month_branch: EarthlyBranch,
    day_branch: EarthlyBranch,
) -> Selection:
    """Pick the governing line of ``chart`` for ``target``.

    Raises :class:`YongShenAbsent` when ``target`` is neither visible nor hidden.
    """

    if target is None:
        return Selection(chart.world_index, SelectionRule.WORLD_LINE)

    candidates = tuple(line.index for line in chart.lines if line.kinship is target)
    if not candidates:
        for line in chart.lines:
            if line.hidden is not None and line.hidden.kinship is target:
                LOG.debug("governing %s hidden under line %d", target, line.index)
                return Selection(line.index, SelectionRule.HIDDEN, hidden=True)
        raise YongShenAbsent(target.glyph)

    if len(candidates) == 1:
        return Selection(candidates[0], SelectionRule.SINGLE, candidates=candidates)

    lines = chart.lines
    cascade = (
        (SelectionRule.WORLD, lambda i: lines[i].world),
        (SelectionRule.MOVING, lambda i: bool(changed[i])),
        (SelectionRule.MONTH_BRANCH, lambda i: lines[i].branch == month_branch),
        (SelectionRule.DAY_BRANCH, lambda i: lines[i].branch == day_branch),
        (SelectionRule.RESPONSE, lambda i: lines[i].response),
    )
    for rule, matches in cascade:
        for index in candidates:
            if matches(index):
                return Selection(index, rule, candidates=candidates)
    return Selection(candidates[0], SelectionRule.LOWEST_INDEX, candidates=candidates)
