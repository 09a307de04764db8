"""Stem, branch and calendar primitives shared by the rule engine."""

from __future__ import annotations

from .calendar import CalendarContext, calendar_context
from .constants import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    EarthlyBranch,
    Element,
    HeavenlyStem,
    StemBranch,
    branch_for_index,
    parse_branch,
    parse_stem,
    parse_stem_branch,
    stem_for_index,
)
from .sexagenary import (
    SEXAGENARY_CYCLE_LENGTH,
    SexagenaryCycleEntry,
    day_cycle_index,
    month_cycle_index,
    sexagenary_entry_for_index,
    sexagenary_index,
    xun_void_branches,
    year_cycle_index,
)

__all__ = [
    "CalendarContext",
    "EARTHLY_BRANCHES",
    "EarthlyBranch",
    "Element",
    "HEAVENLY_STEMS",
    "HeavenlyStem",
    "SEXAGENARY_CYCLE_LENGTH",
    "SexagenaryCycleEntry",
    "StemBranch",
    "branch_for_index",
    "calendar_context",
    "day_cycle_index",
    "month_cycle_index",
    "parse_branch",
    "parse_stem",
    "parse_stem_branch",
    "sexagenary_entry_for_index",
    "sexagenary_index",
    "stem_for_index",
    "xun_void_branches",
    "year_cycle_index",
]
