"""Utilities for working with the sixty Jia-Zi combinations."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from typing import Final

from .constants import (
    EARTHLY_BRANCHES,
    HEAVENLY_STEMS,
    EarthlyBranch,
    HeavenlyStem,
    StemBranch,
)

SEXAGENARY_CYCLE_LENGTH: Final[int] = 60

# 1949-10-01 is a Jia-Zi day in every published almanac.
_DAY_ZERO = date(1949, 10, 1)
_DAY_ZERO_INDEX: Final[int] = 0


@dataclass(frozen=True)
class SexagenaryCycleEntry:
    """Pairing of a Heavenly Stem and Earthly Branch."""

    index: int
    stem_index: int
    branch_index: int

    @property
    def stem(self) -> HeavenlyStem:
        return HEAVENLY_STEMS[self.stem_index]

    @property
    def branch(self) -> EarthlyBranch:
        return EARTHLY_BRANCHES[self.branch_index]

    @property
    def stem_branch(self) -> StemBranch:
        return StemBranch(self.stem, self.branch)

    def label(self) -> str:
        """Return the two-glyph label (e.g., ``甲子``)."""

        return f"{self.stem.glyph}{self.branch.glyph}"


_FIRST_MONTH_STEM_INDEX: Final[dict[int, int]] = {
    0: 2,  # Jia -> Bing Yin
    5: 2,  # Ji -> Bing Yin
    1: 4,  # Yi -> Wu Yin
    6: 4,  # Geng -> Wu Yin
    2: 6,  # Bing -> Geng Yin
    7: 6,  # Xin -> Geng Yin
    3: 8,  # Ding -> Ren Yin
    8: 8,  # Ren -> Ren Yin
    4: 0,  # Wu -> Jia Yin
    9: 0,  # Gui -> Jia Yin
}

# Approximate civil day of each month's "jie" solar term, which opens a solar month.
_JIE_DAY: Final[dict[int, int]] = {
    1: 6,  # Xiao Han -> Chou month
    2: 4,  # Li Chun -> Yin month
    3: 6,
    4: 5,
    5: 6,
    6: 6,
    7: 7,
    8: 8,
    9: 8,
    10: 8,
    11: 7,
    12: 7,  # Da Xue -> Zi month
}

_MONTH_BRANCH_OFFSET: Final[int] = 1  # Tiger (Yin) is the first solar month.


def sexagenary_entry_for_index(index: int) -> SexagenaryCycleEntry:
    """Return the cycle entry for ``index`` (0-59)."""

    idx = index % SEXAGENARY_CYCLE_LENGTH
    return SexagenaryCycleEntry(index=idx, stem_index=idx % 10, branch_index=idx % 12)


def sexagenary_index(stem_index: int, branch_index: int) -> int:
    """Return the 0-59 index for the provided stem/branch combination."""

    target_stem = stem_index % 10
    target_branch = branch_index % 12
    for idx in range(SEXAGENARY_CYCLE_LENGTH):
        if idx % 10 == target_stem and idx % 12 == target_branch:
            return idx
    msg = f"Invalid stem/branch pairing: stem={stem_index}, branch={branch_index}"
    raise ValueError(msg)


def _normalize_datetime(moment: datetime, tz: tzinfo | None) -> datetime:
    if moment.tzinfo is None:
        if tz is not None:
            return moment.replace(tzinfo=tz)
        return moment.replace(tzinfo=UTC)
    if tz is not None:
        return moment.astimezone(tz)
    return moment


def _solar_month_number(moment: datetime) -> int:
    """Return the solar month (1 = Yin month ... 12 = Chou month) of ``moment``."""

    if moment.day >= _JIE_DAY[moment.month]:
        number = moment.month - 1
    else:
        number = moment.month - 2
    return (number - 1) % 12 + 1


def _solar_year(moment: datetime) -> int:
    """Return the stem/branch solar year (using Start of Spring on Feb 4)."""

    if moment.month < 2:
        return moment.year - 1
    if moment.month == 2 and moment.day < _JIE_DAY[2]:
        return moment.year - 1
    return moment.year


def year_cycle_index(moment: datetime, tz: tzinfo | None = None) -> int:
    """Return the sexagenary index for the solar year containing ``moment``."""

    local_moment = _normalize_datetime(moment, tz)
    return (_solar_year(local_moment) - 4) % SEXAGENARY_CYCLE_LENGTH


def month_cycle_index(moment: datetime, tz: tzinfo | None = None) -> int:
    """Return the sexagenary index for the solar month containing ``moment``."""

    local_moment = _normalize_datetime(moment, tz)
    year_index = year_cycle_index(local_moment, tz=None)
    stem_index = sexagenary_entry_for_index(year_index).stem_index

    month_number = _solar_month_number(local_moment)
    first_stem = _FIRST_MONTH_STEM_INDEX[stem_index]
    stem = (first_stem + (month_number - 1)) % 10
    branch = (month_number + _MONTH_BRANCH_OFFSET) % 12
    return sexagenary_index(stem, branch)


def day_cycle_index(moment: datetime | date, tz: tzinfo | None = None) -> int:
    """Return the sexagenary index for the local civil day containing ``moment``."""

    if isinstance(moment, datetime):
        local_day = _normalize_datetime(moment, tz).date()
    else:
        local_day = moment
    delta_days = (local_day - _DAY_ZERO).days
    return (_DAY_ZERO_INDEX + delta_days) % SEXAGENARY_CYCLE_LENGTH


def xun_void_branches(day_index: int) -> tuple[EarthlyBranch, EarthlyBranch]:
    """Return the two branches left unpaired by the ten-day week (旬空) of ``day_index``."""

    idx = day_index % SEXAGENARY_CYCLE_LENGTH
    xun_start = idx - idx % 10
    return (
        EARTHLY_BRANCHES[(xun_start + 10) % 12],
        EARTHLY_BRANCHES[(xun_start + 11) % 12],
    )


__all__ = [
    "SexagenaryCycleEntry",
    "SEXAGENARY_CYCLE_LENGTH",
    "sexagenary_entry_for_index",
    "sexagenary_index",
    "year_cycle_index",
    "month_cycle_index",
    "day_cycle_index",
    "xun_void_branches",
]
