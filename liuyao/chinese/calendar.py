"""Calendar collaborator: civil moments to the pillars a reading needs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo

from .constants import EarthlyBranch, HeavenlyStem
from .sexagenary import (
    SexagenaryCycleEntry,
    day_cycle_index,
    month_cycle_index,
    sexagenary_entry_for_index,
    xun_void_branches,
    year_cycle_index,
)

__all__ = ["CalendarContext", "calendar_context"]


@dataclass(frozen=True)
class CalendarContext:
    """Year, month and day pillars plus the day's void branches."""

    moment: datetime
    year: SexagenaryCycleEntry
    month: SexagenaryCycleEntry
    day: SexagenaryCycleEntry
    void_branches: tuple[EarthlyBranch, EarthlyBranch]

    @property
    def day_stem(self) -> HeavenlyStem:
        return self.day.stem

    @property
    def day_branch(self) -> EarthlyBranch:
        return self.day.branch

    @property
    def month_branch(self) -> EarthlyBranch:
        return self.month.branch

    def to_payload(self) -> dict[str, object]:
        return {
            "moment": self.moment.isoformat(),
            "year": self.year.label(),
            "month": self.month.label(),
            "day": self.day.label(),
            "void": [branch.glyph for branch in self.void_branches],
        }


def calendar_context(moment: datetime, tz: tzinfo | None = None) -> CalendarContext:
    """Return the :class:`CalendarContext` for ``moment`` in the local zone ``tz``."""

    if moment.tzinfo is None and tz is not None:
        moment = moment.replace(tzinfo=tz)
    elif tz is not None:
        moment = moment.astimezone(tz)

    day_index = day_cycle_index(moment)
    return CalendarContext(
        moment=moment,
        year=sexagenary_entry_for_index(year_cycle_index(moment)),
        month=sexagenary_entry_for_index(month_cycle_index(moment)),
        day=sexagenary_entry_for_index(day_index),
        void_branches=xun_void_branches(day_index),
    )
