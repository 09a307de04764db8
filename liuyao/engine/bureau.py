"""Triad (三合) and seasonal-trio (三会) bureau detection."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence

from ..annotate import HexagramChart
from ..chinese.constants import EarthlyBranch, Element
from ..elements import (
    SEASONAL_TRIOS,
    TRIADS,
    BranchGroup,
    controls,
    generates,
    is_clash,
    is_strong,
)
from .models import Fact, FactKind, Strength, StrengthNote
from .strength import demote, promote

__all__ = [
    "BureauFinding",
    "PoolMember",
    "PoolTag",
    "adjust_for_bureaus",
    "build_pool",
    "detect_bureaus",
]


class PoolTag(StrEnum):
    DAY = "day"
    MONTH = "month"
    MOVING = "moving"
    LATENT = "latent"
    STATIC = "static"
    TRANSFORMED = "transformed"


@dataclass(frozen=True)
class PoolMember:
    branch: EarthlyBranch
    tag: PoolTag
    line: int | None = None

    def to_payload(self) -> dict[str, object]:
        return {"branch": self.branch.glyph, "tag": self.tag.value, "line": self.line}


@dataclass(frozen=True)
class BureauFinding:
    group: BranchGroup
    members: tuple[PoolMember, ...]
    substantial: bool
    points: int

    def to_fact(self) -> Fact:
        return Fact(
            FactKind.BUREAU,
            points=self.points,
            data={
                "kind": self.group.kind,
                "branches": self.group.label(),
                "element": self.group.element,
                "substantial": self.substantial,
                "members": tuple(member.to_payload() for member in self.members),
            },
        )


def build_pool(
    original: HexagramChart,
    transformed: HexagramChart,
    changed: Sequence[bool],
    day_branch: EarthlyBranch,
    month_branch: EarthlyBranch,
) -> list[PoolMember]:
    """Collect bureau candidates: day, month, then each line and its transformation."""

    pool = [PoolMember(day_branch, PoolTag.DAY), PoolMember(month_branch, PoolTag.MONTH)]
    for line in original.lines:
        if changed[line.index]:
            tag = PoolTag.MOVING
        elif is_strong(line.element, month_branch.element) and is_clash(day_branch, line.branch):
            tag = PoolTag.LATENT
        else:
            tag = PoolTag.STATIC
        pool.append(PoolMember(line.branch, tag, line.index))
        if changed[line.index]:
            pool.append(
                PoolMember(transformed.lines[line.index].branch, PoolTag.TRANSFORMED, line.index)
            )
    return pool


def _score(
    group: BranchGroup, substantial: bool, governing_branch: EarthlyBranch, governing: Element
) -> int:
    if not substantial:
        return 1 if group.element is governing or generates(group.element, governing) else 0
    triad = group.kind == "triad"
    if governing_branch in group.branches:
        return 4 if triad else 5
    if group.element is governing:
        return 3
    if generates(group.element, governing):
        return 2
    if controls(group.element, governing):
        return -4 if triad else -5
    return 0


def detect_bureaus(
    pool: Sequence[PoolMember], governing_branch: EarthlyBranch, governing: Element
) -> list[BureauFinding]:
    """Return every triad and trio present in ``pool`` that moving energy takes part in."""

    findings: list[BureauFinding] = []
    for group in TRIADS + SEASONAL_TRIOS:
        members = []
        for branch in group.branches:
            member = next((m for m in pool if m.branch == branch), None)
            if member is None:
                break
            members.append(member)
        else:
            active = sum(m.tag in (PoolTag.MOVING, PoolTag.LATENT) for m in members)
            calendar = sum(m.tag in (PoolTag.DAY, PoolTag.MONTH) for m in members)
            changed = sum(m.tag is PoolTag.TRANSFORMED for m in members)
            substantial = (
                active == 3
                or (active == 2 and calendar >= 1)
                or (active == 1 and changed >= 1 and calendar >= 1)
            )
            if not substantial and active == 0 and changed == 0:
                continue
            findings.append(
                BureauFinding(
                    group=group,
                    members=tuple(members),
                    substantial=substantial,
                    points=_score(group, substantial, governing_branch, governing),
                )
            )
    return findings


def adjust_for_bureaus(strength: Strength, total: int) -> Strength:
    if total >= 3:
        return promote(strength, StrengthNote.BUREAU_SUPPORT, to_strong=True)
    if total <= -3:
        return demote(strength, StrengthNote.BUREAU_SUPPRESSION, to_weak=True)
    return strength
