"""Strength scoring of the governing line against calendar and transformation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..chinese.constants import EarthlyBranch, StemBranch
from ..elements import (
    Movement,
    Relation,
    combination,
    is_clash,
    is_harm,
    is_punishment,
    is_strong,
    month_or_day_strength,
    movement,
    relation,
)
from .models import Fact, FactKind, Strength, StrengthLevel, StrengthNote

__all__ = [
    "StrengthAssessment",
    "adjust_for_hidden",
    "demote",
    "hidden_spirit_facts",
    "level_for_score",
    "promote",
    "score_line",
]


@dataclass(frozen=True)
class StrengthAssessment:
    score: int
    level: StrengthLevel
    facts: tuple[Fact, ...]


def level_for_score(score: int) -> StrengthLevel:
    if score > 0:
        return StrengthLevel.STRONG
    if score == 0:
        return StrengthLevel.NEUTRAL
    return StrengthLevel.WEAK


def _transformation_fact(
    subject: StemBranch, transformed: StemBranch, index: int | None
) -> Fact:
    step = movement(subject.branch, transformed.branch)
    back = relation(transformed.element, subject.element)
    if step is Movement.ADVANCING:
        points = 3
    elif step is Movement.RETREATING:
        points = -5
    elif back is Relation.GENERATES:
        points = 3
    elif back is Relation.CONTROLS:
        points = -5
    elif back is Relation.GENERATED_BY:
        points = -2
    else:
        points = 0
    return Fact(
        FactKind.TRANSFORMATION,
        line=index,
        points=points,
        data={
            "transformed": transformed.label(),
            "element": transformed.element,
            "relation": back,
            "movement": step,
        },
    )


def score_line(
    subject: StemBranch,
    transformed: StemBranch | None,
    moving: bool,
    month_branch: EarthlyBranch,
    day_branch: EarthlyBranch,
    void_branches: Iterable[EarthlyBranch] = (),
    *,
    index: int | None = None,
) -> StrengthAssessment:
    """Score ``subject`` and return the level with every contribution.

    ``transformed`` is only consulted when ``moving`` is true. Advancing or
    retreating takes precedence over the element relation of the
    transformation.
    """

    facts: list[Fact] = []
    branch = subject.branch
    element = subject.element

    month_grade = month_or_day_strength(element, month_branch.element)
    month_strong = is_strong(element, month_branch.element)
    facts.append(
        Fact(
            FactKind.MONTH_STRENGTH,
            line=index,
            points=2 if month_strong else 0,
            data={"element": month_branch.element, "vitality": month_grade},
        )
    )
    day_grade = month_or_day_strength(element, day_branch.element)
    facts.append(
        Fact(
            FactKind.DAY_STRENGTH,
            line=index,
            points=2 if is_strong(element, day_branch.element) else 0,
            data={"element": day_branch.element, "vitality": day_grade},
        )
    )

    if moving and transformed is not None:
        facts.append(_transformation_fact(subject, transformed, index))

    if is_clash(month_branch, branch):
        facts.append(Fact(FactKind.MONTH_CLASH, line=index, points=-4))
    month_combo = combination(month_branch, branch)
    if month_combo is not None:
        facts.append(
            Fact(FactKind.MONTH_COMBINATION, line=index, points=2, data={"element": month_combo})
        )
    day_combo = combination(day_branch, branch)
    if day_combo is not None:
        facts.append(
            Fact(FactKind.DAY_COMBINATION, line=index, points=2, data={"element": day_combo})
        )
    if is_harm(day_branch, branch):
        facts.append(Fact(FactKind.DAY_HARM, line=index, points=-1))
    if is_punishment(day_branch, branch):
        facts.append(
            Fact(
                FactKind.DAY_PUNISHMENT,
                line=index,
                points=-1,
                data={"self": day_branch == branch},
            )
        )

    if branch in tuple(void_branches):
        facts.append(Fact(FactKind.VOID, line=index, points=-1))

    if is_clash(day_branch, branch):
        if moving:
            facts.append(Fact(FactKind.DAY_CLASH, line=index, points=-1))
        elif month_strong:
            facts.append(Fact(FactKind.LATENT_ACTIVATION, line=index, points=1))
        else:
            facts.append(Fact(FactKind.DAY_BROKEN, line=index, points=-3))

    score = sum(fact.points or 0 for fact in facts)
    return StrengthAssessment(score=score, level=level_for_score(score), facts=tuple(facts))


def hidden_spirit_facts(
    concealing: StemBranch,
    hidden: StemBranch,
    month_branch: EarthlyBranch,
    day_branch: EarthlyBranch,
    void_branches: Iterable[EarthlyBranch] = (),
    *,
    index: int | None = None,
) -> tuple[int, tuple[Fact, ...]]:
    """Return the concealing-line tally for a hidden spirit and its facts."""

    facts = [
        Fact(
            FactKind.HIDDEN_CALENDAR,
            line=index,
            data={
                "hidden": hidden.label(),
                "month_vitality": month_or_day_strength(hidden.element, month_branch.element),
                "day_vitality": month_or_day_strength(hidden.element, day_branch.element),
            },
        )
    ]

    downward = relation(concealing.element, hidden.element)
    upward = relation(hidden.element, concealing.element)
    if downward is Relation.GENERATES:
        points, kind = 2, "concealing_generates"
    elif downward is Relation.CONTROLS:
        points, kind = -2, "concealing_controls"
    elif upward is Relation.GENERATES:
        points, kind = -1, "hidden_generates"
    elif upward is Relation.CONTROLS:
        points, kind = 1, "hidden_controls"
    else:
        points, kind = 0, "neutral"
    facts.append(
        Fact(
            FactKind.HIDDEN_RELATION,
            line=index,
            points=points,
            data={"relation": kind, "concealing": concealing.label(), "hidden": hidden.label()},
        )
    )
    if hidden.branch in tuple(void_branches):
        facts.append(Fact(FactKind.HIDDEN_VOID, line=index, points=-2))
    if is_clash(month_branch, hidden.branch):
        facts.append(Fact(FactKind.HIDDEN_MONTH_BROKEN, line=index, points=-4))

    total = sum(fact.points or 0 for fact in facts)
    return total, tuple(facts)


def promote(strength: Strength, note: StrengthNote, *, to_strong: bool = False) -> Strength:
    """Lift ``strength`` one step (or straight to strong), noting the cause when leaving weak."""

    if strength.level is StrengthLevel.WEAK:
        target = StrengthLevel.STRONG if to_strong else StrengthLevel.NEUTRAL
        return Strength(target, note)
    if strength.level is StrengthLevel.NEUTRAL:
        return Strength(StrengthLevel.STRONG)
    return strength


def demote(strength: Strength, note: StrengthNote, *, to_weak: bool = False) -> Strength:
    """Drop ``strength`` one step (or straight to weak), noting the cause when leaving strong."""

    if strength.level is StrengthLevel.STRONG:
        target = StrengthLevel.WEAK if to_weak else StrengthLevel.NEUTRAL
        return Strength(target, note)
    if strength.level is StrengthLevel.NEUTRAL:
        return Strength(StrengthLevel.WEAK)
    return strength


def adjust_for_hidden(strength: Strength, total: int) -> Strength:
    if total >= 2:
        return promote(strength, StrengthNote.CONCEALING_SUPPORT)
    if total <= -2:
        return demote(strength, StrengthNote.CONCEALING_SUPPRESSION)
    return strength
