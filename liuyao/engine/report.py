"""Per-line report and moving-line interaction facts."""

from __future__ import annotations

from typing import Any, Sequence

from ..annotate import HexagramChart, LineInfo
from ..chinese.constants import EarthlyBranch, Element
from ..elements import (
    Relation,
    combination,
    controls,
    generates,
    is_clash,
    is_harm,
    is_punishment,
    is_strong,
    month_or_day_strength,
    movement,
    relation,
)
from .models import Fact, FactKind

__all__ = ["line_reports", "moving_line_facts", "transformation_relation"]


def _month_relation(branch: EarthlyBranch, element: Element, month: EarthlyBranch) -> str:
    if branch == month:
        return "on_month"
    if generates(month.element, element):
        return "month_generates"
    if controls(month.element, element):
        return "month_controls"
    return month_or_day_strength(element, month.element).value


def _day_relation(branch: EarthlyBranch, element: Element, day: EarthlyBranch) -> str | None:
    if branch == day:
        return "on_day"
    if generates(day.element, element):
        return "day_generates"
    if controls(day.element, element):
        return "day_controls"
    if is_clash(day, branch):
        return "day_clashes"
    return None


def transformation_relation(original: Element, transformed: Element) -> str | None:
    """Name the relation between a moving line and what it turns into."""

    back = relation(transformed, original)
    if back is Relation.GENERATES:
        return "return_generate"
    if back is Relation.CONTROLS:
        return "return_control"
    forward = relation(original, transformed)
    if forward is Relation.GENERATES:
        return "drain"
    if forward is Relation.CONTROLS:
        return "control_transformed"
    return None


def _interactions(
    line: LineInfo, chart: HexagramChart, changed: Sequence[bool]
) -> tuple[dict[str, Any], ...]:
    found: list[dict[str, Any]] = []
    for other in reversed(chart.lines):
        if other.index == line.index:
            continue
        if is_clash(line.branch, other.branch):
            found.append({"kind": "clash", "line": other.index})
        if not changed[other.index]:
            continue
        acting = relation(other.element, line.element)
        if acting is Relation.GENERATES:
            found.append({"kind": "generates", "line": other.index})
        elif acting is Relation.CONTROLS:
            found.append({"kind": "controls", "line": other.index})
        combo = combination(line.branch, other.branch)
        if combo is not None:
            found.append({"kind": "combination", "line": other.index, "element": combo})
        if is_harm(line.branch, other.branch):
            found.append({"kind": "harm", "line": other.index})
        if is_punishment(line.branch, other.branch):
            found.append({"kind": "punishment", "line": other.index})
    return tuple(found)


def _line_report(
    line: LineInfo,
    original: HexagramChart,
    transformed: HexagramChart,
    changed: Sequence[bool],
    month: EarthlyBranch,
    day: EarthlyBranch,
    void_branches: Sequence[EarthlyBranch],
) -> Fact:
    data: dict[str, Any] = {
        "position": line.position,
        "stem_branch": line.stem_branch.label(),
        "kinship": line.kinship,
        "month": _month_relation(line.branch, line.element, month),
        "day": _day_relation(line.branch, line.element, day),
        "day_broken": is_clash(day, line.branch) and not is_strong(line.element, month.element),
        "month_combination": combination(line.branch, month),
        "day_combination": combination(line.branch, day),
        "day_punishment": is_punishment(line.branch, day),
        "day_harm": is_harm(line.branch, day),
        "interactions": _interactions(line, original, changed),
        "transformation": None,
        "transformed": None,
        "hidden": None,
    }

    if changed[line.index]:
        after = transformed.lines[line.index]
        data["transformation"] = {
            "relation": transformation_relation(line.element, after.element),
            "movement": movement(line.branch, after.branch),
        }
        on_month = after.branch == month
        on_day = after.branch == day
        data["transformed"] = {
            "stem_branch": after.stem_branch.label(),
            "kinship": after.kinship,
            "month": "on_month" if on_month else (
                "month_generates" if generates(month.element, after.element) else None
            ),
            "day": "on_day" if on_day else (
                "day_generates" if generates(day.element, after.element) else None
            ),
        }

    if line.hidden is not None:
        hidden = line.hidden.stem_branch
        downward = relation(line.element, hidden.element)
        upward = relation(hidden.element, line.element)
        data["hidden"] = {
            "label": line.hidden.label(),
            "kinship": line.hidden.kinship,
            "month_controls": controls(month.element, hidden.element),
            "day_controls": controls(day.element, hidden.element),
            "concealing_generates": downward is Relation.GENERATES,
            "concealing_controls": downward is Relation.CONTROLS,
            "hidden_generates": upward is Relation.GENERATES,
            "hidden_controls": upward is Relation.CONTROLS,
            "void": hidden.branch in void_branches,
        }

    return Fact(FactKind.LINE_REPORT, line=line.index, data=data)


def line_reports(
    original: HexagramChart,
    transformed: HexagramChart,
    changed: Sequence[bool],
    month_branch: EarthlyBranch,
    day_branch: EarthlyBranch,
    void_branches: Sequence[EarthlyBranch] = (),
) -> list[Fact]:
    """Return one report fact per line, top line first."""

    return [
        _line_report(
            line, original, transformed, changed, month_branch, day_branch, tuple(void_branches)
        )
        for line in reversed(original.lines)
    ]


def moving_line_facts(
    original: HexagramChart,
    transformed: HexagramChart,
    changed: Sequence[bool],
    governing_index: int,
    governing: Element,
) -> list[Fact]:
    """Describe each moving line's transformation and how it acts on the governing element."""

    facts: list[Fact] = []
    for line in original.lines:
        if not changed[line.index]:
            continue
        after = transformed.lines[line.index]
        acting: str | None = None
        if line.index != governing_index:
            rel = relation(line.element, governing)
            if rel is Relation.GENERATES:
                acting = "generates"
            elif rel is Relation.CONTROLS:
                acting = "controls"
            else:
                acting = "none"
        facts.append(
            Fact(
                FactKind.MOVING_LINE,
                line=line.index,
                data={
                    "position": line.position,
                    "stem_branch": line.stem_branch.label(),
                    "kinship": line.kinship,
                    "element": line.element,
                    "transformed": after.stem_branch.label(),
                    "transformed_kinship": after.kinship,
                    "transformed_element": after.element,
                    "movement": movement(line.branch, after.branch),
                    "relation": transformation_relation(line.element, after.element),
                    "governing": governing_index == line.index,
                    "acts_on_governing": acting,
                    "governing_element": governing,
                },
            )
        )
    return facts
