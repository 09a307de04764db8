"""Render reading facts and charts to display text."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Any

from ..annotate import LINE_POSITIONS, HexagramChart, LineInfo
from ..engine.models import AnalysisResult, Fact, FactKind
from .i18n import translate

__all__ = ["render_chart", "render_fact", "render_report", "term"]

_YANG = "▅▅▅▅▅"
_YIN = "▅▅ ▅▅"


def term(value: Any, locale: str = "zh") -> str:
    """Display form of an enum, branch, element or plain value."""

    if value is None:
        return translate("term.none", locale=locale)
    glyph = getattr(value, "glyph", None)
    if isinstance(value, Enum):
        if locale == "zh" and glyph is not None:
            return str(glyph)
        return str(value.value).replace("_", " ")
    if glyph is not None:
        return str(glyph)
    return str(value)


def _position(index: int | None, locale: str) -> str:
    if index is None:
        return ""
    return LINE_POSITIONS[index] if locale == "zh" else f"line {index + 1}"


def _line_details(data: Mapping[str, Any], locale: str) -> str:
    parts: list[str] = []
    if data.get("month"):
        parts.append(translate(f"report.month.{data['month']}", locale=locale, default=""))
    if data.get("day"):
        parts.append(translate(f"report.day.{data['day']}", locale=locale))
    for flag in ("day_broken", "month_combination", "day_combination", "day_punishment", "day_harm"):
        if data.get(flag):
            parts.append(translate(f"report.{flag}", locale=locale))
    for item in data.get("interactions", ()):
        parts.append(
            translate(
                f"report.interaction.{item['kind']}",
                locale=locale,
                position=_position(item["line"], locale),
            )
        )
    transformation = data.get("transformation")
    if transformation:
        if transformation.get("relation"):
            parts.append(translate(f"report.transformation.{transformation['relation']}", locale=locale))
        if transformation.get("movement"):
            parts.append(translate(f"term.movement.{transformation['movement']}", locale=locale).strip(" （）()"))
    transformed = data.get("transformed")
    if transformed:
        parts.append(
            translate(
                "report.transformed",
                locale=locale,
                kinship=term(transformed["kinship"], locale),
                stem_branch=transformed["stem_branch"],
            )
        )
    hidden = data.get("hidden")
    if hidden:
        parts.append(translate("report.hidden", locale=locale, hidden=hidden["label"]))
    parts = [part for part in parts if part]
    if not parts:
        return translate("report.quiet", locale=locale)
    return translate("term.separator", locale=locale).join(parts)


def render_fact(fact: Fact, *, locale: str = "zh") -> str:
    """Return one display line for ``fact``."""

    data = fact.data
    kind = fact.kind
    key = f"fact.{kind.value}"
    params: dict[str, Any] = {"points": fact.points or 0}

    if kind is FactKind.CATEGORY:
        params["category"] = term(data.get("category"), locale)
        if data.get("target") is None:
            key = "fact.category.world"
        else:
            params["target"] = term(data["target"], locale)
    elif kind is FactKind.SELECTION:
        key = f"fact.selection.{data['rule']}"
        params.update(kinship=term(data.get("kinship"), locale), position=_position(fact.line, locale))
    elif kind is FactKind.HIDDEN_CALENDAR:
        params.update(
            hidden=data["hidden"],
            month_vitality=term(data["month_vitality"], locale),
            day_vitality=term(data["day_vitality"], locale),
        )
    elif kind is FactKind.HIDDEN_RELATION:
        key = f"fact.hidden_relation.{data['relation']}"
        params.update(concealing=data["concealing"], hidden=data["hidden"])
    elif kind in (FactKind.MONTH_STRENGTH, FactKind.DAY_STRENGTH):
        params.update(element=term(data["element"], locale), vitality=term(data["vitality"], locale))
    elif kind is FactKind.TRANSFORMATION:
        movement = data.get("movement")
        params.update(
            transformed=data["transformed"],
            relation=translate(f"term.relation.{data['relation']}", locale=locale),
            movement=translate(f"term.movement.{movement}", locale=locale) if movement else "",
        )
    elif kind is FactKind.DAY_PUNISHMENT and data.get("self"):
        key = "fact.day_punishment.self"
    elif kind is FactKind.STRENGTH_VERDICT:
        params.update(score=data["score"], level=term(data["level"], locale))
    elif kind in (
        FactKind.HIDDEN_ADJUSTMENT,
        FactKind.BUREAU_ADJUSTMENT,
        FactKind.MOVING_LINE_ADJUSTMENT,
    ):
        params.update(total=data.get("total", 0), before=data["before"], after=data["after"])
    elif kind is FactKind.LIFE_STAGE:
        params.update(element=term(data["element"], locale), branch=data["branch"], stage=data["stage"])
    elif kind is FactKind.LINE_REPORT:
        params.update(
            position=_position(fact.line, locale),
            kinship=term(data["kinship"], locale),
            stem_branch=data["stem_branch"],
            details=_line_details(data, locale),
        )
    elif kind is FactKind.MOVING_LINE:
        acting = data.get("acts_on_governing")
        extra = ""
        if acting in ("generates", "controls"):
            extra = translate(f"fact.moving_line.acts.{acting}", locale=locale)
        params.update(
            position=_position(fact.line, locale),
            kinship=term(data["kinship"], locale),
            stem_branch=data["stem_branch"],
            transformed_kinship=term(data["transformed_kinship"], locale),
            transformed=data["transformed"],
            extra=extra,
        )
    elif kind is FactKind.BUREAU:
        params.update(
            kind=translate(f"fact.bureau.{data['kind']}", locale=locale),
            branches=data["branches"],
            element=term(data["element"], locale),
            substance=translate(
                "fact.bureau.substantial" if data["substantial"] else "fact.bureau.partial",
                locale=locale,
            ),
        )
    elif kind is FactKind.JUDGMENT:
        params.update(judgment=term(data["judgment"], locale), strength=data["strength"])
    elif kind is FactKind.MARRIAGE_NOTE:
        gender = str(data.get("gender") or "male")
        key = f"fact.marriage_note.{gender}.{'strong' if data.get('strong') else 'weak'}"
    elif kind is FactKind.TIMING:
        params["element"] = term(data["element"], locale)

    return translate(key, locale=locale, **params)


def _line_row(line: LineInfo, moving: bool, locale: str) -> str:
    symbol = _YANG if line.yang else _YIN
    if moving:
        symbol += " ○" if line.yang else " ×"
    return translate(
        "chart.line",
        locale=locale,
        spirit=term(line.spirit, locale),
        kinship=term(line.kinship, locale),
        stem_branch=line.stem_branch.label(),
        symbol=symbol,
        marker=line.marker,
    ).rstrip()


def render_chart(
    chart: HexagramChart,
    changed: tuple[bool, ...] = (False,) * 6,
    *,
    locale: str = "zh",
) -> list[str]:
    """Return the chart rows, top line first, with hidden spirits beneath their line."""

    rows = [
        translate(
            "chart.title",
            locale=locale,
            name=chart.name,
            palace=chart.palace.name,
            number=chart.record.number,
            title=chart.record.title,
        )
    ]
    for line in reversed(chart.lines):
        rows.append(_line_row(line, changed[line.index], locale))
        if line.hidden is not None:
            rows.append(translate("chart.hidden", locale=locale, hidden=line.hidden.label()))
    if chart.body is not None:
        rows.append(translate("chart.body", locale=locale, body=chart.body.glyph))
    return rows


def render_report(
    result: AnalysisResult,
    *,
    locale: str = "zh",
    include_line_report: bool = True,
) -> str:
    """Format a complete reading: chart, trace, verdict and commentary."""

    context = result.context
    rows = [
        translate(
            "chart.calendar",
            locale=locale,
            month=context.month_branch.glyph,
            day_stem=context.day_stem.glyph,
            day_branch=context.day_branch.glyph,
            void="".join(branch.glyph for branch in context.void_branches) or "-",
        )
    ]
    rows.extend(render_chart(result.original_chart, context.changed, locale=locale))
    if any(context.changed):
        rows.append(translate("chart.transformed", locale=locale, name=result.transformed_chart.name))
    else:
        rows.append(translate("chart.static", locale=locale))
    rows.append("")

    for fact in result.facts:
        if fact.kind is FactKind.LINE_REPORT and not include_line_report:
            continue
        rows.append(render_fact(fact, locale=locale))

    decoration = result.decoration
    texts: list[str] = []
    if decoration.hexagram_text is not None and decoration.hexagram_text.judgment:
        texts.append(
            translate("report.decoration.judgment", locale=locale, text=decoration.hexagram_text.judgment)
        )
    if decoration.image:
        texts.append(translate("report.decoration.image", locale=locale, text=decoration.image))
    for line_text in decoration.line_texts:
        texts.append(
            translate("report.decoration.line", locale=locale, name=line_text.name, text=line_text.text)
        )
    if texts:
        rows.append("")
        rows.extend(texts)
    return "\n".join(rows)
