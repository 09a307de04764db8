"""Reading orchestration: from an :class:`AnalysisContext` to an :class:`AnalysisResult`."""

from __future__ import annotations

import logging

from ..annotate import annotate, annotate_transformed
from ..corpus import CorpusIndex, great_image, line_name
from ..elements import life_stage
from .bureau import adjust_for_bureaus, build_pool, detect_bureaus
from .models import (
    AnalysisContext,
    AnalysisResult,
    Category,
    Decoration,
    Fact,
    FactKind,
    Gender,
    Judgment,
    Strength,
    StrengthLevel,
    StrengthNote,
    Timing,
)
from .report import line_reports, moving_line_facts
from .selection import governing_kinship, select_governing_line
from .strength import adjust_for_hidden, hidden_spirit_facts, score_line

__all__ = ["analyze", "judge"]

LOG = logging.getLogger(__name__)

_JUDGMENTS = {
    StrengthLevel.STRONG: Judgment.AUSPICIOUS,
    StrengthLevel.NEUTRAL: Judgment.NEUTRAL,
    StrengthLevel.WEAK: Judgment.INAUSPICIOUS,
}


def judge(strength: Strength) -> Judgment:
    """Map a strength (whatever its note) to a judgment."""

    return _JUDGMENTS[strength.level]


def _apply_moving_line_support(
    strength: Strength, moving_facts: list[Fact]
) -> tuple[Strength, list[Fact]]:
    adjustments: list[Fact] = []
    for fact in moving_facts:
        acting = fact.data["acts_on_governing"]
        before = strength
        if acting == "generates" and strength.level is StrengthLevel.WEAK:
            strength = Strength(StrengthLevel.STRONG, StrengthNote.ORIGIN_SUPPORT)
        elif acting == "controls" and strength.level is StrengthLevel.STRONG:
            strength = Strength(StrengthLevel.WEAK, StrengthNote.TABOO_SUPPRESSION)
        if strength != before:
            adjustments.append(
                Fact(
                    FactKind.MOVING_LINE_ADJUSTMENT,
                    line=fact.line,
                    data={"before": before.label(), "after": strength.label()},
                )
            )
    return strength, adjustments


def _decorate(corpus: CorpusIndex, context: AnalysisContext, name: str) -> Decoration:
    hexagram_text = corpus.lookup(name).hexagram
    line_texts = []
    for index, moving in enumerate(context.changed):
        if not moving:
            continue
        text = corpus.lookup(name, line_name(index, context.original[index])).line
        if text is not None:
            line_texts.append(text)
    return Decoration(
        hexagram_text=hexagram_text, line_texts=tuple(line_texts), image=great_image(name)
    )


def analyze(
    context: AnalysisContext,
    *,
    corpus: CorpusIndex | None = None,
    moving_line_support: bool = False,
) -> AnalysisResult:
    """Run the full reading for ``context``.

    Raises :class:`~liuyao.exceptions.YongShenAbsent` when the governing kinship
    cannot be found. ``moving_line_support`` enables the optional phase where a
    moving line generating (controlling) the governing element lifts (drops)
    its strength.
    """

    original = annotate(context.original, context.day_stem)
    transformed = annotate_transformed(
        context.transformed, context.day_stem, original.palace.element
    )
    month, day, void = context.month_branch, context.day_branch, context.void_branches

    facts: list[Fact] = []
    target = governing_kinship(context.category, context.gender)
    facts.append(
        Fact(
            FactKind.CATEGORY,
            data={"category": context.category, "target": target},
        )
    )

    selection = select_governing_line(original, target, context.changed, month, day)
    index = selection.index
    line = original.lines[index]
    facts.append(
        Fact(
            FactKind.SELECTION,
            line=index,
            data={
                "rule": selection.rule,
                "kinship": target if target is not None else line.kinship,
                "candidates": selection.candidates,
                "position": line.position,
            },
        )
    )
    LOG.debug("governing line %d selected by %s", index, selection.rule)

    subject = line.stem_branch
    hidden_total = 0
    if selection.hidden and line.hidden is not None:
        subject = line.hidden.stem_branch
        hidden_total, hidden_facts = hidden_spirit_facts(
            line.stem_branch, subject, month, day, void, index=index
        )
        facts.extend(hidden_facts)

    moving = context.changed[index]
    assessment = score_line(
        subject,
        transformed.lines[index].stem_branch if moving else None,
        moving,
        month,
        day,
        void,
        index=index,
    )
    facts.extend(assessment.facts)
    facts.append(
        Fact(
            FactKind.STRENGTH_VERDICT,
            line=index,
            data={"score": assessment.score, "level": assessment.level},
        )
    )

    strength = Strength(assessment.level)
    if selection.hidden:
        adjusted = adjust_for_hidden(strength, hidden_total)
        facts.append(
            Fact(
                FactKind.HIDDEN_ADJUSTMENT,
                line=index,
                data={"total": hidden_total, "before": strength.label(), "after": adjusted.label()},
            )
        )
        strength = adjusted

    facts.append(
        Fact(
            FactKind.LIFE_STAGE,
            line=index,
            data={
                "element": subject.element,
                "branch": day.glyph,
                "stage": life_stage(subject.element, day),
            },
        )
    )

    facts.extend(line_reports(original, transformed, context.changed, month, day, void))

    moving_facts = moving_line_facts(
        original, transformed, context.changed, index, subject.element
    )
    facts.extend(moving_facts)
    if moving_line_support:
        strength, adjustments = _apply_moving_line_support(strength, moving_facts)
        facts.extend(adjustments)

    pool = build_pool(original, transformed, context.changed, day, month)
    findings = detect_bureaus(pool, subject.branch, subject.element)
    facts.extend(finding.to_fact() for finding in findings)
    if findings:
        bureau_total = sum(finding.points for finding in findings)
        adjusted = adjust_for_bureaus(strength, bureau_total)
        facts.append(
            Fact(
                FactKind.BUREAU_ADJUSTMENT,
                data={"total": bureau_total, "before": strength.label(), "after": adjusted.label()},
            )
        )
        strength = adjusted

    judgment = judge(strength)
    facts.append(
        Fact(
            FactKind.JUDGMENT,
            data={"judgment": judgment, "strength": strength.label()},
        )
    )
    if context.category is Category.MARRIAGE:
        facts.append(
            Fact(
                FactKind.MARRIAGE_NOTE,
                data={
                    "gender": context.gender or Gender.MALE,
                    "strong": strength.is_strong,
                    "kinship": target,
                },
            )
        )

    timing = Timing(subject.element)
    facts.append(Fact(FactKind.TIMING, data={"element": subject.element}))

    decoration = Decoration()
    if corpus is not None:
        decoration = _decorate(corpus, context, original.name)

    LOG.debug(
        "reading %s -> %s: score=%d strength=%s judgment=%s",
        original.name,
        transformed.name,
        assessment.score,
        strength.label(),
        judgment,
    )
    return AnalysisResult(
        context=context,
        original_chart=original,
        transformed_chart=transformed,
        target=target,
        governing_index=index,
        governing_line=line,
        hidden=selection.hidden,
        governing_stem_branch=subject,
        score=assessment.score,
        strength=strength,
        judgment=judgment,
        timing=timing,
        facts=tuple(facts),
        decoration=decoration,
    )
