"""Divination engine: governing-line selection, scoring, bureaus and judgment."""

from __future__ import annotations

from .analysis import analyze, judge
from .bureau import BureauFinding, PoolMember, PoolTag, build_pool, detect_bureaus
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
from .selection import Selection, SelectionRule, governing_kinship, select_governing_line
from .strength import StrengthAssessment, level_for_score, score_line

__all__ = [
    "AnalysisContext",
    "AnalysisResult",
    "BureauFinding",
    "Category",
    "Decoration",
    "Fact",
    "FactKind",
    "Gender",
    "Judgment",
    "PoolMember",
    "PoolTag",
    "Selection",
    "SelectionRule",
    "Strength",
    "StrengthAssessment",
    "StrengthLevel",
    "StrengthNote",
    "Timing",
    "analyze",
    "build_pool",
    "detect_bureaus",
    "governing_kinship",
    "judge",
    "level_for_score",
    "score_line",
    "select_governing_line",
]
