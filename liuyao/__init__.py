"""Liu Yao (六爻) hexagram divination engine.

Typical use::

    from liuyao import AnalysisContext, analyze

    context = AnalysisContext.from_hexagram(
        "111111", "100000", day_stem="甲", day_branch="子",
        month_branch="午", void_branches="戌亥", category="career",
    )
    result = analyze(context)
"""

from __future__ import annotations

from .annotate import HexagramChart, Kinship, LineInfo, SixSpirit, annotate, annotate_transformed
from .casting import CastResult, LineCast, LineType, cast_hexagram, random_casts
from .chinese import CalendarContext, calendar_context
from .engine import (
    AnalysisContext,
    AnalysisResult,
    Category,
    Fact,
    FactKind,
    Gender,
    Judgment,
    Strength,
    StrengthLevel,
    analyze,
)
from .exceptions import (
    InvalidHexagram,
    InvalidLineCast,
    LiuyaoError,
    UnknownSymbol,
    UnresolvedPalace,
    YongShenAbsent,
)
from .palace import name_of, palace_of

__version__ = "0.1.0"

__all__ = [
    "AnalysisContext",
    "AnalysisResult",
    "CalendarContext",
    "CastResult",
    "Category",
    "Fact",
    "FactKind",
    "Gender",
    "HexagramChart",
    "InvalidHexagram",
    "InvalidLineCast",
    "Judgment",
    "Kinship",
    "LineCast",
    "LineInfo",
    "LineType",
    "LiuyaoError",
    "SixSpirit",
    "Strength",
    "StrengthLevel",
    "UnknownSymbol",
    "UnresolvedPalace",
    "YongShenAbsent",
    "__version__",
    "analyze",
    "annotate",
    "annotate_transformed",
    "calendar_context",
    "cast_hexagram",
    "name_of",
    "palace_of",
    "random_casts",
]
