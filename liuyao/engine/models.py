"""Value types shared by the divination engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Final, Mapping

from ..annotate import HexagramChart, Kinship, LineInfo
from ..casting import CastResult
from ..chinese.calendar import CalendarContext
from ..chinese.constants import (
    EarthlyBranch,
    Element,
    HeavenlyStem,
    StemBranch,
    parse_branch,
    parse_stem,
)
from ..exceptions import InvalidHexagram, UnknownSymbol
from ..najia import validate_hexagram

__all__ = [
    "AnalysisContext",
    "AnalysisResult",
    "Category",
    "Decoration",
    "Fact",
    "FactKind",
    "Gender",
    "Judgment",
    "Strength",
    "StrengthLevel",
    "StrengthNote",
    "Timing",
    "flip_changed",
]


class Category(StrEnum):
    """Question types a reading can be cast for."""

    CAREER = "career"
    WEALTH = "wealth"
    MARRIAGE = "marriage"
    STUDY = "study"
    SAFETY = "safety"
    HEALTH = "health"
    SIBLINGS = "siblings"
    PARENTS = "parents"
    CHILDREN = "children"

    @property
    def glyph(self) -> str:
        return _CATEGORY_GLYPHS[self]

    @classmethod
    def parse(cls, value: str | Category | None) -> Category | None:
        if value is None or isinstance(value, Category):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownSymbol(f"unknown question category {value!r}") from None


_CATEGORY_GLYPHS: Final[dict[Category, str]] = {
    Category.CAREER: "求官/工作",
    Category.WEALTH: "求财",
    Category.MARRIAGE: "婚姻",
    Category.STUDY: "学业",
    Category.SAFETY: "平安",
    Category.HEALTH: "健康",
    Category.SIBLINGS: "兄弟",
    Category.PARENTS: "父母",
    Category.CHILDREN: "子女",
}


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"

    @classmethod
    def parse(cls, value: str | Gender | None) -> Gender | None:
        if value is None or isinstance(value, Gender):
            return value
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise UnknownSymbol(f"unknown gender {value!r}") from None


class StrengthLevel(StrEnum):
    STRONG = "strong"
    NEUTRAL = "neutral"
    WEAK = "weak"

    @property
    def glyph(self) -> str:
        return {"strong": "强", "neutral": "中平", "weak": "弱"}[self.value]


class StrengthNote(StrEnum):
    """Cause recorded when a later phase moves the strength level."""

    CONCEALING_SUPPORT = "concealing_support"
    CONCEALING_SUPPRESSION = "concealing_suppression"
    BUREAU_SUPPORT = "bureau_support"
    BUREAU_SUPPRESSION = "bureau_suppression"
    ORIGIN_SUPPORT = "origin_support"
    TABOO_SUPPRESSION = "taboo_suppression"

    @property
    def glyph(self) -> str:
        return _NOTE_GLYPHS[self]


_NOTE_GLYPHS: Final[dict[StrengthNote, str]] = {
    StrengthNote.CONCEALING_SUPPORT: "飞神生助",
    StrengthNote.CONCEALING_SUPPRESSION: "飞神克制",
    StrengthNote.BUREAU_SUPPORT: "合局生助",
    StrengthNote.BUREAU_SUPPRESSION: "合局克制",
    StrengthNote.ORIGIN_SUPPORT: "原神生助",
    StrengthNote.TABOO_SUPPRESSION: "忌神克制",
}


@dataclass(frozen=True)
class Strength:
    level: StrengthLevel
    note: StrengthNote | None = None

    @property
    def is_strong(self) -> bool:
        return self.level is StrengthLevel.STRONG

    def label(self) -> str:
        if self.note is None:
            return self.level.glyph
        return f"{self.level.glyph} ({self.note.glyph})"


class Judgment(StrEnum):
    AUSPICIOUS = "auspicious"
    NEUTRAL = "neutral"
    INAUSPICIOUS = "inauspicious"

    @property
    def glyph(self) -> str:
        return {"auspicious": "吉", "neutral": "平", "inauspicious": "凶"}[self.value]


class FactKind(StrEnum):
    """Kinds of narrative facts, in roughly the order a reading emits them."""

    CATEGORY = "category"
    SELECTION = "selection"
    HIDDEN_CALENDAR = "hidden_calendar"
    HIDDEN_RELATION = "hidden_relation"
    HIDDEN_VOID = "hidden_void"
    HIDDEN_MONTH_BROKEN = "hidden_month_broken"
    MONTH_STRENGTH = "month_strength"
    DAY_STRENGTH = "day_strength"
    TRANSFORMATION = "transformation"
    MONTH_CLASH = "month_clash"
    MONTH_COMBINATION = "month_combination"
    DAY_COMBINATION = "day_combination"
    DAY_HARM = "day_harm"
    DAY_PUNISHMENT = "day_punishment"
    VOID = "void"
    LATENT_ACTIVATION = "latent_activation"
    DAY_BROKEN = "day_broken"
    DAY_CLASH = "day_clash"
    STRENGTH_VERDICT = "strength_verdict"
    HIDDEN_ADJUSTMENT = "hidden_adjustment"
    LIFE_STAGE = "life_stage"
    LINE_REPORT = "line_report"
    MOVING_LINE = "moving_line"
    MOVING_LINE_ADJUSTMENT = "moving_line_adjustment"
    BUREAU = "bureau"
    BUREAU_ADJUSTMENT = "bureau_adjustment"
    JUDGMENT = "judgment"
    MARRIAGE_NOTE = "marriage_note"
    TIMING = "timing"


STRENGTH_KINDS: Final[frozenset[FactKind]] = frozenset(
    {
        FactKind.MONTH_STRENGTH,
        FactKind.DAY_STRENGTH,
        FactKind.TRANSFORMATION,
        FactKind.MONTH_CLASH,
        FactKind.MONTH_COMBINATION,
        FactKind.DAY_COMBINATION,
        FactKind.DAY_HARM,
        FactKind.DAY_PUNISHMENT,
        FactKind.VOID,
        FactKind.LATENT_ACTIVATION,
        FactKind.DAY_BROKEN,
        FactKind.DAY_CLASH,
    }
)


@dataclass(frozen=True)
class Fact:
    """One item of the reading's trace; facts with ``points`` are scoring contributions."""

    kind: FactKind
    line: int | None = None
    points: int | None = None
    data: Mapping[str, Any] = field(default_factory=dict)

    @property
    def scoring(self) -> bool:
        return self.points is not None

    def to_payload(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "line": self.line,
            "points": self.points,
            "data": dict(self.data),
        }


@dataclass(frozen=True)
class Timing:
    """Placeholder timing estimate: the governing element's day or month."""

    element: Element

    def label(self) -> str:
        return f"事件可能应验于 {self.element.glyph} 日/月"


@dataclass(frozen=True)
class Decoration:
    """Commentary texts attached to a reading; empty when the corpus has no match."""

    hexagram_text: Any = None
    line_texts: tuple[Any, ...] = ()
    image: str | None = None


def _changed_tuple(changed: object) -> tuple[bool, ...]:
    if isinstance(changed, str):
        if set(changed) - {"0", "1"}:
            raise InvalidHexagram(changed, "changed flags must be '0'/'1' digits")
        flags = tuple(char == "1" for char in changed)
    else:
        flags = tuple(bool(flag) for flag in changed)  # type: ignore[union-attr]
    if len(flags) != 6:
        raise InvalidHexagram(changed, "changed flags must cover six lines")
    return flags


def flip_changed(original: str, changed: tuple[bool, ...]) -> str:
    """Return the transformed hexagram: ``original`` with every changed line flipped."""

    validate_hexagram(original)
    return "".join(
        ("0" if bit == "1" else "1") if moving else bit
        for bit, moving in zip(original, changed)
    )


@dataclass(frozen=True)
class AnalysisContext:
    """Everything a reading depends on."""

    original: str
    transformed: str
    changed: tuple[bool, ...]
    day_stem: HeavenlyStem
    day_branch: EarthlyBranch
    month_branch: EarthlyBranch
    void_branches: tuple[EarthlyBranch, ...] = ()
    category: Category | None = None
    gender: Gender | None = None

    def __post_init__(self) -> None:
        validate_hexagram(self.original)
        validate_hexagram(self.transformed)
        changed = _changed_tuple(self.changed)
        if flip_changed(self.original, changed) != self.transformed:
            raise InvalidHexagram(
                self.transformed, "transformed hexagram does not match the changed lines"
            )
        object.__setattr__(self, "changed", changed)
        object.__setattr__(self, "day_stem", parse_stem(self.day_stem))
        object.__setattr__(self, "day_branch", parse_branch(self.day_branch))
        object.__setattr__(self, "month_branch", parse_branch(self.month_branch))
        object.__setattr__(
            self,
            "void_branches",
            tuple(parse_branch(branch) for branch in self.void_branches),
        )
        object.__setattr__(self, "category", Category.parse(self.category))
        object.__setattr__(self, "gender", Gender.parse(self.gender))

    @classmethod
    def from_hexagram(
        cls,
        original: str,
        changed: object,
        *,
        day_stem: HeavenlyStem | str,
        day_branch: EarthlyBranch | str,
        month_branch: EarthlyBranch | str,
        void_branches: tuple[EarthlyBranch | str, ...] | str = (),
        category: Category | str | None = None,
        gender: Gender | str | None = None,
    ) -> AnalysisContext:
        """Build a context from an original hexagram and its changed-line flags."""

        flags = _changed_tuple(changed)
        if isinstance(void_branches, str):
            void_branches = tuple(void_branches)
        return cls(
            original=original,
            transformed=flip_changed(original, flags),
            changed=flags,
            day_stem=day_stem,  # type: ignore[arg-type]
            day_branch=day_branch,  # type: ignore[arg-type]
            month_branch=month_branch,  # type: ignore[arg-type]
            void_branches=void_branches,  # type: ignore[arg-type]
            category=category,  # type: ignore[arg-type]
            gender=gender,  # type: ignore[arg-type]
        )

    @classmethod
    def from_cast(
        cls,
        cast: CastResult,
        calendar: CalendarContext,
        *,
        category: Category | str | None = None,
        gender: Gender | str | None = None,
    ) -> AnalysisContext:
        """Build a context from a coin cast and the calendar of the moment it was cast."""

        return cls(
            original=cast.original,
            transformed=cast.transformed,
            changed=cast.changed,
            day_stem=calendar.day_stem,
            day_branch=calendar.day_branch,
            month_branch=calendar.month_branch,
            void_branches=calendar.void_branches,
            category=category,  # type: ignore[arg-type]
            gender=gender,  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class AnalysisResult:
    context: AnalysisContext
    original_chart: HexagramChart
    transformed_chart: HexagramChart
    target: Kinship | None
    governing_index: int
    governing_line: LineInfo
    hidden: bool
    governing_stem_branch: StemBranch
    score: int
    strength: Strength
    judgment: Judgment
    timing: Timing
    facts: tuple[Fact, ...]
    decoration: Decoration = field(default_factory=Decoration)

    @property
    def governing_kinship(self) -> Kinship:
        if self.hidden and self.governing_line.hidden is not None:
            return self.governing_line.hidden.kinship
        return self.governing_line.kinship

    @property
    def contributions(self) -> tuple[Fact, ...]:
        """Every fact that carries points, in emission order."""

        return tuple(fact for fact in self.facts if fact.scoring)

    @property
    def strength_contributions(self) -> tuple[Fact, ...]:
        """The contributions summed into :attr:`score`."""

        return tuple(fact for fact in self.contributions if fact.kind in STRENGTH_KINDS)

    def facts_of(self, kind: FactKind) -> tuple[Fact, ...]:
        return tuple(fact for fact in self.facts if fact.kind is kind)

    def to_payload(self) -> dict[str, object]:
        return {
            "original": self.original_chart.to_payload(),
            "transformed": self.transformed_chart.to_payload(),
            "changed": list(self.context.changed),
            "category": self.context.category.value if self.context.category else None,
            "governing": {
                "index": self.governing_index,
                "kinship": self.governing_kinship.glyph,
                "stem_branch": self.governing_stem_branch.label(),
                "hidden": self.hidden,
            },
            "score": self.score,
            "strength": self.strength.label(),
            "judgment": self.judgment.glyph,
            "timing": self.timing.label(),
            "facts": [fact.to_payload() for fact in self.facts],
        }
