"""Coin casting: reduce three-coin tosses to original and transformed hexagrams."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, Iterable, Sequence

from .exceptions import InvalidLineCast

__all__ = [
    "CastResult",
    "LineCast",
    "LineType",
    "cast_hexagram",
    "parse_casts",
    "random_casts",
]


class LineType(StrEnum):
    YOUNG_YANG = "young_yang"
    YOUNG_YIN = "young_yin"
    OLD_YANG = "old_yang"
    OLD_YIN = "old_yin"

    @property
    def moving(self) -> bool:
        return self in (LineType.OLD_YANG, LineType.OLD_YIN)

    @property
    def bit(self) -> str:
        """Line of the original hexagram: ``1`` yang, ``0`` yin."""

        return "1" if self in (LineType.YOUNG_YANG, LineType.OLD_YANG) else "0"

    @property
    def transformed_bit(self) -> str:
        if self.moving:
            return "0" if self.bit == "1" else "1"
        return self.bit

    @property
    def glyph(self) -> str:
        return _LINE_GLYPHS[self][0]

    @property
    def symbol(self) -> str:
        return _LINE_GLYPHS[self][1]


_LINE_GLYPHS: Final[dict[LineType, tuple[str, str]]] = {
    LineType.YOUNG_YANG: ("少阳", "⚊ "),
    LineType.YOUNG_YIN: ("少阴", "⚋ "),
    LineType.OLD_YANG: ("老阳", "—○"),
    LineType.OLD_YIN: ("老阴", "⚋×"),
}

_BY_HEADS: Final[dict[int, LineType]] = {
    0: LineType.OLD_YIN,
    1: LineType.YOUNG_YANG,
    2: LineType.YOUNG_YIN,
    3: LineType.OLD_YANG,
}


@dataclass(frozen=True)
class LineCast:
    """Outcome of three coin tosses; ``True`` is heads."""

    coins: tuple[bool, bool, bool]

    @classmethod
    def parse(cls, toss: str) -> LineCast:
        """Build a cast from a string such as ``"110"`` (``1`` = heads)."""

        text = toss.strip()
        if len(text) != 3 or set(text) - {"0", "1"}:
            raise InvalidLineCast(f"invalid toss {toss!r}: expected three '0'/'1' coins")
        return cls(tuple(char == "1" for char in text))  # type: ignore[arg-type]

    @property
    def heads(self) -> int:
        return sum(self.coins)

    @property
    def line_type(self) -> LineType:
        return _BY_HEADS[self.heads]

    def __str__(self) -> str:
        return "".join("1" if coin else "0" for coin in self.coins)


@dataclass(frozen=True)
class CastResult:
    """Original (本卦) and transformed (变卦) hexagrams, bottom line first."""

    original: str
    transformed: str
    changed: tuple[bool, ...]
    lines: tuple[LineType, ...]

    @property
    def moving_lines(self) -> tuple[int, ...]:
        return tuple(index for index, moving in enumerate(self.changed) if moving)


def cast_hexagram(casts: Sequence[LineCast | str]) -> CastResult:
    """Reduce six casts (bottom line first) to a :class:`CastResult`."""

    if len(casts) != 6:
        raise InvalidLineCast(f"expected 6 line casts, got {len(casts)}")
    resolved = [cast if isinstance(cast, LineCast) else LineCast.parse(cast) for cast in casts]
    lines = tuple(cast.line_type for cast in resolved)
    return CastResult(
        original="".join(line.bit for line in lines),
        transformed="".join(line.transformed_bit for line in lines),
        changed=tuple(line.moving for line in lines),
        lines=lines,
    )


def random_casts(rng: random.Random | None = None, *, count: int = 6) -> list[LineCast]:
    """Toss ``count`` lines of three coins using ``rng`` (seed it for repeatability)."""

    generator = rng if rng is not None else random.Random()
    return [
        LineCast(tuple(generator.random() < 0.5 for _ in range(3)))  # type: ignore[arg-type]
        for _ in range(count)
    ]


def parse_casts(tosses: Iterable[str]) -> list[LineCast]:
    return [LineCast.parse(toss) for toss in tosses]
