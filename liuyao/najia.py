"""Na Jia (纳甲): stem-branch assignment for the six lines of a hexagram."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .chinese.constants import Element, StemBranch, parse_stem_branch
from .exceptions import InvalidHexagram

__all__ = [
    "TRIGRAMS",
    "Trigram",
    "assign",
    "split_trigrams",
    "trigram_for_bits",
    "validate_hexagram",
]


@dataclass(frozen=True)
class Trigram:
    """One of the eight trigrams; ``bits`` run bottom to top."""

    index: int
    glyph: str
    name: str
    bits: str
    element: Element
    inner: tuple[StemBranch, StemBranch, StemBranch]
    outer: tuple[StemBranch, StemBranch, StemBranch]


def _triple(labels: str) -> tuple[StemBranch, StemBranch, StemBranch]:
    return tuple(parse_stem_branch(label) for label in labels.split())  # type: ignore[return-value]


# Ordered as the palaces are: Qian, Dui, Li, Zhen, Xun, Kan, Gen, Kun.
TRIGRAMS: Final[tuple[Trigram, ...]] = (
    Trigram(0, "乾", "Qian", "111", Element.METAL, _triple("甲子 甲寅 甲辰"), _triple("壬午 壬申 壬戌")),
    Trigram(1, "兑", "Dui", "110", Element.METAL, _triple("丁巳 丁卯 丁丑"), _triple("丁亥 丁酉 丁未")),
    Trigram(2, "离", "Li", "101", Element.FIRE, _triple("己卯 己丑 己亥"), _triple("己酉 己未 己巳")),
    Trigram(3, "震", "Zhen", "100", Element.WOOD, _triple("庚子 庚寅 庚辰"), _triple("庚午 庚申 庚戌")),
    Trigram(4, "巽", "Xun", "011", Element.WOOD, _triple("辛丑 辛亥 辛酉"), _triple("辛未 辛巳 辛卯")),
    Trigram(5, "坎", "Kan", "010", Element.WATER, _triple("戊寅 戊辰 戊午"), _triple("戊申 戊戌 戊子")),
    Trigram(6, "艮", "Gen", "001", Element.EARTH, _triple("丙辰 丙午 丙申"), _triple("丙戌 丙子 丙寅")),
    Trigram(7, "坤", "Kun", "000", Element.EARTH, _triple("乙未 乙巳 乙卯"), _triple("癸丑 癸亥 癸酉")),
)

_BY_BITS: Final[dict[str, Trigram]] = {trigram.bits: trigram for trigram in TRIGRAMS}


def validate_hexagram(hexagram: str) -> str:
    """Return ``hexagram`` unchanged or raise :class:`InvalidHexagram`."""

    if not isinstance(hexagram, str) or len(hexagram) != 6 or set(hexagram) - {"0", "1"}:
        raise InvalidHexagram(hexagram)
    return hexagram


def trigram_for_bits(bits: str) -> Trigram:
    """Return the trigram whose lines (bottom to top) are ``bits``."""

    return _BY_BITS[bits]


def split_trigrams(hexagram: str) -> tuple[Trigram, Trigram]:
    """Return the (inner, outer) trigrams of ``hexagram``."""

    validate_hexagram(hexagram)
    return trigram_for_bits(hexagram[:3]), trigram_for_bits(hexagram[3:])


def assign(hexagram: str) -> tuple[StemBranch, ...]:
    """Return the six stem-branches of ``hexagram``, bottom line first."""

    inner, outer = split_trigrams(hexagram)
    return inner.inner + outer.outer
