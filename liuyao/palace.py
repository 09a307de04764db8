"""The eight palaces (八宫) and the 64 hexagrams they hold.

Each palace is headed by a doubled trigram and carries that trigram's element.
Positions 0-7 within a palace are the pure hexagram, the five successive line
changes, the wandering soul (游魂) and the returning soul (归魂). Titles follow
the King Wen numbering.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from .chinese.constants import Element
from .exceptions import UnresolvedPalace
from .najia import TRIGRAMS, Trigram, validate_hexagram

__all__ = [
    "HEXAGRAMS",
    "HexagramRecord",
    "PALACES",
    "Palace",
    "name_of",
    "palace_of",
    "pure_hexagram",
    "record_for",
    "world_response",
]


@dataclass(frozen=True)
class Palace:
    index: int
    trigram: Trigram

    @property
    def element(self) -> Element:
        return self.trigram.element

    @property
    def name(self) -> str:
        return f"{self.trigram.glyph}宫"


@dataclass(frozen=True)
class HexagramRecord:
    """Palace table entry for one hexagram."""

    binary: str
    name: str
    palace: int
    position: int
    number: int
    title: str

    def to_payload(self) -> dict[str, object]:
        return {
            "binary": self.binary,
            "name": self.name,
            "palace": PALACES[self.palace].name,
            "position": self.position,
            "number": self.number,
            "title": self.title,
        }


PALACES: Final[tuple[Palace, ...]] = tuple(Palace(t.index, t) for t in TRIGRAMS)

_TABLE: Final[tuple[tuple[tuple[str, str, int, str], ...], ...]] = (
    (
        ("111111", "乾为天", 1, "The Creative"),
        ("011111", "天风姤", 44, "Coming to Meet"),
        ("001111", "天山遁", 33, "Retreat"),
        ("000111", "天地否", 12, "Standstill"),
        ("000011", "风地观", 20, "Contemplation"),
        ("000001", "山地剥", 23, "Splitting Apart"),
        ("000101", "火地晋", 35, "Progress"),
        ("111101", "火天大有", 14, "Possession in Great Measure"),
    ),
    (
        ("110110", "兑为泽", 58, "The Joyous"),
        ("010110", "泽水困", 47, "Oppression"),
        ("000110", "泽地萃", 45, "Gathering Together"),
        ("001110", "泽山咸", 31, "Influence"),
        ("001010", "水山蹇", 39, "Obstruction"),
        ("001000", "地山谦", 15, "Modesty"),
        ("001100", "雷山小过", 62, "Preponderance of the Small"),
        ("110100", "雷泽归妹", 54, "The Marrying Maiden"),
    ),
    (
        ("101101", "离为火", 30, "The Clinging"),
        ("001101", "火山旅", 56, "The Wanderer"),
        ("011101", "火风鼎", 50, "The Cauldron"),
        ("010101", "火水未济", 64, "Before Completion"),
        ("010001", "山水蒙", 4, "Youthful Folly"),
        ("010011", "风水涣", 59, "Dispersion"),
        ("010111", "天水讼", 6, "Conflict"),
        ("101111", "天火同人", 13, "Fellowship with Men"),
    ),
    (
        ("100100", "震为雷", 51, "The Arousing"),
        ("000100", "雷地豫", 16, "Enthusiasm"),
        ("010100", "雷水解", 40, "Deliverance"),
        ("011100", "雷风恒", 32, "Duration"),
        ("011000", "地风升", 46, "Pushing Upward"),
        ("011010", "水风井", 48, "The Well"),
        ("011110", "泽风大过", 28, "Preponderance of the Great"),
        ("100110", "泽雷随", 17, "Following"),
    ),
    (
        ("011011", "巽为风", 57, "The Gentle"),
        ("111011", "风天小畜", 9, "Taming Power of the Small"),
        ("101011", "风火家人", 37, "The Family"),
        ("100011", "风雷益", 42, "Increase"),
        ("100111", "天雷无妄", 25, "Innocence"),
        ("100101", "火雷噬嗑", 21, "Biting Through"),
        ("100001", "山雷颐", 27, "Nourishing"),
        ("011001", "山风蛊", 18, "Work on the Decayed"),
    ),
    (
        ("010010", "坎为水", 29, "The Abysmal"),
        ("110010", "水泽节", 60, "Limitation"),
        ("100010", "水雷屯", 3, "Difficulty at the Beginning"),
        ("101010", "水火既济", 63, "After Completion"),
        ("101110", "泽火革", 49, "Revolution"),
        ("101100", "雷火丰", 55, "Abundance"),
        ("101000", "地火明夷", 36, "Darkening of the Light"),
        ("010000", "地水师", 7, "The Army"),
    ),
    (
        ("001001", "艮为山", 52, "Keeping Still"),
        ("101001", "山火贲", 22, "Grace"),
        ("111001", "山天大畜", 26, "Taming Power of the Great"),
        ("110001", "山泽损", 41, "Decrease"),
        ("110101", "火泽睽", 38, "Opposition"),
        ("110111", "天泽履", 10, "Treading"),
        ("110011", "风泽中孚", 61, "Inner Truth"),
        ("001011", "风山渐", 53, "Development"),
    ),
    (
        ("000000", "坤为地", 2, "The Receptive"),
        ("100000", "地雷复", 24, "Return"),
        ("110000", "地泽临", 19, "Approach"),
        ("111000", "地天泰", 11, "Peace"),
        ("111100", "雷天大壮", 34, "Power of the Great"),
        ("111110", "泽天夬", 43, "Breakthrough"),
        ("111010", "水天需", 5, "Waiting"),
        ("000010", "水地比", 8, "Holding Together"),
    ),
)

HEXAGRAMS: Final[tuple[HexagramRecord, ...]] = tuple(
    HexagramRecord(binary, name, palace, position, number, title)
    for palace, rows in enumerate(_TABLE)
    for position, (binary, name, number, title) in enumerate(rows)
)

_BY_BINARY: Final[dict[str, HexagramRecord]] = {record.binary: record for record in HEXAGRAMS}
_BY_NAME: Final[dict[str, HexagramRecord]] = {record.name: record for record in HEXAGRAMS}

# 1-based (World, Response) line numbers by position in palace.
_WORLD_RESPONSE: Final[tuple[tuple[int, int], ...]] = (
    (6, 3),
    (1, 4),
    (2, 5),
    (3, 6),
    (4, 1),
    (5, 2),
    (4, 1),
    (3, 6),
)


def record_for(hexagram: str) -> HexagramRecord:
    """Return the palace table entry for a binary hexagram."""

    return _BY_BINARY[validate_hexagram(hexagram)]


def name_of(hexagram: str) -> str:
    """Return the canonical name of a binary hexagram."""

    return record_for(hexagram).name


def palace_of(name: str) -> tuple[int, int]:
    """Return ``(palace index, position in palace)`` for a hexagram name."""

    try:
        record = _BY_NAME[name]
    except KeyError:
        raise UnresolvedPalace(name) from None
    return record.palace, record.position


def pure_hexagram(palace: int) -> str:
    """Return the binary of the doubled trigram heading ``palace``."""

    bits = PALACES[palace].trigram.bits
    return bits + bits


def world_response(position: int) -> tuple[int, int]:
    """Return the 1-based World and Response line numbers for ``position``."""

    return _WORLD_RESPONSE[position]
