"""Index of a classical-commentary markdown document.

The document lists each hexagram under a ``####`` heading such as::

    #### **一、本宫卦**：坤为地 ䷁ （双重柔顺）
    + **卦辞**：元亨，利牝马之贞。
    1. **初六爻动（变地雷复 ䷗）**
       - **本爻辞**：履霜，坚冰至。
       - **变卦辞**：亨。出入无疾……
       - **爻动含义**：……

Lookups never raise: unknown hexagrams or lines simply come back empty.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Final, Mapping

__all__ = [
    "CorpusIndex",
    "CorpusLookup",
    "HexagramText",
    "LineText",
    "line_name",
]

LOG = logging.getLogger(__name__)

_TITLE = re.compile(r"####\s*\*?\s*([^：]+)：\s*([^（\s]+)\s*(\S*)\s*（([^）]+)")
_PROPERTY = re.compile(r"[+*]\s*\*\*([^*]+)\*\*：\s*(.+)")
_LINE_BLOCK = re.compile(r"(\d+)\.\s*\*\*([^爻]+爻动)\s*（变([^）]+)")
_LINE_DETAIL = re.compile(r"[->*]\s*\*\*([^*]+)\*\*：\s*(.+)")

_PROPERTY_KEYS: Final[frozenset[str]] = frozenset({"卦辞", "世爻", "核心意象"})
_LINE_SUFFIX: Final[str] = "爻动"
_INNER_POSITIONS: Final[tuple[str, ...]] = ("二", "三", "四", "五")


def line_name(index: int, bit: str) -> str:
    """Return the classical name of line ``index`` (0 = bottom), e.g. ``初九`` or ``六二``."""

    number = "九" if bit == "1" else "六"
    if index == 0:
        return f"初{number}"
    if index == 5:
        return f"上{number}"
    return f"{number}{_INNER_POSITIONS[index - 1]}"


@dataclass(frozen=True)
class LineText:
    index: int
    name: str
    text: str = ""
    transformed_name: str = ""
    transformed_text: str = ""
    meaning: str = ""


@dataclass(frozen=True)
class HexagramText:
    name: str
    alias: str = ""
    symbol: str = ""
    judgment: str = ""
    core_meaning: str = ""
    world_note: str = ""
    lines: Mapping[str, LineText] = field(default_factory=dict)


@dataclass(frozen=True)
class CorpusLookup:
    hexagram: HexagramText | None = None
    line: LineText | None = None


class _Builder:
    """Mutable parse state; turned into frozen records once a heading closes."""

    def __init__(self, alias: str, name: str, symbol: str, core: str) -> None:
        self.fields: dict[str, str] = {
            "name": name,
            "alias": alias,
            "symbol": symbol,
            "core_meaning": core,
            "judgment": "",
            "world_note": "",
        }
        self.lines: dict[str, LineText] = {}
        self.line: dict[str, object] | None = None

    def close_line(self) -> None:
        if self.line is not None:
            record = LineText(**self.line)  # type: ignore[arg-type]
            self.lines[record.name] = record
            self.line = None

    def build(self) -> HexagramText:
        self.close_line()
        return HexagramText(lines=dict(self.lines), **self.fields)


class CorpusIndex:
    """Read-only index of hexagram commentary keyed by hexagram name."""

    def __init__(self, entries: Mapping[str, HexagramText]) -> None:
        self._entries = dict(entries)

    @classmethod
    def from_markdown(cls, text: str) -> CorpusIndex:
        entries: dict[str, HexagramText] = {}
        current: _Builder | None = None

        for raw in text.splitlines():
            line = raw.strip()
            title = _TITLE.search(line)
            if title:
                if current is not None:
                    entries[current.fields["name"]] = current.build()
                alias, name, symbol, core = (part.strip() for part in title.groups())
                current = _Builder(alias.strip("*"), name.strip("*"), symbol, core)
                continue

            if not line or line.startswith("---") or line.startswith("###") or current is None:
                continue

            prop = _PROPERTY.search(line)
            if prop and prop.group(1).strip() in _PROPERTY_KEYS:
                key, value = prop.group(1).strip(), prop.group(2).strip()
                if key == "卦辞":
                    current.fields["judgment"] = value
                elif key == "世爻":
                    current.fields["world_note"] = value
                elif not current.fields["core_meaning"]:
                    current.fields["core_meaning"] = value
                continue

            block = _LINE_BLOCK.search(line)
            if block:
                current.close_line()
                current.line = {
                    "index": int(block.group(1)),
                    "name": block.group(2).strip(),
                    "transformed_name": block.group(3).strip(),
                }
                continue

            detail = _LINE_DETAIL.search(line)
            if current.line is not None and detail:
                key, value = detail.group(1).strip(), detail.group(2).strip()
                if key == "本爻辞":
                    current.line["text"] = value
                elif key == "变卦辞":
                    current.line["transformed_text"] = value
                elif key == "爻动含义":
                    current.line["meaning"] = value
                    current.close_line()

        if current is not None:
            entries[current.fields["name"]] = current.build()
        LOG.debug("indexed %d hexagrams from commentary", len(entries))
        return cls(entries)

    @classmethod
    def from_path(cls, path: str | Path) -> CorpusIndex:
        return cls.from_markdown(Path(path).read_text(encoding="utf-8"))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def names(self) -> tuple[str, ...]:
        return tuple(self._entries)

    def lookup(self, name: str, line: str | None = None) -> CorpusLookup:
        """Return the hexagram text and, when ``line`` is given, that moving line's text."""

        entry = self._entries.get(name)
        if entry is None:
            LOG.debug("no commentary for hexagram %s", name)
            return CorpusLookup()
        if not line:
            return CorpusLookup(hexagram=entry)
        key = line if line.endswith(_LINE_SUFFIX) else f"{line}{_LINE_SUFFIX}"
        found = entry.lines.get(key)
        if found is None:
            LOG.debug("no commentary for line %s of %s", key, name)
        return CorpusLookup(hexagram=entry, line=found)
