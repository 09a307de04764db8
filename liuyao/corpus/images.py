"""Bundled Great Image (大象) and line image (小象) texts."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import yaml

__all__ = ["ImageRecord", "great_image", "line_image", "load_images"]

_DATA_PATH = Path(__file__).with_name("data") / "images.yaml"


@dataclass(frozen=True)
class ImageRecord:
    name: str
    image: str
    line_images: tuple[str, ...] = ()


@lru_cache(maxsize=1)
def load_images() -> dict[str, ImageRecord]:
    """Load the bundled image table keyed by hexagram name."""

    with _DATA_PATH.open("r", encoding="utf-8") as handle:
        raw = yaml.safe_load(handle) or {}
    line_images = raw.get("line_images") or {}
    return {
        name: ImageRecord(
            name=name,
            image=str(entry.get("image", "")),
            line_images=tuple(line_images.get(name, ())),
        )
        for name, entry in (raw.get("hexagrams") or {}).items()
    }


def great_image(name: str) -> str | None:
    record = load_images().get(name)
    return record.image if record else None


def line_image(name: str, index: int) -> str | None:
    """Return the line image of line ``index`` (0 = bottom) when the table has one."""

    record = load_images().get(name)
    if record is None or not 0 <= index < len(record.line_images):
        return None
    return record.line_images[index]
