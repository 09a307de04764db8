"""Commentary texts used to decorate readings."""

from __future__ import annotations

from .images import ImageRecord, great_image, line_image, load_images
from .index import CorpusIndex, CorpusLookup, HexagramText, LineText, line_name

__all__ = [
    "CorpusIndex",
    "CorpusLookup",
    "HexagramText",
    "ImageRecord",
    "LineText",
    "great_image",
    "line_image",
    "line_name",
    "load_images",
]
