"""Exception hierarchy raised by the Liu Yao rule engine."""

from __future__ import annotations

__all__ = [
    "LiuyaoError",
    "InvalidHexagram",
    "InvalidLineCast",
    "UnresolvedPalace",
    "UnknownSymbol",
    "YongShenAbsent",
]


class LiuyaoError(ValueError):
    """Base class for all errors raised by :mod:`liuyao`."""


class InvalidHexagram(LiuyaoError):
    """Raised when a hexagram is not exactly six ``0``/``1`` characters."""

    def __init__(self, value: object, reason: str = "expected six '0'/'1' digits") -> None:
        super().__init__(f"invalid hexagram {value!r}: {reason}")
        self.value = value


class InvalidLineCast(LiuyaoError):
    """Raised when a coin toss cannot be reduced to a line type."""


class UnresolvedPalace(LiuyaoError):
    """Raised when a hexagram name is missing from the palace table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"hexagram {name!r} does not belong to any palace")
        self.name = name


class UnknownSymbol(LiuyaoError):
    """Raised when a stem, branch, category or similar token cannot be parsed."""


class YongShenAbsent(LiuyaoError):
    """Raised when the governing kinship is neither visible nor hidden."""

    def __init__(self, kinship: str) -> None:
        super().__init__(f"no visible or hidden line carries kinship {kinship!r}")
        self.kinship = kinship
