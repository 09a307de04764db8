from __future__ import annotations

import logging

import pytest

from liuyao.boot import LOG_LEVEL_ENV, configure_logging


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("debug", logging.DEBUG),
        ("ERROR", logging.ERROR),
        ("15", 15),
        ("loud", logging.WARNING),
        ("", logging.WARNING),
    ],
)
def test_level_from_environment(monkeypatch, value: str, expected: int) -> None:
    """The environment variable picks the level; unknown values fall back to warnings."""

    monkeypatch.setenv(LOG_LEVEL_ENV, value)
    assert configure_logging() == expected
    assert logging.getLogger().level == expected


def test_explicit_level_wins(monkeypatch) -> None:
    """An explicit level overrides the environment."""

    monkeypatch.setenv(LOG_LEVEL_ENV, "DEBUG")
    assert configure_logging(level="info") == logging.INFO


def test_default_level() -> None:
    """Without configuration only warnings and above are shown."""

    assert configure_logging() == logging.WARNING
