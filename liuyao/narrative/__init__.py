"""Display text for charts and readings."""

from __future__ import annotations

from .i18n import SUPPORTED_LOCALES, register_translations, translate
from .render import render_chart, render_fact, render_report, term

__all__ = [
    "SUPPORTED_LOCALES",
    "register_translations",
    "render_chart",
    "render_fact",
    "render_report",
    "term",
    "translate",
]
