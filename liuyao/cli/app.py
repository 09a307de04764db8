"""Typer application for the liuyao command line."""

from __future__ import annotations

import json
import random
from datetime import datetime
from pathlib import Path
from typing import List, NoReturn, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import typer

from liuyao.annotate import annotate
from liuyao.boot import configure_logging
from liuyao.casting import CastResult, cast_hexagram, parse_casts, random_casts
from liuyao.chinese import CalendarContext, calendar_context, parse_branch, parse_stem
from liuyao.config import (
    Settings,
    ensure_default_config,
    get_config_home,
    load_settings,
)
from liuyao.corpus import CorpusIndex, great_image, line_image
from liuyao.engine import AnalysisContext, analyze
from liuyao.exceptions import LiuyaoError
from liuyao.narrative import render_chart, render_report
from liuyao.palace import name_of, palace_of
from liuyao.shensha import star_configuration, stars_for_branch

app = typer.Typer(help="Liu Yao hexagram divination.")
config_app = typer.Typer(help="Inspect and initialise the settings file.")


def _fail(exc: Exception) -> NoReturn:
    typer.secho(str(exc), fg=typer.colors.RED, err=True)
    raise typer.Exit(1) from exc


def _resolve_datetime(moment: Optional[str], tz_name: str) -> datetime:
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise typer.BadParameter(f"Unknown time zone {tz_name!r}") from exc
    if moment is None:
        return datetime.now(zone)
    try:
        dt = datetime.fromisoformat(moment)
    except ValueError as exc:
        raise typer.BadParameter("Use ISO-8601 formatted datetimes (YYYY-MM-DDTHH:MM)") from exc
    if dt.tzinfo is None:
        return dt.replace(tzinfo=zone)
    return dt.astimezone(zone)


def _calendar(moment: Optional[str], tz_name: Optional[str], settings: Settings) -> CalendarContext:
    return calendar_context(_resolve_datetime(moment, tz_name or settings.calendar.timezone))


def _split_branches(value: str) -> tuple[str, ...]:
    if "," in value:
        return tuple(token.strip() for token in value.split(",") if token.strip())
    return tuple(value.strip())


def _cast(tosses: Optional[List[str]], seed: Optional[int]) -> CastResult:
    if tosses:
        return cast_hexagram(parse_casts(tosses))
    rng = random.Random(seed) if seed is not None else None
    return cast_hexagram(random_casts(rng))


def _load_corpus(path: Optional[Path], settings: Settings) -> Optional[CorpusIndex]:
    source = path or (Path(settings.corpus.path) if settings.corpus.path else None)
    if source is None:
        return None
    try:
        return CorpusIndex.from_path(source)
    except OSError as exc:
        _fail(exc)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """Configure logging before executing subcommands."""

    configure_logging()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command("cast")
def cli_cast(
    toss: Optional[List[str]] = typer.Option(
        None, "--toss", help="Three coins per line, bottom line first (1 = heads). Repeat six times."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed the random coin tosses."),
    json_output: bool = typer.Option(False, "--json", help="Emit the cast as JSON."),
) -> None:
    """Toss (or replay) six lines of three coins."""

    try:
        cast = _cast(toss, seed)
        original_name = name_of(cast.original)
        transformed_name = name_of(cast.transformed)
    except LiuyaoError as exc:
        _fail(exc)

    payload = {
        "original": cast.original,
        "original_name": original_name,
        "transformed": cast.transformed,
        "transformed_name": transformed_name,
        "changed": "".join("1" if flag else "0" for flag in cast.changed),
        "lines": [line.value for line in cast.lines],
    }
    if json_output:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    for index in reversed(range(6)):
        line = cast.lines[index]
        typer.echo(f"{index + 1} {line.symbol} {line.glyph}")
    typer.echo(f"{original_name} -> {transformed_name}" if cast.moving_lines else original_name)


@app.command("chart")
def cli_chart(
    hexagram: str = typer.Argument(..., metavar="HEXAGRAM", help="Six 0/1 digits, bottom line first."),
    changed: str = typer.Option("000000", "--changed", help="Six 0/1 flags marking moving lines."),
    day_stem: Optional[str] = typer.Option(None, "--day-stem", help="Day stem (defaults to today's)."),
    date: Optional[str] = typer.Option(None, "--date", help="Local ISO datetime for the day stem."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="IANA time zone for --date."),
    json_output: bool = typer.Option(False, "--json", help="Emit the chart as JSON."),
) -> None:
    """Annotate a hexagram with Na Jia, kinship, spirits and World/Response."""

    settings = load_settings()
    try:
        stem = parse_stem(day_stem) if day_stem else _calendar(date, tz_name, settings).day_stem
        chart = annotate(hexagram, stem)
        flags = tuple(flag == "1" for flag in changed)
        if len(flags) != 6:
            raise typer.BadParameter("--changed needs six 0/1 flags")
    except LiuyaoError as exc:
        _fail(exc)

    if json_output:
        typer.echo(json.dumps(chart.to_payload(), ensure_ascii=False, indent=2))
        return
    for row in render_chart(chart, flags, locale=settings.narrative.language):
        typer.echo(row)


@app.command("analyze")
def cli_analyze(
    hexagram: Optional[str] = typer.Option(
        None, "--hexagram", help="Original hexagram as six 0/1 digits, bottom line first."
    ),
    changed: str = typer.Option("000000", "--changed", help="Six 0/1 flags marking moving lines."),
    toss: Optional[List[str]] = typer.Option(
        None, "--toss", help="Three coins per line instead of --hexagram. Repeat six times."
    ),
    seed: Optional[int] = typer.Option(None, "--seed", help="Seed random tosses when nothing is given."),
    date: Optional[str] = typer.Option(None, "--date", help="Local ISO datetime of the cast (defaults to now)."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="IANA time zone (defaults to the settings)."),
    day_stem: Optional[str] = typer.Option(None, "--day-stem", help="Override the day stem."),
    day_branch: Optional[str] = typer.Option(None, "--day-branch", help="Override the day branch."),
    month_branch: Optional[str] = typer.Option(None, "--month-branch", help="Override the month branch."),
    void: Optional[str] = typer.Option(None, "--void", help="Override the void branches, e.g. 戌亥."),
    category: Optional[str] = typer.Option(None, "--category", help="Question category (career, wealth, ...)."),
    gender: Optional[str] = typer.Option(None, "--gender", help="Querent gender for marriage questions."),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Commentary markdown file."),
    lang: Optional[str] = typer.Option(None, "--lang", help="Report language: zh or en."),
    json_output: bool = typer.Option(False, "--json", help="Emit the reading as JSON."),
) -> None:
    """Cast or read a hexagram and run the full analysis."""

    settings = load_settings()
    try:
        calendar = _calendar(date, tz_name, settings)
        if hexagram is not None:
            context = AnalysisContext.from_hexagram(
                hexagram,
                changed,
                day_stem=day_stem or calendar.day_stem,
                day_branch=day_branch or calendar.day_branch,
                month_branch=month_branch or calendar.month_branch,
                void_branches=_split_branches(void) if void else calendar.void_branches,
                category=category,
                gender=gender,
            )
        else:
            cast = _cast(toss, seed)
            context = AnalysisContext(
                original=cast.original,
                transformed=cast.transformed,
                changed=cast.changed,
                day_stem=parse_stem(day_stem or calendar.day_stem),
                day_branch=parse_branch(day_branch or calendar.day_branch),
                month_branch=parse_branch(month_branch or calendar.month_branch),
                void_branches=tuple(
                    parse_branch(b) for b in (_split_branches(void) if void else calendar.void_branches)
                ),
                category=category,  # type: ignore[arg-type]
                gender=gender,  # type: ignore[arg-type]
            )
        result = analyze(
            context,
            corpus=_load_corpus(corpus, settings),
            moving_line_support=settings.scoring.moving_line_support,
        )
    except LiuyaoError as exc:
        _fail(exc)

    if json_output:
        typer.echo(json.dumps(result.to_payload(), ensure_ascii=False, indent=2, default=str))
        return
    typer.echo(
        render_report(
            result,
            locale=(lang or settings.narrative.language).lower(),
            include_line_report=settings.narrative.include_line_report,
        )
    )


@app.command("lookup")
def cli_lookup(
    name: str = typer.Argument(..., metavar="NAME", help="Hexagram name, e.g. 乾为天."),
    line: Optional[str] = typer.Argument(None, metavar="LINE", help="Line name, e.g. 初九."),
    corpus: Optional[Path] = typer.Option(None, "--corpus", help="Commentary markdown file."),
    json_output: bool = typer.Option(False, "--json", help="Emit the texts as JSON."),
) -> None:
    """Show commentary and image texts for a hexagram (and optionally one line)."""

    try:
        palace, position = palace_of(name)
    except LiuyaoError as exc:
        _fail(exc)

    found = None
    index = _load_corpus(corpus, load_settings())
    if index is not None:
        found = index.lookup(name, line)

    payload: dict[str, object] = {
        "name": name,
        "palace": palace,
        "position": position,
        "image": great_image(name),
        "judgment": found.hexagram.judgment if found and found.hexagram else None,
        "line": None,
    }
    if found and found.line:
        payload["line"] = {
            "name": found.line.name,
            "text": found.line.text,
            "transformed": found.line.transformed_name,
            "meaning": found.line.meaning,
        }
        payload["line_image"] = line_image(name, found.line.index - 1)

    if json_output:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    typer.echo(name)
    for key in ("judgment", "image"):
        if payload[key]:
            typer.echo(f"{key}: {payload[key]}")
    if isinstance(payload["line"], dict):
        typer.echo(f"{payload['line']['name']}: {payload['line']['text']}")
        if payload["line"]["meaning"]:
            typer.echo(payload["line"]["meaning"])
    elif line:
        typer.echo(f"no commentary for {line}")


@app.command("stars")
def cli_stars(
    date: Optional[str] = typer.Option(None, "--date", help="Local ISO datetime (defaults to now)."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="IANA time zone (defaults to the settings)."),
    day_stem: Optional[str] = typer.Option(None, "--day-stem", help="Override the day stem."),
    day_branch: Optional[str] = typer.Option(None, "--day-branch", help="Override the day branch."),
    month_branch: Optional[str] = typer.Option(None, "--month-branch", help="Override the month branch."),
    branch: Optional[str] = typer.Option(None, "--branch", help="Only list the stars on this branch."),
    json_output: bool = typer.Option(False, "--json", help="Emit the stars as JSON."),
) -> None:
    """List the stars (神煞) of the day."""

    settings = load_settings()
    try:
        calendar = _calendar(date, tz_name, settings)
        stem = day_stem or calendar.day_stem
        day = day_branch or calendar.day_branch
        month = month_branch or calendar.month_branch
        if branch is not None:
            names = [star.value for star in stars_for_branch(stem, day, month, branch)]
            payload: object = {"branch": parse_branch(branch).glyph, "stars": names}
            text = " ".join(names) or "-"
        else:
            placements = star_configuration(stem, day, month)
            payload = {p.star.value: [b.glyph for b in p.branches] for p in placements}
            text = "\n".join(p.label() for p in placements)
    except LiuyaoError as exc:
        _fail(exc)

    if json_output:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    typer.echo(text)


@app.command("calendar")
def cli_calendar(
    moment: Optional[str] = typer.Argument(None, metavar="ISO_LOCAL", help="Local datetime in ISO format."),
    tz_name: Optional[str] = typer.Option(None, "--tz", help="IANA time zone (defaults to the settings)."),
    json_output: bool = typer.Option(False, "--json", help="Emit the pillars as JSON."),
) -> None:
    """Show the year, month and day pillars and the void branches."""

    context = _calendar(moment, tz_name, load_settings())
    payload = context.to_payload()
    if json_output:
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    typer.echo(f"{payload['year']}年 {payload['month']}月 {payload['day']}日")
    typer.echo(f"旬空: {''.join(payload['void'])}")  # type: ignore[arg-type]


@config_app.command("init")
def config_init() -> None:
    """Write the default settings file if none exists."""

    typer.echo(str(ensure_default_config()))


@config_app.command("show")
def config_show(
    json_output: bool = typer.Option(False, "--json", help="Emit the settings as JSON."),
) -> None:
    """Print the effective settings."""

    settings = load_settings()
    if json_output:
        typer.echo(json.dumps(settings.model_dump(), ensure_ascii=False, indent=2))
        return
    typer.echo(f"# {get_config_home()}")
    for section, values in settings.model_dump().items():
        typer.echo(f"{section}: {values}")


app.add_typer(config_app, name="config")


__all__ = [
    "app",
]
