"""Message catalogs for rendered readings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

__all__ = ["SUPPORTED_LOCALES", "register_translations", "translate"]


_TRANSLATIONS: dict[str, dict[str, str]] = {
    "zh": {
        # Chart -----------------------------------------------------------
        "chart.title": "本卦：{name}（{palace}，第{number}卦）",
        "chart.transformed": "变卦：{name}",
        "chart.static": "静卦，无动爻",
        "chart.body": "卦身：{body}",
        "chart.line": "{spirit} {kinship}{stem_branch} {symbol} {marker}",
        "chart.hidden": "    伏神 {hidden}",
        "chart.calendar": "{month}月 {day_stem}{day_branch}日 旬空：{void}",
        # Facts -----------------------------------------------------------
        "fact.category": "所问：{category}，取{target}为用神",
        "fact.category.world": "所问：{category}，以世爻为用神",
        "fact.selection.world_line": "以世爻（{position}）为用神",
        "fact.selection.single": "用神{kinship}只现一爻，在{position}",
        "fact.selection.world": "用神多现，取持世之{position}",
        "fact.selection.moving": "用神多现，取发动之{position}",
        "fact.selection.month_branch": "用神多现，取临月建之{position}",
        "fact.selection.day_branch": "用神多现，取临日辰之{position}",
        "fact.selection.response": "用神多现，取持应之{position}",
        "fact.selection.lowest_index": "用神多现，取最下之{position}",
        "fact.selection.hidden": "用神{kinship}不上卦，取{position}下伏神",
        "fact.hidden_calendar": "伏神{hidden}：月令{month_vitality}，日辰{day_vitality}",
        "fact.hidden_relation.concealing_generates": "飞神{concealing}生伏神{hidden}（+2）",
        "fact.hidden_relation.concealing_controls": "飞神{concealing}克伏神{hidden}（-2）",
        "fact.hidden_relation.hidden_generates": "伏神{hidden}生飞神{concealing}，泄气（-1）",
        "fact.hidden_relation.hidden_controls": "伏神{hidden}克飞神{concealing}（+1）",
        "fact.hidden_relation.neutral": "飞神{concealing}与伏神{hidden}比和",
        "fact.hidden_void": "伏神旬空（-2）",
        "fact.hidden_month_broken": "伏神月破（-4）",
        "fact.month_strength": "月建{element}，用神{vitality}（{points:+d}）",
        "fact.day_strength": "日辰{element}，用神{vitality}（{points:+d}）",
        "fact.transformation": "动化{transformed}{movement}，{relation}（{points:+d}）",
        "fact.month_clash": "月破（-4）",
        "fact.month_combination": "与月建相合（+2）",
        "fact.day_combination": "与日辰相合（+2）",
        "fact.day_harm": "与日辰相害（-1）",
        "fact.day_punishment": "与日辰相刑（-1）",
        "fact.day_punishment.self": "与日辰自刑（-1）",
        "fact.void": "用神旬空（-1）",
        "fact.latent_activation": "旺相逢日冲，暗动（+1）",
        "fact.day_broken": "休囚逢日冲，日破（-3）",
        "fact.day_clash": "动爻逢日冲（-1）",
        "fact.strength_verdict": "综合得分 {score}，用神{level}",
        "fact.hidden_adjustment": "飞伏合计 {total}：{before} → {after}",
        "fact.life_stage": "用神{element}临日辰{branch}，处{stage}之地",
        "fact.line_report": "{position} {kinship}{stem_branch}：{details}",
        "fact.moving_line": "{position} {kinship}{stem_branch} 化 {transformed_kinship}{transformed}{extra}",
        "fact.moving_line.acts.generates": "，生用神",
        "fact.moving_line.acts.controls": "，克用神",
        "fact.moving_line_adjustment": "动爻作用：{before} → {after}",
        "fact.bureau": "{branches}{kind}{element}局（{substance}，{points:+d}）",
        "fact.bureau.triad": "三合",
        "fact.bureau.trio": "三会",
        "fact.bureau.substantial": "成局",
        "fact.bureau.partial": "虚局",
        "fact.bureau_adjustment": "合局合计 {total}：{before} → {after}",
        "fact.judgment": "断：{judgment}（用神{strength}）",
        "fact.marriage_note.male.strong": "妻贤家富",
        "fact.marriage_note.male.weak": "求财或感情不顺",
        "fact.marriage_note.female.strong": "夫星得力",
        "fact.marriage_note.female.weak": "提防感情冷淡",
        "fact.timing": "事件可能应验于 {element} 日/月",
        # Line-report fragments ------------------------------------------
        "report.month.on_month": "临月建",
        "report.month.month_generates": "得月生",
        "report.month.month_controls": "受月克",
        "report.day.on_day": "临日辰",
        "report.day.day_generates": "得日生",
        "report.day.day_controls": "受日克",
        "report.day.day_clashes": "逢日冲",
        "report.day_broken": "日破",
        "report.month_combination": "月合",
        "report.day_combination": "日合",
        "report.day_punishment": "日刑",
        "report.day_harm": "日害",
        "report.interaction.clash": "与{position}相冲",
        "report.interaction.generates": "得{position}动生",
        "report.interaction.controls": "受{position}动克",
        "report.interaction.combination": "与{position}相合",
        "report.interaction.harm": "与{position}相害",
        "report.interaction.punishment": "与{position}相刑",
        "report.transformation.return_generate": "回头生",
        "report.transformation.return_control": "回头克",
        "report.transformation.drain": "化泄",
        "report.transformation.control_transformed": "克变爻",
        "report.transformed": "化出{kinship}{stem_branch}",
        "report.hidden": "伏{hidden}",
        "report.quiet": "安静",
        # Terms -----------------------------------------------------------
        "term.relation.same": "比和",
        "term.relation.generates": "回头生",
        "term.relation.controls": "回头克",
        "term.relation.generated_by": "化泄",
        "term.relation.none": "克变爻",
        "term.movement.advancing": "（化进神）",
        "term.movement.retreating": "（化退神）",
        "term.none": "无",
        "term.separator": "，",
        "report.decoration.judgment": "卦辞：{text}",
        "report.decoration.image": "大象：{text}",
        "report.decoration.line": "{name}：{text}",
    },
    "en": {
        "chart.title": "Original: {name} ({palace}, No. {number} {title})",
        "chart.transformed": "Transformed: {name}",
        "chart.static": "Static reading, no moving lines",
        "chart.body": "Hexagram body: {body}",
        "chart.line": "{spirit} {kinship} {stem_branch} {symbol} {marker}",
        "chart.hidden": "    hidden {hidden}",
        "chart.calendar": "Month {month}, day {day_stem}{day_branch}, void: {void}",
        "fact.category": "Question: {category}; governing kinship {target}",
        "fact.category.world": "Question: {category}; the World line governs",
        "fact.selection.world_line": "The World line ({position}) governs",
        "fact.selection.single": "{kinship} appears once, at {position}",
        "fact.selection.world": "Several candidates; the World line at {position} wins",
        "fact.selection.moving": "Several candidates; the moving line at {position} wins",
        "fact.selection.month_branch": "Several candidates; {position} sits on the month branch",
        "fact.selection.day_branch": "Several candidates; {position} sits on the day branch",
        "fact.selection.response": "Several candidates; the Response line at {position} wins",
        "fact.selection.lowest_index": "Several candidates; the lowest, {position}, is taken",
        "fact.selection.hidden": "{kinship} is absent; the hidden spirit under {position} governs",
        "fact.hidden_calendar": "Hidden spirit {hidden}: month {month_vitality}, day {day_vitality}",
        "fact.hidden_relation.concealing_generates": "Concealing {concealing} generates hidden {hidden} (+2)",
        "fact.hidden_relation.concealing_controls": "Concealing {concealing} controls hidden {hidden} (-2)",
        "fact.hidden_relation.hidden_generates": "Hidden {hidden} drains into {concealing} (-1)",
        "fact.hidden_relation.hidden_controls": "Hidden {hidden} controls {concealing} (+1)",
        "fact.hidden_relation.neutral": "Hidden {hidden} and concealing {concealing} are neutral",
        "fact.hidden_void": "Hidden spirit is void (-2)",
        "fact.hidden_month_broken": "Hidden spirit is month-broken (-4)",
        "fact.month_strength": "Month element {element}: {vitality} ({points:+d})",
        "fact.day_strength": "Day element {element}: {vitality} ({points:+d})",
        "fact.transformation": "Moves into {transformed}{movement}: {relation} ({points:+d})",
        "fact.month_clash": "Clashed by the month (-4)",
        "fact.month_combination": "Combines with the month (+2)",
        "fact.day_combination": "Combines with the day (+2)",
        "fact.day_harm": "Harmed by the day (-1)",
        "fact.day_punishment": "Punished by the day (-1)",
        "fact.day_punishment.self": "Self-punishment with the day (-1)",
        "fact.void": "Void (-1)",
        "fact.latent_activation": "Strong and clashed by the day: latent activation (+1)",
        "fact.day_broken": "Weak and clashed by the day: day-broken (-3)",
        "fact.day_clash": "Moving line clashed by the day (-1)",
        "fact.strength_verdict": "Total score {score}: {level}",
        "fact.hidden_adjustment": "Concealing tally {total}: {before} -> {after}",
        "fact.life_stage": "{element} at {branch}: {stage}",
        "fact.line_report": "{position} {kinship} {stem_branch}: {details}",
        "fact.moving_line": "{position} {kinship} {stem_branch} -> {transformed_kinship} {transformed}{extra}",
        "fact.moving_line.acts.generates": ", generates the governing line",
        "fact.moving_line.acts.controls": ", controls the governing line",
        "fact.moving_line_adjustment": "Moving-line support: {before} -> {after}",
        "fact.bureau": "{kind} {branches} ({element}, {substance}, {points:+d})",
        "fact.bureau.triad": "Triad",
        "fact.bureau.trio": "Seasonal trio",
        "fact.bureau.substantial": "substantial",
        "fact.bureau.partial": "partial",
        "fact.bureau_adjustment": "Bureau tally {total}: {before} -> {after}",
        "fact.judgment": "Judgment: {judgment} (strength {strength})",
        "fact.marriage_note.male.strong": "A capable wife and a prosperous home",
        "fact.marriage_note.male.weak": "Money or romance may not go smoothly",
        "fact.marriage_note.female.strong": "The husband star is strong",
        "fact.marriage_note.female.weak": "Beware of the relationship cooling",
        "fact.timing": "The matter may come to pass on a {element} day or month",
        "report.month.on_month": "on the month",
        "report.month.month_generates": "generated by the month",
        "report.month.month_controls": "controlled by the month",
        "report.day.on_day": "on the day",
        "report.day.day_generates": "generated by the day",
        "report.day.day_controls": "controlled by the day",
        "report.day.day_clashes": "clashed by the day",
        "report.day_broken": "day-broken",
        "report.month_combination": "month combination",
        "report.day_combination": "day combination",
        "report.day_punishment": "day punishment",
        "report.day_harm": "day harm",
        "report.interaction.clash": "clashes {position}",
        "report.interaction.generates": "generated by moving {position}",
        "report.interaction.controls": "controlled by moving {position}",
        "report.interaction.combination": "combines with {position}",
        "report.interaction.harm": "harmed by {position}",
        "report.interaction.punishment": "punished by {position}",
        "report.transformation.return_generate": "returns to generate",
        "report.transformation.return_control": "returns to control",
        "report.transformation.drain": "drains into its change",
        "report.transformation.control_transformed": "controls its change",
        "report.transformed": "becomes {kinship} {stem_branch}",
        "report.hidden": "hides {hidden}",
        "report.quiet": "quiet",
        "term.relation.same": "same element",
        "term.relation.generates": "returns to generate",
        "term.relation.controls": "returns to control",
        "term.relation.generated_by": "drains",
        "term.relation.none": "controls its change",
        "term.movement.advancing": " (advancing)",
        "term.movement.retreating": " (retreating)",
        "term.none": "none",
        "term.separator": ", ",
        "report.decoration.judgment": "Judgment text: {text}",
        "report.decoration.image": "Great Image: {text}",
        "report.decoration.line": "{name}: {text}",
    },
}

SUPPORTED_LOCALES: tuple[str, ...] = tuple(_TRANSLATIONS)
_DEFAULT_LOCALE = "zh"


def register_translations(locale: str, mapping: Mapping[str, str]) -> None:
    """Register or update translations for *locale* from *mapping*."""

    bucket = _TRANSLATIONS.setdefault(locale, {})
    bucket.update({str(key): str(value) for key, value in mapping.items()})


def _lookup(locale: str, key: str) -> str | None:
    table = _TRANSLATIONS.get(locale)
    if not table:
        return None
    return table.get(key)


def translate(key: str, *, locale: str | None = None, default: str | None = None, **params: Any) -> str:
    """Return the translated string for *key* rendered with *params*."""

    active_locale = locale or _DEFAULT_LOCALE
    template = _lookup(active_locale, key)
    if template is None:
        template = _lookup(_DEFAULT_LOCALE, key)
    if template is None:
        template = default if default is not None else key
    if params:
        return template.format(**params)
    return template
