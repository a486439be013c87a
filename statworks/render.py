"""SVG card rendering on top of the Jinja2 environment Flask ships with."""

from __future__ import annotations

from typing import Any, Dict, List, Sequence

from jinja2 import Environment, PackageLoader, StrictUndefined, TemplateError, select_autoescape

from .errors import RenderError
from .models import AccountSummary, LanguageSegment, StatRow
from .theme import Theme

DEFAULT_FONT_FAMILY = '-apple-system, BlinkMacSystemFont, "Segoe UI", Helvetica, Arial, sans-serif'
STATS_CARD_TEMPLATE = "svg/stats_card.svg"

# Card geometry. The pie radius must match the radius used for segment dash math.
CARD_LAYOUT: Dict[str, Any] = {
    "width": 420,
    "height": 160,
    "radius": 8,
    "pad_x": 18,
    "title_y": 28,
    "title_size": 16,
    "left_x": 18,
    "left_y": 60,
    "stat_value_x": 140,
    "stat_label_size": 12,
    "stat_value_size": 12,
    "stat_label_opacity": 0.7,
    "top_languages_title": "Top Languages",
    "section_title_size": 12,
    "pie_group_x": 230,
    "pie_group_y": 30,
    "pie_title_y": 12,
    "pie_cx": 46,
    "pie_cy": 70,
    "pie_r": 40.0,
    "pie_stroke": 12.0,
    "pie_base_stroke": "#e1e4e8",
    "legend_x": 104,
    "legend_y": 34,
    "legend_size": 10,
}

_env = Environment(
    loader=PackageLoader("statworks", "templates"),
    autoescape=select_autoescape(["svg", "xml", "html"]),
    undefined=StrictUndefined,
    trim_blocks=True,
    lstrip_blocks=True,
)


def render_summary_card(
    theme: Theme,
    title: str,
    stats_rows: Sequence[StatRow],
    segments: Sequence[LanguageSegment],
    aria_label: str,
) -> str:
    context = dict(CARD_LAYOUT)
    context.update(
        theme=theme,
        title=title,
        aria_label=aria_label,
        font_family=DEFAULT_FONT_FAMILY,
        stats_rows=list(stats_rows),
        lang_segments=list(segments),
        show_pie=bool(segments),
    )
    try:
        return _env.get_template(STATS_CARD_TEMPLATE).render(**context)
    except TemplateError as e:
        raise RenderError(f"Template error: {e}") from e


def render_error_card(theme: Theme, message: str) -> str:
    return render_summary_card(
        theme,
        "Error",
        [StatRow(label="Message", value=message, dy=0)],
        [],
        "Error",
    )


def summary_stat_rows(summary: AccountSummary) -> List[StatRow]:
    values = [
        ("Stars", summary.stars_total),
        ("Commits (year)", summary.commits),
        ("Pull Requests", summary.pull_requests),
        ("Issues", summary.issues),
        ("Languages", len(summary.languages)),
    ]
    return [StatRow(label=label, value=str(value), dy=i * 20) for i, (label, value) in enumerate(values)]


# Served when even the error card cannot be rendered.
FALLBACK_ERROR_SVG = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="420" height="60" viewBox="0 0 420 60" '
    'role="img" aria-label="Error">'
    '<rect width="420" height="60" rx="8" fill="#F6F1D1"/>'
    '<text x="18" y="36" font-family="sans-serif" font-size="14" fill="#0B2027">'
    "Unable to render card</text></svg>"
)
