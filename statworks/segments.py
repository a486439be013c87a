"""
Ring-chart geometry for the language breakdown.

Every segment is drawn as its own full circle whose stroke is dashed so that
only one arc is visible: ``stroke-dasharray="<arc> <circumference>"`` and a
negative ``stroke-dashoffset`` equal to the arc length of all previous
segments. No layout pass is needed.
"""

from __future__ import annotations

import math
from typing import List, Sequence, Tuple

from .models import LanguageSegment

PALETTE: Tuple[str, ...] = (
    "#DEA584",
    "#E34C26",
    "#3572A5",
    "#F1E05A",
    "#00ADD8",
    "#9B59B6",
    "#16A085",
)
FALLBACK_COLOR = "#95A5A6"

TOP_N = 5
RADIUS = 40.0
LEGEND_LINE_HEIGHT = 20


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def palette_color(index: int) -> str:
    return PALETTE[index] if 0 <= index < len(PALETTE) else FALLBACK_COLOR


def build_lang_segments(
    langs: Sequence[Tuple[str, str, float]],
    radius: float,
    legend_line_height: int,
) -> List[LanguageSegment]:
    """Lay out pre-colored ``(name, color, ratio)`` triples around the ring."""
    c = 2.0 * math.pi * radius
    acc = 0.0
    out: List[LanguageSegment] = []

    for i, (name, color, ratio) in enumerate(langs):
        p = _clamp(float(ratio), 0.0, 1.0)
        out.append(
            LanguageSegment(
                name=name,
                color=color,
                percent_text=f"{p * 100.0:.1f}%",
                dasharray=f"{c * p:.4f} {c:.4f}",
                dashoffset=f"{-(c * acc):.4f}",
                legend_dy=i * legend_line_height,
            )
        )
        acc += p

    return out


def build_segments(
    languages: Sequence[Tuple[str, int]],
    top_n: int = TOP_N,
    radius: float = RADIUS,
    legend_line_height: int = LEGEND_LINE_HEIGHT,
) -> List[LanguageSegment]:
    """
    Turn ranked ``(language, bytes)`` pairs into segments for the top ``top_n``.

    Ratios are taken against the total of *all* languages, so the drawn
    segments cover less than the full ring when the tail is cut off.
    Returns an empty list when there is nothing to draw.
    """
    total = sum(size for _, size in languages)
    if total <= 0:
        return []

    colored = [
        (name, palette_color(idx), size / total)
        for idx, (name, size) in enumerate(languages[:max(0, top_n)])
    ]
    return build_lang_segments(colored, radius, legend_line_height)
