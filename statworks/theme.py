"""Card colors taken from the query string."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_BACKGROUND = "#F6F1D1"
DEFAULT_TEXT = "#0B2027"


@dataclass(frozen=True)
class Theme:
    background_color: str = DEFAULT_BACKGROUND
    text_color: str = DEFAULT_TEXT


def _non_blank(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def theme_from_query(background: Optional[str], text: Optional[str]) -> Theme:
    return Theme(
        background_color=_non_blank(background) or DEFAULT_BACKGROUND,
        text_color=_non_blank(text) or DEFAULT_TEXT,
    )
