"""
Request orchestration: edge cache, value cache, aggregation, rendering.

Only successful renders are written to either cache tier. Error cards are
returned with ``cacheable=False`` so a transient upstream failure clears up
on the next request.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Mapping, Optional

from .cache import EdgeCache, TTLStore, summary_cache_key
from .config import Settings
from .errors import InvalidParameterError, MissingParameterError, RenderError, UpstreamError
from .logging import get_logger
from .models import AccountSummary
from .render import FALLBACK_ERROR_SVG, render_error_card, render_summary_card, summary_stat_rows
from .segments import LEGEND_LINE_HEIGHT, RADIUS, TOP_N, build_segments
from .theme import Theme, theme_from_query

logger = get_logger(__name__)

# GitHub logins: alnum and single inner hyphens; max length 39
USERNAME_RE = re.compile(r"^(?=.{1,39}$)[A-Za-z0-9]+(?:-[A-Za-z0-9]+)*$")


@dataclass(frozen=True)
class CardResponse:
    svg: str
    cacheable: bool


def require_user(params: Mapping[str, str]) -> str:
    user = (params.get("user") or "").strip()
    if not user:
        raise MissingParameterError("user is required")
    if not USERNAME_RE.match(user):
        raise InvalidParameterError("invalid user")
    return user


class CardService:
    def __init__(
        self,
        settings: Settings,
        fetch_summary: Callable[[str], AccountSummary],
        *,
        edge_cache: Optional[EdgeCache] = None,
        value_store: Optional[TTLStore] = None,
    ) -> None:
        self.settings = settings
        self.fetch_summary = fetch_summary
        if edge_cache is None:
            edge_cache = EdgeCache(settings.edge_cache_ttl, max_entries=settings.cache_max_entries)
        self.edge_cache = edge_cache
        self.value_store: Optional[TTLStore] = None
        if settings.value_cache_enabled:
            if value_store is None:
                value_store = TTLStore(max_entries=settings.cache_max_entries)
            self.value_store = value_store

    def serve(self, request_key: str, params: Mapping[str, str]) -> CardResponse:
        theme = theme_from_query(params.get("background-color"), params.get("text-color"))

        cached = self.edge_cache.get(request_key)
        if cached is not None:
            logger.debug("edge cache hit: %s", request_key)
            return CardResponse(cached, cacheable=True)

        try:
            user = require_user(params)
        except (MissingParameterError, InvalidParameterError) as e:
            return self._error_card(theme, str(e))

        cache_key = summary_cache_key(user, theme)
        if self.value_store is not None:
            svg = self.value_store.get(cache_key)
            if svg is not None:
                logger.debug("value cache hit: %s", cache_key)
                self.edge_cache.put(request_key, svg)
                return CardResponse(svg, cacheable=True)

        try:
            svg = self._render_summary(user, theme)
        except (UpstreamError, RenderError) as e:
            logger.warning("summary failed: user=%s error=%s", user, e)
            return self._error_card(theme, str(e))
        except Exception:
            logger.exception("unexpected error building summary: user=%s", user)
            return self._error_card(theme, "Unexpected server error")

        if self.value_store is not None:
            self.value_store.put(cache_key, svg, self.settings.value_cache_ttl)
        self.edge_cache.put(request_key, svg)
        return CardResponse(svg, cacheable=True)

    def _render_summary(self, user: str, theme: Theme) -> str:
        summary = self.fetch_summary(user)
        segments = build_segments(summary.languages, TOP_N, RADIUS, LEGEND_LINE_HEIGHT)
        return render_summary_card(
            theme,
            f"{user} GitHub Stats",
            summary_stat_rows(summary),
            segments,
            f"GitHub stats for {user}",
        )

    def _error_card(self, theme: Theme, message: str) -> CardResponse:
        try:
            svg = render_error_card(theme, message)
        except RenderError:
            logger.exception("error card render failed: message=%s", message)
            svg = FALLBACK_ERROR_SVG
        return CardResponse(svg, cacheable=False)
