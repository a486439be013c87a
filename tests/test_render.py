"""Tests for SVG rendering and theme resolution."""

from __future__ import annotations

from statworks.models import AccountSummary, StatRow
from statworks.render import render_error_card, render_summary_card, summary_stat_rows
from statworks.segments import build_segments
from statworks.theme import DEFAULT_BACKGROUND, DEFAULT_TEXT, Theme, theme_from_query


def test_theme_defaults_and_trimming() -> None:
    assert theme_from_query(None, None) == Theme(DEFAULT_BACKGROUND, DEFAULT_TEXT)
    assert theme_from_query("   ", "") == Theme(DEFAULT_BACKGROUND, DEFAULT_TEXT)
    assert theme_from_query(" #111111 ", "white") == Theme("#111111", "white")


def test_summary_card_includes_stats_and_ring() -> None:
    summary = AccountSummary(
        languages=(("Rust", 80), ("Go", 20)),
        stars_total=42,
        commits=7,
        pull_requests=3,
        issues=1,
    )
    svg = render_summary_card(
        Theme("#000000", "#ffffff"),
        "octo GitHub Stats",
        summary_stat_rows(summary),
        build_segments(summary.languages),
        "GitHub stats for octo",
    )

    assert svg.startswith("<svg")
    assert 'aria-label="GitHub stats for octo"' in svg
    assert 'fill="#000000"' in svg
    assert "octo GitHub Stats" in svg
    assert "Commits (year)" in svg
    assert ">42<" in svg
    assert "Top Languages" in svg
    assert 'stroke-dasharray="201.0619 251.3274"' in svg
    assert 'stroke-dashoffset="-201.0619"' in svg
    assert "Rust 80.0%" in svg


def test_stat_rows_layout() -> None:
    rows = summary_stat_rows(AccountSummary(languages=(("C", 1),), stars_total=1, commits=2, pull_requests=3, issues=4))

    assert rows == [
        StatRow("Stars", "1", 0),
        StatRow("Commits (year)", "2", 20),
        StatRow("Pull Requests", "3", 40),
        StatRow("Issues", "4", 60),
        StatRow("Languages", "1", 80),
    ]


def test_ring_is_omitted_without_segments() -> None:
    svg = render_summary_card(Theme(), "t", [], [], "a")

    assert "Top Languages" not in svg
    assert "stroke-dasharray" not in svg


def test_error_card() -> None:
    svg = render_error_card(Theme(), "user is required")

    assert ">Error<" in svg
    assert "user is required" in svg
    assert "Top Languages" not in svg


def test_user_supplied_values_are_escaped() -> None:
    svg = render_error_card(Theme('"><script>', "#fff"), "<b>bad</b>")

    assert "<script>" not in svg
    assert "&lt;b&gt;bad&lt;/b&gt;" in svg
