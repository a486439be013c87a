"""Tests for the cache tiers."""

from __future__ import annotations

from statworks.cache import EdgeCache, TTLStore, summary_cache_key
from statworks.theme import Theme
from tests._fixtures.github import FakeClock


def test_summary_cache_key_uses_user_and_theme() -> None:
    key = summary_cache_key("octocat", Theme(background_color="#000", text_color="#fff"))

    assert key == "summary:octocat:#000:#fff"


def test_ttl_store_expires_entries() -> None:
    clock = FakeClock(1000.0)
    store = TTLStore(clock=clock)
    store.put("k", "<svg/>", ttl=60)

    clock.advance(59)
    assert store.get("k") == "<svg/>"

    clock.advance(1)
    assert store.get("k") is None
    assert len(store) == 0


def test_ttl_store_replaces_whole_entry() -> None:
    clock = FakeClock()
    store = TTLStore(clock=clock)
    store.put("k", "first", ttl=10)
    clock.advance(5)
    store.put("k", "second", ttl=10)
    clock.advance(8)

    assert store.get("k") == "second"


def test_edge_cache_uses_its_own_ttl() -> None:
    clock = FakeClock()
    edge = EdgeCache(ttl=100, store=TTLStore(clock=clock))
    edge.put("http://localhost/summary?user=a", "<svg/>")

    assert "http://localhost/summary?user=a" in edge
    clock.advance(100)
    assert edge.get("http://localhost/summary?user=a") is None


def test_expired_entries_are_dropped_on_write() -> None:
    clock = FakeClock()
    edge = EdgeCache(ttl=60, store=TTLStore(clock=clock))
    for n in range(2000):
        edge.put(f"http://localhost/summary?user=octo&n={n}", "<svg/>")

    clock.advance(10000)
    edge.put("http://localhost/summary?user=octo&n=last", "<svg/>")

    assert len(edge) == 1


def test_store_is_bounded_by_evicting_oldest_writes() -> None:
    clock = FakeClock()
    store = TTLStore(clock=clock, max_entries=3)
    for key in ("a", "b", "c"):
        store.put(key, key, ttl=100)
    store.put("a", "a2", ttl=100)
    store.put("d", "d", ttl=100)

    assert len(store) == 3
    assert store.get("b") is None
    assert store.get("a") == "a2"
    assert store.get("c") == "c"
    assert store.get("d") == "d"


def test_edge_cache_caps_an_unbounded_store() -> None:
    edge = EdgeCache(ttl=100, store=TTLStore(max_entries=None), max_entries=2)
    for n in range(5):
        edge.put(f"u{n}", "<svg/>")

    assert len(edge) == 2
    assert "u4" in edge
    assert "u0" not in edge
