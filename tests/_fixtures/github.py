"""Canned GitHub REST responses for offline tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple

API_BASE = "https://api.github.com"


class FakeClock:
    def __init__(self, now: float = 0.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


class FakeGitHub:
    """Stands in for ``requests.Session`` and serves canned GitHub REST data."""

    def __init__(self) -> None:
        self.repo_pages: List[List[Dict[str, Any]]] = []
        self.event_pages: List[List[Dict[str, Any]]] = []
        self.languages: Dict[str, Dict[str, int]] = {}
        self.overrides: Dict[str, FakeResponse] = {}
        self.raise_on: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.headers_seen: List[Dict[str, str]] = []
        self.timeouts: List[float] = []
        self.on_request = None

    def get(self, url: str, headers=None, params=None, timeout=None) -> FakeResponse:
        assert url.startswith(API_BASE)
        path = url[len(API_BASE):]
        params = dict(params or {})
        self.calls.append((path, params))
        self.headers_seen.append(dict(headers or {}))
        self.timeouts.append(timeout)
        if self.on_request is not None:
            self.on_request(path, params)

        if path in self.raise_on:
            raise self.raise_on[path]
        if path in self.overrides:
            return self.overrides[path]

        page = int(params.get("page", 1))
        if path.startswith("/users/") and path.endswith("/repos"):
            return FakeResponse(200, _page(self.repo_pages, page))
        if path.startswith("/users/") and path.endswith("/events/public"):
            return FakeResponse(200, _page(self.event_pages, page))
        if path.startswith("/repos/") and path.endswith("/languages"):
            key = path[len("/repos/"):-len("/languages")]
            return FakeResponse(200, self.languages.get(key, {}))
        return FakeResponse(404, {"message": "Not Found"})

    def paths(self, suffix: str) -> List[str]:
        return [path for path, _ in self.calls if path.endswith(suffix)]

    def pages_requested(self, suffix: str) -> List[int]:
        return [int(params["page"]) for path, params in self.calls if path.endswith(suffix)]


def _page(pages: List[List[Dict[str, Any]]], page: int) -> List[Dict[str, Any]]:
    if 1 <= page <= len(pages):
        return pages[page - 1]
    return []


def repo(name: str, stars: int = 0, *, fork: bool = False, archived: bool = False, owner: str = "octo") -> Dict[str, Any]:
    return {
        "name": name,
        "owner": {"login": owner},
        "stargazers_count": stars,
        "fork": fork,
        "archived": archived,
    }


def event(kind: str, size: Optional[int] = None, *, payload: bool = True) -> Dict[str, Any]:
    item: Dict[str, Any] = {"type": kind}
    if payload:
        item["payload"] = {} if size is None else {"size": size}
    return item
