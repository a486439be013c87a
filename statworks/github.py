"""
GitHub REST client and account summary aggregation.

Two feeds are read for an account:

- ``/users/{login}/repos``: paged until an empty page, forks and archived
  repositories skipped, at most ``max_repos`` qualifying repositories
  processed. Each one costs an extra ``/repos/{owner}/{name}/languages``
  request.
- ``/users/{login}/events/public``: at most ``max_event_pages`` pages. The
  counters built from it are a sample of recent activity, not a full history.

All requests of one aggregation share a single deadline. Any failure aborts
the aggregation; partial summaries are never returned.
"""

from __future__ import annotations

import itertools
import time
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

import requests

from .config import Settings
from .errors import (
    UpstreamError,
    UpstreamStatusError,
    UpstreamTimeoutError,
    UpstreamTransportError,
)
from .logging import get_logger
from .models import ISSUE, PULL_REQUEST, PUSH, AccountSummary, EventRecord, RepositoryRecord, payload_int

logger = get_logger(__name__)

PER_PAGE = 100
ERROR_BODY_LIMIT = 600


# -----------------------------
# Deadline
# -----------------------------
class Deadline:
    """Wall-clock budget shared by every request of one aggregation."""

    def __init__(self, seconds: Optional[float], clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._expires_at = None if seconds is None else clock() + seconds

    def remaining(self) -> Optional[float]:
        if self._expires_at is None:
            return None
        return self._expires_at - self._clock()

    def timeout_for(self, per_request: float) -> float:
        remaining = self.remaining()
        if remaining is None:
            return per_request
        if remaining <= 0:
            raise UpstreamTimeoutError("GitHub request deadline exceeded")
        return min(per_request, remaining)


# -----------------------------
# HTTP
# -----------------------------
class GitHubClient:
    def __init__(self, settings: Settings, session: Optional[requests.Session] = None) -> None:
        self.settings = settings
        self.session = session or requests.Session()

    def _headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/vnd.github+json",
            "User-Agent": self.settings.user_agent,
            "X-GitHub-Api-Version": self.settings.api_version,
        }

    def get_json(self, path: str, *, params: Optional[dict] = None, deadline: Optional[Deadline] = None) -> Any:
        url = f"{self.settings.github_api_base}{path}"
        timeout = self.settings.request_timeout
        if deadline is not None:
            timeout = deadline.timeout_for(timeout)

        logger.debug("GET %s params=%s timeout=%.1f", url, params, timeout)
        try:
            resp = self.session.get(url, headers=self._headers(), params=params, timeout=timeout)
        except requests.Timeout as e:
            raise UpstreamTimeoutError(f"GitHub request timed out: {url}") from e
        except requests.RequestException as e:
            raise UpstreamTransportError(f"GitHub request failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            body = (resp.text or "")[:ERROR_BODY_LIMIT]
            logger.warning("GitHub API error: url=%s status=%s body=%s", url, resp.status_code, body)
            raise UpstreamStatusError(resp.status_code, body, url=url)

        try:
            return resp.json()
        except ValueError as e:
            raise UpstreamTransportError(f"GitHub returned invalid JSON for {url}") from e

    def pages(self, path: str, *, params: Optional[dict] = None, deadline: Optional[Deadline] = None,
              max_pages: Optional[int] = None) -> "Pages":
        return Pages(self, path, params=params, deadline=deadline, max_pages=max_pages)


class Pages:
    """
    Lazy page sequence over a ``page=N`` endpoint.

    Pages are fetched one at a time as iteration advances and iteration ends
    at the first empty page (or after ``max_pages``). Iterating again starts
    over from page 1.
    """

    def __init__(self, client: GitHubClient, path: str, *, params: Optional[dict] = None,
                 deadline: Optional[Deadline] = None, max_pages: Optional[int] = None) -> None:
        self.client = client
        self.path = path
        self.params = dict(params or {})
        self.deadline = deadline
        self.max_pages = max_pages

    def __iter__(self) -> Iterator[List[Dict[str, Any]]]:
        page = 1
        while self.max_pages is None or page <= self.max_pages:
            items = self.client.get_json(self.path, params={**self.params, "page": page}, deadline=self.deadline)
            if not isinstance(items, list):
                raise UpstreamError(f"Unexpected GitHub payload for {self.path} page {page}")
            logger.debug("page fetched: path=%s page=%d count=%d", self.path, page, len(items))
            if not items:
                return
            yield items
            page += 1


# -----------------------------
# Aggregation
# -----------------------------
def merge_languages(languages: Dict[str, int], lang_map: Dict[str, Any]) -> None:
    for name, size in lang_map.items():
        size = payload_int(size, f"languages.{name}")
        if size == 0:
            continue
        languages[name] = languages.get(name, 0) + size


def rank_languages(languages: Dict[str, int]) -> Tuple[Tuple[str, int], ...]:
    # sorted() is stable, so equal sizes keep first-seen order
    return tuple(sorted(languages.items(), key=lambda kv: kv[1], reverse=True))


class SummaryAggregator:
    def __init__(self, client: GitHubClient, *, max_repos: Optional[int] = None,
                 max_event_pages: Optional[int] = None, deadline_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic) -> None:
        settings = client.settings
        self.client = client
        self.max_repos = settings.max_repos if max_repos is None else max_repos
        self.max_event_pages = settings.max_event_pages if max_event_pages is None else max_event_pages
        self.deadline_seconds = settings.request_deadline if deadline_seconds is None else deadline_seconds
        self._clock = clock

    def fetch_summary(self, login: str) -> AccountSummary:
        logger.info("fetch_summary start: login=%s", login)
        deadline = Deadline(self.deadline_seconds, clock=self._clock)

        languages: Dict[str, int] = {}
        stars_total = 0
        repo_count = 0
        for repo in itertools.islice(self._qualifying_repositories(login, deadline), self.max_repos):
            repo_count += 1
            stars_total += repo.stars
            lang_map = self.client.get_json(f"/repos/{repo.owner}/{repo.name}/languages", deadline=deadline)
            if not isinstance(lang_map, dict):
                raise UpstreamError(f"Unexpected GitHub payload for {repo.owner}/{repo.name} languages")
            merge_languages(languages, lang_map)

        commits, pull_requests, issues = self._activity_counts(login, deadline)
        ranked = rank_languages(languages)

        logger.info(
            "fetch_summary done: login=%s repos=%d languages=%d stars=%d",
            login, repo_count, len(ranked), stars_total,
        )
        return AccountSummary(
            languages=ranked,
            stars_total=stars_total,
            commits=commits,
            pull_requests=pull_requests,
            issues=issues,
            repositories_scanned=repo_count,
        )

    def _qualifying_repositories(self, login: str, deadline: Deadline) -> Iterator[RepositoryRecord]:
        pages = self.client.pages(
            f"/users/{login}/repos",
            params={"per_page": PER_PAGE, "sort": "updated"},
            deadline=deadline,
        )
        for items in pages:
            for item in items:
                repo = RepositoryRecord.from_api(item)
                if repo.qualifies:
                    yield repo

    def _activity_counts(self, login: str, deadline: Deadline) -> Tuple[int, int, int]:
        logger.info("activity scan start: login=%s max_pages=%d", login, self.max_event_pages)
        commits = 0
        pull_requests = 0
        issues = 0

        pages = self.client.pages(
            f"/users/{login}/events/public",
            params={"per_page": PER_PAGE},
            deadline=deadline,
            max_pages=self.max_event_pages,
        )
        for items in pages:
            for item in items:
                event = EventRecord.from_api(item)
                if event.kind == PUSH:
                    commits += event.size or 0
                elif event.kind == PULL_REQUEST:
                    pull_requests += 1
                elif event.kind == ISSUE:
                    issues += 1

        logger.info(
            "activity scan done: login=%s commits=%d prs=%d issues=%d",
            login, commits, pull_requests, issues,
        )
        return commits, pull_requests, issues
