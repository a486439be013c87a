"""Value types shared by the aggregator, the segment builder and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .errors import UpstreamError

PUSH = "push"
PULL_REQUEST = "pull_request"
ISSUE = "issue"
OTHER = "other"

_EVENT_KINDS = {
    "PushEvent": PUSH,
    "PullRequestEvent": PULL_REQUEST,
    "IssuesEvent": ISSUE,
}


def payload_int(value: Any, field: str) -> int:
    """Read a non-negative count from a GitHub payload, rejecting anything else."""
    if value is None:
        return 0
    if isinstance(value, bool):
        raise UpstreamError(f"Unexpected GitHub payload: {field}={value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise UpstreamError(f"Unexpected GitHub payload: {field}={value!r}") from None
    if number < 0:
        raise UpstreamError(f"Unexpected GitHub payload: {field}={value!r}")
    return number


def _require_dict(item: Any, what: str) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise UpstreamError(f"Unexpected GitHub payload: {what} item is {type(item).__name__}")
    return item


@dataclass(frozen=True)
class RepositoryRecord:
    owner: str
    name: str
    stars: int
    fork: bool
    archived: bool

    @property
    def qualifies(self) -> bool:
        return not (self.fork or self.archived)

    @classmethod
    def from_api(cls, item: Any) -> "RepositoryRecord":
        item = _require_dict(item, "repository")
        owner = item.get("owner") or {}
        if not isinstance(owner, dict):
            raise UpstreamError(f"Unexpected GitHub payload: repository owner={owner!r}")
        return cls(
            owner=str(owner.get("login") or ""),
            name=str(item.get("name") or ""),
            stars=payload_int(item.get("stargazers_count"), "stargazers_count"),
            fork=bool(item.get("fork")),
            archived=bool(item.get("archived")),
        )


@dataclass(frozen=True)
class EventRecord:
    kind: str
    size: Optional[int] = None

    @classmethod
    def from_api(cls, item: Any) -> "EventRecord":
        item = _require_dict(item, "event")
        kind = _EVENT_KINDS.get(str(item.get("type") or ""), OTHER)
        size = None
        payload = item.get("payload")
        if isinstance(payload, dict) and payload.get("size") is not None:
            size = payload_int(payload["size"], "payload.size")
        return cls(kind=kind, size=size)


@dataclass(frozen=True)
class AccountSummary:
    """
    Aggregated public footprint of one account.

    ``languages`` is ranked by byte count (descending, ties in first-seen
    order) and never holds zero-byte or duplicate entries. Activity counters
    come from the first few pages of the public event feed only, so they
    describe recent activity rather than an all-time total.
    """

    languages: Tuple[Tuple[str, int], ...]
    stars_total: int
    commits: int
    pull_requests: int
    issues: int
    repositories_scanned: int = 0


@dataclass(frozen=True)
class LanguageSegment:
    name: str
    color: str
    percent_text: str
    dasharray: str
    dashoffset: str
    legend_dy: int


@dataclass(frozen=True)
class StatRow:
    label: str
    value: str
    dy: int
