"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .errors import ConfigError

GITHUB_API_BASE = "https://api.github.com"
API_VERSION = "2022-11-28"
USER_AGENT = "statworks"

# Responses from successful renders may sit at the edge for a day.
CACHE_CONTROL = "public, s-maxage=86400, stale-while-revalidate=3600"
ERROR_CACHE_CONTROL = "no-store"

MAX_REPOS = 400
MAX_EVENT_PAGES = 3
VALUE_CACHE_TTL_SECONDS = 6 * 60 * 60
EDGE_CACHE_TTL_SECONDS = 86400
CACHE_MAX_ENTRIES = 10000

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_str(env: Mapping[str, str], key: str, default: str) -> str:
    value = (env.get(key) or "").strip()
    return value or default


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ConfigError(f"{key} must not be negative, got {value}")
    return value


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{key} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigError(f"{key} must be positive, got {value}")
    return value


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = (env.get(key) or "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE:
        return True
    if raw in _FALSE:
        return False
    raise ConfigError(f"{key} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    github_api_base: str = GITHUB_API_BASE
    api_version: str = API_VERSION
    user_agent: str = USER_AGENT
    request_timeout: float = 20.0
    request_deadline: float = 25.0
    max_repos: int = MAX_REPOS
    max_event_pages: int = MAX_EVENT_PAGES
    value_cache_ttl: int = VALUE_CACHE_TTL_SECONDS
    edge_cache_ttl: int = EDGE_CACHE_TTL_SECONDS
    cache_max_entries: int = CACHE_MAX_ENTRIES
    value_cache_enabled: bool = True
    log_level: str = "INFO"
    port: int = 5000

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            github_api_base=_env_str(env, "GITHUB_API_BASE", GITHUB_API_BASE).rstrip("/"),
            api_version=_env_str(env, "GITHUB_API_VERSION", API_VERSION),
            user_agent=_env_str(env, "STATWORKS_USER_AGENT", USER_AGENT),
            request_timeout=_env_float(env, "REQUEST_TIMEOUT_SECONDS", 20.0),
            request_deadline=_env_float(env, "REQUEST_DEADLINE_SECONDS", 25.0),
            max_repos=_env_int(env, "MAX_REPOS", MAX_REPOS),
            max_event_pages=_env_int(env, "MAX_EVENT_PAGES", MAX_EVENT_PAGES),
            value_cache_ttl=_env_int(env, "CACHE_TTL_SECONDS", VALUE_CACHE_TTL_SECONDS),
            edge_cache_ttl=_env_int(env, "EDGE_CACHE_TTL_SECONDS", EDGE_CACHE_TTL_SECONDS),
            cache_max_entries=_env_int(env, "CACHE_MAX_ENTRIES", CACHE_MAX_ENTRIES),
            value_cache_enabled=_env_bool(env, "VALUE_CACHE_ENABLED", True),
            log_level=_env_str(env, "LOG_LEVEL", "INFO").upper(),
            port=_env_int(env, "PORT", 5000),
        )
