from __future__ import annotations

import pytest

from statworks.config import Settings
from statworks.github import GitHubClient, SummaryAggregator
from tests._fixtures.github import FakeGitHub


@pytest.fixture
def settings() -> Settings:
    return Settings(log_level="WARNING")


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def aggregator(settings: Settings, fake_github: FakeGitHub) -> SummaryAggregator:
    return SummaryAggregator(GitHubClient(settings, session=fake_github))
