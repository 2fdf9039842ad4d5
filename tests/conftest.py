"""Test fixtures for pytest."""

from copy import deepcopy
from typing import Generator
from unittest.mock import MagicMock

import pytest

from lib.data_types import (
    AuthorGroupRule,
    Config,
    Group,
    LotteryEnv,
    SelectionRules,
)
from lib.github_service import GitHubService
from lib.utilities import ActionLogger, ActionOutputs

REPOSITORY = "company/reviewer-lottery-test"
REF = "feature/new-endpoint"
PR_NUMBER = 42

BACKEND_CONFIG = Config(
    groups=[
        Group(name="backend-team", usernames=["alice", "bob", "charlie", "diana"]),
    ],
    selection_rules=SelectionRules(
        by_author_group=[
            AuthorGroupRule(group="backend-team", from_clause={"backend-team": 2}),
        ],
    ),
)

THREE_GROUPS = [
    Group(name="backend", usernames=["alice", "bob", "charlie"]),
    Group(name="frontend", usernames=["diana", "eve"]),
    Group(name="ops", usernames=["frank", "george"]),
]


@pytest.fixture(scope="function")
def backend_config() -> Generator[Config, None, None]:
    """Provide a fresh copy of the single backend team config."""
    yield deepcopy(BACKEND_CONFIG)


@pytest.fixture(scope="function")
def three_groups() -> Generator[list, None, None]:
    yield deepcopy(THREE_GROUPS)


@pytest.fixture(scope="function")
def lottery_env() -> LotteryEnv:
    return LotteryEnv(repository=REPOSITORY, ref=REF)


@pytest.fixture(scope="function")
def mocked_logger() -> MagicMock:
    return MagicMock(spec=ActionLogger)


@pytest.fixture(scope="function")
def mocked_outputs() -> MagicMock:
    return MagicMock(spec=ActionOutputs)


@pytest.fixture(scope="function")
def mocked_github_service() -> MagicMock:
    """GitHub service with an empty reviewer list and a successful POST."""
    service = MagicMock(spec=GitHubService)
    service.get_existing_reviewers.return_value = []
    service.set_reviewers.return_value = {"number": PR_NUMBER}
    return service
