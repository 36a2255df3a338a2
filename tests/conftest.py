from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import pytest

from toolinit.github_client import NotFoundError
from toolinit.output import LOGGER_NAME


class FakeLookup:
    """In-memory stand-in for `GitHubClient`."""

    def __init__(self, tags: dict[str, str], titles: dict[str, str] | None = None) -> None:
        self.tags = tags
        self.titles = titles or {}
        self.title_requests: list[str] = []

    def list_tags(self, repository: str) -> str:
        if repository not in self.tags:
            raise NotFoundError(f"Repository not found: {repository}")
        return self.tags[repository]

    def fetch_title(self, repository: str) -> str | None:
        self.title_requests.append(repository)
        return self.titles.get(repository)


@pytest.fixture
def make_lookup() -> Callable[..., FakeLookup]:
    return FakeLookup


@pytest.fixture(autouse=True)
def _reset_toolinit_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("TOOLINIT_GITHUB_URL", "TOOLINIT_GIT", "TOOLINIT_TIMEOUT", "TOOLINIT_MANIFEST"):
        monkeypatch.delenv(key, raising=False)
