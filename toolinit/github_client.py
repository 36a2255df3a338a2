"""
github_client.py

Responsibility: Isolate all interaction with GitHub.

This module must be the only place that:
- Builds GitHub repository URLs from an `owner/name` identifier
- Runs `git ls-remote` against GitHub
- Sends HTTP requests to github.com and interprets the responses

Everything else (version selection, manifest writing, CLI behavior) should talk to
GitHub through the `RemoteMetadataLookup` protocol so it can be replaced in tests.
"""

from __future__ import annotations

import html
import logging
import os
import re
import subprocess
from typing import Protocol

import requests

logger = logging.getLogger(__name__)

_TITLE_RE = re.compile(r"<title>[^:]+: (.*)</title>")

# stderr fragments that mean the identifier does not resolve. With terminal prompts
# disabled, git asks for credentials on unknown repositories and fails with the last one.
_NOT_FOUND_MARKERS = (
    "not found",
    "does not exist",
    "could not read username",
    "terminal prompts disabled",
)


class GitHubError(RuntimeError):
    pass


class NetworkError(GitHubError):
    pass


class NotFoundError(GitHubError):
    pass


class RemoteMetadataLookup(Protocol):
    def list_tags(self, repository: str) -> str:
        """Raw tag listing for `repository`. Raises `NetworkError` or `NotFoundError`."""
        ...

    def fetch_title(self, repository: str) -> str | None:
        """Best-effort display title for `repository`, or None."""
        ...


class GitHubClient:
    def __init__(
        self,
        base_url: str = "https://github.com",
        *,
        git_executable: str = "git",
        timeout: float = 30,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._git = git_executable
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        return {
            "Accept": "text/html",
            "User-Agent": "toolinit",
        }

    def _repo_path(self, repository: str) -> str:
        repository = repository.strip().strip("/")
        if not repository:
            raise GitHubError("Repository identifier is required (expected OWNER/NAME).")
        return repository

    def repository_url(self, repository: str) -> str:
        return f"{self._base_url}/{self._repo_path(repository)}"

    def list_tags(self, repository: str) -> str:
        """
        Return the raw `git ls-remote --tags` output for the repository.

        Output is decoded as UTF-8 with replacement characters, so one tag with an
        undecodable name does not make the whole listing unreadable.
        """
        url = f"{self.repository_url(repository)}.git"
        cmd = [self._git, "ls-remote", "--tags", url]
        env = dict(os.environ)
        env["GIT_TERMINAL_PROMPT"] = "0"

        logger.debug("Listing tags: %s", " ".join(cmd))
        try:
            result = subprocess.run(
                cmd,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                encoding="utf-8",
                errors="replace",
                timeout=self._timeout,
            )
        except FileNotFoundError as e:
            raise GitHubError(f"git executable not found: {self._git}") from e
        except subprocess.TimeoutExpired as e:
            raise NetworkError(f"Timed out after {self._timeout}s listing tags of {url}") from e

        if result.returncode != 0:
            stderr = (result.stderr or "").strip()
            lowered = stderr.lower()
            if any(marker in lowered for marker in _NOT_FOUND_MARKERS):
                raise NotFoundError(f"Repository not found: {repository}\n\n{stderr}")
            raise NetworkError(f"Command failed: {' '.join(cmd)}\n\n{stderr}")
        return result.stdout

    def fetch_title(self, repository: str) -> str | None:
        """
        Return the tagline GitHub puts into the page title, or None if unavailable.

        GitHub titles look like `GitHub - owner/name: tagline`.
        """
        url = self.repository_url(repository)
        try:
            r = requests.get(url, headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            logger.debug("Could not fetch title of %s: %s", url, e)
            return None
        if r.status_code >= 400:
            logger.debug("Could not fetch title of %s: HTTP %s", url, r.status_code)
            return None

        match = _TITLE_RE.search(r.text)
        if match is None:
            return None
        title = html.unescape(match.group(1)).strip()
        return title or None
