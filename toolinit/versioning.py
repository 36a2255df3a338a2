"""
versioning.py

Responsibility: Find semantic versions in raw tag listings and pick the newest one.

Rules:
- A version is `<digits>.<digits>.<digits>` immediately followed by whitespace.
  A triple at the very end of the text (no trailing whitespace) is not a match.
- Extraction never fails; it returns an empty list when nothing matches.
- Selection fails with `NoVersionsFoundError` when there is nothing to select from.

This module intentionally does NOT know about GitHub, git, or the manifest.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

# Digits are 0-9 only; the whitespace boundary is any Unicode whitespace.
_TAG_VERSION_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)\s")
_BARE_VERSION_RE = re.compile(r"([0-9]+)\.([0-9]+)\.([0-9]+)")


class NoVersionsFoundError(ValueError):
    def __init__(self, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"Dependency '{source}' has no tagged versions."
        else:
            message = "No tagged versions found."
        super().__init__(message)


@dataclass(frozen=True, order=True)
class SemanticVersion:
    """A `major.minor.patch` triple, ordered numerically component by component."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def _from_match(cls, match: re.Match[str]) -> SemanticVersion:
        major, minor, patch = (int(group) for group in match.groups())
        return cls(major, minor, patch)


def extract_all(text: str) -> list[SemanticVersion]:
    """
    Return every version found in `text`, in order of first appearance.

    Typical input is `git ls-remote --tags` output, where annotated tags also show
    up as `refs/tags/1.2.3^{}`; those peeled refs are not followed by whitespace
    and therefore never produce a duplicate entry.
    """
    return [SemanticVersion._from_match(m) for m in _TAG_VERSION_RE.finditer(text)]


def select_latest(versions: Iterable[SemanticVersion], *, source: str | None = None) -> SemanticVersion:
    """
    Return the greatest version.

    `source` only names the repository in the error raised for an empty input.
    """
    candidates = list(versions)
    if not candidates:
        raise NoVersionsFoundError(source)
    return max(candidates)


def parse_version(text: str) -> SemanticVersion:
    """
    Parse an explicitly given `major.minor.patch` string, e.g. from the command line.
    """
    match = _BARE_VERSION_RE.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"Not a semantic version (expected MAJOR.MINOR.PATCH): {text!r}")
    return SemanticVersion._from_match(match)
