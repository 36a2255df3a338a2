"""
resolver.py

Responsibility: Resolve a GitHub repository identifier into a dependency entry.

Flow: list tags -> extract versions -> select latest (or check a requested one)
-> derive the recommended constraint -> optionally fetch the display title.
Lookup errors and `NoVersionsFoundError` propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from toolinit.constraints import VersionConstraint, recommend
from toolinit.github_client import RemoteMetadataLookup
from toolinit.versioning import (
    NoVersionsFoundError,
    SemanticVersion,
    extract_all,
    parse_version,
    select_latest,
)

logger = logging.getLogger(__name__)

LATEST = "latest"


class UnknownVersionError(ValueError):
    pass


@dataclass(frozen=True)
class ResolvedDependency:
    repository: str
    version: SemanticVersion
    constraint: VersionConstraint
    title: str | None = None


def resolve_dependency(
    lookup: RemoteMetadataLookup,
    repository: str,
    *,
    version: str = LATEST,
    with_title: bool = True,
) -> ResolvedDependency:
    """
    Resolve `repository` to a version and its recommended constraint.

    `version` is either "latest" or an exact `MAJOR.MINOR.PATCH` that must exist as a tag.
    """
    raw_tags = lookup.list_tags(repository)
    available = extract_all(raw_tags)
    logger.debug("Found %d tagged versions for %s", len(available), repository)

    if version == LATEST:
        selected = select_latest(available, source=repository)
    else:
        selected = parse_version(version)
        if not available:
            raise NoVersionsFoundError(repository)
        if selected not in available:
            raise UnknownVersionError(f"Dependency '{repository}' has no tagged version {selected}.")

    title = lookup.fetch_title(repository) if with_title else None
    if with_title and title is None:
        logger.debug("No title found for %s", repository)

    return ResolvedDependency(
        repository=repository,
        version=selected,
        constraint=recommend(selected),
        title=title,
    )
