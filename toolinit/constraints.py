"""
constraints.py

Responsibility: Turn a selected version into the recommended update constraint.

Releases below 1.0.0 treat the minor component as the breaking boundary, so they
are pinned "up to next minor". From 1.0.0 on, the major component is the boundary
and the constraint is "up to next major".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from toolinit.versioning import SemanticVersion


class ConstraintKind(str, Enum):
    UP_TO_NEXT_MINOR = "upToNextMinor"
    UP_TO_NEXT_MAJOR = "upToNextMajor"


@dataclass(frozen=True)
class VersionConstraint:
    kind: ConstraintKind
    version: SemanticVersion

    def __str__(self) -> str:
        return f'.{self.kind.value}(from: "{self.version}")'

    @property
    def upper_bound(self) -> SemanticVersion:
        """Exclusive upper bound of the accepted range."""
        v = self.version
        if self.kind is ConstraintKind.UP_TO_NEXT_MINOR:
            return SemanticVersion(v.major, v.minor + 1, 0)
        return SemanticVersion(v.major + 1, 0, 0)

    def allows(self, candidate: SemanticVersion) -> bool:
        return self.version <= candidate < self.upper_bound


def recommend(version: SemanticVersion) -> VersionConstraint:
    if version.major == 0:
        return VersionConstraint(ConstraintKind.UP_TO_NEXT_MINOR, version)
    return VersionConstraint(ConstraintKind.UP_TO_NEXT_MAJOR, version)


def recommended_constraint(version: SemanticVersion) -> str:
    """Manifest-ready constraint string, e.g. `.upToNextMajor(from: "1.10.0")`."""
    return str(recommend(version))
