"""
manifest.py

Responsibility: Load, update and save the project's dependency manifest.

The manifest is a YAML mapping (`toolinit.yaml` by default):

    tool_name: mytool
    organization: Acme
    dependencies:
      - github: onevcat/Rainbow
        version: 3.1.4
        constraint: '.upToNextMajor(from: "3.1.4")'
        title: Delightful console output for Swift developers.

Dependencies are kept sorted by their GitHub identifier so that adding one yields a
stable, reviewable diff. Unknown top-level keys survive a load/save round trip.
"""

from __future__ import annotations

import os
import stat
import tempfile
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from toolinit.resolver import ResolvedDependency

_KNOWN_KEYS = ("tool_name", "organization", "dependencies")


class ManifestError(ValueError):
    pass


@dataclass(frozen=True)
class Dependency:
    """One recorded GitHub dependency."""

    github: str
    version: str
    constraint: str
    title: str | None = None

    @classmethod
    def from_resolved(cls, resolved: ResolvedDependency) -> Dependency:
        return cls(
            github=resolved.repository,
            version=str(resolved.version),
            constraint=str(resolved.constraint),
            title=resolved.title,
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "github": self.github,
            "version": self.version,
            "constraint": self.constraint,
        }
        if self.title:
            data["title"] = self.title
        return data


def _sort_key(dep: Dependency) -> str:
    return dep.github.lower()


@dataclass(frozen=True)
class Manifest:
    """Parsed manifest contents."""

    tool_name: str = ""
    organization: str = ""
    dependencies: tuple[Dependency, ...] = ()
    extra: dict[str, Any] = field(default_factory=dict)

    def get(self, github: str) -> Dependency | None:
        key = github.lower()
        for dep in self.dependencies:
            if dep.github.lower() == key:
                return dep
        return None

    def with_dependency(self, dependency: Dependency) -> Manifest:
        """
        Return a copy with `dependency` added, replacing any entry for the same repository.
        """
        key = _sort_key(dependency)
        kept = [d for d in self.dependencies if _sort_key(d) != key]
        kept.append(dependency)
        return replace(self, dependencies=tuple(sorted(kept, key=_sort_key)))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {}
        if self.tool_name:
            data["tool_name"] = self.tool_name
        if self.organization:
            data["organization"] = self.organization
        data.update(self.extra)
        data["dependencies"] = [d.to_dict() for d in self.dependencies]
        return data


def _parse_dependency(raw: Any, index: int) -> Dependency:
    if not isinstance(raw, dict):
        raise ManifestError(f"`dependencies[{index}]` must be an object/mapping.")
    github = str(raw.get("github") or "").strip()
    if not github:
        raise ManifestError(f"`dependencies[{index}]` must define `github`.")
    constraint = str(raw.get("constraint") or "").strip()
    if not constraint:
        raise ManifestError(f"`dependencies[{index}]` ({github}) must define `constraint`.")
    title = raw.get("title")
    if title is not None:
        title = str(title).strip() or None
    return Dependency(
        github=github,
        version=str(raw.get("version") or "").strip(),
        constraint=constraint,
        title=title,
    )


def parse_manifest(text: str) -> Manifest:
    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ManifestError("Manifest must be a mapping/object at the top level.")

    deps_raw = data.get("dependencies") or []
    if not isinstance(deps_raw, list):
        raise ManifestError("`dependencies` must be a list when provided.")
    dependencies = [_parse_dependency(raw, i) for i, raw in enumerate(deps_raw)]

    return Manifest(
        tool_name=str(data.get("tool_name") or "").strip(),
        organization=str(data.get("organization") or "").strip(),
        dependencies=tuple(sorted(dependencies, key=_sort_key)),
        extra={k: v for k, v in data.items() if k not in _KNOWN_KEYS},
    )


def load_manifest(path: str | Path, *, missing_ok: bool = False) -> Manifest:
    """
    Parse the manifest at `path`. With `missing_ok`, a missing file is an empty manifest.
    """
    p = Path(path)
    if not p.exists():
        if missing_ok:
            return Manifest()
        raise ManifestError(f"Manifest file does not exist: {p}")
    try:
        return parse_manifest(p.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ManifestError(f"Manifest is not valid YAML: {p}") from e


def save_manifest(path: str | Path, manifest: Manifest) -> None:
    """
    Write the manifest through a sibling temporary file so an interrupted write never
    leaves a truncated manifest behind.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    text = yaml.safe_dump(manifest.to_dict(), sort_keys=False, allow_unicode=True)

    fd, tmp_name = tempfile.mkstemp(prefix=f".{p.name}.", suffix=".tmp", dir=p.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, stat.S_IMODE(p.stat().st_mode) if p.exists() else 0o644)
        os.replace(tmp_name, p)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
