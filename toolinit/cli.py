"""
cli.py

Responsibility: CLI entrypoint for toolinit.

Commands:
- `latest-version OWNER/NAME`: print the newest tagged version and its recommended constraint
- `add-dependency OWNER/NAME`: resolve the dependency and record it in the manifest

This module should orchestrate behavior but keep concerns isolated:
- Version selection / constraints: `versioning.py`, `constraints.py`, `resolver.py`
- GitHub access: `github_client.py`
- Manifest persistence: `manifest.py`
- Settings and log output: `config.py`, `output.py`
"""

from __future__ import annotations

import argparse
import logging

from toolinit import __version__
from toolinit.config import ConfigError, Settings, load_settings
from toolinit.constraints import recommend
from toolinit.github_client import GitHubClient, GitHubError, RemoteMetadataLookup
from toolinit.manifest import Dependency, ManifestError, load_manifest, save_manifest
from toolinit.output import OutputTarget, configure_logging
from toolinit.resolver import LATEST, UnknownVersionError, resolve_dependency
from toolinit.versioning import NoVersionsFoundError, SemanticVersion, parse_version

logger = logging.getLogger(__name__)


class CLIError(RuntimeError):
    pass


_REPORTED_ERRORS = (
    CLIError,
    ConfigError,
    GitHubError,
    ManifestError,
    NoVersionsFoundError,
    UnknownVersionError,
)


def _settings(args: argparse.Namespace) -> Settings:
    return load_settings(
        github_url=args.github_url,
        timeout=args.timeout,
        manifest_path=getattr(args, "manifest", None),
    )


def _make_lookup(settings: Settings) -> RemoteMetadataLookup:
    return GitHubClient(
        settings.github_url,
        git_executable=settings.git_executable,
        timeout=settings.timeout,
    )


def _requested_version(raw: str) -> str:
    if raw == LATEST:
        return raw
    try:
        return str(parse_version(raw))
    except ValueError as e:
        raise CLIError(f"--version must be '{LATEST}' or MAJOR.MINOR.PATCH, got {raw!r}") from e


def _leaves_previous_range(previous_version: str, new_version: SemanticVersion) -> bool:
    """
    True if `new_version` is an upgrade beyond the range recommended for the previously
    recorded version.
    """
    try:
        previous = parse_version(previous_version)
    except ValueError:
        return False
    return new_version > previous and not recommend(previous).allows(new_version)


def latest_version_cmd(args: argparse.Namespace) -> int:
    settings = _settings(args)
    lookup = _make_lookup(settings)

    resolved = resolve_dependency(lookup, args.repository, with_title=False)
    logger.debug("Latest version of %s is %s", args.repository, resolved.version)
    print(f"{resolved.version} {resolved.constraint}")
    return 0


def add_dependency_cmd(args: argparse.Namespace) -> int:
    version = _requested_version(args.version)
    settings = _settings(args)
    manifest_path = settings.manifest_path

    manifest = load_manifest(manifest_path, missing_ok=True)
    lookup = _make_lookup(settings)
    resolved = resolve_dependency(lookup, args.repository, version=version, with_title=not args.no_title)
    dependency = Dependency.from_resolved(resolved)

    previous = manifest.get(dependency.github)
    save_manifest(manifest_path, manifest.with_dependency(dependency))

    where = {"location_file": manifest_path}
    if previous is None:
        logger.info("Added dependency '%s' at version %s.", dependency.github, dependency.version, extra=where)
    elif previous.version == dependency.version:
        logger.info("Dependency '%s' is already at version %s.", dependency.github, dependency.version, extra=where)
    else:
        logger.info(
            "Updated dependency '%s' from %s to %s.",
            dependency.github,
            previous.version or "unknown",
            dependency.version,
            extra=where,
        )
        if _leaves_previous_range(previous.version, resolved.version):
            logger.warning(
                "Version %s of '%s' is outside the previous range %s and may contain breaking changes.",
                dependency.version,
                dependency.github,
                previous.constraint,
                extra=where,
            )
    if dependency.title is None and not args.no_title:
        logger.warning("No title found for '%s'.", dependency.github)

    print(f"{dependency.github} @ {dependency.constraint}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="toolinit", description="Scaffolding helper for command line tool projects")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-v", "--verbose", action="store_true", help="Print verbose progress output")
    p.add_argument(
        "--output-format",
        choices=[t.value for t in OutputTarget],
        default=OutputTarget.HUMAN.value,
        help="Message format: human (default) or ide (file:line: level: message)",
    )
    p.add_argument("--github-url", default=None, help="GitHub base URL (or set env TOOLINIT_GITHUB_URL)")
    p.add_argument("--timeout", default=None, help="Network timeout in seconds (or set env TOOLINIT_TIMEOUT)")
    sub = p.add_subparsers(dest="command", required=True)

    lv = sub.add_parser("latest-version", help="Print the latest tagged version of a GitHub repository")
    lv.add_argument("repository", help="GitHub repository as OWNER/NAME")
    lv.set_defaults(func=latest_version_cmd)

    ad = sub.add_parser("add-dependency", help="Record a GitHub dependency with its recommended constraint")
    ad.add_argument("repository", help="GitHub repository as OWNER/NAME")
    ad.add_argument(
        "--version",
        dest="version",
        default=LATEST,
        help="Version to record: 'latest' (default) or an existing MAJOR.MINOR.PATCH tag",
    )
    ad.add_argument("--manifest", default=None, help="Manifest file (default: toolinit.yaml, env TOOLINIT_MANIFEST)")
    ad.add_argument("--no-title", action="store_true", help="Do not fetch the repository title")
    ad.set_defaults(func=add_dependency_cmd)
    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(verbose=args.verbose, target=args.output_format)
    try:
        return int(args.func(args))
    except _REPORTED_ERRORS as e:
        logger.error("%s", e, exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
