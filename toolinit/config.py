"""
config.py

Responsibility: Collect runtime settings from defaults, environment and CLI overrides.

Precedence (highest first): explicit overrides (CLI flags), `TOOLINIT_*` environment
variables, built-in defaults. Only the CLI reads settings; the version and constraint
logic never does.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields

ENV_PREFIX = "TOOLINIT_"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Settings:
    github_url: str = "https://github.com"
    git_executable: str = "git"
    timeout: float = 30.0
    manifest_path: str = "toolinit.yaml"


_ENV_KEYS = {
    "github_url": "GITHUB_URL",
    "git_executable": "GIT",
    "timeout": "TIMEOUT",
    "manifest_path": "MANIFEST",
}


def _parse_timeout(raw: object) -> float:
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid timeout: {raw!r} (expected a number of seconds)") from e
    if value <= 0:
        raise ConfigError(f"Invalid timeout: {raw!r} (must be positive)")
    return value


def load_settings(env: Mapping[str, str] | None = None, **overrides: object) -> Settings:
    """
    Build `Settings`; `None` overrides are ignored so argparse defaults can be passed as-is.
    """
    env = os.environ if env is None else env
    known = {f.name for f in fields(Settings)}
    unknown = set(overrides) - known
    if unknown:
        raise ConfigError(f"Unknown setting(s): {', '.join(sorted(unknown))}")

    values: dict[str, object] = {}
    for name, suffix in _ENV_KEYS.items():
        raw = env.get(ENV_PREFIX + suffix)
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    values.update({k: v for k, v in overrides.items() if v is not None})

    if "timeout" in values:
        values["timeout"] = _parse_timeout(values["timeout"])
    for name in ("github_url", "git_executable", "manifest_path"):
        if name in values:
            values[name] = str(values[name])

    return Settings(**values)  # type: ignore[arg-type]
