"""
toolinit package

This package implements a scaffolding helper for command line tool projects, focused
on adding GitHub-hosted dependencies with a sensible version constraint.

Key responsibilities are split across modules:
- `versioning.py`: extract semantic versions from tag listings and select the latest
- `constraints.py`: derive the recommended update constraint for a version
- `github_client.py`: isolated GitHub interaction (tag listing, title lookup)
- `resolver.py`: repository identifier -> version, constraint and title
- `manifest.py`: load/update/save the YAML dependency manifest
- `config.py` / `output.py`: runtime settings and log output
- `cli.py`: CLI entrypoint and orchestration
"""

from __future__ import annotations

__all__ = ["__version__"]

__version__ = "0.1.0"
