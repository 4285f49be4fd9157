"""Project path resolution.

Resolves the project root and the config file location. Uses environment
variables when available, falls back to conventional defaults.

Environment variables:
    SOURCEGEN_PROJECT_ROOT — project root (default: current directory)
    SOURCEGEN_CONFIG — config file (default: <project root>/sourcegen.yaml)
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "sourcegen.yaml"


def project_root() -> Path:
    """Return the project root directory."""
    env = os.environ.get("SOURCEGEN_PROJECT_ROOT")
    if env:
        return Path(env)
    return Path.cwd()


def config_path(root: Path | str | None = None) -> Path:
    """Return the path to sourcegen.yaml."""
    env = os.environ.get("SOURCEGEN_CONFIG")
    if env:
        return Path(env)
    base = Path(root) if root else project_root()
    return base / CONFIG_FILENAME


def display_path(path: Path | str, root: Path | str | None = None) -> Path:
    """Return `path` relative to the project root, or unchanged if outside it."""
    path = Path(path)
    base = Path(root) if root else project_root()
    try:
        return path.relative_to(base)
    except ValueError:
        return path
