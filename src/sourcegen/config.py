"""Load sourcegen.yaml into a SourcegenConfig.

A missing file means "use the defaults", which target a Rust workspace
formatted with rustfmt from the stable toolchain.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from pathlib import Path

import yaml

from sourcegen.errors import PreconditionViolation
from sourcegen.paths import config_path


@dataclass(frozen=True)
class SourcegenConfig:
    """Settings shared by discovery, link rendering, formatting and sync."""
    source_extension: str = ".rs"
    base_url: str = "https://github.com/rust-analyzer/rust-analyzer/blob/master"
    formatter: str = "rustfmt"
    formatter_config: str = "rustfmt.toml"
    formatter_overrides: tuple[str, ...] = ("fn_single_line=true",)
    toolchain_env: str = "RUSTUP_TOOLCHAIN"
    toolchain: str = "stable"
    ci_env: str = "CI"
    test_command: str = "cargo test"

    def to_dict(self) -> dict:
        return {
            "source_extension": self.source_extension,
            "base_url": self.base_url,
            "formatter": self.formatter,
            "formatter_config": self.formatter_config,
            "formatter_overrides": list(self.formatter_overrides),
            "toolchain_env": self.toolchain_env,
            "toolchain": self.toolchain,
            "ci_env": self.ci_env,
            "test_command": self.test_command,
        }


_KNOWN_KEYS = frozenset(f.name for f in fields(SourcegenConfig))


def load_config(path: Path | str | None = None) -> SourcegenConfig:
    """Read sourcegen.yaml and merge it over the defaults.

    Args:
        path: Path to the config file. Defaults to ``config_path()``.

    Returns:
        The resolved config. Defaults when the file does not exist.

    Raises:
        PreconditionViolation: If the file cannot be read or parsed, is not
            a mapping, has unknown keys, or holds a value of the wrong shape.
    """
    cfg_path = Path(path) if path else config_path()
    if not cfg_path.is_file():
        return SourcegenConfig()

    try:
        with open(cfg_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, OSError, UnicodeDecodeError) as exc:
        raise PreconditionViolation(f"cannot load {cfg_path}: {exc}") from exc

    if data is None:
        return SourcegenConfig()
    if not isinstance(data, dict):
        raise PreconditionViolation(f"{cfg_path} is not a YAML mapping")

    unknown = sorted(str(key) for key in set(data) - _KNOWN_KEYS)
    if unknown:
        raise PreconditionViolation(
            f"{cfg_path} has unknown keys: {', '.join(unknown)}"
        )

    overrides = {key: _coerce(cfg_path, key, value) for key, value in data.items()}
    return replace(SourcegenConfig(), **overrides)


def _scalar(cfg_path: Path, key: str, value) -> str:
    # YAML reads `toolchain: 1.75` as a float
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise PreconditionViolation(
        f"{cfg_path}: {key} must be a string, got {type(value).__name__}"
    )


def _coerce(cfg_path: Path, key: str, value):
    """Check one config value against the shape of its default."""
    if key == "formatter_overrides":
        if value is None:
            return ()
        if not isinstance(value, list):
            value = [value]
        return tuple(_scalar(cfg_path, key, item) for item in value)
    return _scalar(cfg_path, key, value)
