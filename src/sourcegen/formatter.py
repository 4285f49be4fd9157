"""Pipe generated text through the external formatter (rustfmt by default).

The formatter must come from the configured toolchain; the toolchain is
selected through an environment variable that is set only for the duration
of the call.
"""

from __future__ import annotations

import logging
import os
import subprocess
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from sourcegen.config import SourcegenConfig, load_config
from sourcegen.errors import FormatterFailed, ToolchainUnavailable
from sourcegen.paths import project_root

logger = logging.getLogger(__name__)


@contextmanager
def pushenv(key: str, value: str) -> Iterator[None]:
    """Set environment variable `key` and restore its prior state on exit."""
    prior = os.environ.get(key)
    os.environ[key] = value
    try:
        yield
    finally:
        if prior is None:
            os.environ.pop(key, None)
        else:
            os.environ[key] = prior


def _run(args: list[str], stdin: str | None = None) -> subprocess.CompletedProcess:
    """Run a formatter command and return the result."""
    logger.debug("running %s", " ".join(args))
    return subprocess.run(
        args,
        input=stdin,
        capture_output=True,
        text=True,
    )


def ensure_formatter(config: SourcegenConfig | None = None) -> None:
    """Check that the formatter runs and reports the expected toolchain.

    Raises:
        ToolchainUnavailable: If the binary cannot be started or its version
            string does not mention the toolchain.
    """
    cfg = config or load_config()
    message = (
        f"Failed to run {cfg.formatter} from toolchain '{cfg.toolchain}'. "
        f"Please run `rustup component add {cfg.formatter} --toolchain {cfg.toolchain}` "
        "to install it."
    )
    try:
        result = _run([cfg.formatter, "--version"])
    except OSError as exc:
        raise ToolchainUnavailable(message) from exc

    version = result.stdout if result.returncode == 0 else ""
    if cfg.toolchain not in version:
        raise ToolchainUnavailable(message)


def reformat(
    text: str,
    config: SourcegenConfig | None = None,
    root: Path | str | None = None,
) -> str:
    """Format `text` and return it with a trailing newline.

    Raises:
        ToolchainUnavailable: See ensure_formatter.
        FormatterFailed: If the formatter exits non-zero.
    """
    cfg = config or load_config()
    base = Path(root) if root else project_root()

    with pushenv(cfg.toolchain_env, cfg.toolchain):
        ensure_formatter(cfg)
        args = [cfg.formatter, "--config-path", str(base / cfg.formatter_config)]
        for override in cfg.formatter_overrides:
            args += ["--config", override]
        try:
            result = _run(args, stdin=text)
        except OSError as exc:
            raise ToolchainUnavailable(f"cannot run {cfg.formatter}: {exc}") from exc

    if result.returncode != 0:
        raise FormatterFailed(
            f"{cfg.formatter} exited with status {result.returncode}: {result.stderr.strip()}",
            returncode=result.returncode,
            stderr=result.stderr,
        )

    formatted = result.stdout
    if not formatted.endswith("\n"):
        formatted += "\n"
    return formatted
