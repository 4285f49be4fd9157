"""Keep generated files in sync with what their generator produces.

``ensure_file_contents`` is meant to be called from a test. When the file on
disk already matches, it does nothing. Otherwise it rewrites the file and
raises ContentDrift, so the first run after a source change fails and the
next one passes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sourcegen.config import SourcegenConfig, load_config
from sourcegen.errors import ContentDrift, SourceIOError
from sourcegen.paths import display_path

logger = logging.getLogger(__name__)


def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n")


def add_preamble(generator: str, text: str) -> str:
    """Prefix generated `text` with the do-not-edit marker line."""
    preamble = f"//! Generated by `{generator}`, do not edit by hand.\n\n"
    return preamble + text


def is_up_to_date(file: Path | str, contents: str) -> bool:
    """Whether `file` holds `contents`, ignoring CRLF vs LF differences.

    A file that cannot be read counts as out of date.
    """
    try:
        with open(file, encoding="utf-8", newline="") as f:
            old_contents = f.read()
    except (OSError, UnicodeDecodeError):
        return False
    return normalize_newlines(old_contents) == normalize_newlines(contents)


def ensure_file_contents(
    file: Path | str,
    contents: str,
    root: Path | str | None = None,
    config: SourcegenConfig | None = None,
) -> None:
    """Check that `file` has `contents`; if not, update it and fail.

    Raises:
        ContentDrift: After rewriting an out-of-date file.
        SourceIOError: If the file cannot be written.
    """
    file = Path(file)
    if is_up_to_date(file, contents):
        return

    cfg = config or load_config()
    shown = display_path(file, root)
    logger.error("%s was not up-to-date, updating", shown)
    if cfg.ci_env in os.environ:
        logger.warning(
            "NOTE: run `%s` locally and commit the updated files", cfg.test_command
        )

    try:
        file.parent.mkdir(parents=True, exist_ok=True)
        with open(file, "w", encoding="utf-8", newline="") as f:
            f.write(contents)
    except OSError as exc:
        raise SourceIOError(f"cannot write {shown}: {exc}") from exc

    raise ContentDrift(
        f"{shown} was not up to date and has been updated, simply re-run the tests",
        path=file,
    )
